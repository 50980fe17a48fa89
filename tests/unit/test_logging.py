"""Tests for logging module."""
from __future__ import annotations

from pathlib import Path

from loguru import logger

from nba_sim.logging import get_logger, setup_logging, simulation_context


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_directory(self, tmp_path: Path) -> None:
        """setup_logging should create log directory if it doesn't exist."""
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_dir=log_dir)

        assert log_dir.exists()

    def test_setup_logging_accepts_string_dir(self, tmp_path: Path) -> None:
        """setup_logging should accept a string directory."""
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=str(log_dir))

        assert log_dir.exists()

    def test_setup_logging_without_console(self, tmp_path: Path) -> None:
        """Disabling the console sink still writes the log file."""
        log_dir = tmp_path / "logs"
        setup_logging(log_dir=log_dir, serialize=False, console=False)

        get_logger("test").info("Season simulated")
        logger.complete()

        files = list(log_dir.glob("nba_sim_*.log"))
        assert len(files) == 1
        assert "Season simulated" in files[0].read_text(encoding="utf-8")

    def test_setup_logging_all_parameters(self, tmp_path: Path) -> None:
        """setup_logging should accept all custom parameters."""
        log_dir = tmp_path / "logs"
        setup_logging(
            level="WARNING",
            log_dir=log_dir,
            rotation="500 MB",
            retention="14 days",
            serialize=False,
            console=True,
        )

        assert log_dir.exists()


class TestSimulationContext:
    """Tests for the simulation tag on log records."""

    def test_records_inside_block_are_tagged(self, tmp_path: Path) -> None:
        """Records logged inside the block carry kind:label."""
        log_dir = tmp_path / "logs"
        setup_logging(log_dir=log_dir, serialize=False, console=False)
        log = get_logger("test")

        with simulation_context("career", "Custom Player"):
            log.info("inside")
        log.info("outside")
        logger.complete()

        text = next(log_dir.glob("nba_sim_*.log")).read_text(encoding="utf-8")
        inside = next(line for line in text.splitlines() if "inside" in line)
        outside = next(line for line in text.splitlines() if "outside" in line)
        assert "career:Custom Player" in inside
        assert "career:Custom Player" not in outside
        assert "| - |" in outside


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger should return a logger instance."""
        log = get_logger(__name__)

        assert log is not None

    def test_get_logger_can_log_with_formatting(self, tmp_path: Path) -> None:
        """Logger should support brace-style formatting."""
        setup_logging(log_dir=tmp_path / "logs")
        log = get_logger("test")

        # Should not raise
        log.info("Simulating {} seasons", 12)


class TestLoggerExports:
    """Tests for module exports."""

    def test_logger_is_exported(self) -> None:
        """Base logger should be exported."""
        from nba_sim.logging import logger as exported_logger

        assert exported_logger is logger

    def test_all_exports_available(self) -> None:
        """All expected exports should be available."""
        from nba_sim.logging import __all__

        assert "setup_logging" in __all__
        assert "get_logger" in __all__
        assert "simulation_context" in __all__
        assert "SUCCESS" in __all__
