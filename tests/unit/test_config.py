"""Tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from nba_sim.config import Settings, get_settings, reset_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.roster_path == "data/NBA_PLAYERS.csv"
        assert settings.roster_json_path == "data/nba_players.json"
        assert settings.teams_path == "data/teams_by_era.json"
        assert settings.league_size == 150
        assert settings.log_level == "INFO"

    def test_path_properties(self) -> None:
        """Path properties should return Path objects."""
        settings = Settings()

        assert isinstance(settings.roster_path_obj, Path)
        assert isinstance(settings.roster_json_path_obj, Path)
        assert isinstance(settings.teams_path_obj, Path)
        assert isinstance(settings.log_dir_obj, Path)

    def test_validation_rejects_empty_path(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Empty paths should be rejected."""
        # pydantic_settings uses aliases as env var names
        monkeypatch.setenv("NBA_SIM_ROSTER_PATH", "   ")
        with pytest.raises(ValueError, match="cannot be empty"):
            Settings()

    @pytest.mark.parametrize("size", ["0", "1001"])
    def test_validation_rejects_league_size_out_of_range(
        self, size: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """League size must be between 1 and 1000."""
        monkeypatch.setenv("NBA_SIM_LEAGUE_SIZE", size)
        with pytest.raises(ValueError):
            Settings()

    def test_validation_rejects_unknown_log_level(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Log level must be one of the known levels."""
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        with pytest.raises(ValueError):
            Settings()

    def test_ensure_directories_creates_log_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """ensure_directories should create the log directory."""
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        settings = Settings()
        settings.ensure_directories()

        assert (tmp_path / "logs").exists()


class TestGetSettings:
    """Tests for get_settings function."""

    def setup_method(self) -> None:
        """Reset settings before each test."""
        reset_settings()

    def teardown_method(self) -> None:
        """Reset settings after each test."""
        reset_settings()

    def test_returns_singleton(self) -> None:
        """get_settings should return the same instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should load from environment variables."""
        monkeypatch.setenv("NBA_SIM_ROSTER_PATH", "custom/players.csv")
        monkeypatch.setenv("NBA_SIM_LEAGUE_SIZE", "40")

        reset_settings()
        settings = get_settings()

        assert settings.roster_path == "custom/players.csv"
        assert settings.league_size == 40


class TestResetSettings:
    """Tests for reset_settings function."""

    def test_reset_clears_singleton(self) -> None:
        """reset_settings should clear the cached instance."""
        settings1 = get_settings()
        reset_settings()
        settings2 = get_settings()

        assert settings1 is not settings2
        assert settings1.roster_path == settings2.roster_path
