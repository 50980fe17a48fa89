"""Logging configuration using Loguru.

Console output is colourised for interactive runs; the file sink rotates
daily and writes JSON records by default. Every record carries a ``sim``
field naming the simulation that emitted it ("career:Custom Player",
"tournament:4"), set with ``simulation_context``; records outside a run show
``-``.

Example:
    >>> from nba_sim.logging import setup_logging, get_logger, simulation_context
    >>> setup_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> with simulation_context("career", "Custom Player"):
    ...     logger.info("Simulating {} seasons", total_years)

Status Tags:
    >>> from nba_sim.logging import SUCCESS, FAIL, WARN
    >>> logger.info("{} Career simulated for {}", SUCCESS, name)
    >>> logger.warning("{} Team {} not in era pool", WARN, team)
    >>> logger.error("{} Roster file could not be parsed", FAIL)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from loguru import logger

# ANSI status tags, rendered by loguru's colorize=True
SUCCESS = "\033[92m[SUCCESS]\033[0m"  # Green
FAIL = "\033[91m[FAIL]\033[0m"        # Red
WARN = "\033[93m[WARN]\033[0m"        # Yellow

NO_SIMULATION: str = "-"

CONSOLE_FORMAT: str = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[sim]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT: str = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{extra[sim]} | "
    "{name}:{function}:{line} | "
    "{message}"
)

logger.configure(extra={"sim": NO_SIMULATION})


class InterceptHandler(logging.Handler):
    """Handler to intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the stdlib call
        frame, depth = sys._getframe(6), 6
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path = "logs",
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
    console: bool = True,
) -> None:
    """Configure simulator logging.

    Replaces any existing sinks with a stderr sink (unless ``console`` is
    False) and a rotating file sink under ``log_dir``, and routes stdlib
    logging (pandas, numpy warnings) through loguru.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files; created if missing.
        rotation: When to rotate log files (e.g., "1 day", "100 MB").
        retention: How long to keep old log files.
        serialize: Whether to write JSON-formatted logs to file.
        console: Whether to log to stderr.

    Example:
        >>> setup_logging(level="DEBUG", log_dir="logs", console=False)
    """
    logger.remove()
    logger.configure(extra={"sim": NO_SIMULATION})

    if console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path / "nba_sim_{time:YYYY-MM-DD}.log",
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        serialize=serialize,
        enqueue=True,  # Thread-safe
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> Any:
    """Get a logger instance bound with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Loguru logger bound with the given name.
    """
    return logger.bind(name=name)


@contextmanager
def simulation_context(kind: str, label: object) -> Iterator[None]:
    """Tag every record logged inside the block with ``kind:label``.

    Example:
        >>> with simulation_context("tournament", 8):
        ...     run_rounds()
    """
    with logger.contextualize(sim=f"{kind}:{label}"):
        yield


__all__ = [
    "FAIL",
    "SUCCESS",
    "WARN",
    "get_logger",
    "logger",
    "setup_logging",
    "simulation_context",
]
