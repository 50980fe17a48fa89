"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the simulator,
supporting environment variables and .env file loading.

Example:
    >>> from nba_sim.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.roster_path)
    'data/NBA_PLAYERS.csv'
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        roster_path: CSV file with historical player season averages.
        roster_json_path: Optional JSON enrichment file (STL/BLK columns).
        teams_path: Optional JSON mapping of era label to team names.
        league_size: Number of background players sampled per career.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Roster feed
    roster_path: str = Field(
        default="data/NBA_PLAYERS.csv",
        alias="NBA_SIM_ROSTER_PATH",
        description="CSV file with historical player season averages",
    )
    roster_json_path: str = Field(
        default="data/nba_players.json",
        alias="NBA_SIM_ROSTER_JSON_PATH",
        description="Optional JSON enrichment file merged by player name",
    )
    teams_path: str = Field(
        default="data/teams_by_era.json",
        alias="NBA_SIM_TEAMS_PATH",
        description="Optional JSON mapping of era label to team names",
    )

    # Simulation
    league_size: int = Field(
        default=150,
        alias="NBA_SIM_LEAGUE_SIZE",
        ge=1,
        le=1000,
        description="Background players sampled into the synthetic league",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )

    @field_validator("roster_path", "roster_json_path", "teams_path", "log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @property
    def roster_path_obj(self) -> Path:
        """Return roster CSV path as Path object."""
        return Path(self.roster_path)

    @property
    def roster_json_path_obj(self) -> Path:
        """Return roster JSON enrichment path as Path object."""
        return Path(self.roster_json_path)

    @property
    def teams_path_obj(self) -> Path:
        """Return teams-by-era path as Path object."""
        return Path(self.teams_path)

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.league_size)
        150
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
