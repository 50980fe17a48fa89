"""Shared pytest fixtures for simulator tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (test settings with temporary directories)
- Sample roster fixtures (records, CSV/JSON feed files)
- Simulation fixtures (seeded generators, team pool, attribute picks)

Example:
    def test_something(sample_records, cosmetic_rng):
        # sample_records is a list of PlayerRecord objects
        # cosmetic_rng is a seeded CosmeticRng
        pass
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Generator

import pandas as pd
import pytest

from nba_sim.career.attributes import AttributeKey, AttributePick, pick_attribute
from nba_sim.career.simulator import CareerResult, SimulationRequest, simulate_career
from nba_sim.config import Settings, reset_settings
from nba_sim.data.roster import PlayerRecord, Roster
from nba_sim.data.teams import FALLBACK_TEAMS
from nba_sim.rng import CosmeticRng

# Name, Position, Debut, G, PTS, AST, TRB, STL, BLK, FG%, PER, Height
SAMPLE_ROWS: list[tuple[Any, ...]] = [
    ("Michael Jordan", "Guard", 1984, 1072, 30.1, 5.3, 6.2, 2.3, 0.8, 0.497, 27.9, 78),
    ("Magic Johnson", "Guard", 1979, 906, 19.5, 11.2, 7.2, 1.9, 0.4, 0.520, 24.1, 81),
    ("Larry Bird", "Forward", 1979, 897, 24.3, 6.3, 10.0, 1.7, 0.8, 0.496, 23.5, 81),
    ("Tim Duncan", "Forward-Center", 1997, 1392, 19.0, 3.0, 10.8, 0.7, 2.2, 0.506, 24.2, 83),
    ("Shaquille O'Neal", "Center", 1992, 1207, 23.7, 2.5, 10.9, 0.6, 2.3, 0.582, 26.4, 85),
    ("John Stockton", "Guard", 1984, 1504, 13.1, 10.5, 2.7, 2.2, 0.2, 0.515, 21.8, 73),
    ("Reggie Miller", "Guard", 1987, 1389, 18.2, 3.0, 3.0, 1.1, 0.2, 0.471, 18.4, 79),
    ("Scottie Pippen", "Forward", 1987, 1178, 16.1, 5.2, 6.4, 2.0, 0.8, 0.473, 18.7, 80),
    ("Karl Malone", "Forward", 1985, 1476, 25.0, 3.6, 10.1, 1.4, 0.8, 0.516, 23.9, 81),
    ("Hakeem Olajuwon", "Center", 1984, 1238, 21.8, 2.5, 11.1, 1.7, 3.1, 0.512, 23.6, 84),
    ("Gary Payton", "Guard", 1990, 1335, 16.3, 6.7, 3.9, 1.8, 0.2, 0.466, 18.9, 76),
    ("Dennis Rodman", "Forward", 1986, 911, 7.3, 1.8, 13.1, 0.7, 0.6, 0.521, 14.6, 79),
]

SAMPLE_COLUMNS: list[str] = [
    "Name", "Position", "Debut", "G", "PTS", "AST", "TRB",
    "STL", "BLK", "FG%", "PER", "Height",
]


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Create and return temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_settings(
    tmp_data_dir: Path, roster_csv: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Settings, None, None]:
    """Provide test settings pointing at temporary files.

    Automatically resets settings singleton after test.
    """
    monkeypatch.setenv("NBA_SIM_ROSTER_PATH", str(roster_csv))
    monkeypatch.setenv("NBA_SIM_ROSTER_JSON_PATH", str(tmp_data_dir / "missing.json"))
    monkeypatch.setenv("NBA_SIM_TEAMS_PATH", str(tmp_data_dir / "missing_teams.json"))
    monkeypatch.setenv("NBA_SIM_LEAGUE_SIZE", "10")
    monkeypatch.setenv("LOG_DIR", str(tmp_data_dir / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    reset_settings()
    from nba_sim.config import get_settings

    settings = get_settings()
    settings.ensure_directories()

    yield settings

    reset_settings()


# =============================================================================
# Roster
# =============================================================================


@pytest.fixture
def sample_roster_df() -> pd.DataFrame:
    """Return the sample roster as a DataFrame with upstream column names."""
    return pd.DataFrame(SAMPLE_ROWS, columns=SAMPLE_COLUMNS)


@pytest.fixture
def roster_csv(tmp_data_dir: Path, sample_roster_df: pd.DataFrame) -> Path:
    """Write the sample roster CSV and return its path."""
    path = tmp_data_dir / "NBA_PLAYERS.csv"
    sample_roster_df.to_csv(path, index=False)
    return path


@pytest.fixture
def enrichment_json(tmp_data_dir: Path) -> Path:
    """Write a JSON enrichment file overriding two players."""
    path = tmp_data_dir / "nba_players.json"
    path.write_text(
        json.dumps(
            [
                {"Name": "Michael Jordan", "STL": 2.5, "Position": ["Guard", "Forward"]},
                {"Name": "Dennis Rodman", "BLK": 0.7},
                {"Name": "Not In Csv", "STL": 9.9},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_records(sample_roster_df: pd.DataFrame) -> list[PlayerRecord]:
    """Return the sample roster as PlayerRecord objects."""
    return [
        PlayerRecord.from_row(row)
        for row in sample_roster_df.to_dict(orient="records")
    ]


@pytest.fixture
def sample_roster(sample_records: list[PlayerRecord]) -> Roster:
    """Return a Roster with every attribute column present."""
    return Roster(records=tuple(sample_records), columns=frozenset(SAMPLE_COLUMNS))


@pytest.fixture
def records_by_name(sample_records: list[PlayerRecord]) -> dict[str, PlayerRecord]:
    """Index sample records by name."""
    return {record.name: record for record in sample_records}


# =============================================================================
# Simulation
# =============================================================================


@pytest.fixture
def cosmetic_rng() -> CosmeticRng:
    """Return a seeded cosmetic generator."""
    return CosmeticRng(seed=42)


@pytest.fixture
def team_pool() -> list[str]:
    """Return a ten-team pool."""
    return list(FALLBACK_TEAMS[:10])


@pytest.fixture
def star_picks(
    records_by_name: dict[str, PlayerRecord],
) -> dict[AttributeKey, AttributePick]:
    """One pick per attribute from a strong, durable set of sources."""
    sources = {
        AttributeKey.SHOOTING: "Michael Jordan",
        AttributeKey.PASSING: "Magic Johnson",
        AttributeKey.REBOUNDING: "Dennis Rodman",
        AttributeKey.STEALS: "John Stockton",
        AttributeKey.BLOCKS: "Hakeem Olajuwon",
        AttributeKey.LONGEVITY: "Tim Duncan",
        AttributeKey.ATHLETICISM: "Shaquille O'Neal",
        AttributeKey.HEIGHT: "Larry Bird",
    }
    return {
        key: pick_attribute(key, records_by_name[name]) for key, name in sources.items()
    }


@pytest.fixture
def starting_five(records_by_name: dict[str, PlayerRecord]) -> dict[str, PlayerRecord]:
    """A complete slot -> record roster."""
    return {
        "PG": records_by_name["Magic Johnson"],
        "SG": records_by_name["Michael Jordan"],
        "SF": records_by_name["Larry Bird"],
        "PF": records_by_name["Tim Duncan"],
        "C": records_by_name["Shaquille O'Neal"],
    }


@pytest.fixture
def bench_five(records_by_name: dict[str, PlayerRecord]) -> dict[str, PlayerRecord]:
    """A second complete roster."""
    return {
        "PG": records_by_name["John Stockton"],
        "SG": records_by_name["Reggie Miller"],
        "SF": records_by_name["Scottie Pippen"],
        "PF": records_by_name["Karl Malone"],
        "C": records_by_name["Hakeem Olajuwon"],
    }


@pytest.fixture
def career_result(
    star_picks: dict[AttributeKey, AttributePick],
    sample_records: list[PlayerRecord],
    team_pool: list[str],
) -> CareerResult:
    """A seeded, fully simulated career."""
    request = SimulationRequest(
        name="Custom Player",
        position="SG",
        picks=star_picks,
        team=team_pool[0],
        roster=tuple(sample_records),
        team_pool=tuple(team_pool),
        league_size=10,
    )
    return simulate_career(request, CosmeticRng(seed=17))
