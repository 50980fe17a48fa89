"""Team name pools per era.

Example:
    >>> from nba_sim.data.teams import load_teams_by_era, teams_for_era
    >>> teams = teams_for_era(load_teams_by_era("data/teams_by_era.json"), "1990s")
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from nba_sim.logging import get_logger
from nba_sim.types import EraLabel, TeamName

if TYPE_CHECKING:
    from nba_sim.rng import CosmeticRng

logger = get_logger(__name__)

FALLBACK_TEAMS: tuple[TeamName, ...] = (
    "Lakers", "Celtics", "Bulls", "Warriors", "Spurs",
    "Heat", "Knicks", "Suns", "Mavs", "Nuggets",
    "Raptors", "Jazz", "Sixers", "Pistons", "Hawks",
    "Clippers", "Pacers", "Wizards", "Bucks", "Blazers",
)

# Era lists shorter than this fall back to the default pool
MIN_ERA_TEAMS: int = 10
DEFAULT_TEAM_OPTIONS: int = 5


def load_teams_by_era(path: str | Path) -> dict[EraLabel, list[TeamName]]:
    """Read the optional era -> team names mapping.

    A missing or malformed file yields an empty mapping so callers fall back
    to ``FALLBACK_TEAMS``.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No team mapping at {}, using fallback pool", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring team mapping {}: {}", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring team mapping {}: expected an object", path)
        return {}
    return {
        str(era): [str(name) for name in names]
        for era, names in data.items()
        if isinstance(names, list)
    }


def teams_for_era(
    teams_by_era: Mapping[EraLabel, Sequence[TeamName]], era: EraLabel
) -> list[TeamName]:
    """Team pool for an era; the fallback list when the era has < 10 teams."""
    names = teams_by_era.get(era) or []
    if len(names) >= MIN_ERA_TEAMS:
        return list(names)
    return list(FALLBACK_TEAMS)


def team_options(
    pool: Sequence[TeamName],
    rng: CosmeticRng,
    count: int = DEFAULT_TEAM_OPTIONS,
) -> list[TeamName]:
    """Draw the distinct team choices offered to the user."""
    return rng.sample(pool, count)
