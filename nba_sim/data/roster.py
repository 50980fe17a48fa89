"""Historical roster feed.

Loads the player season-average table (CSV, optionally enriched by a JSON
file merged on player name) into immutable ``PlayerRecord`` objects, and
provides the era, position and candidate-draw helpers the pickers use.

Every numeric field goes through ``parse_or_default`` so malformed upstream
rows never reach the engine as NaN or text.

Example:
    >>> from nba_sim.data.roster import load_roster
    >>> roster = load_roster("data/NBA_PLAYERS.csv", "data/nba_players.json")
    >>> pool = roster.in_era("1990s")
    >>> print(f"{len(pool)} players debuted in the 1990s")
"""
from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pandas as pd

from nba_sim.logging import get_logger
from nba_sim.types import (
    DraftSlot,
    EraLabel,
    PlayerNotFoundError,
    RosterLoadError,
    parse_or_default,
)

if TYPE_CHECKING:
    from nba_sim.career.attributes import AvailableAttributes
    from nba_sim.rng import CosmeticRng

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

NUMERIC_COLUMNS: frozenset[str] = frozenset(
    {
        "Debut", "Final", "Height", "Weight", "G", "PTS", "TRB", "AST",
        "STL", "BLK", "FG%", "FG3%", "FT%", "eFG%", "PER", "WS",
    }
)

# Source column -> PlayerRecord field
COLUMN_FIELDS: dict[str, str] = {
    "G": "games",
    "PTS": "pts",
    "AST": "ast",
    "TRB": "reb",
    "STL": "stl",
    "BLK": "blk",
    "FG%": "fg_pct",
    "PER": "per",
    "Height": "height",
}

ALL_ERAS: EraLabel = "all"
ERA_LENGTH_YEARS: int = 10
DRAFT_SLOTS: tuple[DraftSlot, ...] = ("PG", "SG", "SF", "PF", "C")
DEFAULT_CANDIDATE_COUNT: int = 10


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class PlayerRecord:
    """A historical player's season-average statistics.

    Attributes:
        name: Player name.
        position: Raw position string, possibly multi-role ("Guard-Forward").
        debut: Debut year, or None when unknown.
        games: Career games played.
        pts: Points per game.
        ast: Assists per game.
        reb: Rebounds per game.
        stl: Steals per game.
        blk: Blocks per game.
        fg_pct: Field goal percentage as stored upstream (0-1 or 0-100).
        per: Player Efficiency Rating.
        height: Height in inches.
    """

    name: str
    position: str = ""
    debut: int | None = None
    games: float = 0.0
    pts: float = 0.0
    ast: float = 0.0
    reb: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    fg_pct: float = 0.0
    per: float = 0.0
    height: float = 0.0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> PlayerRecord:
        """Build a record from a source row keyed by upstream column names."""
        values = {
            attr: parse_or_default(row.get(column))
            for column, attr in COLUMN_FIELDS.items()
        }
        return cls(
            name=_clean_text(row.get("Name")),
            position=_clean_text(row.get("Position")),
            debut=_parse_year(row.get("Debut")),
            **values,
        )

    def stat(self, column: str) -> float:
        """Return the value for an upstream column name (0 when unknown)."""
        attr = COLUMN_FIELDS.get(column)
        return float(getattr(self, attr)) if attr else 0.0

    @property
    def roles(self) -> list[str]:
        """Position roles parsed from the raw position string."""
        return parse_position(self.position)


@dataclass(frozen=True)
class Roster:
    """Loaded roster plus the set of columns the source provided.

    Attributes:
        records: Player records in source order.
        columns: Column names present in the merged source.
    """

    records: tuple[PlayerRecord, ...]
    columns: frozenset[str] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.records)

    def has_column(self, column: str) -> bool:
        return column in self.columns

    @property
    def available(self) -> AvailableAttributes:
        """Attributes this roster's columns can support."""
        from nba_sim.career.attributes import available_attributes

        return available_attributes(self.columns)

    def in_era(self, era: EraLabel) -> list[PlayerRecord]:
        """Records whose debut falls inside the era window."""
        return filter_by_era(self.records, era)

    def find(self, name: str) -> PlayerRecord:
        """Look a player up by name (case-insensitive, first match).

        Raises:
            PlayerNotFoundError: No record carries that name.
        """
        wanted = name.strip().lower()
        for record in self.records:
            if record.name.lower() == wanted:
                return record
        raise PlayerNotFoundError(f"Player not found in roster: {name}")


# =============================================================================
# Parsing helpers
# =============================================================================


def _clean_text(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value).strip()


def _parse_year(value: Any) -> int | None:
    year = parse_or_default(value, default=math.nan)
    return None if math.isnan(year) else int(year)


def parse_position(raw: Any) -> list[str]:
    """Split a raw position into roles.

    Accepts list literals ("['Guard', 'Forward']"), hyphen or slash separated
    strings and single roles.
    """
    text = _clean_text(raw)
    if not text:
        return []
    if text.startswith("["):
        try:
            parts = json.loads(text.replace("'", '"'))
        except json.JSONDecodeError:
            parts = []
        if not isinstance(parts, list):
            parts = []
    elif "-" in text:
        parts = text.split("-")
    elif "/" in text:
        parts = text.split("/")
    else:
        parts = [text]
    return [str(p).strip() for p in parts if str(p).strip()]


def position_matches_slot(roles: Iterable[str], slot: DraftSlot) -> bool:
    """Whether a player with these roles may fill a draft slot."""
    role_set = set(roles)
    if slot == "C":
        return "Center" in role_set
    if slot in ("PG", "SG"):
        return bool(role_set & {"Guard", "Guard-Forward", "Forward-Guard"})
    if slot in ("SF", "PF"):
        return bool(
            role_set
            & {
                "Forward",
                "Forward-Center",
                "Center-Forward",
                "Guard-Forward",
                "Forward-Guard",
            }
        )
    return False


def era_start(era: EraLabel) -> int | None:
    """Return the first year of an era label ("1990s" -> 1990, "all" -> None).

    Raises:
        ValueError: Label does not start with a four-digit year.
    """
    if era == ALL_ERAS:
        return None
    head = era.strip()[:4]
    if len(head) != 4 or not head.isdigit():
        raise ValueError(f"Invalid era label: {era!r}")
    return int(head)


def filter_by_era(
    records: Iterable[PlayerRecord], era: EraLabel
) -> list[PlayerRecord]:
    """Keep records whose debut year is inside [start, start + 10).

    Records with an unknown debut are excluded unless era is "all".
    """
    start = era_start(era)
    if start is None:
        return list(records)
    end = start + ERA_LENGTH_YEARS
    return [r for r in records if r.debut is not None and start <= r.debut < end]


def draw_candidates(
    pool: Sequence[PlayerRecord],
    rng: CosmeticRng,
    count: int = DEFAULT_CANDIDATE_COUNT,
    slot: DraftSlot | None = None,
    position_locked: bool = False,
) -> list[PlayerRecord]:
    """Draw a random list of pick candidates from a pool.

    Args:
        pool: Era-filtered records.
        rng: Cosmetic generator.
        count: Number of candidates offered.
        slot: Draft slot being filled (team mode).
        position_locked: Restrict candidates to players eligible for slot.

    Returns:
        Up to ``count`` distinct records.
    """
    candidates = list(pool)
    if slot is not None and position_locked:
        candidates = [r for r in candidates if position_matches_slot(r.roles, slot)]
    return rng.sample(candidates, count)


# =============================================================================
# Loading
# =============================================================================


def merge_enrichment(df: pd.DataFrame, json_path: str | Path) -> pd.DataFrame:
    """Overlay JSON enrichment rows onto the base table by player name.

    Columns missing from the base table are added. Matching rows have every
    enrichment column overwritten, including with nulls; unmatched JSON rows
    are ignored.
    """
    path = Path(json_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Skipping roster enrichment {}: {}", path, e)
        return df

    if not isinstance(data, list):
        logger.warning("Skipping roster enrichment {}: expected a list", path)
        return df
    rows = [r for r in data if isinstance(r, dict) and r.get("Name")]
    if not rows:
        return df

    enrich = pd.DataFrame(rows).drop_duplicates("Name", keep="last").set_index("Name")
    merged = df.copy()
    matched = merged["Name"].isin(enrich.index)

    for column in enrich.columns:
        values = enrich[column].map(
            lambda v: ", ".join(map(str, v)) if isinstance(v, list) else v
        )
        if column in merged.columns:
            merged[column] = merged[column].astype(object)
        else:
            merged[column] = pd.Series(
                [None] * len(merged), index=merged.index, dtype=object
            )
        merged.loc[matched, column] = merged.loc[matched, "Name"].map(values)

    logger.debug(
        "Merged {} enrichment columns onto {} players",
        len(enrich.columns),
        int(matched.sum()),
    )
    return merged


def load_roster(
    csv_path: str | Path,
    json_path: str | Path | None = None,
) -> Roster:
    """Load the roster feed.

    Args:
        csv_path: Player season-average CSV with a ``Name`` column.
        json_path: Optional enrichment JSON (list of objects keyed by Name).
            A missing file is skipped.

    Returns:
        Roster with records in source order.

    Raises:
        RosterLoadError: CSV missing, unreadable or lacking a Name column.
    """
    path = Path(csv_path)
    if not path.exists():
        raise RosterLoadError(f"Roster file not found: {path}")

    try:
        df = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise RosterLoadError(f"Could not read roster {path}: {e}") from e

    if "Name" not in df.columns:
        raise RosterLoadError(f"Roster {path} has no Name column")

    if json_path is not None and Path(json_path).exists():
        df = merge_enrichment(df, json_path)

    for column in NUMERIC_COLUMNS.intersection(df.columns):
        df[column] = pd.to_numeric(df[column], errors="coerce")

    records = tuple(
        record
        for record in (PlayerRecord.from_row(row) for row in df.to_dict(orient="records"))
        if record.name
    )
    logger.info("Loaded {} players from {}", len(records), path)
    return Roster(records=records, columns=frozenset(str(c) for c in df.columns))
