"""Attribute picks and custom player baseline construction.

A custom player is assembled by choosing one historical source player per
attribute. Each pick contributes one scalar: the source's raw column for
most attributes, or the athleticism composite for ``athleticism``.

Which attributes are offered depends on the roster's columns (STL and BLK
are optional), so the active set is computed once with
``available_attributes`` and passed around explicitly.

Athleticism formula:
    ATH = 0.45*perNorm + 0.20*fgBonus + 0.20*rebBonus
          + 0.10*durability + 0.05*heightBonus

Example:
    >>> from nba_sim.career.attributes import AttributeKey, pick_attribute
    >>> pick = pick_attribute(AttributeKey.PASSING, magic)
    >>> pick.value
    11.2
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from nba_sim.data.roster import PlayerRecord
from nba_sim.logging import get_logger
from nba_sim.types import TeamName, ValidationResult, clamp, parse_or_default

logger = get_logger(__name__)


class AttributeKey(str, Enum):
    """Canonical attributes a custom player is built from."""

    SHOOTING = "shooting"
    PASSING = "passing"
    REBOUNDING = "rebounding"
    STEALS = "steals"
    BLOCKS = "blocks"
    LONGEVITY = "longevity"
    ATHLETICISM = "athleticism"
    HEIGHT = "height"


# Source column per attribute; athleticism is computed, never read
ATTRIBUTE_COLUMNS: dict[AttributeKey, str] = {
    AttributeKey.SHOOTING: "PTS",
    AttributeKey.PASSING: "AST",
    AttributeKey.REBOUNDING: "TRB",
    AttributeKey.STEALS: "STL",
    AttributeKey.BLOCKS: "BLK",
    AttributeKey.LONGEVITY: "G",
    AttributeKey.HEIGHT: "Height",
}

# Baseline field fed by each attribute
BASELINE_FIELDS: dict[AttributeKey, str] = {
    AttributeKey.SHOOTING: "pts",
    AttributeKey.PASSING: "ast",
    AttributeKey.REBOUNDING: "reb",
    AttributeKey.STEALS: "stl",
    AttributeKey.BLOCKS: "blk",
    AttributeKey.LONGEVITY: "g",
    AttributeKey.ATHLETICISM: "ath",
    AttributeKey.HEIGHT: "height",
}

AvailableAttributes = frozenset[AttributeKey]
AttributePicks = Mapping[AttributeKey, "AttributePick"]


def available_attributes(columns: Iterable[str]) -> AvailableAttributes:
    """Attributes the data source can support, in canonical order."""
    present = set(columns)
    return frozenset(
        key
        for key in AttributeKey
        if key is AttributeKey.ATHLETICISM or ATTRIBUTE_COLUMNS[key] in present
    )


def ordered(attributes: Iterable[AttributeKey]) -> list[AttributeKey]:
    """Sort attributes into canonical display order."""
    wanted = set(attributes)
    return [key for key in AttributeKey if key in wanted]


# =============================================================================
# Athleticism
# =============================================================================


def compute_athleticism(
    per: float | None,
    fg: float | None,
    reb: float | None,
    g: float | None,
    height: float | None,
) -> float:
    """Blend efficiency, shooting, rebounding, durability and height.

    Each bonus term is zero when its input is missing or zero. A missing PER
    means athleticism cannot be assessed and the score is 0.

    Args:
        per: Player Efficiency Rating.
        fg: Field goal percentage, 0-1 or 0-100.
        reb: Rebounds per game.
        g: Career games.
        height: Height in inches.

    Returns:
        Athleticism score (roughly -1 to 1.5).
    """
    per = parse_or_default(per)
    if not per:
        return 0.0

    fg = parse_or_default(fg)
    reb = parse_or_default(reb)
    g = parse_or_default(g)
    height = parse_or_default(height)

    per_norm = clamp((per - 15.0) / 10.0, -1.5, 1.5)
    fg_pct = fg / 100.0 if fg > 1 else fg
    fg_bonus = (fg_pct - 0.45) * 4.0 if fg_pct else 0.0
    reb_bonus = min(reb / 10.0, 1.2) if reb else 0.0
    durability = min(g / 1200.0, 1.0) if g else 0.0
    height_bonus = (height - 78.0) / 12.0 if height else 0.0

    return (
        0.45 * per_norm
        + 0.20 * fg_bonus
        + 0.20 * reb_bonus
        + 0.10 * durability
        + 0.05 * height_bonus
    )


def athleticism_of(record: PlayerRecord) -> float:
    """Athleticism score of a roster record."""
    return compute_athleticism(
        per=record.per,
        fg=record.fg_pct,
        reb=record.reb,
        g=record.games,
        height=record.height,
    )


# =============================================================================
# Picks
# =============================================================================


@dataclass(frozen=True)
class AttributePick:
    """One attribute borrowed from one source player.

    Attributes:
        key: Attribute being filled.
        source: Player the value was taken from.
        value: Derived scalar value.
    """

    key: AttributeKey
    source: PlayerRecord
    value: float

    @property
    def source_name(self) -> str:
        return self.source.name


def pick_attribute(key: AttributeKey, record: PlayerRecord) -> AttributePick:
    """Derive the attribute value a source player contributes."""
    if key is AttributeKey.ATHLETICISM:
        value = athleticism_of(record)
    else:
        value = record.stat(ATTRIBUTE_COLUMNS[key])
    return AttributePick(key=key, source=record, value=parse_or_default(value))


def validate_picks(
    picks: AttributePicks, available: AvailableAttributes
) -> ValidationResult:
    """Check every active attribute has a pick."""
    result = ValidationResult()
    for key in ordered(available):
        if key not in picks:
            result.add_error(f"Pick a player for {key.value.upper()} first.")
    return result


# =============================================================================
# Baseline
# =============================================================================


@dataclass(frozen=True)
class CustomPlayerBaseline:
    """Peak stat vector of a custom player, before position and curve.

    Attributes:
        pts: Points per game (shooting pick).
        ast: Assists per game (passing pick).
        reb: Rebounds per game (rebounding pick).
        stl: Steals per game (steals pick).
        blk: Blocks per game (blocks pick).
        g: Career games (longevity pick).
        ath: Athleticism score.
        height: Height in inches.
        position: Chosen position.
        team: Chosen team name.
    """

    pts: float = 0.0
    ast: float = 0.0
    reb: float = 0.0
    stl: float = 0.0
    blk: float = 0.0
    g: float = 0.0
    ath: float = 0.0
    height: float = 0.0
    position: str = ""
    team: TeamName | None = None


def build_baseline(
    picks: AttributePicks,
    position: str,
    team: TeamName | None = None,
    available: AvailableAttributes | None = None,
) -> CustomPlayerBaseline:
    """Compose picks into a baseline.

    Picks for attributes outside ``available`` are ignored and inactive
    attributes contribute 0.

    Args:
        picks: Attribute -> pick mapping.
        position: Chosen position.
        team: Chosen team name.
        available: Active attributes; defaults to all attributes.

    Returns:
        CustomPlayerBaseline.

    Raises:
        InvalidRequestError: An active attribute has no pick.
    """
    active = available if available is not None else frozenset(AttributeKey)
    validation = validate_picks(picks, active)
    if not validation.valid:
        logger.warning("Baseline rejected: {}", "; ".join(validation.errors))
    validation.raise_if_invalid()

    values = {
        BASELINE_FIELDS[key]: parse_or_default(pick.value)
        for key, pick in picks.items()
        if key in active
    }
    return CustomPlayerBaseline(position=position, team=team, **values)
