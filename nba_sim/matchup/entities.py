"""Matchup entities: a single custom player or a drafted five-man team.

An entity is a name plus the aggregate stat vector the game resolver scores.
Teams also carry their roster (for narrative moments) and per-role scores
(for role differentials).

Team aggregation:
    pts, ast, reb  summed over the five players
    per, fg        mean over the five players
    impact         sum of the four role scores

Role scores:
    pg_playmaking      PG assists
    sg_scoring         SG points
    wing_efficiency    mean PER of SF and PF
    center_rebounding  C rebounds

Example:
    >>> team = team_entity("Dynasty", {"PG": magic, "SG": jordan, "SF": bird,
    ...                                "PF": duncan, "C": shaq})
    >>> team.stats.impact
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from nba_sim.career.season import per_estimate
from nba_sim.data.roster import DRAFT_SLOTS, PlayerRecord
from nba_sim.logging import get_logger
from nba_sim.types import DraftSlot, ValidationResult, parse_or_default

if TYPE_CHECKING:
    from nba_sim.career.attributes import CustomPlayerBaseline

logger = get_logger(__name__)

ROLE_LABELS: dict[str, str] = {
    "pg_playmaking": "PG playmaking",
    "sg_scoring": "SG scoring",
    "wing_efficiency": "Wing efficiency",
    "center_rebounding": "Center rebounding",
}


@dataclass(frozen=True)
class EntityStats:
    """Aggregate stat vector scored by the game resolver.

    ``fg`` is on the 0-100 scale.
    """

    pts: float = 0.0
    ast: float = 0.0
    reb: float = 0.0
    per: float = 0.0
    fg: float = 0.0
    impact: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class Entity:
    """One side of a matchup.

    Attributes:
        name: Display name, also the seed key.
        stats: Aggregate stats.
        roster: (slot, record) pairs; empty for a solo player.
        role_scores: Role name -> score; empty for a solo player.
        is_team: Whether this is a drafted team.
    """

    name: str
    stats: EntityStats
    roster: tuple[tuple[DraftSlot, PlayerRecord], ...] = ()
    role_scores: dict[str, float] = field(default_factory=dict)
    is_team: bool = False

    @property
    def players(self) -> list[PlayerRecord]:
        return [record for _, record in self.roster]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "stats": self.stats.to_dict(),
            "roster": {slot: record.name for slot, record in self.roster},
            "role_scores": dict(self.role_scores),
            "is_team": self.is_team,
        }


def fg_percent(value: float | None) -> float:
    """Normalise a field goal percentage to the 0-100 scale."""
    fg = parse_or_default(value)
    return fg * 100.0 if 0.0 < fg <= 1.0 else fg


def solo_entity(
    name: str,
    baseline: CustomPlayerBaseline,
    fg: float | None = None,
) -> Entity:
    """Entity for a custom attribute-built player.

    PER is estimated from the baseline line the same way seasons are.

    Args:
        name: Player name.
        baseline: Custom player's baseline.
        fg: Field goal percentage (0-1 or 0-100); 0 when unknown.
    """
    per = per_estimate(baseline.pts, baseline.ast, baseline.reb, baseline.stl, baseline.blk)
    stats = EntityStats(
        pts=baseline.pts,
        ast=baseline.ast,
        reb=baseline.reb,
        per=per,
        fg=fg_percent(fg),
    )
    return Entity(name=name, stats=stats)


def validate_team(
    name: str | None, roster_by_slot: Mapping[DraftSlot, PlayerRecord]
) -> ValidationResult:
    """Check a drafted team has a name and a player in every slot."""
    result = ValidationResult()
    if not name or not name.strip():
        result.add_error("Please enter a team name before simulating.")
    for slot in DRAFT_SLOTS:
        if slot not in roster_by_slot:
            result.add_error(f"Draft a player for {slot} first.")
    return result


def compute_role_scores(roster_by_slot: Mapping[DraftSlot, PlayerRecord]) -> dict[str, float]:
    """Score the four positional roles of a complete roster."""
    return {
        "pg_playmaking": roster_by_slot["PG"].ast,
        "sg_scoring": roster_by_slot["SG"].pts,
        "wing_efficiency": (roster_by_slot["SF"].per + roster_by_slot["PF"].per) / 2.0,
        "center_rebounding": roster_by_slot["C"].reb,
    }


def team_entity(name: str, roster_by_slot: Mapping[DraftSlot, PlayerRecord]) -> Entity:
    """Aggregate a drafted five-man team.

    Args:
        name: Team name.
        roster_by_slot: Slot (PG, SG, SF, PF, C) -> drafted record.

    Returns:
        Team entity with roster in slot order.

    Raises:
        InvalidRequestError: Missing name or unfilled slot.
    """
    validation = validate_team(name, roster_by_slot)
    if not validation.valid:
        logger.warning("Team rejected: {}", "; ".join(validation.errors))
    validation.raise_if_invalid()

    players = [roster_by_slot[slot] for slot in DRAFT_SLOTS]
    count = len(players)
    roles = compute_role_scores(roster_by_slot)
    stats = EntityStats(
        pts=sum(p.pts for p in players),
        ast=sum(p.ast for p in players),
        reb=sum(p.reb for p in players),
        per=sum(p.per for p in players) / count,
        fg=sum(fg_percent(p.fg_pct) for p in players) / count,
        impact=sum(roles.values()),
    )
    return Entity(
        name=name,
        stats=stats,
        roster=tuple((slot, roster_by_slot[slot]) for slot in DRAFT_SLOTS),
        role_scores=roles,
        is_team=True,
    )
