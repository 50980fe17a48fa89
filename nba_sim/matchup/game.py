"""Seeded single-game resolver.

Every game between the same two names is identical: the match generator is
an xorshift32 seeded by ``fnv1a_32(f"{name_a}::{name_b}")`` and it drives
the score variance and all narrative choices, in that order.

Scoring:
    raw  = 1.0*pts + 0.4*ast + 0.25*reb + 0.3*per + 0.2*fg (+ 0.35*impact, teams)
    base = clamp(pace + raw / divisor, 60, 140)
           pace 100 / divisor 2.5 solo, pace 110 / divisor 6.0 team
    final = round(base + U(-4, 4)), side A drawn first

A tied final goes to the side with the higher base (side A when bases are
equal) by exactly one point.

Example:
    >>> from nba_sim.matchup.game import simulate_game
    >>> result = simulate_game("Alice", "Bob", stats_a, stats_b)
    >>> result.winner, result.score_a, result.score_b
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from nba_sim.logging import get_logger
from nba_sim.matchup.entities import ROLE_LABELS, Entity, EntityStats
from nba_sim.matchup.narrative import build_narrative
from nba_sim.rng import ReproducibleRng, fnv1a_32
from nba_sim.types import KeyFactor, ValidationResult, clamp, round_half_up

if TYPE_CHECKING:
    from nba_sim.data.roster import PlayerRecord

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

STAT_WEIGHTS: dict[str, float] = {
    "pts": 1.0,
    "ast": 0.4,
    "reb": 0.25,
    "per": 0.3,
    "fg": 0.2,
}
IMPACT_WEIGHT: float = 0.35

SOLO_PACE: float = 100.0
TEAM_PACE: float = 110.0
SOLO_DIVISOR: float = 2.5
TEAM_DIVISOR: float = 6.0
SCORE_FLOOR: float = 60.0
SCORE_CEILING: float = 140.0
SCORE_VARIANCE: float = 4.0

MAX_KEY_FACTORS: int = 3

STAT_LABELS: dict[str, str] = {
    "pts": "Scoring",
    "ast": "Playmaking",
    "reb": "Rebounding",
    "per": "Efficiency (PER)",
    "fg": "Shooting (FG%)",
}


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one game.

    Attributes:
        name_a: First side.
        name_b: Second side.
        score_a: First side's final score.
        score_b: Second side's final score.
        base_a: First side's pre-variance base score.
        base_b: Second side's pre-variance base score.
        winner: Winning side's name.
        lines: Ordered narrative.
        key_factors: Ranked stat differentials.
        seed: Match generator seed.
    """

    name_a: str
    name_b: str
    score_a: int
    score_b: int
    base_a: float
    base_b: float
    winner: str
    lines: tuple[str, ...]
    key_factors: tuple[KeyFactor, ...]
    seed: int

    @property
    def loser(self) -> str:
        return self.name_b if self.winner == self.name_a else self.name_a

    @property
    def margin(self) -> int:
        return abs(self.score_a - self.score_b)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name_a": self.name_a,
            "name_b": self.name_b,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "base_a": self.base_a,
            "base_b": self.base_b,
            "winner": self.winner,
            "lines": list(self.lines),
            "key_factors": [dict(factor) for factor in self.key_factors],
            "seed": self.seed,
        }


# =============================================================================
# Scoring
# =============================================================================


def match_seed(name_a: str, name_b: str) -> int:
    """Seed of the match generator for an ordered pair of names."""
    return fnv1a_32(f"{name_a}::{name_b}")


def raw_score(stats: EntityStats, team_mode: bool = False) -> float:
    """Weighted stat sum before pace normalisation."""
    raw = sum(getattr(stats, stat) * weight for stat, weight in STAT_WEIGHTS.items())
    if team_mode:
        raw += IMPACT_WEIGHT * stats.impact
    return raw


def base_score(stats: EntityStats, team_mode: bool = False) -> float:
    """Pre-variance expected score, clamped to [60, 140]."""
    pace, divisor = (TEAM_PACE, TEAM_DIVISOR) if team_mode else (SOLO_PACE, SOLO_DIVISOR)
    return clamp(pace + raw_score(stats, team_mode) / divisor, SCORE_FLOOR, SCORE_CEILING)


def break_tie(
    score_a: int, score_b: int, base_a: float, base_b: float
) -> tuple[int, int]:
    """Give a tied game to the statistically stronger side by one point."""
    if score_a != score_b:
        return score_a, score_b
    if base_a >= base_b:
        return score_a + 1, score_b
    return score_a, score_b + 1


def key_factors(
    name_a: str,
    name_b: str,
    stats_a: EntityStats,
    stats_b: EntityStats,
    roles_a: dict[str, float] | None = None,
    roles_b: dict[str, float] | None = None,
    limit: int = MAX_KEY_FACTORS,
) -> list[KeyFactor]:
    """Largest stat differentials between the sides.

    Role differentials are included only when both sides have role scores.
    Zero differentials are skipped; ties in magnitude keep candidate order.
    """
    candidates: list[KeyFactor] = []
    for stat, label in STAT_LABELS.items():
        diff = getattr(stats_a, stat) - getattr(stats_b, stat)
        candidates.append(
            KeyFactor(label=label, stat=stat, diff=diff, favors=name_a if diff > 0 else name_b)
        )
    if roles_a and roles_b:
        for role, label in ROLE_LABELS.items():
            diff = roles_a.get(role, 0.0) - roles_b.get(role, 0.0)
            candidates.append(
                KeyFactor(label=label, stat=role, diff=diff, favors=name_a if diff > 0 else name_b)
            )
    ranked = sorted(
        (factor for factor in candidates if factor["diff"] != 0),
        key=lambda factor: abs(factor["diff"]),
        reverse=True,
    )
    return ranked[:limit]


# =============================================================================
# Games
# =============================================================================


def simulate_game(
    name_a: str,
    name_b: str,
    stats_a: EntityStats,
    stats_b: EntityStats,
    team_mode: bool = False,
    roster_a: Sequence[PlayerRecord] = (),
    roster_b: Sequence[PlayerRecord] = (),
    roles_a: dict[str, float] | None = None,
    roles_b: dict[str, float] | None = None,
) -> MatchResult:
    """Resolve one game between two stat vectors.

    Args:
        name_a: First side's name.
        name_b: Second side's name.
        stats_a: First side's aggregate stats.
        stats_b: Second side's aggregate stats.
        team_mode: Score with team pace, divisor and impact weight.
        roster_a: First side's players, for narrative moments.
        roster_b: Second side's players, for narrative moments.
        roles_a: First side's role scores, for key factors.
        roles_b: Second side's role scores, for key factors.

    Returns:
        MatchResult; identical for identical inputs.
    """
    seed = match_seed(name_a, name_b)
    rng = ReproducibleRng(seed)

    base_a = base_score(stats_a, team_mode)
    base_b = base_score(stats_b, team_mode)
    score_a = round_half_up(base_a + rng.uniform(-SCORE_VARIANCE, SCORE_VARIANCE))
    score_b = round_half_up(base_b + rng.uniform(-SCORE_VARIANCE, SCORE_VARIANCE))
    score_a, score_b = break_tie(score_a, score_b, base_a, base_b)
    winner = name_a if score_a > score_b else name_b

    factors = key_factors(name_a, name_b, stats_a, stats_b, roles_a, roles_b)
    rosters = [(name_a, list(roster_a)), (name_b, list(roster_b))] if team_mode else []
    lines = build_narrative(rng, name_a, name_b, score_a, score_b, factors, rosters)

    logger.debug(
        "Game {} vs {}: {}-{} (base {:.1f}-{:.1f})",
        name_a,
        name_b,
        score_a,
        score_b,
        base_a,
        base_b,
    )
    return MatchResult(
        name_a=name_a,
        name_b=name_b,
        score_a=score_a,
        score_b=score_b,
        base_a=base_a,
        base_b=base_b,
        winner=winner,
        lines=tuple(lines),
        key_factors=tuple(factors),
        seed=seed,
    )


def validate_matchup(entities: Sequence[Entity]) -> ValidationResult:
    """Check a set of entrants can play each other."""
    result = ValidationResult()
    if len(entities) < 2:
        result.add_error("Add at least two entrants before simulating.")
    names = [entity.name for entity in entities]
    if any(not name or not name.strip() for name in names):
        result.add_error("Every entrant needs a name.")
    if len(set(names)) != len(names):
        result.add_error("Entrant names must be unique.")
    if len({entity.is_team for entity in entities}) > 1:
        result.add_error("Cannot mix single players and teams in one matchup.")
    return result


def simulate_matchup(entity_a: Entity, entity_b: Entity) -> MatchResult:
    """Resolve a game between two built entities.

    Raises:
        InvalidRequestError: Entities cannot play each other.
    """
    validation = validate_matchup([entity_a, entity_b])
    if not validation.valid:
        logger.warning("Matchup rejected: {}", "; ".join(validation.errors))
    validation.raise_if_invalid()

    team_mode = entity_a.is_team
    return simulate_game(
        entity_a.name,
        entity_b.name,
        entity_a.stats,
        entity_b.stats,
        team_mode=team_mode,
        roster_a=entity_a.players,
        roster_b=entity_b.players,
        roles_a=entity_a.role_scores or None,
        roles_b=entity_b.role_scores or None,
    )
