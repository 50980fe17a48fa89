"""Single-elimination tournament over matchup entities.

Each round pairs the remaining entrants in order. When a round has an odd
number of entrants, one is drawn with the cosmetic generator to sit out and
advances automatically, so bracket shape varies run to run while every
individual game stays seeded by its pairing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from nba_sim.logging import SUCCESS, get_logger, simulation_context
from nba_sim.matchup.entities import Entity
from nba_sim.matchup.game import MatchResult, simulate_matchup, validate_matchup
from nba_sim.rng import CosmeticRng

logger = get_logger(__name__)


@dataclass(frozen=True)
class TournamentRound:
    """Games played in one round plus the entrant that sat out, if any."""

    number: int
    matches: tuple[MatchResult, ...]
    bye: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "matches": [match.to_dict() for match in self.matches],
            "bye": self.bye,
        }


@dataclass(frozen=True)
class TournamentResult:
    """Full bracket and champion."""

    rounds: tuple[TournamentRound, ...]
    champion: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "champion": self.champion,
        }


def play_round(
    number: int, entrants: Sequence[Entity], rng: CosmeticRng
) -> tuple[TournamentRound, list[Entity]]:
    """Play one round.

    Returns:
        Tuple of (round record, entrants advancing). Winners come first in
        pairing order, followed by the bye entrant.
    """
    remaining = list(entrants)
    bye = None
    if len(remaining) % 2 == 1:
        bye = remaining.pop(rng.randrange(len(remaining)))

    by_name = {entity.name: entity for entity in remaining}
    matches: list[MatchResult] = []
    advancing: list[Entity] = []
    for i in range(0, len(remaining), 2):
        match = simulate_matchup(remaining[i], remaining[i + 1])
        matches.append(match)
        advancing.append(by_name[match.winner])
    if bye is not None:
        advancing.append(bye)

    logger.debug(
        "Round {}: {} games, bye {}",
        number,
        len(matches),
        bye.name if bye else "none",
    )
    record = TournamentRound(
        number=number,
        matches=tuple(matches),
        bye=bye.name if bye else None,
    )
    return record, advancing


def run_tournament(
    entrants: Sequence[Entity], rng: CosmeticRng | None = None
) -> TournamentResult:
    """Play rounds until one entrant remains.

    Two entrants play a single game.

    Args:
        entrants: Built entities, all players or all teams, uniquely named.
        rng: Cosmetic generator for bye draws; fresh and unseeded when None.

    Returns:
        TournamentResult with every round.

    Raises:
        InvalidRequestError: Fewer than two entrants or incompatible entrants.
    """
    validation = validate_matchup(entrants)
    if not validation.valid:
        logger.warning("Tournament rejected: {}", "; ".join(validation.errors))
    validation.raise_if_invalid()

    rng = rng or CosmeticRng()
    rounds: list[TournamentRound] = []
    remaining = list(entrants)
    with simulation_context("tournament", len(entrants)):
        while len(remaining) > 1:
            record, remaining = play_round(len(rounds) + 1, remaining, rng)
            rounds.append(record)

    champion = remaining[0].name
    logger.info(
        "{} Tournament of {} won by {} after {} rounds",
        SUCCESS,
        len(entrants),
        champion,
        len(rounds),
    )
    return TournamentResult(rounds=tuple(rounds), champion=champion)
