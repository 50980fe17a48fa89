"""Game narrative: phase lines, moment vignettes and key-factor call-outs.

Narrative text is flavour only; nothing here feeds back into the score.
Every choice is drawn from the match's seeded generator so a given pairing
always reads the same.

Line order:
    1. One template per phase: open, answer, half, third, close
    2. Up to three moments (team games): a roster player and a flavour action
    3. One line per key factor
    4. The final score
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from nba_sim.types import KeyFactor

if TYPE_CHECKING:
    from nba_sim.data.roster import PlayerRecord
    from nba_sim.rng import ReproducibleRng

PHASES: tuple[str, ...] = ("open", "answer", "half", "third", "close")

MAX_MOMENTS: int = 3

# Placeholders: {a}, {b} (sides in call order), {winner}, {loser}
PHASE_TEMPLATES: dict[str, tuple[str, ...]] = {
    "open": (
        "{a} and {b} trade baskets early as the crowd settles in.",
        "{a} comes out firing, but {b} refuses to blink.",
        "{b} wins the tip and both sides probe each other's defense.",
        "A feeling-out first few minutes between {a} and {b}.",
    ),
    "answer": (
        "{loser} strings together stops to steal the first-quarter edge.",
        "{winner} answers an early run with one of its own.",
        "Every {a} bucket is met by a {b} reply at the other end.",
        "{winner} starts to find a rhythm from the perimeter.",
    ),
    "half": (
        "{winner} heads into halftime with the momentum.",
        "It is a one-possession game at the half.",
        "{loser} leads briefly before {winner} closes the half on a burst.",
        "Both benches have work to do at the break.",
    ),
    "third": (
        "{loser} opens the third quarter on a run to make it a game.",
        "{winner} tightens up defensively coming out of the locker room.",
        "The third quarter turns into a shootout.",
        "Foul trouble shuffles the rotations for {loser} in the third.",
    ),
    "close": (
        "{winner} closes it out with clutch free throws down the stretch.",
        "{loser} has a look to tie late, but it rims out.",
        "{winner} pulls away in the final minutes.",
        "A late stop seals it for {winner}.",
    ),
}

FLAVOR_ACTIONS: tuple[str, ...] = (
    "buries a deep three off the dribble",
    "finishes through contact for an and-one",
    "swats a shot into the stands",
    "threads a no-look pass for an easy layup",
    "rips down a contested offensive board",
    "picks a pocket and races the other way",
    "drains a fadeaway over two defenders",
    "drives baseline for a reverse layup",
    "hammers home a putback dunk",
    "draws a charge to kill the momentum",
)


def phase_lines(
    rng: ReproducibleRng, name_a: str, name_b: str, winner: str, loser: str
) -> list[str]:
    """One templated line per game phase, in phase order."""
    values = {"a": name_a, "b": name_b, "winner": winner, "loser": loser}
    return [rng.choice(PHASE_TEMPLATES[phase]).format(**values) for phase in PHASES]


def moment_lines(
    rng: ReproducibleRng,
    sides: Sequence[tuple[str, Sequence[PlayerRecord]]],
) -> list[str]:
    """Up to three vignettes crediting a random roster player with an action.

    Args:
        rng: Match generator.
        sides: (team name, players) for each side with a roster.
    """
    sides = [(name, players) for name, players in sides if players]
    if not sides:
        return []
    count = 1 + rng.randrange(MAX_MOMENTS)
    lines = []
    for _ in range(count):
        team, players = rng.choice(sides)
        player = rng.choice(players)
        lines.append(f"Moment: {player.name} ({team}) {rng.choice(FLAVOR_ACTIONS)}.")
    return lines


def factor_line(factor: KeyFactor) -> str:
    return f"Key factor: {factor['label']} favors {factor['favors']} ({abs(factor['diff']):.1f})."


def final_line(name_a: str, name_b: str, score_a: int, score_b: int) -> str:
    winner = name_a if score_a > score_b else name_b
    return (
        f"Final: {name_a} {score_a}, {name_b} {score_b}. "
        f"{winner} wins by {abs(score_a - score_b)}."
    )


def build_narrative(
    rng: ReproducibleRng,
    name_a: str,
    name_b: str,
    score_a: int,
    score_b: int,
    key_factors: Sequence[KeyFactor],
    rosters: Sequence[tuple[str, Sequence[PlayerRecord]]] = (),
) -> list[str]:
    """Assemble every narrative line of a game.

    Args:
        rng: Match generator, already past the score draws.
        name_a: First side.
        name_b: Second side.
        score_a: Final score of the first side.
        score_b: Final score of the second side.
        key_factors: Ranked key factors.
        rosters: (team name, players) pairs; empty outside team games.

    Returns:
        Ordered narrative lines.
    """
    winner, loser = (name_a, name_b) if score_a > score_b else (name_b, name_a)
    lines = phase_lines(rng, name_a, name_b, winner, loser)
    lines.extend(moment_lines(rng, rosters))
    lines.extend(factor_line(factor) for factor in key_factors)
    lines.append(final_line(name_a, name_b, score_a, score_b))
    return lines
