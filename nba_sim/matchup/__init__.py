"""Seeded matchup and tournament resolver.

Submodules:
    entities: Solo and team entities and their aggregate stats
    game: Single-game scoring, tie-break and key factors
    narrative: Phase templates, moment vignettes and call-out lines
    tournament: Single-elimination bracket with random byes

Example:
    >>> from nba_sim.matchup import run_tournament, team_entity
    >>> result = run_tournament([team_a, team_b, team_c])
    >>> result.champion
"""
from __future__ import annotations

from nba_sim.matchup.entities import (
    Entity,
    EntityStats,
    solo_entity,
    team_entity,
    validate_team,
)
from nba_sim.matchup.game import (
    MatchResult,
    base_score,
    key_factors,
    match_seed,
    simulate_game,
    simulate_matchup,
    validate_matchup,
)
from nba_sim.matchup.tournament import (
    TournamentResult,
    TournamentRound,
    run_tournament,
)

__all__ = [
    "Entity",
    "EntityStats",
    "MatchResult",
    "TournamentResult",
    "TournamentRound",
    "base_score",
    "key_factors",
    "match_seed",
    "run_tournament",
    "simulate_game",
    "simulate_matchup",
    "solo_entity",
    "team_entity",
    "validate_matchup",
    "validate_team",
]
