"""Roster and team feeds consumed by the simulation engine.

Submodules:
    roster: Player records, CSV/JSON loading, era and position helpers
    teams: Team name pools per era

Example:
    >>> from nba_sim.data import load_roster, teams_for_era, load_teams_by_era
    >>> roster = load_roster("data/NBA_PLAYERS.csv")
    >>> teams = teams_for_era(load_teams_by_era("data/teams_by_era.json"), "all")
"""
from __future__ import annotations

from nba_sim.data.roster import (
    ALL_ERAS,
    DRAFT_SLOTS,
    NUMERIC_COLUMNS,
    PlayerRecord,
    Roster,
    draw_candidates,
    era_start,
    filter_by_era,
    load_roster,
    merge_enrichment,
    parse_position,
    position_matches_slot,
)
from nba_sim.data.teams import (
    FALLBACK_TEAMS,
    load_teams_by_era,
    team_options,
    teams_for_era,
)

__all__ = [
    "ALL_ERAS",
    "DRAFT_SLOTS",
    "FALLBACK_TEAMS",
    "NUMERIC_COLUMNS",
    "PlayerRecord",
    "Roster",
    "draw_candidates",
    "era_start",
    "filter_by_era",
    "load_roster",
    "load_teams_by_era",
    "merge_enrichment",
    "parse_position",
    "position_matches_slot",
    "team_options",
    "teams_for_era",
]
