"""Output bridges for simulation results.

Submodules:
    reports: Career, matchup and tournament report dictionaries
    biography: Narrative-ready career payload

Example:
    >>> from nba_sim.output import career_summary, build_career_payload
    >>> summary = career_summary(result)
    >>> payload = build_career_payload(result, "Custom Player", "SG")
"""
from __future__ import annotations

from nba_sim.output.biography import (
    CareerPayload,
    build_career_payload,
    cache_key,
)
from nba_sim.output.reports import (
    analytical_findings,
    career_averages,
    career_summary,
    matchup_summary,
    tournament_summary,
)

__all__ = [
    "CareerPayload",
    "analytical_findings",
    "build_career_payload",
    "cache_key",
    "career_averages",
    "career_summary",
    "matchup_summary",
    "tournament_summary",
]
