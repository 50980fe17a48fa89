"""Career projection engine.

Submodules:
    attributes: Attribute picks, athleticism and baseline construction
    curve: Career arc multiplier and career length
    season: Per-season stat lines, leaderboards and awards
    simulator: Full career run and Hall-of-Fame decision
    metrics: Advanced career analytics

Example:
    >>> from nba_sim.career import SimulationRequest, simulate_career
    >>> result = simulate_career(request, CosmeticRng(seed=7))
    >>> result.awards.mvp
"""
from __future__ import annotations

from nba_sim.career.attributes import (
    AttributeKey,
    AttributePick,
    AvailableAttributes,
    CustomPlayerBaseline,
    available_attributes,
    build_baseline,
    compute_athleticism,
    pick_attribute,
    validate_picks,
)
from nba_sim.career.curve import (
    GAMES_PER_SEASON,
    MAX_CAREER_YEARS,
    career_length,
    curve_factor,
    games_by_season,
    total_games,
)
from nba_sim.career.metrics import (
    AdvancedMetrics,
    career_variance_index,
    compute_advanced_metrics,
    longevity_score,
    peak_vs_consistency,
    team_impact_score,
)
from nba_sim.career.season import (
    SeasonAwards,
    SeasonLine,
    SeasonRecord,
    simulate_season,
    top_n,
)
from nba_sim.career.simulator import (
    AwardTally,
    CareerResult,
    SimulationRequest,
    career_avg_score,
    is_hall_of_famer,
    simulate_career,
    validate_request,
)

__all__ = [
    "GAMES_PER_SEASON",
    "MAX_CAREER_YEARS",
    "AdvancedMetrics",
    "AttributeKey",
    "AttributePick",
    "AvailableAttributes",
    "AwardTally",
    "CareerResult",
    "CustomPlayerBaseline",
    "SeasonAwards",
    "SeasonLine",
    "SeasonRecord",
    "SimulationRequest",
    "available_attributes",
    "build_baseline",
    "career_avg_score",
    "career_length",
    "career_variance_index",
    "compute_advanced_metrics",
    "compute_athleticism",
    "curve_factor",
    "games_by_season",
    "is_hall_of_famer",
    "longevity_score",
    "peak_vs_consistency",
    "pick_attribute",
    "simulate_career",
    "simulate_season",
    "team_impact_score",
    "top_n",
    "total_games",
    "validate_picks",
    "validate_request",
]
