"""Advanced career metrics.

All metrics read the season-level points-per-game series; non-finite values
are dropped before computing.

Metrics:
    career_variance_index: Population std dev of season PTS. Lower means
        more consistent.
    longevity_score: Seasons at or above replacement level
        (mean - 0.5*std).
    peak_vs_consistency: Best season PTS / career mean PTS. Above 1.4 is a
        sharp peak; 1.0-1.15 is steady excellence.
    team_impact_score: Mean of PTS * wins/82 across seasons.

Example:
    >>> from nba_sim.career.metrics import team_impact_score
    >>> round(team_impact_score([20.0, 15.0], [60, 20]), 2)
    9.15
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np

from nba_sim.career.curve import GAMES_PER_SEASON

if TYPE_CHECKING:
    from nba_sim.career.season import SeasonRecord


@dataclass(frozen=True)
class AdvancedMetrics:
    """Career-level analytics.

    Attributes:
        career_variance_index: Std dev of season PTS.
        longevity_score: Seasons above replacement level.
        peak_vs_consistency: Peak PTS over mean PTS.
        team_impact_score: PTS weighted by team win percentage.
    """

    career_variance_index: float = 0.0
    longevity_score: int = 0
    peak_vs_consistency: float = 1.0
    team_impact_score: float = 0.0

    def to_dict(self) -> dict[str, float | int]:
        return asdict(self)


def _finite(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    return arr[np.isfinite(arr)]


def career_variance_index(season_pts: Sequence[float]) -> float:
    """Population standard deviation of season PTS (0 with < 2 seasons)."""
    ppgs = _finite(season_pts)
    if ppgs.size < 2:
        return 0.0
    return float(np.std(ppgs))


def longevity_score(season_pts: Sequence[float]) -> int:
    """Count seasons with PTS >= mean - 0.5*std.

    A zero std is treated as 1, so a flat career counts every season.
    """
    ppgs = _finite(season_pts)
    if ppgs.size == 0:
        return 0
    std = float(np.std(ppgs)) or 1.0
    threshold = float(np.mean(ppgs)) - 0.5 * std
    return int(np.count_nonzero(ppgs >= threshold))


def peak_vs_consistency(season_pts: Sequence[float]) -> float:
    """Best season PTS over career mean PTS (1.0 without data)."""
    ppgs = _finite(season_pts)
    if ppgs.size == 0:
        return 1.0
    mean = float(np.mean(ppgs))
    return float(np.max(ppgs)) / mean if mean > 0 else 1.0


def team_impact_score(
    season_pts: Sequence[float], season_wins: Sequence[float]
) -> float:
    """Mean of PTS * (wins / 82) over seasons with finite PTS and wins."""
    impacts = [
        pts * (wins / GAMES_PER_SEASON)
        for pts, wins in zip(season_pts, season_wins)
        if math.isfinite(pts) and math.isfinite(wins)
    ]
    return float(np.mean(impacts)) if impacts else 0.0


def compute_advanced_metrics(seasons: Sequence[SeasonRecord]) -> AdvancedMetrics:
    """Compute every advanced metric for a simulated career."""
    pts = [float(s.custom.pts) for s in seasons]
    wins = [float(s.custom.wins) for s in seasons]
    return AdvancedMetrics(
        career_variance_index=career_variance_index(pts),
        longevity_score=longevity_score(pts),
        peak_vs_consistency=peak_vs_consistency(pts),
        team_impact_score=team_impact_score(pts, wins),
    )
