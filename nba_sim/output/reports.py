"""Career, matchup and tournament reports.

Reports are plain dictionaries suitable for JSON serialization or for the
CLI's rich tables. The career report adds games-weighted career averages and
analytical findings derived from the advanced metrics.

Findings thresholds:
    Career profile: CVI < 2.5 highly consistent, < 4.0 moderately
        consistent, otherwise high variance
    Durability: longevity score >= 75% of career seasons
    Playing style: peak ratio > 1.35 sharp peak, < 1.15 steady excellence
    Team context: team impact > 60% of career PPG

Example:
    >>> from nba_sim.output import career_summary
    >>> summary = career_summary(result)
    >>> for finding in summary["findings"]:
    ...     print(f"{finding['category']}: {finding['text']}")
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from nba_sim.logging import get_logger

if TYPE_CHECKING:
    from nba_sim.career.metrics import AdvancedMetrics
    from nba_sim.career.simulator import CareerResult
    from nba_sim.matchup.game import MatchResult
    from nba_sim.matchup.tournament import TournamentResult

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

HIGHLY_CONSISTENT_CVI: float = 2.5
MODERATELY_CONSISTENT_CVI: float = 4.0
DURABILITY_SHARE: float = 0.75
SHARP_PEAK_RATIO: float = 1.35
STEADY_PEAK_RATIO: float = 1.15
TEAM_CONTEXT_SHARE: float = 0.6

AVERAGE_STATS: tuple[str, ...] = ("pts", "ast", "reb", "stl", "blk", "per")


# =============================================================================
# Career
# =============================================================================


def career_averages(result: CareerResult) -> dict[str, float]:
    """Games-weighted per-game averages over the career.

    A career with no games played divides by 1, giving zeros.
    """
    played = sum(s.custom.games for s in result.seasons) or 1
    return {
        stat: sum(getattr(s.custom, stat) * s.custom.games for s in result.seasons) / played
        for stat in AVERAGE_STATS
    }


def consistency_label(cvi: float) -> str:
    if cvi < HIGHLY_CONSISTENT_CVI:
        return "highly consistent"
    if cvi < MODERATELY_CONSISTENT_CVI:
        return "moderately consistent"
    return "high variance"


def analytical_findings(
    metrics: AdvancedMetrics, total_years: int, avg_pts: float
) -> list[dict[str, str]]:
    """Interpret the advanced metrics as short findings.

    Args:
        metrics: Career advanced metrics.
        total_years: Career length in seasons.
        avg_pts: Games-weighted career points per game.

    Returns:
        List of {"category", "text"} dictionaries; playing style is omitted
        when the peak ratio sits between the steady and sharp thresholds.
    """
    findings = [
        {
            "category": "Career Profile",
            "text": (
                f"This player showed {consistency_label(metrics.career_variance_index)} "
                "performance."
            ),
        }
    ]

    seasons = f"{metrics.longevity_score}/{total_years}"
    if metrics.longevity_score >= total_years * DURABILITY_SHARE:
        findings.append(
            {
                "category": "Durability",
                "text": f"Sustained excellence across multiple seasons ({seasons}).",
            }
        )
    else:
        findings.append(
            {
                "category": "Career Arc",
                "text": (
                    f"Performance fluctuated significantly (only {seasons} seasons "
                    "above replacement level)."
                ),
            }
        )

    if metrics.peak_vs_consistency > SHARP_PEAK_RATIO:
        findings.append(
            {
                "category": "Playing Style",
                "text": "Sharp peak player: elite potential but less sustained excellence.",
            }
        )
    elif metrics.peak_vs_consistency < STEADY_PEAK_RATIO:
        findings.append(
            {
                "category": "Playing Style",
                "text": "Steady excellence with consistent performance throughout the career.",
            }
        )

    if metrics.team_impact_score > avg_pts * TEAM_CONTEXT_SHARE:
        text = "High contextual impact; thrived on winning teams."
    else:
        text = "Performance relatively independent of team success."
    findings.append({"category": "Team Context", "text": text})
    return findings


def career_summary(result: CareerResult) -> dict[str, Any]:
    """Build the career report.

    Args:
        result: Simulated career.

    Returns:
        Dictionary containing:
        - generated_at: Report timestamp
        - name, position, team
        - total_years, total_games
        - awards: Award counts
        - hall_of_fame, career_avg_score
        - averages: Games-weighted career averages
        - advanced_metrics: Advanced metric values
        - findings: Analytical findings
    """
    averages = career_averages(result)
    findings = analytical_findings(
        result.advanced_metrics, result.total_years, averages["pts"]
    )
    logger.debug("Built career summary for {} with {} findings", result.name, len(findings))
    return {
        "generated_at": datetime.now().isoformat(),
        "name": result.name,
        "position": result.position,
        "team": result.team,
        "total_years": result.total_years,
        "total_games": result.total_games,
        "awards": result.awards.to_dict(),
        "hall_of_fame": result.hall_of_fame,
        "career_avg_score": result.career_avg_score,
        "averages": averages,
        "advanced_metrics": result.advanced_metrics.to_dict(),
        "findings": findings,
    }


# =============================================================================
# Matchups
# =============================================================================


def matchup_summary(result: MatchResult) -> dict[str, Any]:
    """Condensed game report: scoreline, winner and the narrative."""
    return {
        "matchup": f"{result.name_a} vs {result.name_b}",
        "score": f"{result.score_a}-{result.score_b}",
        "winner": result.winner,
        "margin": result.margin,
        "key_factors": [dict(factor) for factor in result.key_factors],
        "lines": list(result.lines),
    }


def tournament_summary(result: TournamentResult) -> dict[str, Any]:
    """Bracket report with one entry per round."""
    return {
        "champion": result.champion,
        "rounds": [
            {
                "round": r.number,
                "games": [
                    f"{m.name_a} {m.score_a} - {m.score_b} {m.name_b}" for m in r.matches
                ],
                "winners": [m.winner for m in r.matches],
                "bye": r.bye,
            }
            for r in result.rounds
        ],
    }
