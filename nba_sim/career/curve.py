"""Career arc model and career length.

The career curve is a unitless multiplier applied to a custom player's
baseline each season: it rises from a start floor to 1.0, climbs through the
peak to a ceiling, then declines. Durable players (more career games) peak
later, longer and higher.

    gNorm        = clamp((G - 300) / 1200, 0, 1)
    peakStart    = round(2 + 2*gNorm)           2..4
    peakLength   = round(1 + 3*gNorm)           1..4
    peakEnd      = min(totalYears, peakStart + peakLength - 1)
    startFloor   = 0.75 + 0.08*gNorm
    peakCeil     = 1.08 + 0.12*gNorm
    declineFloor = 0.82 + 0.05*gNorm

The decline segment always starts from peakCeil at peakEnd. When
peakLength is 1 (gNorm below 1/6) the peak segment never climbs past 1.0,
so the season after peakEnd can sit above the peak season: at G=300 over
ten seasons the arc reads 0.75, 1.0, 1.0475, ... before it falls.

Example:
    >>> from nba_sim.career.curve import curve_factor, career_length
    >>> years = career_length(820)
    >>> [round(curve_factor(y, 820, years), 3) for y in range(1, years + 1)]
"""

from __future__ import annotations

from dataclasses import dataclass

from nba_sim.types import clamp, round_half_up

GAMES_PER_SEASON: int = 82
MAX_CAREER_YEARS: int = 20


@dataclass(frozen=True)
class CurveShape:
    """Breakpoints and levels of one career arc."""

    g_norm: float
    peak_start: int
    peak_end: int
    start_floor: float
    peak_ceil: float
    decline_floor: float


def curve_shape(longevity_games: float, total_years: int) -> CurveShape:
    """Compute the arc breakpoints for a longevity value."""
    g_norm = clamp((float(longevity_games) - 300.0) / 1200.0, 0.0, 1.0)
    peak_start = round_half_up(2 + 2 * g_norm)
    peak_length = round_half_up(1 + 3 * g_norm)
    return CurveShape(
        g_norm=g_norm,
        peak_start=peak_start,
        peak_end=min(total_years, peak_start + peak_length - 1),
        start_floor=0.75 + 0.08 * g_norm,
        peak_ceil=1.08 + 0.12 * g_norm,
        decline_floor=0.82 + 0.05 * g_norm,
    )


def curve_factor(year_index: int, longevity_games: float, total_years: int) -> float:
    """Performance multiplier for a season of the career.

    Args:
        year_index: 1-based season number.
        longevity_games: Career games from the longevity pick.
        total_years: Career length in seasons.

    Returns:
        Multiplier, 0.75 at the lowest and 1.20 at the highest.
    """
    s = curve_shape(longevity_games, total_years)

    if year_index < s.peak_start:
        t = (year_index - 1) / max(1, s.peak_start - 1)
        return s.start_floor + t * (1.0 - s.start_floor)
    if year_index <= s.peak_end:
        t = (year_index - s.peak_start) / max(1, s.peak_end - s.peak_start)
        return 1.0 + t * (s.peak_ceil - 1.0)
    t = (year_index - s.peak_end) / max(1, total_years - s.peak_end)
    return s.peak_ceil - t * (s.peak_ceil - s.decline_floor)


def total_games(longevity_games: float) -> int:
    """Career games implied by the longevity pick, floored at 0."""
    return max(0, round_half_up(float(longevity_games)))


def career_length(games: int, max_years: int = MAX_CAREER_YEARS) -> int:
    """Seasons in the career: games/82 rounded, at least one.

    A zero-game career still gets one (empty) season.
    """
    years = round_half_up(games / GAMES_PER_SEASON) or 1
    return int(clamp(years, 1, max_years))


def games_by_season(games: int, total_years: int) -> list[int]:
    """Split career games evenly; earlier seasons absorb the remainder."""
    base, remainder = divmod(games, total_years)
    return [base + (1 if i < remainder else 0) for i in range(total_years)]
