"""Single-season simulation: stat lines, leaderboards and awards.

Each season the custom player's stat line is drawn around their
position-adjusted baseline and scaled by the career curve, while a synthetic
league of background players is perturbed around their own historical
averages (background players do not age). Leaderboards and awards are then
computed over the combined field.

Formulas:
    per   = clamp(10 + .55*pts + .45*ast + .35*reb + 1.3*stl + 1.2*blk, 8, 32)
    score = .55*pts + .30*reb + .25*ast + .15*per + .4*stl + .4*blk

Background players are scored without the steal/block terms.

Example:
    >>> league = sample_league(pool, teams, rng, size=150)
    >>> season = simulate_season(1, 10, baseline, "Custom", "Bulls", league, 82, None, rng)
    >>> season.awards.mvp.name
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from nba_sim.career.curve import curve_factor
from nba_sim.logging import get_logger
from nba_sim.types import TeamName, clamp, round_half_up

if TYPE_CHECKING:
    from nba_sim.career.attributes import CustomPlayerBaseline
    from nba_sim.data.roster import PlayerRecord
    from nba_sim.rng import CosmeticRng

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_LEAGUE_SIZE: int = 150
LEADERBOARD_SIZE: int = 10
ALL_PRO_SIZE: int = 15
MIP_PROXY_SPREAD: float = 3.0
MIN_TEAM_WINS: int = 20
TEAM_WIN_SPREAD: int = 40

YEAR_VARIANCE_CENTER: float = 0.95
YEAR_VARIANCE_SCALE: float = 0.06
YEAR_VARIANCE_BOUNDS: tuple[float, float] = (0.85, 1.1)

# stat -> (noise scale, cap) for the custom player
CUSTOM_NOISE: dict[str, tuple[float, float]] = {
    "pts": (1.8, 45.0),
    "ast": (0.7, 15.0),
    "reb": (0.9, 18.0),
    "stl": (0.25, 3.5),
    "blk": (0.25, 3.5),
}

# stat -> (noise scale, floor, cap) for background players
LEAGUE_NOISE: dict[str, tuple[float, float, float]] = {
    "pts": (2.0, 0.0, 40.0),
    "ast": (1.0, 0.0, 15.0),
    "reb": (1.2, 0.0, 18.0),
    "stl": (0.35, 0.0, 3.5),
    "blk": (0.35, 0.0, 4.0),
    "per": (2.5, 5.0, 32.0),
}

POSITION_ALIASES: dict[str, str] = {
    "pg": "point guard",
    "sg": "shooting guard",
    "sf": "small forward",
    "pf": "power forward",
    "c": "center",
}


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class PositionAdjustment:
    """Per-game offsets added to the baseline before curve scaling."""

    pts: float = 0.0
    ast: float = 0.0
    reb: float = 0.0
    stl: float = 0.0
    blk: float = 0.0


@dataclass(frozen=True)
class SeasonLine:
    """One participant's stat line in one season."""

    name: str
    team: TeamName
    pts: float
    ast: float
    reb: float
    stl: float
    blk: float
    per: float
    score: float
    is_custom: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LeaguePlayer:
    """Background player: a historical record assigned to a team."""

    record: PlayerRecord
    team: TeamName

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class Leaderboards:
    """Top-10 lists for the season."""

    pts: tuple[SeasonLine, ...]
    ast: tuple[SeasonLine, ...]
    reb: tuple[SeasonLine, ...]
    per: tuple[SeasonLine, ...]


@dataclass(frozen=True)
class SeasonAwards:
    """Season honours.

    Attributes:
        mvp: Highest composite score.
        roy: Rookie of the Year (year 1 only).
        mip: Most Improved Player (year 2 onward).
        champion: Team with the highest aggregate score.
        finals_mvp: Best score on the champion team.
        all_pro: Top 15 by PER.
    """

    mvp: SeasonLine
    roy: SeasonLine | None
    mip: SeasonLine | None
    champion: TeamName
    finals_mvp: SeasonLine
    all_pro: tuple[SeasonLine, ...] = ()


@dataclass(frozen=True)
class CustomSeason:
    """The custom player's season as reported to renderers."""

    name: str
    team: TeamName
    pts: float
    ast: float
    reb: float
    stl: float
    blk: float
    per: float
    score: float
    wins: int
    games: int


@dataclass(frozen=True)
class SeasonRecord:
    """One simulated year. Created once and never mutated."""

    year: int
    custom: CustomSeason
    leaderboards: Leaderboards
    awards: SeasonAwards
    team_wins: dict[TeamName, int] = field(default_factory=dict)

    @property
    def won_mvp(self) -> bool:
        return self.awards.mvp.is_custom

    @property
    def won_roy(self) -> bool:
        return self.awards.roy is not None and self.awards.roy.is_custom

    @property
    def won_mip(self) -> bool:
        return self.awards.mip is not None and self.awards.mip.is_custom

    @property
    def won_championship(self) -> bool:
        return self.awards.champion == self.custom.team

    @property
    def won_finals_mvp(self) -> bool:
        return self.awards.finals_mvp.is_custom

    @property
    def made_all_pro(self) -> bool:
        return any(line.is_custom for line in self.awards.all_pro)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for renderers."""
        awards = self.awards
        return {
            "year": self.year,
            "custom": asdict(self.custom),
            "leaderboards": {
                stat: [line.to_dict() for line in getattr(self.leaderboards, stat)]
                for stat in ("pts", "ast", "reb", "per")
            },
            "awards": {
                "mvp": awards.mvp.to_dict(),
                "roy": awards.roy.to_dict() if awards.roy else None,
                "mip": awards.mip.to_dict() if awards.mip else None,
                "champion": awards.champion,
                "finals_mvp": awards.finals_mvp.to_dict(),
                "all_pro": [line.name for line in awards.all_pro],
            },
            "team_wins": dict(self.team_wins),
        }


# =============================================================================
# Formulas
# =============================================================================


def position_adjustment(position: str | None) -> PositionAdjustment:
    """Offsets for a position: guards pass, shooting guards score, centers rebound."""
    pos = str(position or "").strip().lower()
    pos = POSITION_ALIASES.get(pos, pos)
    if "point" in pos:
        return PositionAdjustment(ast=0.7, reb=-0.5)
    if "shooting" in pos:
        return PositionAdjustment(pts=1.5, reb=-0.5)
    if "center" in pos:
        return PositionAdjustment(pts=-1.5, ast=-1.0, reb=3.0, blk=0.3)
    return PositionAdjustment()


def per_estimate(pts: float, ast: float, reb: float, stl: float, blk: float) -> float:
    """PER derived from a season line."""
    return clamp(
        10.0 + pts * 0.55 + ast * 0.45 + reb * 0.35 + stl * 1.3 + blk * 1.2,
        8.0,
        32.0,
    )


def composite_score(
    pts: float,
    reb: float,
    ast: float,
    per: float,
    stl: float = 0.0,
    blk: float = 0.0,
) -> float:
    """Weighted blend used for MVP and award ranking."""
    return pts * 0.55 + reb * 0.30 + ast * 0.25 + per * 0.15 + stl * 0.4 + blk * 0.4


def year_variance(rng: CosmeticRng) -> float:
    """Season-level multiplicative noise, bounded to [0.85, 1.1]."""
    lo, hi = YEAR_VARIANCE_BOUNDS
    return clamp(YEAR_VARIANCE_CENTER + rng.randn() * YEAR_VARIANCE_SCALE, lo, hi)


# =============================================================================
# League
# =============================================================================


def sample_league(
    pool: Sequence[PlayerRecord],
    teams: Sequence[TeamName],
    rng: CosmeticRng,
    size: int = DEFAULT_LEAGUE_SIZE,
) -> list[LeaguePlayer]:
    """Draw background players from the era pool and assign random teams."""
    return [
        LeaguePlayer(record=record, team=rng.choice(teams))
        for record in rng.sample(pool, size)
    ]


def league_season_line(player: LeaguePlayer, rng: CosmeticRng) -> SeasonLine:
    """Perturb a background player's averages into a season line."""
    stats: dict[str, float] = {}
    for stat, (scale, lo, hi) in LEAGUE_NOISE.items():
        stats[stat] = clamp(getattr(player.record, stat) + rng.randn() * scale, lo, hi)
    score = composite_score(stats["pts"], stats["reb"], stats["ast"], stats["per"])
    return SeasonLine(name=player.name, team=player.team, score=score, **stats)


# =============================================================================
# Leaderboards & Awards
# =============================================================================


def top_n(
    lines: Sequence[SeasonLine], stat: str, n: int = LEADERBOARD_SIZE
) -> list[SeasonLine]:
    """Top n lines by stat, descending; ties keep input order."""
    return sorted(lines, key=lambda line: getattr(line, stat), reverse=True)[:n]


def team_aggregates(lines: Sequence[SeasonLine]) -> dict[TeamName, float]:
    """Sum of composite scores per team, in first-seen order."""
    totals: dict[TeamName, float] = {}
    for line in lines:
        totals[line.team] = totals.get(line.team, 0.0) + line.score
    return totals


def team_win_totals(aggregates: dict[TeamName, float]) -> dict[TeamName, int]:
    """Min-max scale team aggregates into a 20-60 win range."""
    if not aggregates:
        return {}
    lo = min(aggregates.values())
    span = max(1.0, max(aggregates.values()) - lo)
    return {
        team: round_half_up(MIN_TEAM_WINS + (total - lo) / span * TEAM_WIN_SPREAD)
        for team, total in aggregates.items()
    }


def most_improved(
    lines: Sequence[SeasonLine],
    prior_custom_score: float,
    rng: CosmeticRng,
) -> SeasonLine | None:
    """Largest positive score gain over the prior season.

    Background seasons are not retained, so their prior score is a random
    proxy up to 3 points below the current score. Returns None when nobody
    improved.
    """
    if not lines:
        raise ValueError("most_improved() requires at least one season line")
    best, best_delta = lines[0], float("-inf")
    for line in lines:
        if line.is_custom:
            prior = prior_custom_score
        else:
            prior = line.score - rng.random() * MIP_PROXY_SPREAD
        delta = line.score - prior
        if delta > best_delta:
            best, best_delta = line, delta
    if best_delta <= 0:
        return None
    return best


def determine_awards(
    lines: Sequence[SeasonLine],
    year: int,
    prior_custom_score: float | None,
    rng: CosmeticRng,
) -> tuple[SeasonAwards, dict[TeamName, int]]:
    """Compute the season's awards and team win totals.

    Args:
        lines: Every participant's season line, custom player first.
        year: 1-based season number.
        prior_custom_score: Custom player's score last season.
        rng: Cosmetic generator (MIP proxy).

    Returns:
        Tuple of (awards, team wins).
    """
    by_score = top_n(lines, "score", n=len(lines))
    mvp = by_score[0]
    roy = mvp if year == 1 else None

    mip = None
    if year > 1 and prior_custom_score is not None:
        mip = most_improved(lines, prior_custom_score, rng)

    aggregates = team_aggregates(lines)
    champion = max(aggregates, key=aggregates.__getitem__)
    finals_mvp = next(line for line in by_score if line.team == champion)

    awards = SeasonAwards(
        mvp=mvp,
        roy=roy,
        mip=mip,
        champion=champion,
        finals_mvp=finals_mvp,
        all_pro=tuple(top_n(lines, "per", n=ALL_PRO_SIZE)),
    )
    return awards, team_win_totals(aggregates)


# =============================================================================
# Season
# =============================================================================


def custom_season_stats(
    baseline: CustomPlayerBaseline,
    factor: float,
    rng: CosmeticRng,
) -> dict[str, float]:
    """Draw the custom player's counting stats for one season."""
    adjustment = position_adjustment(baseline.position)
    stats: dict[str, float] = {}
    for stat, (scale, cap) in CUSTOM_NOISE.items():
        base = getattr(baseline, stat) + getattr(adjustment, stat)
        stats[stat] = clamp((base + rng.randn() * scale) * factor, 0.0, cap)
    return stats


def simulate_season(
    year: int,
    total_years: int,
    baseline: CustomPlayerBaseline,
    name: str,
    team: TeamName,
    league: Sequence[LeaguePlayer],
    games: int,
    prior_score: float | None,
    rng: CosmeticRng,
) -> SeasonRecord:
    """Simulate one year of the career.

    Args:
        year: 1-based season number.
        total_years: Career length.
        baseline: Custom player's baseline.
        name: Custom player's name.
        team: Custom player's team.
        league: Background players for the career.
        games: Games played this season.
        prior_score: Custom player's composite score last season.
        rng: Cosmetic generator.

    Returns:
        Immutable SeasonRecord.
    """
    factor = curve_factor(year, baseline.g, total_years) * year_variance(rng)
    stats = custom_season_stats(baseline, factor, rng)
    per = per_estimate(stats["pts"], stats["ast"], stats["reb"], stats["stl"], stats["blk"])
    score = composite_score(
        stats["pts"], stats["reb"], stats["ast"], per, stats["stl"], stats["blk"]
    )
    custom_line = SeasonLine(
        name=name, team=team, per=per, score=score, is_custom=True, **stats
    )

    lines = [custom_line] + [league_season_line(player, rng) for player in league]

    leaderboards = Leaderboards(
        pts=tuple(top_n(lines, "pts")),
        ast=tuple(top_n(lines, "ast")),
        reb=tuple(top_n(lines, "reb")),
        per=tuple(top_n(lines, "per")),
    )
    awards, team_wins = determine_awards(lines, year, prior_score, rng)

    custom = CustomSeason(
        name=name,
        team=team,
        per=per,
        score=score,
        wins=team_wins.get(team, 0),
        games=games,
        **stats,
    )
    logger.debug(
        "Season {}: {:.1f} pts, {:.1f} PER, MVP {}, champion {}",
        year,
        custom.pts,
        custom.per,
        awards.mvp.name,
        awards.champion,
    )
    return SeasonRecord(
        year=year,
        custom=custom,
        leaderboards=leaderboards,
        awards=awards,
        team_wins=team_wins,
    )
