"""Career simulation and Hall-of-Fame decision.

``simulate_career`` takes an immutable ``SimulationRequest`` (everything the
run depends on: picks, position, team, era pool, team pool, active
attributes) plus an explicit cosmetic generator, and returns an immutable
``CareerResult``. No module-level state is read or written, so concurrent
simulations cannot interfere.

Hall of Fame is awarded when ANY of these fixed clauses holds:
    - MVP >= 1 and careerAvgScore > 20
    - All-Pro >= 6 and careerAvgScore > 18
    - Championships >= 2 and All-Pro >= 3 and careerAvgScore > 17
    - MVP >= 4 and All-Pro >= 7

careerAvgScore is the games-weighted mean of
``.55*pts + .30*reb + .25*ast + .15*per`` over seasons.

Example:
    >>> request = SimulationRequest(
    ...     name="Custom Player", position="PG", picks=picks, team="Bulls",
    ...     roster=tuple(pool), team_pool=tuple(teams),
    ...     available_attributes=available,
    ... )
    >>> result = simulate_career(request, CosmeticRng(seed=7))
    >>> print(result.total_years, result.hall_of_fame)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any

from nba_sim.career.attributes import (
    AttributeKey,
    AttributePick,
    AvailableAttributes,
    build_baseline,
    validate_picks,
)
from nba_sim.career.curve import (
    MAX_CAREER_YEARS,
    career_length,
    games_by_season,
    total_games,
)
from nba_sim.career.metrics import AdvancedMetrics, compute_advanced_metrics
from nba_sim.career.season import (
    DEFAULT_LEAGUE_SIZE,
    SeasonRecord,
    sample_league,
    simulate_season,
)
from nba_sim.data.roster import PlayerRecord
from nba_sim.logging import SUCCESS, get_logger, simulation_context
from nba_sim.rng import CosmeticRng
from nba_sim.types import TeamName, ValidationResult

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Hall-of-Fame clauses are fixed design constants
HOF_MVP_MIN: int = 1
HOF_MVP_SCORE: float = 20.0
HOF_ALL_PRO_MIN: int = 6
HOF_ALL_PRO_SCORE: float = 18.0
HOF_CHAMPS_MIN: int = 2
HOF_CHAMPS_ALL_PRO_MIN: int = 3
HOF_CHAMPS_SCORE: float = 17.0
HOF_AUTO_MVP_MIN: int = 4
HOF_AUTO_ALL_PRO_MIN: int = 7


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class SimulationRequest:
    """Everything one career simulation depends on.

    Attributes:
        name: Custom player's name.
        position: Chosen position (PG/SG/SF/PF/C or long form).
        picks: One pick per active attribute.
        team: Chosen team.
        roster: Era-filtered pool background players are drawn from.
        team_pool: Team names for the era.
        available_attributes: Attributes the data source supports.
        league_size: Background players sampled into the league.
        max_years: Upper bound on career length.
    """

    name: str
    position: str
    picks: Mapping[AttributeKey, AttributePick]
    team: TeamName | None
    roster: tuple[PlayerRecord, ...] = ()
    team_pool: tuple[TeamName, ...] = ()
    available_attributes: AvailableAttributes = frozenset(AttributeKey)
    league_size: int = DEFAULT_LEAGUE_SIZE
    max_years: int = MAX_CAREER_YEARS

    def __post_init__(self) -> None:
        # read-only snapshot of the caller's picks
        object.__setattr__(self, "picks", MappingProxyType(dict(self.picks)))


@dataclass(frozen=True)
class AwardTally:
    """Career award counts."""

    mvp: int = 0
    roy: int = 0
    mip: int = 0
    all_pro: int = 0
    championships: int = 0
    finals_mvp: int = 0

    @classmethod
    def from_seasons(cls, seasons: Sequence[SeasonRecord]) -> AwardTally:
        """Count the awards the custom player won across seasons."""
        return cls(
            mvp=sum(s.won_mvp for s in seasons),
            roy=sum(s.won_roy for s in seasons),
            mip=sum(s.won_mip for s in seasons),
            all_pro=sum(s.made_all_pro for s in seasons),
            championships=sum(s.won_championship for s in seasons),
            finals_mvp=sum(s.won_finals_mvp for s in seasons),
        )

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class CareerResult:
    """Aggregate of a simulated career. Immutable once returned."""

    name: str
    position: str
    team: TeamName
    seasons: tuple[SeasonRecord, ...]
    awards: AwardTally
    hall_of_fame: bool
    career_avg_score: float
    total_games: int
    total_years: int
    advanced_metrics: AdvancedMetrics = field(default_factory=AdvancedMetrics)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form for renderers."""
        return {
            "name": self.name,
            "position": self.position,
            "team": self.team,
            "seasons": [season.to_dict() for season in self.seasons],
            "awards": self.awards.to_dict(),
            "hall_of_fame": self.hall_of_fame,
            "career_avg_score": self.career_avg_score,
            "total_games": self.total_games,
            "total_years": self.total_years,
            "advanced_metrics": self.advanced_metrics.to_dict(),
        }


# =============================================================================
# Aggregation
# =============================================================================


def career_avg_score(seasons: Sequence[SeasonRecord]) -> float:
    """Games-weighted mean of the per-season composite (no stl/blk terms)."""
    played = sum(s.custom.games for s in seasons) or 1
    weighted = sum(
        (
            s.custom.pts * 0.55
            + s.custom.reb * 0.30
            + s.custom.ast * 0.25
            + s.custom.per * 0.15
        )
        * s.custom.games
        for s in seasons
    )
    return weighted / played


def is_hall_of_famer(awards: AwardTally, avg_score: float) -> bool:
    """Apply the four Hall-of-Fame clauses."""
    return (
        (awards.mvp >= HOF_MVP_MIN and avg_score > HOF_MVP_SCORE)
        or (awards.all_pro >= HOF_ALL_PRO_MIN and avg_score > HOF_ALL_PRO_SCORE)
        or (
            awards.championships >= HOF_CHAMPS_MIN
            and awards.all_pro >= HOF_CHAMPS_ALL_PRO_MIN
            and avg_score > HOF_CHAMPS_SCORE
        )
        or (awards.mvp >= HOF_AUTO_MVP_MIN and awards.all_pro >= HOF_AUTO_ALL_PRO_MIN)
    )


def validate_request(request: SimulationRequest) -> ValidationResult:
    """Collect every reason the request cannot be simulated."""
    result = ValidationResult()
    if not request.name or not request.name.strip():
        result.add_error("Please enter a player name before simulating.")
    result.merge(validate_picks(request.picks, request.available_attributes))
    if not request.team:
        result.add_error("Pick a team before simulating.")
    if not request.team_pool:
        result.add_error("Team pool is empty; no teams available for the era.")
    return result


# =============================================================================
# Simulation
# =============================================================================


def _resolve_team(
    request: SimulationRequest, rng: CosmeticRng
) -> TeamName:
    if request.team in request.team_pool:
        return request.team
    logger.warning(
        "Team {} not in the era pool, assigning a random team", request.team
    )
    return rng.choice(request.team_pool)


def simulate_career(
    request: SimulationRequest,
    rng: CosmeticRng | None = None,
) -> CareerResult:
    """Run a full season-by-season career projection.

    Args:
        request: Immutable simulation inputs.
        rng: Cosmetic generator; a fresh unseeded one when None.

    Returns:
        CareerResult with every season, award counts, Hall-of-Fame decision
        and advanced metrics.

    Raises:
        InvalidRequestError: Request failed validation; nothing was simulated.
    """
    validation = validate_request(request)
    if not validation.valid:
        logger.warning("Career request rejected: {}", "; ".join(validation.errors))
    validation.raise_if_invalid()

    with simulation_context("career", request.name):
        return _run_career(request, rng or CosmeticRng())


def _run_career(request: SimulationRequest, rng: CosmeticRng) -> CareerResult:
    baseline = build_baseline(
        request.picks,
        request.position,
        team=request.team,
        available=request.available_attributes,
    )

    games = total_games(baseline.g)
    years = career_length(games, request.max_years)
    season_games = games_by_season(games, years)

    league = sample_league(request.roster, request.team_pool, rng, request.league_size)
    team = _resolve_team(request, rng)

    logger.info(
        "Simulating {} ({}, {}): {} seasons, {} games, {} league players",
        request.name,
        request.position,
        team,
        years,
        games,
        len(league),
    )

    seasons: list[SeasonRecord] = []
    prior_score: float | None = None

    for year in range(1, years + 1):
        season = simulate_season(
            year=year,
            total_years=years,
            baseline=baseline,
            name=request.name,
            team=team,
            league=league,
            games=season_games[year - 1],
            prior_score=prior_score,
            rng=rng,
        )
        prior_score = season.custom.score
        seasons.append(season)

    awards = AwardTally.from_seasons(seasons)
    avg_score = career_avg_score(seasons)
    hall_of_fame = is_hall_of_famer(awards, avg_score)

    logger.info(
        "{} Career complete for {}: {} MVP, {} All-Pro, {} titles, HOF={}",
        SUCCESS,
        request.name,
        awards.mvp,
        awards.all_pro,
        awards.championships,
        hall_of_fame,
    )

    return CareerResult(
        name=request.name,
        position=request.position,
        team=team,
        seasons=tuple(seasons),
        awards=awards,
        hall_of_fame=hall_of_fame,
        career_avg_score=avg_score,
        total_games=games,
        total_years=years,
        advanced_metrics=compute_advanced_metrics(seasons),
    )
