"""Biography payload bridge.

Converts a simulated career into the fact sheet a narrative generator
consumes: player profile, dated timeline, career highs and award strings.
The payload contains only facts the simulation produced; profile fields the
engine does not model are filled with fixed placeholders.

Field names serialize in camelCase (``model_dump(by_alias=True)``).

Example:
    >>> from nba_sim.output.biography import build_career_payload, cache_key
    >>> payload = build_career_payload(result, "Custom Player", "SG")
    >>> payload.model_dump(by_alias=True)["careerStats"]["careerHighPoints"]
    >>> cache_key("Custom Player", "SG", "ollama")
    'Custom Player|SG|career|ollama'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nba_sim.types import round_half_up

if TYPE_CHECKING:
    from nba_sim.career.simulator import CareerResult

# Simulated careers are dated from the 2024 draft
START_YEAR: int = 2024
PAYLOAD_NOTE: str = "All details are simulated from deterministic engine outputs."


class _PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerProfile(_PayloadModel):
    full_name: str
    birth_date: str = "Unknown"
    nationality: str = "American"
    position: str
    height: str = "Unknown"
    college: str = "Unknown"


class TimelineEntry(_PayloadModel):
    date: str
    event: str
    details: str


class CareerStats(_PayloadModel):
    seasons: int = 0
    teams: list[str] = Field(default_factory=list)
    career_high_points: int = 0
    career_high_assists: int = 0
    career_high_rebounds: int = 0
    awards: list[str] = Field(default_factory=list)
    injuries: list[dict[str, Any]] = Field(default_factory=list)


class ModeContext(_PayloadModel):
    game_mode: str = "career"
    seed: int | None = None
    note: str = PAYLOAD_NOTE


class CareerPayload(_PayloadModel):
    """Narrative-ready fact sheet for one simulated career."""

    player: PlayerProfile
    career_timeline: list[TimelineEntry] = Field(default_factory=list)
    career_stats: CareerStats = Field(default_factory=CareerStats)
    mode_context: ModeContext = Field(default_factory=ModeContext)


def career_timeline(result: CareerResult) -> list[TimelineEntry]:
    """Draft, debut and per-season award milestones.

    Season N spans START_YEAR + N - 1 into the following year; its awards
    are dated in the spring that ends it.
    """
    if not result.seasons:
        return []

    first_team = result.seasons[0].custom.team
    timeline = [
        TimelineEntry(
            date=f"{START_YEAR}-06-26",
            event="Drafted",
            details=f"Selected in the {START_YEAR} NBA Draft",
        ),
        TimelineEntry(
            date=f"{START_YEAR}-10-01",
            event="NBA Debut",
            details=f"Debuted with the {first_team}",
        ),
    ]
    for season in result.seasons:
        spring = START_YEAR + season.year
        if season.won_mvp:
            timeline.append(
                TimelineEntry(
                    date=f"{spring}-04-01",
                    event="MVP Award",
                    details="Won the MVP award",
                )
            )
        if season.won_roy:
            timeline.append(
                TimelineEntry(
                    date=f"{spring}-05-01",
                    event="Rookie of the Year",
                    details="Won the Rookie of the Year award",
                )
            )
        if season.won_championship:
            timeline.append(
                TimelineEntry(
                    date=f"{spring}-06-01",
                    event="Championship",
                    details=f"Won NBA championship with {season.custom.team}",
                )
            )
    return timeline


def build_career_payload(
    result: CareerResult,
    player_name: str,
    position: str,
) -> CareerPayload:
    """Convert a simulated career into a biography payload.

    Args:
        result: Simulated career.
        player_name: Display name of the custom player.
        position: Chosen position.

    Returns:
        CareerPayload; dump with ``by_alias=True`` for camelCase keys.
    """
    teams = list(dict.fromkeys(s.custom.team for s in result.seasons))

    def career_high(stat: str) -> int:
        return round_half_up(
            max((getattr(s.custom, stat) for s in result.seasons), default=0.0)
        )

    awards = result.awards
    stats = CareerStats(
        seasons=result.total_years,
        teams=teams,
        career_high_points=career_high("pts"),
        career_high_assists=career_high("ast"),
        career_high_rebounds=career_high("reb"),
        awards=[
            f"{awards.mvp} MVP Awards",
            f"{awards.all_pro} All-Pro Selections",
            f"{awards.championships} Championships",
        ],
    )
    return CareerPayload(
        player=PlayerProfile(full_name=player_name, position=position),
        career_timeline=career_timeline(result),
        career_stats=stats,
    )


def cache_key(player_name: str, position: str, provider: str) -> str:
    """Key a generated biography by player, position and provider."""
    return f"{player_name}|{position}|career|{provider}"
