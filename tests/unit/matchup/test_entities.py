"""Tests for matchup entities."""
from __future__ import annotations

import pytest

from nba_sim.career.attributes import AttributeKey, AttributePick, build_baseline
from nba_sim.data.roster import PlayerRecord
from nba_sim.matchup.entities import (
    compute_role_scores,
    fg_percent,
    solo_entity,
    team_entity,
    validate_team,
)
from nba_sim.types import InvalidRequestError


class TestFgPercent:
    """Tests for fg_percent."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.497, 49.7), (49.7, 49.7), (0.0, 0.0), (None, 0.0), (1.0, 100.0)],
    )
    def test_scale(self, value: float | None, expected: float) -> None:
        assert fg_percent(value) == pytest.approx(expected)


class TestSoloEntity:
    """Tests for solo_entity."""

    def test_stats_from_baseline(
        self, star_picks: dict[AttributeKey, AttributePick]
    ) -> None:
        baseline = build_baseline(star_picks, "SG")

        entity = solo_entity("Alpha", baseline, fg=0.497)

        assert entity.name == "Alpha"
        assert not entity.is_team
        assert entity.roster == ()
        assert entity.stats.pts == 30.1
        assert entity.stats.fg == pytest.approx(49.7)
        assert 8.0 <= entity.stats.per <= 32.0
        assert entity.stats.impact == 0.0


class TestTeamEntity:
    """Tests for team_entity and role scores."""

    def test_aggregates(self, starting_five: dict[str, PlayerRecord]) -> None:
        team = team_entity("Dynasty", starting_five)
        players = list(starting_five.values())

        assert team.is_team
        assert team.stats.pts == pytest.approx(sum(p.pts for p in players))
        assert team.stats.reb == pytest.approx(sum(p.reb for p in players))
        assert team.stats.per == pytest.approx(sum(p.per for p in players) / 5)
        assert team.stats.fg == pytest.approx(sum(p.fg_pct * 100 for p in players) / 5)
        assert [slot for slot, _ in team.roster] == ["PG", "SG", "SF", "PF", "C"]

    def test_role_scores(self, starting_five: dict[str, PlayerRecord]) -> None:
        roles = compute_role_scores(starting_five)

        assert roles["pg_playmaking"] == 11.2
        assert roles["sg_scoring"] == 30.1
        assert roles["wing_efficiency"] == pytest.approx((23.5 + 24.2) / 2)
        assert roles["center_rebounding"] == 10.9

    def test_impact_is_sum_of_roles(self, starting_five: dict[str, PlayerRecord]) -> None:
        team = team_entity("Dynasty", starting_five)
        assert team.stats.impact == pytest.approx(sum(team.role_scores.values()))

    def test_incomplete_roster_rejected(
        self, starting_five: dict[str, PlayerRecord]
    ) -> None:
        roster = dict(starting_five)
        del roster["C"]

        with pytest.raises(InvalidRequestError, match="Draft a player for C first."):
            team_entity("Dynasty", roster)

    def test_missing_name_rejected(self, starting_five: dict[str, PlayerRecord]) -> None:
        result = validate_team("", starting_five)

        assert result.errors == ["Please enter a team name before simulating."]

    def test_to_dict(self, starting_five: dict[str, PlayerRecord]) -> None:
        data = team_entity("Dynasty", starting_five).to_dict()

        assert data["roster"]["SG"] == "Michael Jordan"
        assert data["is_team"] is True
