"""Tests for game narrative assembly."""
from __future__ import annotations

from nba_sim.data.roster import PlayerRecord
from nba_sim.matchup.narrative import (
    FLAVOR_ACTIONS,
    PHASES,
    build_narrative,
    factor_line,
    final_line,
    moment_lines,
    phase_lines,
)
from nba_sim.rng import ReproducibleRng
from nba_sim.types import KeyFactor


class TestLines:
    """Tests for individual line builders."""

    def test_phase_lines_fill_placeholders(self) -> None:
        lines = phase_lines(ReproducibleRng(7), "Alpha", "Beta", "Alpha", "Beta")

        assert len(lines) == len(PHASES)
        assert not any("{" in line for line in lines)

    def test_factor_line_uses_magnitude(self) -> None:
        factor = KeyFactor(label="Scoring", stat="pts", diff=-4.3, favors="Beta")

        assert factor_line(factor) == "Key factor: Scoring favors Beta (4.3)."

    def test_final_line(self) -> None:
        assert final_line("Alpha", "Beta", 98, 104) == (
            "Final: Alpha 98, Beta 104. Beta wins by 6."
        )

    def test_moments_need_a_roster(self) -> None:
        assert moment_lines(ReproducibleRng(3), [("Alpha", []), ("Beta", [])]) == []

    def test_moments_credit_roster_players(self) -> None:
        players = [PlayerRecord(name="Guard One"), PlayerRecord(name="Guard Two")]

        lines = moment_lines(ReproducibleRng(3), [("Alpha", players)])

        assert 1 <= len(lines) <= 3
        for line in lines:
            assert line.startswith("Moment: Guard ")
            assert "(Alpha)" in line
            assert any(action in line for action in FLAVOR_ACTIONS)


class TestBuildNarrative:
    """Tests for build_narrative."""

    def test_line_order(self) -> None:
        factors = [KeyFactor(label="Scoring", stat="pts", diff=3.0, favors="Alpha")]

        lines = build_narrative(ReproducibleRng(11), "Alpha", "Beta", 101, 99, factors)

        assert len(lines) == len(PHASES) + 2
        assert lines[-2] == "Key factor: Scoring favors Alpha (3.0)."
        assert lines[-1] == "Final: Alpha 101, Beta 99. Alpha wins by 2."

    def test_same_generator_state_same_story(self) -> None:
        first = build_narrative(ReproducibleRng(5), "Alpha", "Beta", 90, 95, [])
        second = build_narrative(ReproducibleRng(5), "Alpha", "Beta", 90, 95, [])

        assert first == second
