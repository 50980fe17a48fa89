"""Tests for CLI module."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from nba_sim.cli import app
from nba_sim.config import Settings

runner = CliRunner()

DYNASTY = "Dynasty=Magic Johnson,Michael Jordan,Larry Bird,Tim Duncan,Shaquille O'Neal"
GRINDERS = "Grinders=John Stockton,Reggie Miller,Scottie Pippen,Karl Malone,Hakeem Olajuwon"


@pytest.fixture(autouse=True)
def _settings(test_settings: Settings) -> Settings:
    """Point every command at the sample roster."""
    return test_settings


def json_output(text: str) -> Any:
    """Extract the JSON document printed by a --json command."""
    lines = text.splitlines()
    start = lines.index("{")
    end = len(lines) - 1 - lines[::-1].index("}")
    return json.loads("\n".join(lines[start : end + 1]))


class TestMainApp:
    """Tests for main CLI app."""

    def test_help_shows_all_commands(self) -> None:
        """Help should list every command and group."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("roster", "career", "matchup", "tournament"):
            assert command in result.stdout

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_short_version_flag(self) -> None:
        result = runner.invoke(app, ["-v"])

        assert result.exit_code == 0
        assert "0.1.0" in result.stdout


class TestRosterCommands:
    """Tests for the roster command group."""

    def test_info(self) -> None:
        result = runner.invoke(app, ["roster", "info"])

        assert result.exit_code == 0
        assert "Roster Status" in result.stdout
        assert "12" in result.stdout

    def test_info_invalid_era(self) -> None:
        result = runner.invoke(app, ["roster", "info", "--era", "bogus"])

        assert result.exit_code == 1
        assert "Invalid era" in result.stdout

    def test_missing_roster_file(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["roster", "info", "--roster", str(tmp_path / "nope.csv")]
        )

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_draw(self) -> None:
        result = runner.invoke(app, ["roster", "draw", "--count", "3", "--seed", "5"])

        assert result.exit_code == 0
        assert "Candidates" in result.stdout

    def test_draw_unknown_slot(self) -> None:
        result = runner.invoke(app, ["roster", "draw", "--slot", "XX"])

        assert result.exit_code == 1
        assert "Unknown slot" in result.stdout


class TestCareerCommand:
    """Tests for the career command."""

    def test_json_summary(self) -> None:
        result = runner.invoke(
            app,
            ["career", "--name", "Test Star", "--fill-random", "--seed", "7", "--json"],
        )

        assert result.exit_code == 0
        summary = json_output(result.stdout)
        assert summary["name"] == "Test Star"
        assert summary["total_years"] >= 1
        assert {"mvp", "all_pro", "championships"} <= set(summary["awards"])

    def test_seeded_runs_repeat(self) -> None:
        args = ["career", "--fill-random", "--seed", "11", "--json"]

        first = json_output(runner.invoke(app, args).stdout)
        second = json_output(runner.invoke(app, args).stdout)

        first.pop("generated_at")
        second.pop("generated_at")
        assert first == second

    def test_explicit_picks(self) -> None:
        result = runner.invoke(
            app,
            [
                "career",
                "--team",
                "Bulls",
                "--pick",
                "shooting=Michael Jordan",
                "--fill-random",
                "--seed",
                "3",
                "--json",
            ],
        )

        assert result.exit_code == 0
        assert json_output(result.stdout)["team"] == "Bulls"

    def test_table_output(self) -> None:
        result = runner.invoke(app, ["career", "--fill-random", "--seed", "2"])

        assert result.exit_code == 0
        assert "Career Summary" in result.stdout
        assert "Advanced Metrics" in result.stdout

    def test_bio_payload_written(self, tmp_path: Path) -> None:
        payload_path = tmp_path / "bio" / "payload.json"

        result = runner.invoke(
            app,
            ["career", "--fill-random", "--seed", "4", "--bio-payload", str(payload_path)],
        )

        assert result.exit_code == 0
        payload = json.loads(payload_path.read_text(encoding="utf-8"))
        assert payload["player"]["fullName"] == "Custom Player"
        assert payload["careerTimeline"][0]["event"] == "Drafted"

    def test_missing_picks_rejected(self) -> None:
        result = runner.invoke(app, ["career", "--team", "Bulls"])

        assert result.exit_code == 1
        assert "Pick a player for SHOOTING first." in result.stdout

    def test_unknown_attribute(self) -> None:
        result = runner.invoke(app, ["career", "--pick", "dunking=Michael Jordan"])

        assert result.exit_code != 0

    def test_unknown_player(self) -> None:
        result = runner.invoke(app, ["career", "--pick", "shooting=Nobody Famous"])

        assert result.exit_code == 1
        assert "Nobody Famous" in result.stdout


class TestMatchupCommands:
    """Tests for the matchup and tournament commands."""

    def test_player_matchup_json(self) -> None:
        result = runner.invoke(
            app,
            [
                "matchup",
                "--player",
                "Alpha=Michael Jordan",
                "--player",
                "Beta=Dennis Rodman",
                "--json",
            ],
        )

        assert result.exit_code == 0
        summary = json_output(result.stdout)
        assert summary["matchup"] == "Alpha vs Beta"
        assert summary["lines"][-1].startswith("Final: Alpha")

    def test_matchup_is_deterministic(self) -> None:
        args = ["matchup", "--team", DYNASTY, "--team", GRINDERS, "--json"]

        first = json_output(runner.invoke(app, args).stdout)
        second = json_output(runner.invoke(app, args).stdout)

        assert first == second

    def test_matchup_needs_two_entrants(self) -> None:
        result = runner.invoke(app, ["matchup", "--player", "Alpha=Michael Jordan"])

        assert result.exit_code == 1
        assert "exactly two entrants" in result.stdout

    def test_mixed_entrants_rejected(self) -> None:
        result = runner.invoke(
            app, ["matchup", "--team", DYNASTY, "--player", "Alpha=Michael Jordan"]
        )

        assert result.exit_code == 1
        assert "Cannot mix" in result.stdout

    def test_bad_assignment(self) -> None:
        result = runner.invoke(app, ["matchup", "--player", "Alpha"])

        assert result.exit_code != 0

    def test_tournament_json(self) -> None:
        result = runner.invoke(
            app,
            [
                "tournament",
                "--player",
                "A=Michael Jordan",
                "--player",
                "B=Larry Bird",
                "--player",
                "C=John Stockton",
                "--seed",
                "1",
                "--json",
            ],
        )

        assert result.exit_code == 0
        summary = json_output(result.stdout)
        assert summary["champion"] in {"A", "B", "C"}
        assert len(summary["rounds"]) == 2

    def test_tournament_table(self) -> None:
        result = runner.invoke(app, ["tournament", "--team", DYNASTY, "--team", GRINDERS])

        assert result.exit_code == 0
        assert "Champion" in result.stdout
