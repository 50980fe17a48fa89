"""CLI entrypoint using Typer.

This module defines the command-line interface for the simulator. Roster
inspection lives under the ``roster`` group; careers, single games and
tournaments are top-level commands.

Example:
    $ nba-sim --help
    $ nba-sim roster info --era 1990s
    $ nba-sim career --name "Custom Player" --position SG --team Bulls \\
        --pick "shooting=Michael Jordan" --pick "passing=Magic Johnson" --fill-random
    $ nba-sim matchup --player "Alpha=Michael Jordan" --player "Beta=Larry Bird"
    $ nba-sim tournament --team "Dynasty=PG1,SG1,SF1,PF1,C1" --team ... --seed 7
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nba_sim import __version__
from nba_sim.config import get_settings
from nba_sim.logging import setup_logging
from nba_sim.types import InvalidRequestError, NBASimError

# Initialize console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="nba-sim",
    help="NBA Career and Matchup Simulator CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Create subcommand groups
roster_app = typer.Typer(
    name="roster",
    help="Historical roster inspection commands",
    no_args_is_help=True,
)

# Register subcommand groups
app.add_typer(roster_app, name="roster")


RosterOption = Annotated[
    Path | None,
    typer.Option(
        "--roster",
        "-r",
        help="Roster CSV (defaults to NBA_SIM_ROSTER_PATH)",
    ),
]
EraOption = Annotated[
    str,
    typer.Option(
        "--era",
        "-e",
        help="Era label such as 1990s, or 'all'",
    ),
]
SeedOption = Annotated[
    int | None,
    typer.Option(
        "--seed",
        help="Seed for cosmetic randomness (omit for run-to-run variety)",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the result as JSON instead of tables",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]nba-sim[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """NBA Career and Matchup Simulator.

    Build a custom player from historical attributes and project a career,
    or resolve seeded games and tournaments between players and teams.
    """
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_dir=settings.log_dir_obj)


# =============================================================================
# Shared helpers
# =============================================================================


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error: {message}[/red]")
    return typer.Exit(1)


def _load_roster(roster_path: Path | None) -> Any:
    """Load the roster from an explicit path or settings, exiting on failure."""
    from nba_sim.data import load_roster

    settings = get_settings()
    csv_path = roster_path or settings.roster_path_obj
    try:
        return load_roster(csv_path, settings.roster_json_path_obj)
    except NBASimError as e:
        raise _fail(str(e)) from e


def _era_pool(roster: Any, era: str) -> list[Any]:
    try:
        return roster.in_era(era)
    except ValueError as e:
        raise _fail(str(e)) from e


def _split_assignment(raw: str, option: str) -> tuple[str, str]:
    """Split ``key=value`` option text."""
    key, sep, value = raw.partition("=")
    if not sep or not key.strip() or not value.strip():
        raise typer.BadParameter(f"Expected KEY=VALUE, got {raw!r}", param_hint=option)
    return key.strip(), value.strip()


def _build_entrants(
    roster: Any, teams: list[str] | None, players: list[str] | None
) -> list[Any]:
    """Build matchup entities from --team and --player options.

    ``--team "Name=PG,SG,SF,PF,C"`` drafts five historical players in slot
    order. ``--player "Name=Historical Player"`` builds a custom player that
    takes every attribute from one historical player.
    """
    from nba_sim.career import AttributeKey, build_baseline, pick_attribute
    from nba_sim.data import DRAFT_SLOTS
    from nba_sim.matchup import solo_entity, team_entity

    entrants = []
    try:
        for raw in teams or []:
            name, members = _split_assignment(raw, "--team")
            names = [m.strip() for m in members.split(",") if m.strip()]
            roster_by_slot = {
                slot: roster.find(player) for slot, player in zip(DRAFT_SLOTS, names)
            }
            entrants.append(team_entity(name, roster_by_slot))
        for raw in players or []:
            name, source_name = _split_assignment(raw, "--player")
            source = roster.find(source_name)
            picks = {key: pick_attribute(key, source) for key in AttributeKey}
            baseline = build_baseline(picks, source.position)
            entrants.append(solo_entity(name, baseline, fg=source.fg_pct))
    except NBASimError as e:
        raise _fail(str(e)) from e
    return entrants


def _display_match(result: Any) -> None:
    console.print(
        Panel(
            f"[bold]{result.name_a}[/bold] {result.score_a}  -  "
            f"{result.score_b} [bold]{result.name_b}[/bold]\n"
            f"[green]Winner:[/green] {result.winner} by {result.margin}",
            title=f"{result.name_a} vs {result.name_b}",
        )
    )
    for line in result.lines:
        console.print(f"  {line}")


# =============================================================================
# Roster Commands
# =============================================================================


@roster_app.command("info")
def roster_info(
    roster_path: RosterOption = None,
    era: EraOption = "all",
) -> None:
    """Show roster size, era pool and supported attributes."""
    from nba_sim.career.attributes import ordered

    roster = _load_roster(roster_path)
    pool = _era_pool(roster, era)
    available = ordered(roster.available)

    table = Table(title="Roster Status")
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Players", str(len(roster)))
    table.add_row(f"Players ({era})", str(len(pool)))
    table.add_row("Attributes", ", ".join(key.value for key in available))
    console.print(table)


@roster_app.command("draw")
def roster_draw(
    roster_path: RosterOption = None,
    era: EraOption = "all",
    slot: Annotated[
        str | None,
        typer.Option("--slot", help="Draft slot (PG, SG, SF, PF, C)"),
    ] = None,
    locked: Annotated[
        bool,
        typer.Option("--locked", help="Only players eligible for --slot"),
    ] = False,
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Candidates to draw"),
    ] = 10,
    seed: SeedOption = None,
) -> None:
    """Draw a random list of pick candidates from the era pool."""
    from nba_sim.data import DRAFT_SLOTS, draw_candidates
    from nba_sim.rng import CosmeticRng

    if slot is not None and slot.upper() not in DRAFT_SLOTS:
        raise _fail(f"Unknown slot {slot}; expected one of {', '.join(DRAFT_SLOTS)}")

    roster = _load_roster(roster_path)
    pool = _era_pool(roster, era)
    candidates = draw_candidates(
        pool,
        CosmeticRng(seed),
        count=count,
        slot=slot.upper() if slot else None,
        position_locked=locked,
    )

    table = Table(title=f"Candidates ({era})")
    table.add_column("Player", style="cyan")
    table.add_column("Pos")
    table.add_column("G", justify="right")
    table.add_column("PTS", justify="right")
    table.add_column("AST", justify="right")
    table.add_column("TRB", justify="right")
    table.add_column("PER", justify="right")
    for record in candidates:
        table.add_row(
            record.name,
            record.position,
            f"{record.games:.0f}",
            f"{record.pts:.1f}",
            f"{record.ast:.1f}",
            f"{record.reb:.1f}",
            f"{record.per:.1f}",
        )
    console.print(table)


# =============================================================================
# Career Command
# =============================================================================


@app.command("career")
def career(
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Custom player's name"),
    ] = "Custom Player",
    position: Annotated[
        str,
        typer.Option("--position", "-p", help="PG, SG, SF, PF or C"),
    ] = "SG",
    team: Annotated[
        str | None,
        typer.Option("--team", "-t", help="Team to play for"),
    ] = None,
    picks: Annotated[
        list[str] | None,
        typer.Option(
            "--pick",
            help="Attribute pick as attribute=Player Name (repeatable)",
        ),
    ] = None,
    fill_random: Annotated[
        bool,
        typer.Option(
            "--fill-random",
            help="Fill missing picks and team from random candidate draws",
        ),
    ] = False,
    roster_path: RosterOption = None,
    era: EraOption = "all",
    seed: SeedOption = None,
    bio_payload: Annotated[
        Path | None,
        typer.Option("--bio-payload", help="Write the biography payload JSON here"),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Simulate a custom player's career season by season."""
    from nba_sim.career import (
        AttributeKey,
        SimulationRequest,
        pick_attribute,
        simulate_career,
    )
    from nba_sim.career.attributes import ordered
    from nba_sim.data import draw_candidates, load_teams_by_era, team_options, teams_for_era
    from nba_sim.output import build_career_payload, career_summary
    from nba_sim.rng import CosmeticRng

    settings = get_settings()
    rng = CosmeticRng(seed)
    roster = _load_roster(roster_path)
    pool = _era_pool(roster, era)
    team_pool = teams_for_era(load_teams_by_era(settings.teams_path_obj), era)

    chosen = {}
    for raw in picks or []:
        key_text, player = _split_assignment(raw, "--pick")
        try:
            key = AttributeKey(key_text.lower())
        except ValueError as e:
            raise typer.BadParameter(
                f"Unknown attribute {key_text!r}", param_hint="--pick"
            ) from e
        try:
            chosen[key] = pick_attribute(key, roster.find(player))
        except NBASimError as e:
            raise _fail(str(e)) from e

    if fill_random:
        for key in ordered(roster.available):
            if key not in chosen:
                candidates = draw_candidates(pool, rng, count=1)
                if candidates:
                    chosen[key] = pick_attribute(key, candidates[0])
        if team is None:
            team = team_options(team_pool, rng, count=1)[0]

    request = SimulationRequest(
        name=name,
        position=position,
        picks=chosen,
        team=team,
        roster=tuple(pool),
        team_pool=tuple(team_pool),
        available_attributes=roster.available,
        league_size=settings.league_size,
    )
    try:
        result = simulate_career(request, rng)
    except InvalidRequestError as e:
        for error in e.errors:
            console.print(f"[red]{error}[/red]")
        raise typer.Exit(1) from e

    summary = career_summary(result)

    if bio_payload is not None:
        payload = build_career_payload(result, name, position)
        bio_payload.parent.mkdir(parents=True, exist_ok=True)
        bio_payload.write_text(
            payload.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
        )

    if as_json:
        typer.echo(json.dumps(summary, indent=2))
        return

    awards = result.awards
    console.print(
        Panel(
            f"[bold]Team:[/bold] {result.team}\n"
            f"[bold]Career:[/bold] {result.total_years} seasons "
            f"({result.total_games} games)\n"
            f"[bold]MVP:[/bold] {awards.mvp}  [bold]ROY:[/bold] {awards.roy}  "
            f"[bold]MIP:[/bold] {awards.mip}\n"
            f"[bold]All-Pro:[/bold] {awards.all_pro}  "
            f"[bold]Championships:[/bold] {awards.championships}  "
            f"[bold]Finals MVP:[/bold] {awards.finals_mvp}\n"
            f"[bold]Hall of Fame:[/bold] "
            f"{'[green]YES[/green]' if result.hall_of_fame else 'NO'}",
            title=f"Career Summary: {result.name}",
        )
    )

    table = Table(title="Seasons")
    table.add_column("Year", justify="right")
    table.add_column("Team", style="cyan")
    table.add_column("GP", justify="right")
    for stat in ("PTS", "AST", "REB", "STL", "BLK", "PER"):
        table.add_column(stat, justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Honours", style="green")
    for season in result.seasons:
        c = season.custom
        honours = [
            label
            for label, won in (
                ("MVP", season.won_mvp),
                ("ROY", season.won_roy),
                ("MIP", season.won_mip),
                ("All-Pro", season.made_all_pro),
                ("Champion", season.won_championship),
                ("Finals MVP", season.won_finals_mvp),
            )
            if won
        ]
        table.add_row(
            str(season.year),
            c.team,
            str(c.games),
            f"{c.pts:.1f}",
            f"{c.ast:.1f}",
            f"{c.reb:.1f}",
            f"{c.stl:.1f}",
            f"{c.blk:.1f}",
            f"{c.per:.1f}",
            str(c.wins),
            ", ".join(honours),
        )
    console.print(table)

    metrics = result.advanced_metrics
    console.print(
        Panel(
            f"[bold]Career Variance Index:[/bold] {metrics.career_variance_index:.2f}\n"
            f"[bold]Longevity Score:[/bold] {metrics.longevity_score} seasons\n"
            f"[bold]Peak vs Consistency:[/bold] {metrics.peak_vs_consistency:.2f}\n"
            f"[bold]Team Impact Score:[/bold] {metrics.team_impact_score:.2f}",
            title="Advanced Metrics",
        )
    )
    for finding in summary["findings"]:
        console.print(f"  [bold]{finding['category']}:[/bold] {finding['text']}")


# =============================================================================
# Matchup Commands
# =============================================================================


TeamEntrantOption = Annotated[
    list[str] | None,
    typer.Option(
        "--team",
        "-t",
        help="Drafted team as Name=PG,SG,SF,PF,C (repeatable)",
    ),
]
PlayerEntrantOption = Annotated[
    list[str] | None,
    typer.Option(
        "--player",
        "-p",
        help="Custom player as Name=Historical Player (repeatable)",
    ),
]


@app.command("matchup")
def matchup(
    teams: TeamEntrantOption = None,
    players: PlayerEntrantOption = None,
    roster_path: RosterOption = None,
    as_json: JsonOption = False,
) -> None:
    """Play one seeded game between two entrants."""
    from nba_sim.matchup import simulate_matchup
    from nba_sim.output import matchup_summary

    roster = _load_roster(roster_path)
    entrants = _build_entrants(roster, teams, players)
    if len(entrants) != 2:
        raise _fail(f"A matchup needs exactly two entrants, got {len(entrants)}")

    try:
        result = simulate_matchup(entrants[0], entrants[1])
    except InvalidRequestError as e:
        raise _fail(str(e)) from e

    if as_json:
        typer.echo(json.dumps(matchup_summary(result), indent=2))
        return
    _display_match(result)


@app.command("tournament")
def tournament(
    teams: TeamEntrantOption = None,
    players: PlayerEntrantOption = None,
    roster_path: RosterOption = None,
    seed: SeedOption = None,
    as_json: JsonOption = False,
) -> None:
    """Run a single-elimination tournament; odd rounds draw a random bye."""
    from nba_sim.matchup import run_tournament
    from nba_sim.output import tournament_summary
    from nba_sim.rng import CosmeticRng

    roster = _load_roster(roster_path)
    entrants = _build_entrants(roster, teams, players)

    try:
        result = run_tournament(entrants, CosmeticRng(seed))
    except InvalidRequestError as e:
        raise _fail(str(e)) from e

    if as_json:
        typer.echo(json.dumps(tournament_summary(result), indent=2))
        return

    for tournament_round in result.rounds:
        table = Table(title=f"Round {tournament_round.number}")
        table.add_column("Game", style="cyan")
        table.add_column("Score", justify="center")
        table.add_column("Winner", style="green")
        for match in tournament_round.matches:
            table.add_row(
                f"{match.name_a} vs {match.name_b}",
                f"{match.score_a}-{match.score_b}",
                match.winner,
            )
        if tournament_round.bye:
            table.add_row(f"{tournament_round.bye} (bye)", "-", tournament_round.bye)
        console.print(table)

    console.print(
        Panel(f"[bold green]{result.champion}[/bold green]", title="Champion")
    )


if __name__ == "__main__":
    app()
