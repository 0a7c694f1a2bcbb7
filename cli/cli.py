"""Workout engine CLI.

Developer CLI that runs the same orchestrators as the HTTP API against the
configured database, with rich output for inspecting generated weeks.
"""

import asyncio
import json
import os
from datetime import date
from pathlib import Path
from typing import Any

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from workout_engine.catalog.catalog import SUPPORTED_WORKOUT_TYPES, default_catalog
from workout_engine.catalog.safety import SafetyFilter
from workout_engine.config.settings import settings
from workout_engine.core.logger import setup_logger
from workout_engine.errors import DayGenerationError, WeekGenerationError, WorkoutEngineError
from workout_engine.generation.pipeline import select_candidates
from workout_engine.generation.schemas import WorkoutRequest
from workout_engine.orchestration.models import DayRecord, DayStatus, WeekResult
from workout_engine.orchestration.week import current_day, week_dates
from workout_engine.persistence.store import SqlDayStore
from workout_engine.profiles.models import UserProfile
from workout_engine.profiles.parsing import parse_profile
from workout_engine.service import build_week_orchestrator

# Initialize Rich console for output
console = Console()

app = typer.Typer(
    name="workouts",
    help="Workout Engine CLI - generate and inspect personalized workouts",
    add_completion=False,
)

DEFAULT_HOST = os.getenv("SERVER_HOST", "127.0.0.1")

_STATUS_STYLES = {
    DayStatus.PENDING: "dim",
    DayStatus.GENERATING: "yellow",
    DayStatus.READY: "green",
    DayStatus.ERROR: "red",
}


def _setup_logging(debug: bool = False) -> None:
    """Configure logging for a command.

    Args:
        debug: Enable debug logging level with structured fields on the console
    """
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file, show_extra=debug)


def _load_profile(profile_path: Path | None, user_id: str | None) -> UserProfile:
    """Build a profile from a JSON file of questionnaire answers.

    Raises:
        typer.Exit: If the file cannot be read or is not a JSON object
    """
    raw: dict[str, Any] = {}
    if profile_path is not None:
        try:
            loaded = json.loads(profile_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            console.print(f"[red]Error:[/red] could not read profile {profile_path}: {e}", style="bold red")
            raise typer.Exit(1) from e
        if not isinstance(loaded, dict):
            console.print("[red]Error:[/red] profile file must contain a JSON object", style="bold red")
            raise typer.Exit(1)
        raw = loaded
    if user_id:
        raw["user_id"] = user_id
    return parse_profile(raw)


def _parse_date(value: str | None) -> date:
    if not value:
        return current_day()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] invalid date '{value}', expected YYYY-MM-DD", style="bold red")
        raise typer.Exit(1) from e


def _week_table(result: WeekResult) -> Table:
    table = Table(title=f"Week of {result.week_start.isoformat()} ({result.user_id})")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Workout")
    table.add_column("Exercises", justify="right")
    for record in result.days:
        style = _STATUS_STYLES.get(record.status, "white")
        if record.payload is not None:
            title = record.payload.title
            count = str(len(record.payload.all_units()))
        else:
            title = record.error or ""
            count = "-"
        table.add_row(
            f"{record.date.isoformat()} {record.date.strftime('%a')}",
            record.workout_type or "",
            f"[{style}]{record.status.value}[/{style}]",
            title,
            count,
        )
    return table


def _print_day(record: DayRecord, as_json: bool) -> None:
    if as_json:
        console.print(JSON(record.model_dump_json()))
        return
    if record.payload is None:
        console.print(Panel(record.error or record.status.value, title=record.date.isoformat(), border_style="red"))
        return

    payload = record.payload
    border = "yellow" if payload.is_placeholder else "green"
    console.print(
        Panel(
            f"{payload.description}\n\n[dim]{payload.estimated_duration} min, {payload.difficulty.value}, "
            f"~{payload.estimated_calories} kcal[/dim]",
            title=f"{record.date.isoformat()} - {payload.title}",
            border_style=border,
        )
    )
    for label, units in (("Warm-up", payload.warmup), ("Main", payload.main), ("Cool-down", payload.cooldown)):
        if not units:
            continue
        table = Table(title=label, show_header=True)
        table.add_column("Exercise")
        table.add_column("Sets", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Rest", justify="right")
        for unit in units:
            table.add_row(unit.name, str(unit.sets), str(unit.reps), f"{unit.rest_seconds}s")
        console.print(table)
    console.print(f"[bold cyan]Coach notes:[/bold cyan] {payload.coach_notes}")


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("workout_engine.main:app", host=host, port=port, reload=reload)


@app.command()
def generate_week(
    profile: Path | None = typer.Option(None, "--profile", help="JSON file with the user's profile answers"),
    user_id: str | None = typer.Option(None, "--user-id", "-u", help="Override the profile's user id"),
    start: str | None = typer.Option(None, "--date", "-d", help="Any date in the target week (YYYY-MM-DD)"),
    force: bool = typer.Option(False, "--force", help="Regenerate days that are already ready"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate every workout of a week."""
    _setup_logging(debug)
    user = _load_profile(profile, user_id)
    today = _parse_date(start)
    orchestrator = build_week_orchestrator()
    try:
        result = asyncio.run(orchestrator.generate_week(user, today=today, force=force))
    except WeekGenerationError as e:
        console.print(_week_table(e.result))
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e
    except WorkoutEngineError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e
    console.print(_week_table(result))
    if result.placeholders:
        console.print(f"[yellow]{result.placeholders} day(s) used a placeholder workout; consider regenerating.[/yellow]")


@app.command()
def generate_day(
    profile: Path | None = typer.Option(None, "--profile", help="JSON file with the user's profile answers"),
    user_id: str | None = typer.Option(None, "--user-id", "-u", help="Override the profile's user id"),
    day: str | None = typer.Option(None, "--date", "-d", help="Date to generate (YYYY-MM-DD, default today)"),
    as_json: bool = typer.Option(False, "--json", help="Print the stored record as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate (or regenerate) the workout for one date."""
    _setup_logging(debug)
    user = _load_profile(profile, user_id)
    target = _parse_date(day)
    orchestrator = build_week_orchestrator()
    try:
        record = asyncio.run(orchestrator.day_orchestrator.generate_day(user, target, target.weekday()))
    except DayGenerationError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e
    _print_day(record, as_json)


@app.command()
def show_week(
    user_id: str = typer.Option(..., "--user-id", "-u", help="User whose week to show"),
    start: str | None = typer.Option(None, "--date", "-d", help="Any date in the week (YYYY-MM-DD)"),
    details: bool = typer.Option(False, "--details", help="Print every ready workout in full"),
) -> None:
    """Show the stored workouts of a week without generating anything."""
    _setup_logging()
    dates = week_dates(_parse_date(start))
    store = SqlDayStore()
    try:
        records = asyncio.run(store.get_by_user_and_date_range(user_id, dates[0], dates[-1]))
    except WorkoutEngineError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e
    if not records:
        console.print(f"[yellow]No workouts stored for {user_id} in the week of {dates[0].isoformat()}[/yellow]")
        return
    console.print(_week_table(WeekResult(user_id=user_id, week_start=dates[0], days=records)))
    if details:
        for record in records:
            if record.payload is not None:
                _print_day(record, as_json=False)


@app.command()
def candidates(
    workout_type: str = typer.Argument(..., help=f"Workout type, e.g. {', '.join(SUPPORTED_WORKOUT_TYPES[:4])}"),
    profile: Path | None = typer.Option(None, "--profile", help="JSON file with the user's profile answers"),
    focus: str | None = typer.Option(None, "--focus", help="Optional focus: push, pull, legs, core"),
) -> None:
    """List the safe candidate exercises a workout type would be built from."""
    _setup_logging()
    user = _load_profile(profile, None)
    request = WorkoutRequest(
        profile=user,
        workout_type=workout_type,
        duration=user.session_duration,
        equipment=user.equipment,
        focus=focus,
    )
    units = select_candidates(default_catalog(), SafetyFilter(), request)

    table = Table(title=f"{workout_type} candidates ({user.fitness_level.value})")
    table.add_column("Exercise")
    table.add_column("Difficulty")
    table.add_column("Targets")
    table.add_column("Equipment")
    for unit in units:
        table.add_row(
            unit.name,
            unit.difficulty.value,
            ", ".join(sorted(unit.target_areas)),
            ", ".join(sorted(unit.equipment)),
        )
    console.print(table)
    if user.limitations_text:
        console.print(f"[dim]Filtered for limitations: {user.limitations_text}[/dim]")


if __name__ == "__main__":
    app()
