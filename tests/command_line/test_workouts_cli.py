"""Tests for the workouts CLI."""

import asyncio
import json
from datetime import date

import pytest
from rich.console import Console
from typer.testing import CliRunner

import cli.cli as workouts_cli
from workout_engine.orchestration.day import DayOrchestrator
from workout_engine.orchestration.week import WeekOrchestrator

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep table cells on one line so output assertions see whole names."""
    monkeypatch.setattr(workouts_cli, "console", Console(width=200))


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({"userId": "cli-user", "limitations": "knee pain", "fitnessLevel": "advanced"}))
    return path


@pytest.fixture
def wired(monkeypatch, store, make_pipeline, scripted_service):
    """Point the CLI at the test store and a scripted generation service."""
    service = scripted_service()
    orchestrator = WeekOrchestrator(store, DayOrchestrator(store, make_pipeline(service)))
    monkeypatch.setattr(workouts_cli, "build_week_orchestrator", lambda: orchestrator)
    monkeypatch.setattr(workouts_cli, "SqlDayStore", lambda: store)
    return service


def test_candidates_respect_limitations(profile_file):
    result = runner.invoke(workouts_cli.app, ["candidates", "Lower Body", "--profile", str(profile_file)])

    assert result.exit_code == 0
    assert "Glute Bridge" in result.stdout
    assert "Jump Squats" not in result.stdout
    assert "Pistol Squat" not in result.stdout


def test_candidates_with_missing_profile_file(tmp_path):
    result = runner.invoke(workouts_cli.app, ["candidates", "HIIT", "--profile", str(tmp_path / "missing.json")])

    assert result.exit_code == 1


def test_generate_day_prints_workout(wired, profile_file):
    result = runner.invoke(
        workouts_cli.app, ["generate-day", "--profile", str(profile_file), "--date", "2026-03-04", "--json"]
    )

    assert result.exit_code == 0
    assert '"status": "ready"' in result.stdout
    assert len(wired.calls) == 1


def test_generate_day_rejects_bad_date(wired, profile_file):
    result = runner.invoke(workouts_cli.app, ["generate-day", "--profile", str(profile_file), "--date", "tomorrow"])

    assert result.exit_code == 1
    assert wired.calls == []


def test_generate_week_then_show_week(wired, profile_file, store):
    generated = runner.invoke(
        workouts_cli.app, ["generate-week", "--profile", str(profile_file), "--date", "2026-03-05"]
    )
    shown = runner.invoke(workouts_cli.app, ["show-week", "--user-id", "cli-user", "--date", "2026-03-02"])

    assert generated.exit_code == 0
    assert shown.exit_code == 0
    assert "ready" in shown.stdout
    records = asyncio.run(store.get_by_user_and_date_range("cli-user", date(2026, 3, 2), date(2026, 3, 8)))
    assert len(records) == 7


def test_show_week_with_nothing_stored(wired):
    result = runner.invoke(workouts_cli.app, ["show-week", "--user-id", "nobody", "--date", "2026-03-02"])

    assert result.exit_code == 0
    assert "No workouts stored" in result.stdout


def test_default_date_comes_from_current_day(wired, monkeypatch):
    monkeypatch.setattr(workouts_cli, "current_day", lambda: date(2026, 3, 5))

    result = runner.invoke(workouts_cli.app, ["show-week", "--user-id", "nobody"])

    assert result.exit_code == 0
    assert "week of 2026-03-02" in result.stdout
