"""Tests for the /workouts API."""

import asyncio
from datetime import date

import pytest
from fastapi.testclient import TestClient

from workout_engine.api import routes
from workout_engine.api.routes import get_orchestrator
from workout_engine.main import app
from workout_engine.orchestration.day import DayOrchestrator
from workout_engine.orchestration.week import WeekOrchestrator

MONDAY = date(2026, 3, 2)
PROFILE = {"userId": "api-user", "fitnessLevel": "beginner", "sessionDuration": "30"}


class FailingPipeline:
    async def generate(self, request, context="Workout Generation"):
        raise RuntimeError(f"no workout for {request.day_name}")


@pytest.fixture
def use_pipeline(store):
    """Route the API to an orchestrator over the test store and the given pipeline."""

    def _use(pipeline) -> WeekOrchestrator:
        orchestrator = WeekOrchestrator(store, DayOrchestrator(store, pipeline))
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return orchestrator

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_generate_week(client, use_pipeline, make_pipeline, scripted_service):
    use_pipeline(make_pipeline(scripted_service()))

    response = client.post("/workouts/week", json={"profile": PROFILE, "today": "2026-03-05"})

    assert response.status_code == 200
    body = response.json()
    assert body["week_start"] == "2026-03-02"
    assert body["succeeded"] == 7
    assert len(body["days"]) == 7
    assert all(day["status"] == "ready" for day in body["days"])


def test_week_with_failures_returns_502_with_details(client, use_pipeline):
    use_pipeline(FailingPipeline())

    response = client.post("/workouts/week", json={"profile": PROFILE, "today": "2026-03-02"})

    assert response.status_code == 502
    body = response.json()
    assert len(body["failures"]) == 7
    assert body["failures"][0] == {"date": "2026-03-02", "detail": "RuntimeError: no workout for Monday"}
    assert body["week"]["failed"] == 7


def test_generate_day_derives_weekday(client, use_pipeline, make_pipeline, scripted_service):
    use_pipeline(make_pipeline(scripted_service()))

    response = client.post("/workouts/day", json={"profile": PROFILE, "date": "2026-03-04"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["workout_type"] == "Lower Body"
    assert body["payload"]["main"]


def test_generate_day_in_progress_returns_409(client, store, use_pipeline, make_pipeline, scripted_service):
    use_pipeline(make_pipeline(scripted_service()))
    asyncio.run(store.upsert_pending("api-user", MONDAY))
    asyncio.run(store.mark_generating("api-user", MONDAY))

    response = client.post("/workouts/day", json={"profile": PROFILE, "date": MONDAY.isoformat()})

    assert response.status_code == 409


def test_generate_day_failure_returns_502(client, use_pipeline):
    use_pipeline(FailingPipeline())

    response = client.post("/workouts/day", json={"profile": PROFILE, "date": "2026-03-03"})

    assert response.status_code == 502
    assert "no workout for Tuesday" in response.json()["detail"]


def test_get_week_reads_without_generating(client, use_pipeline, make_pipeline, scripted_service):
    service = scripted_service()
    use_pipeline(make_pipeline(service))
    client.post("/workouts/day", json={"profile": PROFILE, "date": "2026-03-04"})

    response = client.get("/workouts/week", params={"user_id": "api-user", "start": "2026-03-08"})

    assert response.status_code == 200
    body = response.json()
    assert [day["date"] for day in body["days"]] == ["2026-03-04"]
    assert len(service.calls) == 1


def test_invalid_day_index_is_rejected(client, use_pipeline, make_pipeline, scripted_service):
    use_pipeline(make_pipeline(scripted_service()))

    response = client.post(
        "/workouts/day", json={"profile": PROFILE, "date": "2026-03-04", "day_of_week_index": 9}
    )

    assert response.status_code == 422


def test_get_week_defaults_to_current_day(client, use_pipeline, make_pipeline, scripted_service, monkeypatch):
    use_pipeline(make_pipeline(scripted_service()))
    monkeypatch.setattr(routes, "current_day", lambda: date(2026, 3, 5))

    response = client.get("/workouts/week", params={"user_id": "api-user"})

    assert response.status_code == 200
    assert response.json()["week_start"] == MONDAY.isoformat()
