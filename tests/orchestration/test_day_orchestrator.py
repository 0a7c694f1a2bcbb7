"""Tests for DayOrchestrator status transitions."""

import asyncio
from datetime import date, timedelta

import pytest
from sqlalchemy import func, select

from workout_engine.errors import DayAlreadyGeneratingError, DayGenerationError, PersistenceError
from workout_engine.orchestration.day import DayOrchestrator
from workout_engine.orchestration.models import DayStatus
from workout_engine.persistence.models import WorkoutDay

DAY = date(2026, 3, 4)  # a Wednesday
WEDNESDAY = 2


class ExplodingPipeline:
    def __init__(self, error: Exception):
        self.error = error

    async def generate(self, request, context="Workout Generation"):
        raise self.error


class BlockingPipeline:
    """Pipeline that waits until released, so a second request can race it."""

    def __init__(self, inner):
        self.inner = inner
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, request, context="Workout Generation"):
        self.started.set()
        await self.release.wait()
        return await self.inner.generate(request, context)


def _rows(session_factory) -> int:
    with session_factory() as session:
        return session.execute(select(func.count()).select_from(WorkoutDay)).scalar_one()


@pytest.mark.asyncio
async def test_generate_day_persists_ready_record(store, profile, scripted_service, make_pipeline):
    orchestrator = DayOrchestrator(store, make_pipeline(scripted_service()))

    record = await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert record.status == DayStatus.READY
    assert record.payload is not None
    assert record.workout_type == "Lower Body"
    stored = await store.get_by_user_and_date_range(profile.user_id, DAY, DAY)
    assert stored == [record]


@pytest.mark.asyncio
async def test_regeneration_overwrites_single_row(store, session_factory, profile, scripted_service, make_pipeline, valid_response):
    second = dict(valid_response, title="Second Version")
    service = scripted_service(valid_response, second)
    orchestrator = DayOrchestrator(store, make_pipeline(service))

    first_record = await orchestrator.generate_day(profile, DAY, WEDNESDAY)
    second_record = await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert first_record.payload.title == "Upper Body Builder"
    assert second_record.payload.title == "Second Version"
    assert _rows(session_factory) == 1


@pytest.mark.asyncio
async def test_reuse_ready_skips_generation(store, profile, scripted_service, make_pipeline):
    service = scripted_service()
    orchestrator = DayOrchestrator(store, make_pipeline(service))

    first = await orchestrator.generate_day(profile, DAY, WEDNESDAY)
    again = await orchestrator.generate_day(profile, DAY, WEDNESDAY, reuse_ready=True)

    assert again == first
    assert len(service.calls) == 1


@pytest.mark.asyncio
async def test_failure_is_persisted_and_raised(store, profile):
    orchestrator = DayOrchestrator(store, ExplodingPipeline(PersistenceError("disk full")))

    with pytest.raises(DayGenerationError) as exc_info:
        await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert exc_info.value.day == DAY
    assert "disk full" in exc_info.value.detail
    [record] = await store.get_by_user_and_date_range(profile.user_id, DAY, DAY)
    assert record.status == DayStatus.ERROR
    assert "disk full" in record.error
    assert record.payload is None


@pytest.mark.asyncio
async def test_error_day_can_be_regenerated(store, profile, scripted_service, make_pipeline):
    await store.upsert_pending(profile.user_id, DAY)
    await store.mark_generating(profile.user_id, DAY)
    await store.mark_error(profile.user_id, DAY, "earlier failure")

    record = await DayOrchestrator(store, make_pipeline(scripted_service())).generate_day(profile, DAY, WEDNESDAY)

    assert record.status == DayStatus.READY
    assert record.error is None


@pytest.mark.asyncio
async def test_service_outage_still_ends_ready_with_placeholder(store, profile, scripted_service, make_pipeline):
    orchestrator = DayOrchestrator(store, make_pipeline(scripted_service(ConnectionError("offline"))))

    record = await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert record.status == DayStatus.READY
    assert record.is_placeholder


@pytest.mark.asyncio
async def test_concurrent_request_for_same_day_is_rejected(store, profile, scripted_service, make_pipeline):
    blocking = BlockingPipeline(make_pipeline(scripted_service()))
    orchestrator = DayOrchestrator(store, blocking, stale_after=timedelta(minutes=15))

    first = asyncio.create_task(orchestrator.generate_day(profile, DAY, WEDNESDAY))
    await blocking.started.wait()

    with pytest.raises(DayAlreadyGeneratingError):
        await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    blocking.release.set()
    record = await first
    assert record.status == DayStatus.READY


@pytest.mark.asyncio
async def test_store_failure_on_ready_becomes_day_failure(store, failing_store, profile, scripted_service, make_pipeline):
    orchestrator = DayOrchestrator(failing_store(mark_ready={DAY}), make_pipeline(scripted_service()))

    with pytest.raises(DayGenerationError) as exc_info:
        await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert exc_info.value.detail == "PersistenceError: mark_ready failed: disk full"
    [record] = await store.get_by_user_and_date_range(profile.user_id, DAY, DAY)
    assert record.status == DayStatus.ERROR
    assert record.payload is None


@pytest.mark.asyncio
async def test_unrecordable_failure_still_raises_day_failure(store, failing_store, profile, scripted_service, make_pipeline):
    flaky = failing_store(mark_ready={DAY}, mark_error={DAY})
    orchestrator = DayOrchestrator(flaky, make_pipeline(scripted_service()))

    with pytest.raises(DayGenerationError) as exc_info:
        await orchestrator.generate_day(profile, DAY, WEDNESDAY)

    assert "mark_ready failed" in exc_info.value.detail
    [record] = await store.get_by_user_and_date_range(profile.user_id, DAY, DAY)
    assert record.status == DayStatus.GENERATING
