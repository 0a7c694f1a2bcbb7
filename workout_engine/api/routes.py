"""Workout generation API endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from loguru import logger

from workout_engine.api.schemas import (
    DayFailure,
    DayGenerateRequest,
    WeekFailureResponse,
    WeekGenerateRequest,
    WeekResponse,
)
from workout_engine.errors import (
    DayAlreadyGeneratingError,
    DayGenerationError,
    PersistenceError,
    WeekGenerationError,
)
from workout_engine.orchestration.models import DayRecord, WeekResult
from workout_engine.orchestration.week import WeekOrchestrator, current_day, week_dates
from workout_engine.profiles.parsing import parse_profile
from workout_engine.service import build_week_orchestrator

router = APIRouter(prefix="/workouts", tags=["workouts"])

_orchestrator: WeekOrchestrator | None = None


def get_orchestrator() -> WeekOrchestrator:
    """FastAPI dependency returning the process-wide orchestrator (built lazily)."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_week_orchestrator()
    return _orchestrator


def _week_response(result: WeekResult) -> WeekResponse:
    return WeekResponse(
        user_id=result.user_id,
        week_start=result.week_start,
        succeeded=result.succeeded,
        failed=result.failed,
        days=result.days,
    )


@router.post("/week", response_model=WeekResponse)
async def generate_week(
    body: WeekGenerateRequest,
    orchestrator: WeekOrchestrator = Depends(get_orchestrator),
):
    """Generate all seven workouts of the week containing body.today.

    Returns:
        WeekResponse with the seven day records

    Raises:
        HTTPException: 409 if a day is already generating, 500 on storage failure.
            A week with failed days is answered with 502 and per-day details.
    """
    profile = parse_profile(body.profile)
    logger.info("Week generation requested", user_id=profile.user_id, force=body.force)
    try:
        result = await orchestrator.generate_week(profile, today=body.today, force=body.force)
    except WeekGenerationError as e:
        if e.in_progress and e.in_progress == set(e.failures):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
        failure = WeekFailureResponse(
            message=str(e),
            failures=[DayFailure(date=day, detail=detail) for day, detail in sorted(e.failures.items())],
            week=_week_response(e.result),
        )
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=failure.model_dump(mode="json"))
    except PersistenceError as e:
        logger.exception("Week generation storage failure", user_id=profile.user_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    return _week_response(result)


@router.post("/day", response_model=DayRecord)
async def generate_day(
    body: DayGenerateRequest,
    orchestrator: WeekOrchestrator = Depends(get_orchestrator),
) -> DayRecord:
    """Generate (or regenerate) the workout for one date.

    Raises:
        HTTPException: 409 if the day is already generating, 502 if generation failed
    """
    profile = parse_profile(body.profile)
    day_index = body.day_of_week_index if body.day_of_week_index is not None else body.date.weekday()
    try:
        return await orchestrator.day_orchestrator.generate_day(profile, body.date, day_index)
    except DayAlreadyGeneratingError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except DayGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e


@router.get("/week", response_model=WeekResponse)
async def get_week(
    user_id: str = Query(..., description="User whose week to read"),
    start: date | None = Query(None, description="Any date in the week (defaults to today)"),
    orchestrator: WeekOrchestrator = Depends(get_orchestrator),
) -> WeekResponse:
    """Read the stored records of one week without generating anything."""
    dates = week_dates(start or current_day())
    try:
        days = await orchestrator.store.get_by_user_and_date_range(user_id, dates[0], dates[-1])
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    return _week_response(WeekResult(user_id=user_id, week_start=dates[0], days=days))
