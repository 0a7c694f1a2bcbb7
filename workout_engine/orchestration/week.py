"""Week orchestration: seven concurrent day generations, settle-all."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta

from loguru import logger

from workout_engine.errors import DayAlreadyGeneratingError, DayGenerationError, PersistenceError, WeekGenerationError
from workout_engine.orchestration.day import DayOrchestrator
from workout_engine.orchestration.models import DayRecord, DayStatus, WeekResult
from workout_engine.persistence.models import utcnow
from workout_engine.persistence.store import DayStore
from workout_engine.profiles.models import UserProfile


def current_day() -> date:
    """Local calendar date used whenever a caller does not name a week."""
    return date.today()


def week_start(today: date) -> date:
    """Monday of the week containing today."""
    return today - timedelta(days=today.weekday())


def week_dates(today: date) -> list[date]:
    """The seven dates Monday..Sunday of the week containing today."""
    monday = week_start(today)
    return [monday + timedelta(days=offset) for offset in range(7)]


class WeekOrchestrator:
    """Generates every day of the current Monday-aligned week."""

    def __init__(self, store: DayStore, day_orchestrator: DayOrchestrator):
        self.store = store
        self.day_orchestrator = day_orchestrator

    async def generate_week(
        self,
        profile: UserProfile,
        *,
        today: date | None = None,
        force: bool = False,
        raise_on_failure: bool = True,
    ) -> WeekResult:
        """Generate all seven days concurrently and wait for every one to settle.

        A failing day never cancels the others. Days already ready are kept
        unless force is set.

        Args:
            profile: Requesting user's profile
            today: Any date in the target week (defaults to today)
            force: Regenerate days that are already ready
            raise_on_failure: Raise WeekGenerationError if any day failed

        Returns:
            WeekResult holding the seven records in date order

        Raises:
            WeekGenerationError: At least one day failed and raise_on_failure is set
        """
        dates = week_dates(today or current_day())
        user_id = profile.user_id
        logger.info("Generating week", user_id=user_id, week_start=dates[0].isoformat(), force=force)

        outcomes = await asyncio.gather(
            *(
                self.day_orchestrator.generate_day(profile, day, index, reuse_ready=not force)
                for index, day in enumerate(dates)
            ),
            return_exceptions=True,
        )

        failures: dict[date, str] = {}
        in_progress: set[date] = set()
        for day, outcome in zip(dates, outcomes, strict=True):
            if isinstance(outcome, DayAlreadyGeneratingError):
                in_progress.add(day)
            if isinstance(outcome, DayGenerationError):
                failures[day] = outcome.detail
            elif isinstance(outcome, BaseException):
                failures[day] = f"{type(outcome).__name__}: {outcome}"

        records = await self._read_week(user_id, dates, outcomes)
        result = WeekResult(user_id=user_id, week_start=dates[0], days=_complete_week(user_id, dates, records, failures))

        logger.info(
            "Week settled",
            user_id=user_id,
            week_start=dates[0].isoformat(),
            succeeded=result.succeeded,
            failed=len(failures),
            placeholders=result.placeholders,
        )
        if failures and raise_on_failure:
            raise WeekGenerationError(failures, result, frozenset(in_progress))
        return result

    async def _read_week(self, user_id: str, dates: list[date], outcomes: list) -> list[DayRecord]:
        """Stored records for the week, or the settled day results when the store cannot be read."""
        try:
            return await self.store.get_by_user_and_date_range(user_id, dates[0], dates[-1])
        except PersistenceError as e:
            logger.error(
                "Could not read back generated week",
                user_id=user_id,
                week_start=dates[0].isoformat(),
                error=str(e),
            )
            return [outcome for outcome in outcomes if isinstance(outcome, DayRecord)]


def _complete_week(
    user_id: str,
    dates: list[date],
    records: list[DayRecord],
    failures: dict[date, str],
) -> list[DayRecord]:
    """One record per date; a failed day whose error could not be persisted is reported as error anyway."""
    by_date = {record.date: record for record in records}
    days: list[DayRecord] = []
    for day in dates:
        record = by_date.get(day)
        if day in failures and (record is None or record.status != DayStatus.ERROR):
            base = record.model_dump() if record is not None else {"user_id": user_id, "date": day}
            now = utcnow()
            timestamps = {} if record is not None else {"created_at": now, "updated_at": now}
            record = DayRecord.model_validate(
                {**base, **timestamps, "status": DayStatus.ERROR, "payload": None, "error": failures[day]}
            )
        if record is not None:
            days.append(record)
    return days
