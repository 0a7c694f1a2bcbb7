"""Day store: the persistence boundary of the pipeline.

The orchestrators depend only on the five DayStore operations. SqlDayStore
implements them over SQLAlchemy; each operation is a single short
transaction on one (user_id, date) row, executed in a worker thread so the
event loop keeps serving other days.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date, timedelta
from typing import Protocol, TypeVar

from loguru import logger
from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from workout_engine.errors import DayAlreadyGeneratingError, PersistenceError
from workout_engine.generation.schemas import GeneratedPayload
from workout_engine.orchestration.models import DayRecord, DayStatus
from workout_engine.persistence.models import WorkoutDay, utcnow
from workout_engine.persistence.session import get_session_factory, session_scope

T = TypeVar("T")


class DayStore(Protocol):
    async def upsert_pending(self, user_id: str, day: date, workout_type: str | None = None) -> DayRecord: ...

    async def mark_generating(
        self,
        user_id: str,
        day: date,
        *,
        workout_type: str | None = None,
        stale_after: timedelta | None = None,
    ) -> DayRecord: ...

    async def mark_ready(self, user_id: str, day: date, payload: GeneratedPayload) -> DayRecord: ...

    async def mark_error(self, user_id: str, day: date, detail: str) -> DayRecord: ...

    async def get_by_user_and_date_range(self, user_id: str, start: date, end: date) -> list[DayRecord]: ...


def to_record(row: WorkoutDay) -> DayRecord:
    status = DayStatus(row.status)
    payload = None
    if status == DayStatus.READY and row.payload_json:
        payload = GeneratedPayload.model_validate(row.payload_json)
    return DayRecord(
        user_id=row.user_id,
        date=row.day,
        status=status,
        workout_type=row.workout_type,
        payload=payload,
        error=row.error_detail if status == DayStatus.ERROR else None,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _day_filter(user_id: str, day: date):
    return and_(WorkoutDay.user_id == user_id, WorkoutDay.day == day)


class SqlDayStore:
    """DayStore over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None):
        self._factory = session_factory or get_session_factory()

    async def _run(self, operation: str, fn: Callable[[Session], T]) -> T:
        def _work() -> T:
            with session_scope(self._factory) as session:
                return fn(session)

        try:
            return await asyncio.to_thread(_work)
        except SQLAlchemyError as e:
            logger.error(f"Day store operation '{operation}' failed: {e}")
            raise PersistenceError(f"{operation} failed: {type(e).__name__}: {e}") from e

    def _get_row(self, session: Session, user_id: str, day: date) -> WorkoutDay | None:
        return session.execute(select(WorkoutDay).where(_day_filter(user_id, day))).scalar_one_or_none()

    def _require_row(self, session: Session, user_id: str, day: date) -> WorkoutDay:
        row = self._get_row(session, user_id, day)
        if row is None:
            raise PersistenceError(f"No workout day for user {user_id} on {day.isoformat()}")
        return row

    async def upsert_pending(self, user_id: str, day: date, workout_type: str | None = None) -> DayRecord:
        """Create a pending row if none exists; an existing row is returned untouched."""

        def _upsert(session: Session) -> DayRecord:
            row = self._get_row(session, user_id, day)
            if row is not None:
                return to_record(row)
            now = utcnow()
            row = WorkoutDay(
                user_id=user_id,
                day=day,
                status=DayStatus.PENDING.value,
                workout_type=workout_type,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError:
                # another writer inserted the same (user_id, date) first
                session.rollback()
                return to_record(self._require_row(session, user_id, day))
            return to_record(row)

        return await self._run("upsert_pending", _upsert)

    async def mark_generating(
        self,
        user_id: str,
        day: date,
        *,
        workout_type: str | None = None,
        stale_after: timedelta | None = None,
    ) -> DayRecord:
        """Claim the day for a new generation.

        The claim is a single conditional UPDATE so two concurrent requests
        cannot both win. A row already generating is only re-claimable once
        its last update is older than stale_after.

        Raises:
            DayAlreadyGeneratingError: A non-stale generation owns the row
            PersistenceError: The row does not exist or the write failed
        """

        def _claim(session: Session) -> DayRecord:
            now = utcnow()
            claimable = WorkoutDay.status != DayStatus.GENERATING.value
            if stale_after is not None:
                claimable = or_(claimable, WorkoutDay.updated_at < now - stale_after)
            values: dict[str, object] = {
                "status": DayStatus.GENERATING.value,
                "error_detail": None,
                "updated_at": now,
            }
            if workout_type is not None:
                values["workout_type"] = workout_type
            result = session.execute(
                update(WorkoutDay).where(_day_filter(user_id, day), claimable).values(**values)
            )
            if result.rowcount == 0:
                row = self._require_row(session, user_id, day)
                if row.status == DayStatus.GENERATING.value:
                    raise DayAlreadyGeneratingError(user_id, day)
                raise PersistenceError(f"Could not claim workout day {day.isoformat()} for user {user_id}")
            return to_record(self._require_row(session, user_id, day))

        return await self._run("mark_generating", _claim)

    async def mark_ready(self, user_id: str, day: date, payload: GeneratedPayload) -> DayRecord:
        def _ready(session: Session) -> DayRecord:
            row = self._require_row(session, user_id, day)
            row.status = DayStatus.READY.value
            row.payload_json = payload.model_dump(mode="json")
            row.error_detail = None
            row.updated_at = utcnow()
            session.flush()
            return to_record(row)

        return await self._run("mark_ready", _ready)

    async def mark_error(self, user_id: str, day: date, detail: str) -> DayRecord:
        def _error(session: Session) -> DayRecord:
            row = self._require_row(session, user_id, day)
            row.status = DayStatus.ERROR.value
            row.payload_json = None
            row.error_detail = detail
            row.updated_at = utcnow()
            session.flush()
            return to_record(row)

        return await self._run("mark_error", _error)

    async def get_by_user_and_date_range(self, user_id: str, start: date, end: date) -> list[DayRecord]:
        """Records for user_id with start <= date <= end, in date order."""

        def _range(session: Session) -> list[DayRecord]:
            rows = session.execute(
                select(WorkoutDay)
                .where(WorkoutDay.user_id == user_id, WorkoutDay.day >= start, WorkoutDay.day <= end)
                .order_by(WorkoutDay.day)
            ).scalars()
            return [to_record(row) for row in rows]

        return await self._run("get_by_user_and_date_range", _range)
