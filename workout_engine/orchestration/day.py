"""Single-day orchestration: status transitions around one pipeline run."""

from __future__ import annotations

from datetime import date, timedelta

from loguru import logger

from workout_engine.config.settings import settings
from workout_engine.errors import DayAlreadyGeneratingError, DayGenerationError
from workout_engine.generation.pipeline import WorkoutPipeline
from workout_engine.generation.schemas import WorkoutRequest
from workout_engine.orchestration.models import DayRecord, DayStatus
from workout_engine.orchestration.schedule import plan_day
from workout_engine.persistence.store import DayStore
from workout_engine.profiles.models import UserProfile


class DayOrchestrator:
    """Drives one (user, date) record through pending -> generating -> ready | error."""

    def __init__(self, store: DayStore, pipeline: WorkoutPipeline, stale_after: timedelta | None = None):
        self.store = store
        self.pipeline = pipeline
        self.stale_after = (
            stale_after if stale_after is not None else timedelta(seconds=settings.generation_stale_after_seconds)
        )

    async def generate_day(
        self,
        profile: UserProfile,
        day: date,
        day_of_week_index: int,
        *,
        reuse_ready: bool = False,
    ) -> DayRecord:
        """Generate and persist the workout for one day.

        Regenerating a ready or errored day overwrites the same record.

        Args:
            profile: Requesting user's profile
            day: Calendar date to generate
            day_of_week_index: Weekday of day, 0=Monday .. 6=Sunday
            reuse_ready: Return an existing ready record instead of regenerating

        Returns:
            The ready DayRecord

        Raises:
            DayAlreadyGeneratingError: Another generation for the day is in flight
            DayGenerationError: Generation or persistence failed; the error is
                persisted on the record when the store is reachable
        """
        user_id = profile.user_id
        try:
            plan = plan_day(profile, day_of_week_index)
            record = await self.store.upsert_pending(user_id, day, plan.workout_type)
            if reuse_ready and record.status == DayStatus.READY:
                logger.debug("Keeping ready workout", user_id=user_id, day=day.isoformat())
                return record

            await self.store.mark_generating(
                user_id, day, workout_type=plan.workout_type, stale_after=self.stale_after
            )
            logger.info(
                "Generating workout",
                user_id=user_id,
                day=day.isoformat(),
                workout_type=plan.workout_type,
                focus=plan.focus,
            )
            request = WorkoutRequest(
                profile=profile,
                workout_type=plan.workout_type,
                duration=plan.duration,
                equipment=profile.equipment,
                focus=plan.focus,
                day_name=plan.day_name,
            )
            payload = await self.pipeline.generate(request, context=f"Workout {day.isoformat()}")
            record = await self.store.mark_ready(user_id, day, payload)
        except DayAlreadyGeneratingError:
            logger.warning("Workout generation already in progress", user_id=user_id, day=day.isoformat())
            raise
        except Exception as e:
            detail = f"{type(e).__name__}: {e}"
            logger.error("Workout generation failed", user_id=user_id, day=day.isoformat(), detail=detail)
            await self._record_failure(user_id, day, detail)
            raise DayGenerationError(day, detail) from e

        logger.info(
            "Workout ready",
            user_id=user_id,
            day=day.isoformat(),
            placeholder=record.is_placeholder,
        )
        return record

    async def _record_failure(self, user_id: str, day: date, detail: str) -> None:
        try:
            await self.store.mark_error(user_id, day, detail)
        except Exception as e:
            # the original failure is what the caller needs to see
            logger.error(
                "Could not persist workout error",
                user_id=user_id,
                day=day.isoformat(),
                error=f"{type(e).__name__}: {e}",
            )
