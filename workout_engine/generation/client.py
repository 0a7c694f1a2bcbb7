"""Retrying generation client.

Walks the attempt ladder (see ladder.py) until one attempt yields usable
content, then falls back to a synthetic placeholder. generate() always
returns a schema-valid GeneratedPayload and never raises: callers are
shielded from upstream unreliability.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from loguru import logger

from workout_engine.catalog.exercises import ContentUnit
from workout_engine.catalog.safety import SafetyFilter
from workout_engine.config.settings import settings
from workout_engine.generation.fallback import build_placeholder
from workout_engine.generation.ladder import (
    INITIAL_STATE,
    Attempt,
    AttemptOutcome,
    SyntheticFallback,
    advance,
    retry_delay,
)
from workout_engine.generation.logging_helpers import log_attempt_outcome, log_generation_request
from workout_engine.generation.prompt_builder import PromptComposer
from workout_engine.generation.schemas import GeneratedPayload, WorkoutRequest
from workout_engine.generation.service import GenerationService
from workout_engine.generation.validator import PayloadValidator, has_usable_content

Sleeper = Callable[[float], Awaitable[None]]


class GenerationClient:
    """Escalating-fallback wrapper around a GenerationService."""

    def __init__(
        self,
        service: GenerationService,
        composer: PromptComposer | None = None,
        validator: PayloadValidator | None = None,
        safety: SafetyFilter | None = None,
        *,
        base_delay: float | None = None,
        max_delay: float | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self.service = service
        self.composer = composer or PromptComposer()
        self.validator = validator or PayloadValidator()
        self.safety = safety or SafetyFilter()
        self.base_delay = settings.retry_base_delay_seconds if base_delay is None else base_delay
        self.max_delay = settings.retry_max_delay_seconds if max_delay is None else max_delay
        self._sleep = sleep

    async def _run_attempt(
        self,
        state: Attempt,
        request: WorkoutRequest,
        candidates: Sequence[ContentUnit],
        context: str,
    ) -> tuple[AttemptOutcome, GeneratedPayload | None, str | None]:
        envelope = self.composer.compose(
            request.profile,
            request.workout_type,
            request.duration,
            request.equipment,
            candidates,
            state.number,
            focus=request.focus,
            day_name=request.day_name,
        )
        log_generation_request(context, envelope, state.temperature)

        try:
            raw = await self.service.complete(envelope, temperature=state.temperature)
        except Exception as e:
            return AttemptOutcome.SERVICE_ERROR, None, f"{type(e).__name__}: {e}"

        if not has_usable_content(raw):
            return AttemptOutcome.MALFORMED, None, "response has no non-empty exercise list"

        payload = self.validator.validate(raw, workout_type=request.workout_type, profile=request.profile)
        payload = self.safety.screen_payload(
            payload, request.profile.limitations, request.profile.limitation_areas
        )
        if not payload.main:
            return AttemptOutcome.MALFORMED, None, "every main exercise conflicted with user limitations"

        return AttemptOutcome.SUCCESS, payload.model_copy(update={"attempts_used": state.number}), None

    async def generate(
        self,
        request: WorkoutRequest,
        candidates: Sequence[ContentUnit],
        context: str = "Workout Generation",
    ) -> GeneratedPayload:
        """Generate a workout, walking the attempt ladder.

        Args:
            request: Workout parameters
            candidates: Safety-filtered candidate exercises
            context: Label used in log records

        Returns:
            Validated GeneratedPayload; a placeholder if every attempt failed
        """
        state: Attempt | SyntheticFallback = INITIAL_STATE
        while isinstance(state, Attempt):
            outcome, payload, detail = await self._run_attempt(state, request, candidates, context)
            log_attempt_outcome(context, state, outcome, detail)
            if outcome is AttemptOutcome.SUCCESS and payload is not None:
                return payload

            delay = retry_delay(state, outcome, base=self.base_delay, cap=self.max_delay)
            if delay > 0:
                await self._sleep(delay)
            state = advance(state)

        logger.error(
            "All generation attempts failed; returning placeholder workout",
            context=context,
            attempts=state.attempts_made,
            workout_type=request.workout_type,
        )
        placeholder = self.validator.validate(
            build_placeholder(request), workout_type=request.workout_type, profile=request.profile
        )
        return placeholder.model_copy(update={"is_placeholder": True, "attempts_used": state.attempts_made})
