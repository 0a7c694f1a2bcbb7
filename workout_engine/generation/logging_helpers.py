"""Helper functions for logging generation requests and attempt outcomes."""

from __future__ import annotations

from loguru import logger

from workout_engine.generation.ladder import Attempt, AttemptOutcome
from workout_engine.generation.schemas import RequestEnvelope


def log_generation_request(
    context: str,
    envelope: RequestEnvelope,
    temperature: float,
) -> None:
    """Log the prompt submitted to the generation service.

    Args:
        context: Context description (e.g., "Workout Generation user=42 2026-10-19")
        envelope: Envelope being submitted
        temperature: Sampling temperature for this attempt
    """
    logger.debug(
        "Generation Request - PROMPT SUBMITTED",
        context=context,
        attempt=envelope.attempt,
        detail_level=envelope.detail_level,
        temperature=temperature,
        prompt_chars=envelope.size,
        system_prompt=envelope.system_prompt,
        user_prompt=envelope.user_prompt,
    )


def log_attempt_outcome(
    context: str,
    state: Attempt,
    outcome: AttemptOutcome,
    detail: str | None = None,
) -> None:
    """Log how one attempt ended.

    Args:
        context: Context description
        state: Attempt that just finished
        outcome: success, malformed or service_error
        detail: Optional error or diagnostic detail
    """
    extra_data: dict[str, str | int] = {"context": context, "attempt": state.number, "outcome": outcome.value}
    if detail:
        extra_data["detail"] = detail

    if outcome is AttemptOutcome.SUCCESS:
        logger.info(f"Generation attempt {state.number} succeeded", **extra_data)
    elif outcome is AttemptOutcome.MALFORMED:
        logger.warning(f"Generation attempt {state.number} returned unusable output", **extra_data)
    else:
        logger.warning(f"Generation attempt {state.number} failed calling service", **extra_data)
