"""Generation service boundary.

GenerationClient talks to anything implementing GenerationService. The
production implementation submits the envelope to an LLM through a
pydantic_ai Agent and asks for a RawWorkoutResponse-shaped result.
"""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger
from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from workout_engine.config.settings import settings
from workout_engine.errors import GenerationServiceError
from workout_engine.generation.model import get_model
from workout_engine.generation.schemas import RawWorkoutResponse, RequestEnvelope


class GenerationService(Protocol):
    async def complete(self, envelope: RequestEnvelope, *, temperature: float) -> Any:
        """Submit an envelope and return the raw structured response.

        Raises:
            Exception: Any transport or service failure
        """
        ...


class PydanticAIGenerationService:
    """Structured completion over a pydantic_ai Agent."""

    def __init__(
        self,
        provider: str | None = None,
        model_name: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.provider = provider or settings.generation_provider
        self.model_name = model_name or settings.generation_model
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.generation_timeout_seconds
        self._model = None

    def _get_model(self):
        # built on first use: a missing API key fails the attempt, not construction
        if self._model is None:
            self._model = get_model(self.provider, self.model_name)
        return self._model

    async def complete(self, envelope: RequestEnvelope, *, temperature: float) -> Any:
        try:
            agent = Agent(
                model=self._get_model(),
                system_prompt=envelope.system_prompt,
                output_type=RawWorkoutResponse,
            )
            result = await agent.run(
                envelope.user_prompt,
                model_settings=ModelSettings(temperature=temperature, timeout=self.timeout_seconds),
            )
        except Exception as e:
            logger.error(
                "Generation service call failed",
                error_type=type(e).__name__,
                error_message=str(e),
                model=self.model_name,
                attempt=envelope.attempt,
            )
            raise GenerationServiceError(f"{type(e).__name__}: {e}") from e
        return result.output.model_dump(by_alias=True, exclude_none=True)
