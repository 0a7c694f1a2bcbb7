"""LLM model abstraction for consistent model access."""

import os

from pydantic_ai.models.openai import OpenAIChatModel

from workout_engine.config.settings import settings


def get_model(provider: str, model_name: str):
    if provider == "openai":
        # pydantic_ai reads the key from the environment
        if settings.openai_api_key and not os.getenv("OPENAI_API_KEY"):
            os.environ["OPENAI_API_KEY"] = settings.openai_api_key
        return OpenAIChatModel(model_name)

    raise ValueError(f"Unsupported LLM provider: {provider}")
