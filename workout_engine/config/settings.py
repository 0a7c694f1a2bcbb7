import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "workouts.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.info(f"Using default database path: {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    generation_provider: str = Field(default="openai", validation_alias="GENERATION_PROVIDER")
    generation_model: str = Field(default="gpt-4o-mini", validation_alias="GENERATION_MODEL")
    generation_timeout_seconds: float = Field(
        default=60.0,
        validation_alias="GENERATION_TIMEOUT_SECONDS",
        description="Per-attempt timeout for the generation service",
    )
    retry_base_delay_seconds: float = Field(
        default=0.5,
        validation_alias="RETRY_BASE_DELAY_SECONDS",
        description="Delay before the second attempt after a service error; doubles per attempt",
    )
    retry_max_delay_seconds: float = Field(
        default=3.0,
        validation_alias="RETRY_MAX_DELAY_SECONDS",
        description="Upper bound on the delay between attempts",
    )
    generation_stale_after_seconds: int = Field(
        default=900,
        validation_alias="GENERATION_STALE_AFTER_SECONDS",
        description="Age after which a day stuck in 'generating' may be claimed again",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("retry_base_delay_seconds", "retry_max_delay_seconds")
    @classmethod
    def validate_delay(cls, value: float) -> float:
        if value < 0:
            logger.warning(f"Negative retry delay {value} is not allowed. Using 0.")
            return 0.0
        return value


settings = Settings()
