"""Environment driven defaults for retry policies."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import JitterRange, RetryConfig


class RetrySettings(BaseSettings):
    """Default retry configuration loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="RETRY_", env_file=".env", extra="ignore"
    )

    max_attempts: int = 3
    interval_millis: float = Field(default=1000, ge=0)
    backoff_factor: float = Field(default=1.0, gt=0)
    jitter_min: int = 0
    jitter_max: int = 0

    @model_validator(mode="after")
    def validate_jitter(self) -> "RetrySettings":
        """Ensure jitter_max is not below jitter_min."""
        if self.jitter_min > self.jitter_max:
            raise ValueError("jitter_max must be greater than or equal to jitter_min")
        return self

    def get_config(self) -> RetryConfig:
        """Get the retry configuration described by these settings."""
        return RetryConfig(
            max_attempts=self.max_attempts,
            interval_millis=self.interval_millis,
            backoff_factor=self.backoff_factor,
            jitter=JitterRange(min=self.jitter_min, max=self.jitter_max),
        )
