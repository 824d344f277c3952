"""Data models for retry configuration and attempt history."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ErrorCode(str, Enum):
    """Standardized error codes."""

    INVALID_CONFIGURATION = "invalid_configuration"
    RAN_OUT_OF_RETRIES = "ran_out_of_retries"


class JitterRange(BaseModel):
    """Additive random noise window, in milliseconds."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(default=0, description="Lowest jitter added to a delay")
    max: int = Field(default=0, description="Highest jitter added to a delay")

    @model_validator(mode="after")
    def validate_bounds(self) -> "JitterRange":
        """Ensure min does not exceed max."""
        if self.min > self.max:
            raise ValueError("jitter min must be less than or equal to max")
        return self

    @property
    def is_zero(self) -> bool:
        return self.min == 0 and self.max == 0


class RetryConfig(BaseModel):
    """Immutable snapshot of a retry policy's timing configuration."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, description="Total operation invocations")
    interval_millis: float = Field(
        default=1000, description="Delay before the first retry in milliseconds"
    )
    backoff_factor: float = Field(
        default=1, description="Multiplier applied to the delay after every retry"
    )
    jitter: JitterRange = Field(default_factory=JitterRange)

    def interval_for(self, retry_index: int) -> float:
        """Delay before the given retry (0-indexed), without jitter."""
        return self.interval_millis * (self.backoff_factor**retry_index)


class ReturnedValue(BaseModel):
    """An attempt whose return value qualified for a retry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["returned_value"] = "returned_value"
    value: Any = None


class ExceptionThrown(BaseModel):
    """An attempt whose raised exception qualified for a retry."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["exception_thrown"] = "exception_thrown"
    exception: BaseException


Attempt = ReturnedValue | ExceptionThrown
