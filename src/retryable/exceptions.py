"""Exception hierarchy for retryable operations."""

from typing import Any

from .models import Attempt, ErrorCode, RetryConfig


class RetryableError(Exception):
    """Base exception for the retry library."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: dict[str, Any] | None = None,
        correlation_id: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id


class InvalidConfiguration(RetryableError):
    """A policy builder call received arguments that violate an invariant."""

    def __init__(self, message: str, field: str, value: Any):
        super().__init__(
            message,
            ErrorCode.INVALID_CONFIGURATION,
            {"field": field, "value": value},
        )
        self.field = field
        self.value = value


class RanOutOfRetries(RetryableError):
    """The attempt budget was consumed without an acceptable outcome.

    Carries the policy snapshot and every recorded attempt, in order, so
    callers can tell repeated exceptions apart from repeated disqualified
    return values.
    """

    def __init__(
        self,
        retry_config: RetryConfig,
        attempts: list[Attempt],
        id: str | None = None,
    ):
        super().__init__(
            "Ran out of retries while executing operation",
            ErrorCode.RAN_OUT_OF_RETRIES,
            {"retry_config": retry_config, "attempts": attempts, "id": id},
            correlation_id=id,
        )
        self.retry_config = retry_config
        self.attempts = attempts
        self.id = id
