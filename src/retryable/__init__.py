"""Retry orchestration for sync and async operations.

This package re-runs an operation under a configurable policy (attempt
budget, fixed interval, exponential backoff and random jitter) until it
returns an acceptable value or the budget runs out, in which case a
``RanOutOfRetries`` error carrying the attempt history is raised.
"""

from .config import RetrySettings
from .decorators import retryable
from .delay import Delay, sleep_millis
from .exceptions import InvalidConfiguration, RanOutOfRetries, RetryableError
from .executor import Retryable
from .models import (
    Attempt,
    ErrorCode,
    ExceptionThrown,
    JitterRange,
    RetryConfig,
    ReturnedValue,
)
from .policy import RetryPolicy
from .strategies import BackoffWithJitterWait
from .triggers import (
    ErrorTrigger,
    ExceptionTypeTrigger,
    ExceptionValueTrigger,
    PredicateTrigger,
)

__all__ = [
    "Retryable",
    "RetryPolicy",
    "retryable",
    "RetrySettings",
    "RetryConfig",
    "JitterRange",
    "Attempt",
    "ReturnedValue",
    "ExceptionThrown",
    "ErrorCode",
    "ErrorTrigger",
    "ExceptionTypeTrigger",
    "ExceptionValueTrigger",
    "PredicateTrigger",
    "BackoffWithJitterWait",
    "Delay",
    "sleep_millis",
    "RetryableError",
    "InvalidConfiguration",
    "RanOutOfRetries",
]
