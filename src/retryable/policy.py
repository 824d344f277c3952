"""Fluent retry policy: timing parameters and retry triggers."""

from typing import Any

import structlog
from pydantic import ValidationError

from .config import RetrySettings
from .exceptions import InvalidConfiguration
from .models import JitterRange, RetryConfig
from .triggers import ErrorClassifier, ErrorTrigger, error_trigger, values_match

logger = structlog.get_logger()


class RetryPolicy:
    """Mutable retry configuration owned by a single executor.

    Builder methods return the policy itself so calls can be chained::

        policy.times(5).with_intervals_of(200).if_it_throws(ConnectionError)

    A policy must not be changed while a run using it is in flight.
    """

    def __init__(self, config: RetryConfig | None = None):
        config = config or RetryConfig()
        self.max_attempts = config.max_attempts
        self.interval_millis = config.interval_millis
        self.backoff_factor = config.backoff_factor
        self.jitter = config.jitter
        self.error_triggers: list[ErrorTrigger] = []
        self.value_triggers: list[Any] = []

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        """Create a policy seeded with environment defaults."""
        return cls(settings.get_config())

    def if_it_throws(self, classifier: ErrorClassifier) -> "RetryPolicy":
        """Retry when the operation raises a matching exception.

        Args:
            classifier: Exception class (subclasses match too), exception
                instance (structurally equal errors match) or predicate

        Returns:
            This policy
        """
        if any(t.classifier is classifier for t in self.error_triggers):
            return self
        self.error_triggers.append(error_trigger(classifier))
        return self

    def if_it_returns(self, value: Any) -> "RetryPolicy":
        """Retry when the operation returns exactly this value."""
        if any(values_match(value, existing) for existing in self.value_triggers):
            return self
        self.value_triggers.append(value)
        return self

    def times(self, n: int) -> "RetryPolicy":
        """Set the total number of invocations allowed per run.

        Raises:
            InvalidConfiguration: If n is not an integer
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidConfiguration(
                f"Attempt count must be an integer: {n!r}",
                field="max_attempts",
                value=n,
            )
        self.max_attempts = n
        return self

    def with_intervals_of(self, interval_millis: float) -> "RetryPolicy":
        """Set the delay before the first retry, in milliseconds."""
        self.interval_millis = _require_number("interval_millis", interval_millis)
        return self

    def with_backoff_factor(self, factor: float) -> "RetryPolicy":
        """Set the multiplier applied to the delay after every retry."""
        self.backoff_factor = _require_number("backoff_factor", factor)
        return self

    def with_jitter(self, min: int, max: int) -> "RetryPolicy":
        """Set the random jitter window added to every delay.

        Raises:
            InvalidConfiguration: If min is greater than max. The previous
                window is kept.
        """
        try:
            jitter = JitterRange(min=min, max=max)
        except ValidationError as e:
            logger.debug("Rejected jitter window", min=min, max=max)
            raise InvalidConfiguration(
                f"Invalid jitter window: min={min!r}, max={max!r}",
                field="jitter",
                value=(min, max),
            ) from e
        self.jitter = jitter
        return self

    def classify_error(self, error: BaseException) -> bool:
        """Return True if the error matches any registered error trigger."""
        return any(trigger.matches(error) for trigger in self.error_triggers)

    def classify_value(self, value: Any) -> bool:
        """Return True if the value matches any registered value trigger."""
        return any(values_match(value, trigger) for trigger in self.value_triggers)

    def snapshot(self) -> RetryConfig:
        """Immutable copy of the timing configuration, triggers excluded."""
        return RetryConfig(
            max_attempts=self.max_attempts,
            interval_millis=self.interval_millis,
            backoff_factor=self.backoff_factor,
            jitter=self.jitter,
        )

    def copy(self) -> "RetryPolicy":
        """Independent policy with the same configuration and triggers."""
        clone = RetryPolicy(self.snapshot())
        clone.error_triggers = list(self.error_triggers)
        clone.value_triggers = list(self.value_triggers)
        return clone

    def __repr__(self) -> str:
        return (
            f"RetryPolicy(max_attempts={self.max_attempts}, "
            f"interval_millis={self.interval_millis}, "
            f"backoff_factor={self.backoff_factor}, "
            f"jitter=({self.jitter.min}, {self.jitter.max}), "
            f"error_triggers={len(self.error_triggers)}, "
            f"value_triggers={len(self.value_triggers)})"
        )


def _require_number(field: str, value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(
            f"{field} must be a number: {value!r}", field=field, value=value
        )
    return value
