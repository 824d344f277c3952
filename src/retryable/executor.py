"""Retry loop around a caller supplied operation."""

import inspect
import random
from collections.abc import Callable
from typing import Any

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    TryAgain,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
)

from .config import RetrySettings
from .delay import Delay, sleep_millis
from .exceptions import RanOutOfRetries
from .models import Attempt, ExceptionThrown, RetryConfig, ReturnedValue
from .policy import RetryPolicy
from .strategies import BackoffWithJitterWait

logger = structlog.get_logger()


class _FatalTryAgain(Exception):
    """Carries a non-qualifying TryAgain past tenacity to the caller."""

    def __init__(self, error: TryAgain):
        super().__init__(error)
        self.error = error


class Retryable:
    """Runs an operation and retries it according to its policy.

    The operation may be a plain or an async callable. Configure the retry
    behaviour through ``retry`` before calling ``run``::

        fetch = Retryable(fetch_quote, id="quotes")
        fetch.retry.times(5).with_intervals_of(500).if_it_throws(TimeoutError)
        quote = await fetch.run("EURUSD")

    Nothing is retried unless a trigger is registered. An instance is
    single-flight: ``attempts`` is reset by every ``run``, so concurrent runs
    on the same instance overwrite each other's history.
    """

    def __init__(
        self,
        operation: Callable[..., Any],
        id: str | None = None,
        *,
        policy: RetryPolicy | None = None,
        settings: RetrySettings | None = None,
        delay: Delay = sleep_millis,
        rng: random.Random | None = None,
    ):
        """Initialize the executor.

        Args:
            operation: Callable to run, sync or async
            id: Optional label attached to exhaustion errors
            policy: Policy to own; a default one is created when omitted
            settings: Environment defaults used when no policy is given
            delay: Awaitable taking milliseconds, called between attempts
            rng: Random source for jitter
        """
        self._operation = operation
        self._id = id
        if policy is None:
            policy = (
                RetryPolicy.from_settings(settings) if settings else RetryPolicy()
            )
        self.retry = policy
        self.attempts: list[Attempt] = []
        self._delay = delay
        self._rng = rng or random.Random()

    @property
    def id(self) -> str | None:
        return self._id

    async def run(self, *args: Any, **kwargs: Any) -> Any:
        """Run the operation, retrying while outcomes match a trigger.

        Returns:
            The first return value that does not match a value trigger

        Raises:
            RanOutOfRetries: If every allowed attempt matched a trigger
            Exception: Any error not matching an error trigger, unchanged
        """
        self.attempts = []
        config = self.retry.snapshot()

        if config.max_attempts <= 0:
            logger.debug(
                "No attempts allowed, skipping operation",
                max_attempts=config.max_attempts,
                id=self._id,
            )
            raise self._ran_out_of_retries(config)

        retrying = AsyncRetrying(
            sleep=self._delay,
            stop=stop_after_attempt(config.max_attempts),
            wait=BackoffWithJitterWait(config, self._rng),
            retry=(
                retry_if_exception(self._qualifies)
                | retry_if_result(self.retry.classify_value)
            ),
            after=self._record_attempt,
            before_sleep=self._log_retry,
            retry_error_callback=lambda _: self._raise_exhausted(config),
        )
        try:
            result = await retrying(self._invoke, *args, **kwargs)
        except _FatalTryAgain as carrier:
            fatal = carrier.error
        else:
            if self.attempts:
                logger.info(
                    "Operation succeeded after retries",
                    operation=_name_of(self._operation),
                    retries=len(self.attempts),
                    id=self._id,
                )
            return result
        raise fatal

    async def _invoke(self, *args: Any, **kwargs: Any) -> Any:
        try:
            result = self._operation(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except TryAgain as e:
            # tenacity retries TryAgain without consulting the retry condition
            if not self.retry.classify_error(e):
                raise _FatalTryAgain(e) from e
            raise
        return result

    def _qualifies(self, error: BaseException) -> bool:
        if isinstance(error, _FatalTryAgain):
            return False
        return self.retry.classify_error(error)

    def _record_attempt(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome is None:
            return
        if outcome.failed:
            self.attempts.append(ExceptionThrown(exception=outcome.exception()))
        else:
            self.attempts.append(ReturnedValue(value=outcome.result()))

    def _log_retry(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        next_action = retry_state.next_action
        error = outcome.exception() if outcome is not None and outcome.failed else None
        logger.warning(
            "Operation failed, retrying",
            operation=_name_of(self._operation),
            attempt=retry_state.attempt_number,
            delay_millis=next_action.sleep if next_action else None,
            outcome=self.attempts[-1].kind if self.attempts else None,
            error_type=type(error).__name__ if error else None,
            error_message=str(error) if error else None,
            id=self._id,
        )

    def _raise_exhausted(self, config: RetryConfig) -> Any:
        raise self._ran_out_of_retries(config)

    def _ran_out_of_retries(self, config: RetryConfig) -> RanOutOfRetries:
        logger.error(
            "Ran out of retries",
            operation=_name_of(self._operation),
            max_attempts=config.max_attempts,
            attempts=len(self.attempts),
            id=self._id,
        )
        return RanOutOfRetries(config, list(self.attempts), self._id)


def _name_of(operation: Callable[..., Any]) -> str:
    return getattr(operation, "__name__", type(operation).__name__)
