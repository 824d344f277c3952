"""Retry decorator for sync and async functions."""

import functools
from collections.abc import Callable, Iterable
from typing import Any

from .config import RetrySettings
from .delay import Delay, sleep_millis
from .executor import Retryable
from .policy import RetryPolicy
from .triggers import ErrorClassifier


def retryable(
    *,
    times: int | None = None,
    interval_millis: float | None = None,
    backoff_factor: float | None = None,
    jitter: tuple[int, int] | None = None,
    if_it_throws: Iterable[ErrorClassifier] = (),
    if_it_returns: Iterable[Any] = (),
    id: str | None = None,
    delay: Delay = sleep_millis,
    settings: RetrySettings | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Create a retry decorator with the given configuration.

    Unset timing arguments fall back to ``settings`` when given, otherwise
    to the policy defaults. Every call of the decorated function runs in a
    fresh executor, so the wrapper is safe to call concurrently. The wrapper
    is always a coroutine function.

    Args:
        times: Total invocations allowed per call
        interval_millis: Delay before the first retry
        backoff_factor: Multiplier applied to the delay after every retry
        jitter: Inclusive (min, max) jitter window in milliseconds
        if_it_throws: Error triggers
        if_it_returns: Value triggers
        id: Label attached to exhaustion errors
        delay: Delay primitive
        settings: Environment defaults

    Returns:
        Decorator function

    Raises:
        InvalidConfiguration: If the jitter window is invalid
    """
    policy = RetryPolicy.from_settings(settings) if settings else RetryPolicy()
    if times is not None:
        policy.times(times)
    if interval_millis is not None:
        policy.with_intervals_of(interval_millis)
    if backoff_factor is not None:
        policy.with_backoff_factor(backoff_factor)
    if jitter is not None:
        policy.with_jitter(*jitter)
    for classifier in if_it_throws:
        policy.if_it_throws(classifier)
    for value in if_it_returns:
        policy.if_it_returns(value)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            executor = Retryable(func, id, policy=policy.copy(), delay=delay)
            return await executor.run(*args, **kwargs)

        wrapper.retry = policy  # type: ignore[attr-defined]
        return wrapper

    return decorator
