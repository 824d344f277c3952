"""Delay computation between attempts."""

import random

from tenacity import RetryCallState
from tenacity.wait import wait_base

from .models import JitterRange, RetryConfig


def random_jitter(jitter: JitterRange, rng: random.Random) -> int:
    """Draw a uniform integer from the jitter window, inclusive."""
    if jitter.is_zero:
        return 0
    return rng.randint(jitter.min, jitter.max)


class BackoffWithJitterWait(wait_base):
    """Geometric backoff plus additive integer jitter, in milliseconds.

    The delay before retry k (0-indexed) is ``interval * factor**k`` plus a
    jitter drawn independently for every retry, floored at zero.
    """

    def __init__(self, config: RetryConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def __call__(self, retry_state: RetryCallState) -> float:
        # Newer tenacity computes the wait before checking stop.
        if retry_state.attempt_number >= self.config.max_attempts:
            return 0
        interval = self.config.interval_for(retry_state.attempt_number - 1)
        return max(interval + random_jitter(self.config.jitter, self.rng), 0)
