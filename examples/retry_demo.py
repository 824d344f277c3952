"""Demonstration of retryable operations.

This example shows the executor with value and error triggers, the
decorator form, and how exhaustion is reported.
"""

import asyncio
import random
from typing import Any

from retryable import RanOutOfRetries, Retryable, RetrySettings, retryable


class QuoteServiceUnavailable(Exception):
    """Raised by the simulated quote service."""


async def simulate_quote_lookup(symbol: str) -> float | None:
    """Simulate a quote lookup that fails or returns nothing at times."""
    await asyncio.sleep(0.01)

    roll = random.random()
    if roll < 0.3:
        raise QuoteServiceUnavailable(f"Quote service unavailable for {symbol}")
    if roll < 0.5:
        return None
    return round(random.uniform(1.0, 2.0), 4)


def simulate_job_status(job_id: str) -> dict[str, Any]:
    """Simulate polling a background job."""
    return {"job_id": job_id, "state": random.choice(["pending", "done"])}


async def demo_executor():
    """Demonstrate the executor with mixed triggers."""
    print("\n=== Executor Demo ===")

    lookup = Retryable(simulate_quote_lookup, id="quotes")
    (
        lookup.retry.times(5)
        .with_intervals_of(50)
        .with_backoff_factor(2)
        .with_jitter(0, 20)
        .if_it_returns(None)
        .if_it_throws(QuoteServiceUnavailable)
    )

    for symbol in ["EURUSD", "GBPUSD", "USDJPY"]:
        try:
            quote = await lookup.run(symbol)
            print(f"✅ {symbol}: {quote} after {len(lookup.attempts)} retries")
        except RanOutOfRetries as e:
            kinds = [attempt.kind for attempt in e.attempts]
            print(f"❌ {symbol}: ran out of retries, history={kinds}")


async def demo_decorator():
    """Demonstrate the decorator with a predicate trigger."""
    print("\n=== Decorator Demo ===")

    @retryable(
        settings=RetrySettings(),
        times=4,
        interval_millis=25,
        if_it_throws=[lambda e: isinstance(e, LookupError)],
    )
    def wait_for_job(job_id: str) -> dict[str, Any]:
        status = simulate_job_status(job_id)
        if status["state"] != "done":
            raise LookupError(f"Job {job_id} not finished")
        return status

    for i in range(3):
        try:
            status = await wait_for_job(f"job-{i}")
            print(f"✅ {status['job_id']} finished")
        except RanOutOfRetries as e:
            print(f"❌ job-{i} still pending after {len(e.attempts)} attempts")


async def main():
    """Run all retry demonstrations."""
    print("🚀 Retryable Demonstration")
    print("=" * 50)

    await demo_executor()
    await demo_decorator()

    print("\n✅ All demonstrations completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
