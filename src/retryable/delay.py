"""Delay primitive used between attempts."""

import asyncio
from collections.abc import Awaitable, Callable

Delay = Callable[[float], Awaitable[None]]


async def sleep_millis(milliseconds: float) -> None:
    """Suspend the current task for at least the given milliseconds."""
    await asyncio.sleep(max(milliseconds, 0) / 1000)
