"""Async timing helpers."""

import asyncio
from typing import TypeVar

T = TypeVar("T")


async def delay(milliseconds: float, value: T | None = None) -> T | None:
    """Suspend the caller for the given number of milliseconds, then return value.

    Negative durations are treated as zero.

    Examples:
        >>> asyncio.run(delay(10, "done"))
        'done'
    """
    await asyncio.sleep(max(milliseconds, 0) / 1000)
    return value
