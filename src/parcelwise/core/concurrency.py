"""Bounded concurrent fan-out."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")


async def gather_bounded(
    factories: Iterable[Callable[[], Awaitable[T]]],
    limit: int,
) -> list[T]:
    """Run every factory with at most ``limit`` in flight and wait for all.

    Results keep the order of ``factories``. Factories are expected to
    handle their own errors; the first unhandled exception propagates.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    semaphore = asyncio.Semaphore(limit)

    async def run(factory: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await factory()

    return list(await asyncio.gather(*(run(f) for f in factories)))
