"""Async iterator combinators for live feeds."""

import asyncio
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

_UNSET: Any = object()


class _Finished:
    pass


class _Failed:
    def __init__(self, error: Exception) -> None:
        self.error = error


async def combine_latest(*sources: AsyncIterator[Any]) -> AsyncIterator[tuple]:
    """Yield a tuple of the latest value of every source on each new value.

    Nothing is yielded until every source has produced once. The combined
    feed ends when all sources end and fails as soon as any source fails.
    """
    queue: asyncio.Queue[tuple[int, Any]] = asyncio.Queue()

    async def pump(index: int, source: AsyncIterator[Any]) -> None:
        try:
            async for value in source:
                await queue.put((index, value))
        except Exception as e:
            await queue.put((index, _Failed(e)))
            return
        await queue.put((index, _Finished()))

    tasks = [asyncio.create_task(pump(i, s)) for i, s in enumerate(sources)]
    latest = [_UNSET] * len(sources)
    finished = 0
    try:
        while finished < len(sources):
            index, item = await queue.get()
            if isinstance(item, _Finished):
                finished += 1
                continue
            if isinstance(item, _Failed):
                raise item.error
            latest[index] = item
            if all(value is not _UNSET for value in latest):
                yield tuple(latest)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


async def ticker(interval_seconds: float) -> AsyncIterator[datetime]:
    """Yield the current UTC instant now and then every ``interval_seconds``."""
    while True:
        yield datetime.now(timezone.utc)
        await asyncio.sleep(interval_seconds)
