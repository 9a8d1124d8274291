import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import Any


async def timed_source(
    entries: Iterable[tuple[float, Any, Any]],
) -> AsyncIterator[tuple[Any, Any]]:
    """
    Yield `(key, value)` after sleeping `delay` seconds, for each `(delay, key, value)`.
    """

    for delay, key, value in entries:
        await asyncio.sleep(delay)
        yield key, value


async def failing_source(
    entries: Iterable[tuple[Any, Any]],
    exception: Exception,
) -> AsyncIterator[tuple[Any, Any]]:
    for key, value in entries:
        await asyncio.sleep(0)
        yield key, value

    raise exception


async def never_ending_source() -> AsyncIterator[tuple[Any, Any]]:
    await asyncio.Event().wait()
    yield None, None


async def queue_source(
    queue: asyncio.Queue[tuple[Any, Any] | None],
) -> AsyncIterator[tuple[Any, Any]]:
    """
    Yield the entries put in the queue until `None` is put.
    """

    while (entry := await queue.get()) is not None:
        yield entry


async def settle(rounds: int = 10):
    for _ in range(rounds):
        await asyncio.sleep(0)
