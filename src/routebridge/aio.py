"""asyncio adapters for bridge streams and command sources.

The bridge itself is synchronous; these helpers let coroutine code
consume streams with ``async for`` and feed commands from an async
iterable.  Everything runs on the event loop thread.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import Any, TypeVar

from routebridge._stream import Observable
from routebridge.sink import CommandSink

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_COMPLETED = object()


class _StreamError:
    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error


async def iterate(stream: Observable[T], *, maxsize: int = 0) -> AsyncIterator[T]:
    """Yield every value *stream* emits.

    Values emitted while the consumer is busy are queued.  With a bounded
    *maxsize* the oldest queued value is dropped on overflow.  A stream
    error is raised from the iterator; completion ends it.  The
    subscription is disposed when iteration stops.
    """
    queue: asyncio.Queue[Any] = asyncio.Queue()

    def put(item: Any) -> None:
        if maxsize > 0 and queue.qsize() >= maxsize:
            dropped = queue.get_nowait()
            _logger.debug("Stream consumer lagging, dropped %r", dropped)
        queue.put_nowait(item)

    # Terminal notifications are never dropped.
    subscription = stream.subscribe(
        put,
        lambda error: queue.put_nowait(_StreamError(error)),
        lambda: queue.put_nowait(_COMPLETED),
    )
    try:
        while True:
            item = await queue.get()
            if item is _COMPLETED:
                return
            if isinstance(item, _StreamError):
                raise item.error
            yield item
    finally:
        subscription.dispose()


async def first(stream: Observable[T], *, timeout: float | None = None) -> T:
    """Return the first value *stream* emits.

    Raises ``TimeoutError`` when nothing arrives within *timeout* seconds.
    """

    async def _first() -> T:
        async with contextlib.aclosing(iterate(stream)) as values:
            async for value in values:
                return value
        raise LookupError("Stream completed without emitting a value")

    return await asyncio.wait_for(_first(), timeout=timeout)


async def feed_commands(commands: AsyncIterable[Any], sink: CommandSink) -> int:
    """Send every command of *commands* to *sink*; return how many were dispatched.

    Bad commands are reported on ``sink.command_errors`` and skipped, as
    with :meth:`CommandSink.consume`.
    """
    dispatched = 0
    async for raw in commands:
        if sink.send(raw):
            dispatched += 1
    return dispatched
