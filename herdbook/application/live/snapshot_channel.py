from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from herdbook.application.interfaces.record_store import Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

_CLOSED = object()


class SnapshotChannel(Generic[T]):
    """Forwards full snapshots from a store subscription to one consumer.

    A background task drains the subscription into a bounded queue. When the
    consumer falls behind, the oldest pending snapshot is dropped; every
    snapshot is complete, so only the newest one matters. Always close the
    channel (``aclose()`` or ``async with``) so the task is cancelled and the
    subscription released.
    """

    def __init__(self, subscription: Subscription, *, max_pending: int = 16) -> None:
        self._subscription = subscription
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=max(1, max_pending))
        self._task: asyncio.Task[None] | None = None
        self.error: BaseException | None = None
        self.closed = False
        self._released = False

    def start(self) -> SnapshotChannel[T]:
        if self._task is None and not self.closed:
            self._task = asyncio.create_task(self._pump())
        return self

    def _offer(self, item: Any) -> None:
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(item)

    async def _pump(self) -> None:
        try:
            async for snapshot in self._subscription:
                self._offer(snapshot)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.error("Live subscription failed: %s", exc, exc_info=True)
            self.error = exc
        self._offer(_CLOSED)

    def __aiter__(self) -> SnapshotChannel[T]:
        return self

    async def __anext__(self) -> list[T]:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        self.start()
        item = await self._queue.get()
        if item is _CLOSED:
            self.closed = True
            if self.error is not None:
                raise self.error
            raise StopAsyncIteration
        return item

    async def aclose(self) -> None:
        if self._released:
            return
        self._released = True
        self.closed = True
        self._subscription.unsubscribe()
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        # Wake a consumer still waiting on the queue
        self._offer(_CLOSED)

    async def __aenter__(self) -> SnapshotChannel[T]:
        return self.start()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class LiveView(Generic[T, R]):
    """Re-aggregates every snapshot of a channel from scratch.

    ``latest`` keeps the last successfully aggregated value, so a failing
    subscription leaves the previous view in place.
    """

    def __init__(self, channel: SnapshotChannel[T], aggregate: Callable[[list[T]], R]) -> None:
        self.channel = channel
        self.aggregate = aggregate
        self.latest: R | None = None

    def __aiter__(self) -> LiveView[T, R]:
        return self

    async def __anext__(self) -> R:
        snapshot = await self.channel.__anext__()
        self.latest = self.aggregate(snapshot)
        return self.latest

    async def aclose(self) -> None:
        await self.channel.aclose()

    async def __aenter__(self) -> LiveView[T, R]:
        self.channel.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
