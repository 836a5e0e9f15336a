from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class ChangeFeed:
    """In-process fan-out of "collection changed" signals.

    Every listener owns an unbounded queue; `publish` is called by the store
    after a write has been committed. Only listeners in this process are
    woken up.
    """

    def __init__(self) -> None:
        # Key: collection -> queues of the active listeners
        self._listeners: dict[str, list[asyncio.Queue[str | None]]] = {}

    def register(self, collection: str) -> asyncio.Queue[str | None]:
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._listeners.setdefault(collection, []).append(queue)
        logger.debug(
            "Listener registered: collection=%s total=%d",
            collection,
            len(self._listeners[collection]),
        )
        return queue

    def unregister(self, collection: str, queue: asyncio.Queue[str | None]) -> None:
        queues = [q for q in self._listeners.get(collection, []) if q is not queue]
        if queues:
            self._listeners[collection] = queues
        else:
            self._listeners.pop(collection, None)
        # Wake a pending reader so it can observe the cancellation
        queue.put_nowait(None)
        logger.debug("Listener removed: collection=%s remaining=%d", collection, len(queues))

    def publish(self, collection: str) -> None:
        for queue in self._listeners.get(collection, []):
            queue.put_nowait(collection)

    def listener_count(self, collection: str | None = None) -> int:
        if collection is not None:
            return len(self._listeners.get(collection, []))
        return sum(len(v) for v in self._listeners.values())
