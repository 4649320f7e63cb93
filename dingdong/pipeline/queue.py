"""Bounded hand-off queue between the request intake and the workers."""

from __future__ import annotations

import threading
from collections import deque

from dingdong.pipeline.types import QueuedBody


class QueueClosed(Exception):
    """Raised by ``WorkQueue.get`` once the queue is closed and empty."""


class WorkQueue:
    """Bounded multi-producer/multi-consumer queue of ``QueuedBody`` items.

    Producers never block: ``try_put`` either hands the item over or
    reports that there was no room. Consumers block in ``get`` until an
    item arrives or the queue is closed. Closing does not discard the
    backlog; ``get`` keeps returning items until none are left and only
    then raises ``QueueClosed``.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque[QueuedBody] = deque()
        self._closed = False
        self._mutex = threading.Lock()
        self._not_empty = threading.Condition(self._mutex)

    def try_put(self, item: QueuedBody) -> bool:
        """Enqueue ``item`` if there is room. Never blocks."""

        with self._mutex:
            if self._closed or len(self._items) >= self.capacity:
                return False
            self._items.append(item)
            self._not_empty.notify()
            return True

    def get(self) -> QueuedBody:
        """Return the next item, waiting while the queue is open and empty."""

        with self._not_empty:
            while not self._items:
                if self._closed:
                    raise QueueClosed
                self._not_empty.wait()
            return self._items.popleft()

    def close(self) -> None:
        """Refuse further items and wake every waiting consumer."""

        with self._mutex:
            self._closed = True
            self._not_empty.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def full(self) -> bool:
        with self._mutex:
            return len(self._items) >= self.capacity

    def __len__(self) -> int:
        with self._mutex:
            return len(self._items)
