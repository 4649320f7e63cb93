"""Worker threads that fold queued bodies into the metrics store."""

from __future__ import annotations

import logging
import threading

from dingdong.core.metrics import MetricsStore
from dingdong.pipeline.queue import QueueClosed, WorkQueue

logger = logging.getLogger("dingdong.workers")


class WorkerPool:
    """Fixed set of threads draining a ``WorkQueue``.

    Each worker adds the size of every body it takes to
    ``total_body_size``. A worker only exits once the queue has been
    closed and everything still in it has been consumed.
    """

    def __init__(self, queue: WorkQueue, metrics: MetricsStore, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.size = size
        self._queue = queue
        self._metrics = metrics
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        if self._threads:
            raise RuntimeError("worker pool already started")
        for index in range(self.size):
            thread = threading.Thread(
                target=self._run,
                name=f"dingdong-worker-{index}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        logger.debug("Started %d workers", self.size)

    def join(self) -> None:
        """Block until every worker has exited."""

        for thread in self._threads:
            thread.join()
        logger.debug("All %d workers exited", len(self._threads))

    @property
    def alive(self) -> int:
        return sum(1 for thread in self._threads if thread.is_alive())

    def _run(self) -> None:
        while True:
            try:
                item = self._queue.get()
            except QueueClosed:
                return
            self._metrics.total_body_size.add(item.size)
