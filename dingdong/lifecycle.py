"""Startup and shutdown sequencing for the responder.

The controller walks a strictly linear state machine::

    STARTING -> RUNNING -> DRAINING -> REPORTING -> TERMINATED

``start`` builds the shared ``ServerContext`` and launches the workers.
``shutdown`` closes the work queue, waits for every worker to finish the
backlog and only then reads the metrics, so the report never races a
late update. The HTTP listener and signal handling belong to the server
hosting the application; the controller runs inside its lifespan.
"""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from dingdong.core.config import Settings
from dingdong.core.errors import LifecycleError
from dingdong.core.metrics import MetricsSnapshot, MetricsStore
from dingdong.core.report import render_report
from dingdong.pipeline import RequestDumper, RequestIntake, WorkerPool, WorkQueue

logger = logging.getLogger("dingdong.lifecycle")


class LifecycleState(str, Enum):
    """Phases of a server run."""

    STARTING = "starting"
    RUNNING = "running"
    DRAINING = "draining"
    REPORTING = "reporting"
    TERMINATED = "terminated"


@dataclass(slots=True)
class ServerContext:
    """Objects shared by the intake route, the workers and the controller."""

    settings: Settings
    metrics: MetricsStore
    queue: WorkQueue
    intake: RequestIntake
    pool: WorkerPool


class LifecycleController:
    def __init__(self, settings: Settings, console: TextIO | None = None) -> None:
        self.settings = settings
        self.context: ServerContext | None = None
        self._console = console
        self._state = LifecycleState.STARTING
        self._lock = threading.Lock()

    @property
    def state(self) -> LifecycleState:
        return self._state

    def start(self) -> ServerContext:
        """Allocate the queue and metrics and launch the workers."""

        self._expect(LifecycleState.STARTING)

        metrics = MetricsStore()
        queue = WorkQueue(self.settings.queue_size)
        intake = RequestIntake(queue, metrics, RequestDumper(self._console))
        pool = WorkerPool(queue, metrics, self.settings.workers)
        pool.start()

        self.context = ServerContext(
            settings=self.settings,
            metrics=metrics,
            queue=queue,
            intake=intake,
            pool=pool,
        )
        self._advance(LifecycleState.STARTING, LifecycleState.RUNNING)
        logger.info(
            "Configuration: workers=%d, queue_size=%d, max_body_size=%dMB",
            self.settings.workers,
            self.settings.queue_size,
            self.settings.max_body_size_mb,
        )
        return self.context

    def drain(self) -> None:
        """Close the queue and block until every worker has exited."""

        self._advance(LifecycleState.RUNNING, LifecycleState.DRAINING)
        context = self._require_context()
        backlog = len(context.queue)
        context.queue.close()
        logger.info("Draining %d queued bodies with %d workers", backlog, context.pool.size)
        context.pool.join()

    def report(self) -> MetricsSnapshot:
        """Read the final metrics and print the summary."""

        self._advance(LifecycleState.DRAINING, LifecycleState.REPORTING)
        snapshot = self._require_context().metrics.snapshot()
        print(render_report(snapshot), file=self._console or sys.stdout, flush=True)
        self._advance(LifecycleState.REPORTING, LifecycleState.TERMINATED)
        return snapshot

    def shutdown(self) -> MetricsSnapshot | None:
        """Run the full drain-and-report sequence.

        Returns ``None`` when the controller was never started or has
        already terminated.
        """

        if self._state is LifecycleState.TERMINATED:
            return None
        if self._state is LifecycleState.STARTING:
            self._advance(LifecycleState.STARTING, LifecycleState.TERMINATED)
            return None

        logger.info("Shutting down server...")
        try:
            self.drain()
        except Exception:  # noqa: BLE001
            logger.exception("Drain did not complete cleanly; reporting what was counted")
            self._force(LifecycleState.DRAINING)
        return self.report()

    def _require_context(self) -> ServerContext:
        if self.context is None:
            raise LifecycleError("server context has not been created")
        return self.context

    def _expect(self, expected: LifecycleState) -> None:
        if self._state is not expected:
            raise LifecycleError(f"expected {expected.value} state, found {self._state.value}")

    def _advance(self, expected: LifecycleState, target: LifecycleState) -> None:
        with self._lock:
            self._expect(expected)
            logger.debug("Lifecycle %s -> %s", self._state.value, target.value)
            self._state = target

    def _force(self, target: LifecycleState) -> None:
        with self._lock:
            self._state = target
