"""Per-request dump and accounting."""

from __future__ import annotations

from dingdong.core.metrics import MetricsStore
from dingdong.pipeline.dump import RequestDumper, should_dump
from dingdong.pipeline.queue import WorkQueue
from dingdong.pipeline.types import CapturedRequest, QueuedBody


class RequestIntake:
    """Dumps, enqueues and counts a single request.

    ``inspect`` runs while the request is being answered; ``account`` is
    meant to run once the response has gone out. ``account`` never blocks
    on the work queue: a body that does not fit is dropped and counted in
    ``dropped_bodies``. Nothing here can fail, so the client always keeps
    its 200.
    """

    def __init__(
        self,
        queue: WorkQueue,
        metrics: MetricsStore,
        dumper: RequestDumper | None = None,
    ) -> None:
        self._queue = queue
        self._metrics = metrics
        self._dumper = dumper

    def inspect(self, request: CapturedRequest) -> None:
        if self._dumper is not None and should_dump(request.path):
            self._dumper.dump(request)

    def account(self, request: CapturedRequest) -> None:
        if request.body:
            item = QueuedBody(body=bytes(request.body), method=request.method)
            # A closed queue refuses everything; only a full one counts as a drop.
            if not self._queue.try_put(item) and not self._queue.closed:
                self._metrics.dropped_bodies.add(1)

        self._metrics.total_requests.add(1)
        self._metrics.increment_method(request.method)

    def handle(self, request: CapturedRequest) -> None:
        self.inspect(request)
        self.account(request)
