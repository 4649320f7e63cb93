import pytest

from dingdong.pipeline.queue import WorkQueue
from dingdong.pipeline.types import QueuedBody
from dingdong.pipeline.workers import WorkerPool


def test_workers_drain_backlog_after_close(metrics):
    queue = WorkQueue(capacity=50)
    sizes = [index + 1 for index in range(50)]
    for size in sizes:
        assert queue.try_put(QueuedBody(body=b"a" * size, method="PUT"))

    pool = WorkerPool(queue, metrics, size=4)
    pool.start()
    queue.close()
    pool.join()

    assert pool.alive == 0
    assert len(queue) == 0
    assert metrics.total_body_size.load() == sum(sizes)
    assert metrics.total_requests.load() == 0


def test_zero_workers_leave_backlog_untouched(metrics):
    queue = WorkQueue(capacity=2)
    queue.try_put(QueuedBody(body=b"abc", method="POST"))

    pool = WorkerPool(queue, metrics, size=0)
    pool.start()
    queue.close()
    pool.join()

    assert len(queue) == 1
    assert metrics.total_body_size.load() == 0


def test_pool_cannot_start_twice(metrics):
    queue = WorkQueue(capacity=1)
    pool = WorkerPool(queue, metrics, size=1)
    pool.start()
    try:
        with pytest.raises(RuntimeError):
            pool.start()
    finally:
        queue.close()
        pool.join()


def test_negative_size_rejected(metrics):
    with pytest.raises(ValueError):
        WorkerPool(WorkQueue(capacity=1), metrics, size=-1)
