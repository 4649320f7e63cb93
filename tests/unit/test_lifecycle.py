import pytest

from dingdong.core.errors import LifecycleError
from dingdong.lifecycle import LifecycleController, LifecycleState
from dingdong.pipeline.types import CapturedRequest


def test_full_sequence_reaches_terminated(make_settings, console):
    controller = LifecycleController(make_settings(workers=3, queue_size=10), console=console)
    assert controller.state is LifecycleState.STARTING

    context = controller.start()
    assert controller.state is LifecycleState.RUNNING
    assert context.pool.size == 3
    assert context.queue.capacity == 10

    context.intake.handle(CapturedRequest(method="POST", path="/", body=b"12345"))
    snapshot = controller.shutdown()

    assert controller.state is LifecycleState.TERMINATED
    assert context.queue.closed
    assert context.pool.alive == 0
    assert snapshot.total_requests == 1
    assert snapshot.total_body_size == 5
    assert "SERVER METRICS" in console.getvalue()


def test_drain_before_start_is_rejected(make_settings):
    controller = LifecycleController(make_settings())

    with pytest.raises(LifecycleError):
        controller.drain()


def test_report_requires_drain(make_settings, console):
    controller = LifecycleController(make_settings(workers=0), console=console)
    controller.start()

    with pytest.raises(LifecycleError):
        controller.report()

    controller.shutdown()


def test_start_only_once(make_settings, console):
    controller = LifecycleController(make_settings(workers=0), console=console)
    controller.start()

    with pytest.raises(LifecycleError):
        controller.start()

    controller.shutdown()


def test_shutdown_without_start_reports_nothing(make_settings, console):
    controller = LifecycleController(make_settings(), console=console)

    assert controller.shutdown() is None
    assert controller.state is LifecycleState.TERMINATED
    assert console.getvalue() == ""


def test_second_shutdown_is_a_no_op(make_settings, console):
    controller = LifecycleController(make_settings(workers=1), console=console)
    controller.start()
    controller.shutdown()
    printed = console.getvalue()

    assert controller.shutdown() is None
    assert console.getvalue() == printed
