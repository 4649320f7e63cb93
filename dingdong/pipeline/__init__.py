"""Intake-to-worker pipeline exports."""

from .dump import RequestDumper
from .intake import RequestIntake
from .queue import QueueClosed, WorkQueue
from .types import CapturedRequest, QueuedBody
from .workers import WorkerPool

__all__ = [
    "CapturedRequest",
    "QueueClosed",
    "QueuedBody",
    "RequestDumper",
    "RequestIntake",
    "WorkQueue",
    "WorkerPool",
]
