"""Concurrency-safe traffic counters shared by intake and workers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterator


class AtomicCounter:
    """Integer counter whose increments are never lost across threads."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = value

    def add(self, delta: int = 1) -> int:
        with self._lock:
            self._value += delta
            return self._value

    def load(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    total_requests: int
    total_body_size: int
    dropped_bodies: int
    method_counts: Dict[str, int]


class MetricsStore:
    """Process-lifetime traffic metrics.

    ``total_requests``, ``total_body_size`` and ``dropped_bodies`` are
    independent atomic counters. Per-method counters live in a lazily
    populated registry: the lookup is lock-free and the registry lock is
    only taken the first time a method is seen, so at most one counter is
    ever created per method.
    """

    def __init__(self) -> None:
        self.total_requests = AtomicCounter()
        self.total_body_size = AtomicCounter()
        self.dropped_bodies = AtomicCounter()
        self._method_counts: dict[str, AtomicCounter] = {}
        self._registry_lock = threading.Lock()

    def increment_method(self, method: str) -> None:
        counter = self._method_counts.get(method)
        if counter is None:
            with self._registry_lock:
                # Another thread may have registered it while we waited.
                counter = self._method_counts.get(method)
                if counter is None:
                    counter = AtomicCounter()
                    self._method_counts[method] = counter
        counter.add(1)

    def method_counter(self, method: str) -> AtomicCounter | None:
        return self._method_counts.get(method)

    def iter_method_counts(self) -> Iterator[tuple[str, int]]:
        with self._registry_lock:
            items = list(self._method_counts.items())
        for method, counter in items:
            yield method, counter.load()

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(
            total_requests=self.total_requests.load(),
            total_body_size=self.total_body_size.load(),
            dropped_bodies=self.dropped_bodies.load(),
            method_counts=dict(self.iter_method_counts()),
        )
