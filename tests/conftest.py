from __future__ import annotations

import io
from typing import Callable

import pytest

from dingdong.core.config import Settings
from dingdong.core.metrics import MetricsStore


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def factory(**overrides) -> Settings:
        values = {"workers": 2, "queue_size": 100, "max_body_size_mb": 1}
        values.update(overrides)
        return Settings(**values)

    return factory


@pytest.fixture
def console() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def metrics() -> MetricsStore:
    return MetricsStore()
