"""Records passed between the HTTP layer, the intake and the workers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True, slots=True)
class CapturedRequest:
    """Everything the intake needs from one HTTP request."""

    method: str
    path: str
    remote_addr: str = ""
    headers: Sequence[tuple[str, str]] = field(default_factory=tuple)
    body: bytes = b""


@dataclass(frozen=True, slots=True)
class QueuedBody:
    """Request body captured for asynchronous accounting."""

    body: bytes
    method: str

    @property
    def size(self) -> int:
        return len(self.body)
