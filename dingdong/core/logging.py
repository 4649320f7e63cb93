"""Logging utilities for the server."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s %(message)s"


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(level: str | int = "INFO") -> int:
    """Configure root logging once and align uvicorn's loggers with it."""

    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    for name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(name).setLevel(resolved)
    # Per-request access lines would flood the console under load.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return resolved
