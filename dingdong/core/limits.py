"""Request body size enforcement ahead of the intake."""

from __future__ import annotations

from typing import Callable

from fastapi import Request
from fastapi.responses import Response

from .errors import body_too_large_response


def body_limit_middleware(limit: int) -> Callable:
    """Build a middleware rejecting requests whose declared length exceeds ``limit``.

    Only ``Content-Length`` is checked here; bodies sent without it are
    measured by the intake route once read.
    """

    async def middleware(request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length")
        if declared is not None and declared.isdigit():
            size = int(declared)
            if size > limit:
                return body_too_large_response(size, limit)
        return await call_next(request)

    return middleware
