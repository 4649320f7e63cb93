"""Exception types and handlers."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("dingdong.errors")


class LifecycleError(RuntimeError):
    """Raised when the server lifecycle is driven out of order."""


class BodyTooLargeError(Exception):
    """Raised when a request body exceeds the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"request body of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


def body_too_large_response(size: int, limit: int) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "error": "body_too_large",
            "message": "Request body exceeds the configured maximum size.",
            "limit_bytes": limit,
            "size_bytes": size,
        },
    )


async def body_too_large_handler(request: Request, exc: BodyTooLargeError) -> JSONResponse:
    return body_too_large_response(exc.size, exc.limit)

