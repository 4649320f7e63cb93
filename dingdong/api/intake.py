"""Catch-all route that acknowledges every request."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.background import BackgroundTask
from starlette.types import Receive, Scope, Send

from dingdong.core.errors import BodyTooLargeError
from dingdong.pipeline import CapturedRequest, RequestIntake

CATCH_ALL_PATH = "/{path:path}"

logger = logging.getLogger("dingdong.intake")


def get_intake(request: Request) -> RequestIntake:
    """Return the intake of the running server context."""

    return request.app.state.context.intake


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


class IntakeEndpoint:
    """ASGI endpoint answering every method with an empty 200.

    Dumps are written before answering. Queueing and counting are attached
    as a background task, so they only start once the response is sent.
    Starlette only restricts a route to GET when its endpoint is a plain
    function; an ASGI instance keeps ``methods=None`` and matches any
    method token.
    """

    def __init__(self, max_body_size: int) -> None:
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await self.dispatch(request)
        await response(scope, receive, send)

    async def dispatch(self, request: Request) -> Response:
        body = await request.body()
        if len(body) > self.max_body_size:
            raise BodyTooLargeError(len(body), self.max_body_size)

        captured = CapturedRequest(
            method=request.method,
            path=request.url.path,
            remote_addr=_remote_addr(request),
            headers=tuple(request.headers.items()),
            body=body,
        )
        try:
            intake = get_intake(request)
            intake.inspect(captured)
        except Exception:  # noqa: BLE001
            logger.exception("Intake failed on %s %s", request.method, request.url.path)
            return Response(status_code=200)
        return Response(status_code=200, background=BackgroundTask(intake.account, captured))


def register_intake_route(app: FastAPI, max_body_size: int) -> None:
    app.add_route(
        CATCH_ALL_PATH,
        IntakeEndpoint(max_body_size),
        methods=None,
        include_in_schema=False,
    )
