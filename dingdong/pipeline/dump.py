"""Console dump of requests whose path asks for it."""

from __future__ import annotations

import sys
from typing import TextIO

from dingdong.pipeline.types import CapturedRequest

DUMP_MARKER = "dump"
MAX_DISPLAY_BODY = 1024
RULE = "-" * 50


def should_dump(path: str) -> bool:
    return DUMP_MARKER in path


def format_dump(request: CapturedRequest) -> str:
    """Render the dump block for ``request``.

    Bodies are shown verbatim up to ``MAX_DISPLAY_BODY`` bytes; larger
    bodies are replaced by a size placeholder.
    """

    lines = [
        RULE,
        "REQUEST DUMP",
        f"Method:      {request.method}",
        f"Path:        {request.path}",
        f"Remote Addr: {request.remote_addr}",
        "Headers:",
    ]
    lines.extend(f"  {key}: {value}" for key, value in request.headers)

    body_len = len(request.body)
    lines.append(f"Body Size:   {body_len} bytes")
    if 0 < body_len <= MAX_DISPLAY_BODY:
        lines.append(f"Body:        {request.body.decode('utf-8', errors='replace')}")
    elif body_len > MAX_DISPLAY_BODY:
        lines.append(f"Body:        [{body_len} bytes - too large to display]")
    lines.append(RULE)
    return "\n".join(lines)


class RequestDumper:
    """Writes each dump block to the console with a single write."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def dump(self, request: CapturedRequest) -> None:
        text = format_dump(request)
        stream = self._stream or sys.stdout
        print(text, file=stream, flush=True)
