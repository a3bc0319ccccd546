"""
HTTP plumbing between uvicorn and the request dispatcher.

``ResponseWriter`` is the response object handed to every handler. It keeps a
node-style ``write_head`` / ``write`` / ``end`` surface so handlers fully own
what they send. ``DispatchApp`` is the ASGI app uvicorn serves: it builds a
``Request``, runs the dispatcher, and sends whatever the writer ended with.

Created: 2026-10-12
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from fastapi import Request, Response

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Request, "ResponseWriter"], Awaitable[None]]


class ResponseWriter:
    """Buffered response that a handler writes to exactly once."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self._chunks: list[bytes] = []
        self._headers_sent = False
        self.finished = False

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent

    def write_head(self, status_code: int, headers: Mapping[str, str] | None = None) -> None:
        """Set the status line and headers. Only allowed once, before ``end()``."""
        self._check_open()
        if self._headers_sent:
            raise RuntimeError("Response headers were already written")
        self.status_code = status_code
        if headers:
            self.headers.update(headers)
        self._headers_sent = True

    def set_header(self, name: str, value: str) -> None:
        self._check_open()
        if self._headers_sent:
            raise RuntimeError("Cannot set a header after write_head()")
        self.headers[name] = value

    def write(self, chunk: str | bytes) -> None:
        self._check_open()
        self._headers_sent = True
        self._chunks.append(_to_bytes(chunk))

    def end(self, chunk: str | bytes | None = None) -> None:
        """Finish the response, optionally with a last chunk of body."""
        self._check_open()
        if chunk:
            self._chunks.append(_to_bytes(chunk))
        self._headers_sent = True
        self.finished = True

    def to_response(self) -> Response:
        return Response(content=self.body, status_code=self.status_code, headers=self.headers)

    def _check_open(self) -> None:
        if self.finished:
            raise RuntimeError("Response already ended")


def _to_bytes(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk


class DispatchApp:
    """ASGI app that hands every HTTP request to a single handler."""

    def __init__(self, handler: RequestHandler):
        self.handler = handler

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            return

        request = Request(scope, receive)
        writer = ResponseWriter()
        await self.handler(request, writer)

        if not writer.finished:
            logger.warning(
                "Handler for %s %s returned without ending the response",
                request.method,
                request.url.path,
            )
            writer.end()

        await writer.to_response()(scope, receive, send)
