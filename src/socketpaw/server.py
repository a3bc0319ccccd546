"""
HTTP listener lifecycle.

``create_server`` builds a uvicorn-backed server for an ASGI app; ``HTTPListener``
owns one server for the receiver and exposes ``listen()`` / ``close()``.
Binding happens in the background, so a port that is already taken shows
up as an ``"error"`` event instead of an exception from ``listen()``.

Created: 2026-10-13
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import uvicorn

from socketpaw.errors import HTTPServerListenError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"

ErrorCallback = Callable[[BaseException], Any]


@dataclass(frozen=True)
class TLSOptions:
    """Certificate files for serving HTTPS."""

    certfile: str
    keyfile: str
    keyfile_password: str | None = None
    ca_certs: str | None = None


class HTTPServer(Protocol):
    """What the listener needs from a server."""

    def listen(self, port: int) -> None: ...

    async def close(self) -> None: ...

    def on(self, event: str, listener: Callable[..., Any]) -> None: ...


ServerFactory = Callable[..., HTTPServer]


class UvicornHTTPServer:
    """A uvicorn server run as a task on the current event loop."""

    def __init__(self, app: Any, tls: TLSOptions | None = None, host: str = DEFAULT_HOST):
        self.app = app
        self.tls = tls
        self.host = host
        self.port: int | None = None
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task | None = None
        self._listeners: dict[str, list[Callable[..., Any]]] = {}

    @property
    def listening(self) -> bool:
        return bool(self._server and self._server.started)

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def _emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener(*args)

    def _config(self, port: int) -> uvicorn.Config:
        kwargs: dict[str, Any] = {}
        if self.tls is not None:
            kwargs = {
                "ssl_certfile": self.tls.certfile,
                "ssl_keyfile": self.tls.keyfile,
                "ssl_keyfile_password": self.tls.keyfile_password,
                "ssl_ca_certs": self.tls.ca_certs,
            }
        return uvicorn.Config(
            self.app,
            host=self.host,
            port=port,
            lifespan="off",
            log_level="warning",
            log_config=None,
            **kwargs,
        )

    def listen(self, port: int) -> None:
        """Start serving on ``port``. Requires a running event loop."""
        if self._task is not None and not self._task.done():
            raise RuntimeError("Server is already listening")
        loop = asyncio.get_running_loop()
        self.port = port
        self._server = uvicorn.Server(self._config(port))
        self._task = loop.create_task(self._serve(self._server, port))

    async def _serve(self, server: uvicorn.Server, port: int) -> None:
        # _serve() skips uvicorn's signal capture (uvicorn >= 0.29); the embedding
        # application owns signals.
        try:
            await server._serve()
        except SystemExit as exc:
            # uvicorn exits this way when the socket cannot be bound
            self._emit("error", HTTPServerListenError(port, f"exit code {exc.code}"))
            return
        except OSError as exc:
            self._emit("error", HTTPServerListenError(port, str(exc)))
            return
        self._emit("close")

    async def close(self) -> None:
        """Stop accepting connections and wait for in-flight requests to drain."""
        if self._server is None or self._task is None:
            return
        self._server.should_exit = True
        await self._task


def create_server(app: Any, tls: TLSOptions | None = None, host: str = DEFAULT_HOST) -> HTTPServer:
    """Default server factory: HTTP, or HTTPS when ``tls`` is given."""
    if tls is not None:
        logger.debug("Creating HTTPS server (cert=%s)", tls.certfile)
    return UvicornHTTPServer(app, tls=tls, host=host)


class HTTPListener:
    """Owns the receiver's HTTP server.

    ``close()`` must not race an in-progress ``listen()``; callers stop the
    listener only after it was started.
    """

    def __init__(
        self,
        app: Any,
        port: int,
        tls: TLSOptions | None = None,
        create_server: ServerFactory = create_server,
        on_error: ErrorCallback | None = None,
        host: str = DEFAULT_HOST,
    ):
        self.port = port
        self.tls = tls
        self.host = host
        self.on_error = on_error
        self.error: BaseException | None = None
        self.server = create_server(app, tls=tls, host=host)
        self.server.on("error", self._handle_error)

    def listen(self) -> None:
        self.server.listen(self.port)
        scheme = "https" if self.tls else "http"
        logger.debug("Listening for %s requests on %s:%d", scheme.upper(), self.host, self.port)

    async def close(self, callback: Callable[[], Any] | None = None) -> None:
        """Close the server; ``callback`` runs only after closure completes."""
        await self.server.close()
        logger.debug("HTTP server on port %d closed", self.port)
        if callback is not None:
            callback()

    def _handle_error(self, error: BaseException) -> None:
        self.error = error
        logger.error("%s", error)
        if self.on_error is not None:
            self.on_error(error)
