"""
Socket Mode client lifecycle.

The receiver never manages the websocket itself. It delegates ``start`` and
``stop`` to a client, one call each, with no retries at this layer;
reconnect policy belongs to the client.

Created: 2026-10-13
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from socketpaw.errors import ReceiverError

logger = logging.getLogger(__name__)


class SocketModeClient(Protocol):
    """Persistent-socket client the receiver drives."""

    async def start(self) -> Any: ...

    async def disconnect(self) -> Any: ...


class BoltSocketModeClient:
    """Adapts slack_bolt's ``AsyncSocketModeHandler`` to ``SocketModeClient``.

    ``connect_async`` opens the connection and returns; the bolt app then
    handles incoming events on its own.
    """

    def __init__(self, app: Any, app_token: str, handler: Any = None):
        if handler is None:
            if not app_token:
                raise ValueError("An app-level token (xapp-...) is required for Socket Mode")
            from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler

            handler = AsyncSocketModeHandler(app, app_token)
        self.app = app
        self.handler = handler

    async def start(self) -> None:
        await self.handler.connect_async()

    async def disconnect(self) -> None:
        await self.handler.disconnect_async()


class SocketLifecycle:
    """Start/stop facade over a ``SocketModeClient``."""

    def __init__(self, client: SocketModeClient | None = None):
        self.client = client

    async def start(self) -> Any:
        client = self._require_client()
        logger.info("Connecting Socket Mode client")
        return await client.start()

    async def stop(self) -> Any:
        client = self._require_client()
        logger.info("Disconnecting Socket Mode client")
        return await client.disconnect()

    def _require_client(self) -> SocketModeClient:
        if self.client is None:
            raise ReceiverError("No Socket Mode client configured; pass app= or client=")
        return self.client
