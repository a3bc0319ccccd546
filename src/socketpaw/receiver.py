"""
Socket Mode receiver with a small HTTP surface.

Events arrive over the Socket Mode websocket, so the HTTP server only serves
the OAuth install page, the OAuth redirect URI, and any custom routes the
application registers (health checks, extra webhooks, ...).

Created: 2026-10-13
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from socketpaw.asgi import DispatchApp
from socketpaw.config import Settings
from socketpaw.dispatcher import RequestDispatcher
from socketpaw.installer import Installer, InstallerOptions, InstallerRouteSet
from socketpaw.routes import CustomRoute, build_custom_routes
from socketpaw.oauth import SlackInstaller
from socketpaw.server import (
    DEFAULT_HOST,
    ErrorCallback,
    HTTPListener,
    ServerFactory,
    TLSOptions,
    create_server,
)
from socketpaw.socket_mode import BoltSocketModeClient, SocketLifecycle, SocketModeClient

logger = logging.getLogger(__name__)


class SocketModeReceiver:
    """Receives events over Socket Mode and serves OAuth/custom HTTP routes.

    The HTTP listener is created and bound during construction when an
    installer (passed in, or built from ``client_id``/``client_secret``) or at
    least one custom route is configured. Construct the
    receiver inside a running event loop in that case. ``start()`` and
    ``stop()`` only drive the Socket Mode client; close the HTTP listener
    with ``close_http_server()``.
    """

    def __init__(
        self,
        *,
        app_token: str = "",
        app: Any = None,
        client: SocketModeClient | None = None,
        installer: Installer | None = None,
        installer_options: InstallerOptions | None = None,
        scopes: Sequence[str] | None = None,
        custom_routes: Iterable[CustomRoute | Mapping[str, Any]] | None = None,
        tls: TLSOptions | None = None,
        create_server: ServerFactory = create_server,
        on_error: ErrorCallback | None = None,
        host: str = DEFAULT_HOST,
        client_id: str = "",
        client_secret: str = "",
        redirect_uri: str | None = None,
    ):
        # Fail fast: nothing below runs if a route is malformed.
        self.custom_routes = build_custom_routes(custom_routes)

        if client is None and app is not None:
            client = BoltSocketModeClient(app, app_token)
        self.socket = SocketLifecycle(client)

        options = installer_options or InstallerOptions()
        if scopes is not None:
            options = replace(options, scopes=tuple(scopes))
        self.installer_options = options

        if installer is None and client_id and client_secret:
            installer = SlackInstaller(client_id, client_secret, redirect_uri=redirect_uri)

        self.installer_routes = (
            InstallerRouteSet(installer, options) if installer is not None else None
        )
        self.dispatcher = RequestDispatcher(self.custom_routes, self.installer_routes)

        self.http_listener: HTTPListener | None = None
        if self.installer_routes is not None or self.custom_routes:
            self.http_listener = HTTPListener(
                DispatchApp(self.dispatcher),
                port=options.port,
                tls=tls,
                create_server=create_server,
                on_error=on_error,
                host=host,
            )
            self.http_listener.listen()
            if self.installer_routes is not None:
                logger.debug(
                    "Go to http://localhost:%d%s to initiate OAuth flow",
                    options.port,
                    options.install_path,
                )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> SocketModeReceiver:
        """Build a receiver from ``Settings``; keyword arguments take precedence."""
        options = InstallerOptions(
            install_path=settings.install_path,
            redirect_uri_path=settings.redirect_uri_path,
            scopes=tuple(settings.scopes),
            user_scopes=tuple(settings.user_scopes),
            metadata=settings.metadata,
            direct_install=settings.direct_install,
            port=settings.port,
        )
        tls = None
        if settings.ssl_certfile and settings.ssl_keyfile:
            tls = TLSOptions(
                certfile=settings.ssl_certfile,
                keyfile=settings.ssl_keyfile,
                keyfile_password=settings.ssl_keyfile_password,
            )
        kwargs.setdefault("app_token", settings.app_token)
        kwargs.setdefault("host", settings.host)
        kwargs.setdefault("client_id", settings.client_id)
        kwargs.setdefault("client_secret", settings.client_secret)
        kwargs.setdefault("redirect_uri", settings.redirect_uri)
        kwargs.setdefault("installer_options", options)
        kwargs.setdefault("tls", tls)
        return cls(**kwargs)

    # ── Collaborators ──────────────────────────────────────────────────

    @property
    def client(self) -> SocketModeClient | None:
        return self.socket.client

    @client.setter
    def client(self, client: SocketModeClient) -> None:
        self.socket.client = client

    @property
    def installer(self) -> Installer | None:
        if self.installer_routes is None:
            return None
        return self.installer_routes.installer

    @installer.setter
    def installer(self, installer: Installer) -> None:
        if self.installer_routes is None:
            raise AttributeError("Receiver was built without an installer")
        self.installer_routes.installer = installer

    # ── Lifecycle ──────────────────────────────────────────────────────

    async def start(self) -> Any:
        """Connect the Socket Mode client."""
        return await self.socket.start()

    async def stop(self) -> Any:
        """Disconnect the Socket Mode client."""
        return await self.socket.stop()

    async def close_http_server(self) -> None:
        if self.http_listener is not None:
            await self.http_listener.close()
