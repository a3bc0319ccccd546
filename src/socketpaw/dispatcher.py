"""
Request dispatcher for the receiver's HTTP surface.

Every request is routed by a fixed priority order, first match wins:

1. OAuth redirect URI (GET)  -> installer callback
2. Install path (GET)        -> install page or direct-install redirect
3. Custom routes             -> user handler
4. Anything else             -> 404

Created: 2026-10-12
"""

from __future__ import annotations

import logging
from typing import Any

from socketpaw._invoke import invoke
from socketpaw.installer import InstallerRouteSet
from socketpaw.routes import CustomRoute, match_custom_route

logger = logging.getLogger(__name__)


def request_path(request: Any) -> str:
    """URL path of a request, without the query string."""
    return request.url.path


class RequestDispatcher:
    """Single entry point for inbound HTTP requests.

    The route tables are read-only after construction, so concurrent
    requests share them without locking. Errors raised by a selected handler
    propagate to the server; the dispatcher does not recover from them.
    """

    def __init__(
        self,
        custom_routes: tuple[CustomRoute, ...] = (),
        installer_routes: InstallerRouteSet | None = None,
    ):
        self.custom_routes = custom_routes
        self.installer_routes = installer_routes

    async def __call__(self, request: Any, response: Any) -> None:
        path = request_path(request)
        method = request.method or ""

        # OAuth routes require exactly "GET"; custom routes ignore method case.
        installer_routes = self.installer_routes
        if installer_routes is not None:
            if installer_routes.is_redirect_uri_request(method, path):
                logger.debug("Routing %s %s to OAuth callback", method, path)
                await installer_routes.handle_redirect(request, response)
                return
            if installer_routes.is_install_path_request(method, path):
                logger.debug("Routing %s %s to install page", method, path)
                await installer_routes.handle_install(request, response)
                return

        route = match_custom_route(self.custom_routes, path, method)
        if route is not None:
            logger.debug("Routing %s %s to custom route", method, path)
            await invoke(route.handler, request, response)
            return

        logger.debug("No route for %s %s", method, path)
        response.write_head(404, {})
        response.end()
