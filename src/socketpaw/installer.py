"""
OAuth install and redirect routes.

The installer itself (URL generation, state handling, token exchange) is a
collaborator. This module only decides whether a request is aimed at the
install page or the OAuth redirect URI, and writes the install page response.

Created: 2026-10-12
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from socketpaw._invoke import invoke

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_PATH = "/slack/install"
DEFAULT_REDIRECT_URI_PATH = "/slack/oauth_redirect"
DEFAULT_PORT = 3000


class Installer(Protocol):
    """OAuth flow collaborator. Either method may be sync or async."""

    def generate_install_url(
        self, *, scopes: Sequence[str], user_scopes: Sequence[str], metadata: str | None
    ) -> Any:
        """Return (or resolve to) the authorization URL."""
        ...

    def handle_callback(self, request: Any, response: Any, callback_options: Any) -> Any:
        """Finish the OAuth exchange and write the success/failure response."""
        ...


@dataclass(frozen=True)
class InstallerOptions:
    """Configuration for the install page and OAuth redirect routes."""

    install_path: str = DEFAULT_INSTALL_PATH
    redirect_uri_path: str = DEFAULT_REDIRECT_URI_PATH
    scopes: tuple[str, ...] = ()
    user_scopes: tuple[str, ...] = ()
    metadata: str | None = None
    direct_install: bool = False
    render_html_for_install_path: Callable[[str], str] | None = None
    callback_options: Any = None
    port: int = DEFAULT_PORT


def render_install_page(url: str) -> str:
    """Default landing page with an "Add to Slack" button."""
    href = html.escape(url, quote=True)
    return (
        "<html>"
        "<head><link rel=\"icon\" href=\"data:,\"><title>Install</title></head>"
        "<body>"
        f"<a href=\"{href}\">"
        "<img alt=\"Add to Slack\" height=\"40\" width=\"139\" "
        "src=\"https://platform.slack-edge.com/img/add_to_slack.png\" "
        "srcset=\"https://platform.slack-edge.com/img/add_to_slack.png 1x, "
        "https://platform.slack-edge.com/img/add_to_slack@2x.png 2x\" />"
        "</a>"
        "</body>"
        "</html>"
    )


class InstallerRouteSet:
    """The two GET routes an installer adds to the HTTP surface."""

    def __init__(self, installer: Installer, options: InstallerOptions | None = None):
        self.installer = installer
        self.options = options or InstallerOptions()

    @property
    def install_path(self) -> str:
        return self.options.install_path

    @property
    def redirect_uri_path(self) -> str:
        return self.options.redirect_uri_path

    def is_redirect_uri_request(self, method: str, path: str) -> bool:
        return method == "GET" and path == self.options.redirect_uri_path

    def is_install_path_request(self, method: str, path: str) -> bool:
        return method == "GET" and path == self.options.install_path

    async def handle_redirect(self, request: Any, response: Any) -> None:
        """Hand the OAuth callback to the installer, which writes the response."""
        await invoke(
            self.installer.handle_callback, request, response, self.options.callback_options
        )

    async def handle_install(self, request: Any, response: Any) -> None:
        """Serve the install page, or redirect straight to Slack for direct installs."""
        opts = self.options
        url = await invoke(
            self.installer.generate_install_url,
            scopes=list(opts.scopes),
            user_scopes=list(opts.user_scopes),
            metadata=opts.metadata,
        )

        if opts.direct_install:
            logger.debug("Redirecting install request to %s", url)
            response.write_head(302, {"Location": url})
            response.end("")
            return

        render = opts.render_html_for_install_path or render_install_page
        body = render(url)
        response.write_head(200, {"Content-Type": "text/html; charset=utf-8"})
        response.end(body)
