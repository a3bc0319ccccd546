"""
Default OAuth installer built on slack_sdk.

Issues a state per install link, builds the ``oauth/v2/authorize`` URL, and
on the redirect checks the state and exchanges the code with
``oauth.v2.access``. What happens with the resulting tokens is left to the
success callback.

Created: 2026-10-16
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from slack_sdk.errors import SlackApiError
from slack_sdk.oauth import AuthorizeUrlGenerator

from socketpaw._invoke import invoke
from socketpaw.errors import OAuthCallbackError

logger = logging.getLogger(__name__)

DEFAULT_STATE_EXPIRATION_SECONDS = 600


@dataclass(frozen=True)
class CallbackOptions:
    """Hooks for the OAuth redirect.

    ``success(installation, metadata, request, response)`` receives the
    ``oauth.v2.access`` payload; ``failure(error, request, response)`` receives
    an ``OAuthCallbackError`` or ``SlackApiError``. Either may be async and
    must write the response.
    """

    success: Callable[..., Any] | None = None
    failure: Callable[..., Any] | None = None


def _success_page() -> str:
    return (
        "<html><head><title>Installed</title></head><body>"
        "<h2>Thank you!</h2><p>The app was installed. You can close this window.</p>"
        "</body></html>"
    )


def _failure_page() -> str:
    return (
        "<html><head><title>Installation failed</title></head><body>"
        "<h2>Oops, something went wrong.</h2><p>Please try installing again.</p>"
        "</body></html>"
    )


class SlackInstaller:
    """``Installer`` backed by slack_sdk's OAuth helpers."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str | None = None,
        state_store: Any = None,
        web_client: Any = None,
        state_expiration_seconds: int = DEFAULT_STATE_EXPIRATION_SECONDS,
    ):
        if not client_id or not client_secret:
            raise ValueError("client_id and client_secret are required for OAuth")
        if state_store is None:
            from slack_sdk.oauth.state_store import FileOAuthStateStore

            state_store = FileOAuthStateStore(
                expiration_seconds=state_expiration_seconds, client_id=client_id
            )
        if web_client is None:
            from slack_sdk.web.async_client import AsyncWebClient

            web_client = AsyncWebClient()
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.state_store = state_store
        self.web_client = web_client
        # install metadata by state, handed to the success callback
        self._metadata: dict[str, str] = {}

    async def generate_install_url(
        self, *, scopes: Sequence[str], user_scopes: Sequence[str], metadata: str | None
    ) -> str:
        state = await self.state_store.async_issue()
        if metadata is not None:
            self._metadata[state] = metadata
        generator = AuthorizeUrlGenerator(
            client_id=self.client_id,
            redirect_uri=self.redirect_uri,
            scopes=list(scopes),
            user_scopes=list(user_scopes),
        )
        return generator.generate(state)

    async def handle_callback(
        self, request: Any, response: Any, callback_options: CallbackOptions | None = None
    ) -> None:
        options = callback_options or CallbackOptions()
        params = request.query_params
        state = params.get("state") or ""
        metadata = self._metadata.pop(state, None)

        try:
            installation = await self._exchange(params, state)
        except (OAuthCallbackError, SlackApiError) as exc:
            logger.warning("OAuth callback failed: %s", exc)
            if options.failure is not None:
                await invoke(options.failure, exc, request, response)
            else:
                response.write_head(500, {"Content-Type": "text/html; charset=utf-8"})
                response.end(_failure_page())
            return

        logger.info("OAuth installation completed for team %s", _team_id(installation))
        if options.success is not None:
            await invoke(options.success, installation, metadata, request, response)
        else:
            response.write_head(200, {"Content-Type": "text/html; charset=utf-8"})
            response.end(_success_page())

    async def _exchange(self, params: Any, state: str) -> dict[str, Any]:
        error = params.get("error")
        if error:
            raise OAuthCallbackError(error, "authorization was not granted")
        if not state or not await self.state_store.async_consume(state):
            raise OAuthCallbackError("invalid_state", "state is missing, expired or already used")
        code = params.get("code")
        if not code:
            raise OAuthCallbackError("missing_code", "no authorization code in the redirect")

        result = await self.web_client.oauth_v2_access(
            client_id=self.client_id,
            client_secret=self.client_secret,
            code=code,
            redirect_uri=self.redirect_uri,
        )
        return result.data


def _team_id(installation: dict[str, Any]) -> str:
    team = installation.get("team") or {}
    return team.get("id") or "?"
