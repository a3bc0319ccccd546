"""
Receiver settings loaded from the environment.

Created: 2026-10-13
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from socketpaw.installer import DEFAULT_INSTALL_PATH, DEFAULT_PORT, DEFAULT_REDIRECT_URI_PATH


class Settings(BaseSettings):
    """Settings read from ``SOCKETPAW_*`` variables or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="SOCKETPAW_",
        env_file=".env",
        extra="ignore",
    )

    app_token: str = ""  # xapp-... app-level token for Socket Mode
    bot_token: str = ""  # xoxb-... used by the bolt app

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str | None = None  # must match the app's configured redirect URL

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    install_path: str = DEFAULT_INSTALL_PATH
    redirect_uri_path: str = DEFAULT_REDIRECT_URI_PATH
    scopes: list[str] = Field(default_factory=list)
    user_scopes: list[str] = Field(default_factory=list)
    metadata: str | None = None
    direct_install: bool = False

    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
    ssl_keyfile_password: str | None = None

    log_level: str = "INFO"


_settings: Settings | None = None


def get_settings(force_reload: bool = False) -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None or force_reload:
        _settings = Settings()
    return _settings
