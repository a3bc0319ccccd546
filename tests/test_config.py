# Tests for receiver settings
# Created: 2026-10-15

from socketpaw import config
from socketpaw.config import Settings, get_settings


def test_defaults(monkeypatch):
    for key in ("SOCKETPAW_PORT", "SOCKETPAW_INSTALL_PATH", "SOCKETPAW_DIRECT_INSTALL"):
        monkeypatch.delenv(key, raising=False)
    s = Settings(_env_file=None)
    assert s.port == 3000
    assert s.install_path == "/slack/install"
    assert s.redirect_uri_path == "/slack/oauth_redirect"
    assert s.direct_install is False
    assert s.scopes == []


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SOCKETPAW_PORT", "8080")
    monkeypatch.setenv("SOCKETPAW_APP_TOKEN", "xapp-1-abc")
    monkeypatch.setenv("SOCKETPAW_SCOPES", '["channels:read", "chat:write"]')
    monkeypatch.setenv("SOCKETPAW_DIRECT_INSTALL", "true")

    s = Settings(_env_file=None)

    assert s.port == 8080
    assert s.app_token == "xapp-1-abc"
    assert s.scopes == ["channels:read", "chat:write"]
    assert s.direct_install is True


def test_get_settings_caches(monkeypatch):
    monkeypatch.setattr(config, "_settings", None)
    first = get_settings()
    assert get_settings() is first
    assert get_settings(force_reload=True) is not first


def test_oauth_credentials_and_host(monkeypatch):
    monkeypatch.setenv("SOCKETPAW_CLIENT_ID", "111.222")
    monkeypatch.setenv("SOCKETPAW_CLIENT_SECRET", "shh")
    monkeypatch.setenv("SOCKETPAW_HOST", "127.0.0.1")

    s = Settings(_env_file=None)

    assert s.client_id == "111.222"
    assert s.client_secret == "shh"
    assert s.redirect_uri is None
    assert s.host == "127.0.0.1"
