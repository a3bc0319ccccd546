# Tests for the socketpaw runner
# Created: 2026-10-16

import asyncio
import sys
import types
from unittest.mock import AsyncMock, MagicMock

import pytest

from socketpaw.__main__ import health, run
from socketpaw.asgi import ResponseWriter
from socketpaw.config import Settings
from socketpaw.errors import HTTPServerListenError


class MockAsyncApp:
    def __init__(self, **kwargs):
        self.token = kwargs.get("token")


@pytest.fixture(autouse=True)
def _mock_bolt_app(monkeypatch):
    module = types.ModuleType("slack_bolt.async_app")
    module.AsyncApp = MockAsyncApp
    monkeypatch.setitem(sys.modules, "slack_bolt.async_app", module)


@pytest.fixture
def settings():
    return Settings(_env_file=None, app_token="xapp-1", bot_token="xoxb-1")


@pytest.fixture
def socket_client():
    stub = MagicMock()
    stub.start = AsyncMock()
    stub.disconnect = AsyncMock()
    return stub


def test_health_route():
    response = ResponseWriter()
    health(None, response)
    assert response.status_code == 200
    assert response.body == b'{"status": "ok"}'


async def test_listen_failure_stops_the_run(
    settings, socket_client, fake_server, fake_create_server
):
    fake_server.listen_failure = HTTPServerListenError(3000, "address already in use")

    with pytest.raises(SystemExit) as exc_info:
        await run(settings, client=socket_client, create_server=fake_create_server)

    assert exc_info.value.code == 1
    socket_client.start.assert_not_called()
    assert fake_server.closed


async def test_late_listen_failure_disconnects_socket(
    settings, socket_client, fake_server, fake_create_server
):
    task = asyncio.create_task(
        run(settings, client=socket_client, create_server=fake_create_server)
    )
    while not socket_client.start.await_count:
        await asyncio.sleep(0)

    fake_server.emit("error", HTTPServerListenError(3000, "address already in use"))

    with pytest.raises(SystemExit):
        await task
    socket_client.disconnect.assert_awaited_once_with()
    assert fake_server.closed


async def test_cancel_shuts_down_cleanly(settings, socket_client, fake_server, fake_create_server):
    task = asyncio.create_task(
        run(settings, client=socket_client, create_server=fake_create_server)
    )
    while not socket_client.start.await_count:
        await asyncio.sleep(0)

    task.cancel()
    await task

    socket_client.disconnect.assert_awaited_once_with()
    assert fake_server.closed
