"""Pytest configuration."""

from unittest.mock import MagicMock

import pytest
from fastapi import Request


def build_request(method: str = "GET", path: str = "/", query: str = "") -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query.encode(),
        "headers": [(b"host", b"localhost")],
    }
    return Request(scope)


class FakeServer:
    """Stands in for the uvicorn server: records calls, emits on demand."""

    def __init__(self, listen_failure: BaseException | None = None):
        self.listen_failure = listen_failure
        self.listen = MagicMock(side_effect=self._listen)
        self.closed = False
        self.app = None
        self.tls = None
        self.host = None
        self._listeners: dict[str, list] = {}

    def on(self, event, listener):
        self._listeners.setdefault(event, []).append(listener)

    def emit(self, event, *args):
        for listener in self._listeners.get(event, []):
            listener(*args)

    def _listen(self, port):
        if self.listen_failure is not None:
            self.emit("error", self.listen_failure)

    async def close(self):
        self.closed = True
        self.emit("close")


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def fake_server():
    return FakeServer()


@pytest.fixture
def fake_create_server(fake_server):
    def factory(app, tls=None, host=None):
        fake_server.app = app
        fake_server.tls = tls
        fake_server.host = host
        return fake_server

    return MagicMock(side_effect=factory)
