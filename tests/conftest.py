from __future__ import annotations

import ctypes
import os
import sys
from typing import Callable, List, Union

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import httpx
import pytest


def _has_libgl() -> bool:
    try:
        ctypes.CDLL("libGL.so.1")
        return True
    except OSError:
        return False


def pytest_collection_modifyitems(config, items):
    if _has_libgl():
        return
    skip = pytest.mark.skip(reason="libGL missing; skipping GUI tests in CI")
    for item in items:
        if "gui" in item.keywords:
            item.add_marker(skip)


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.append(ROOT)


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "gui: marks tests that require a GUI environment")


Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that replays canned replies and records each request.

    A reply may be a response or a callable receiving the request, which lets
    a test raise transport errors such as :class:`httpx.ConnectError`.
    """

    def __init__(self, *replies: Reply) -> None:
        self.replies: List[Reply] = list(replies)
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError("No replies configured for RecordingTransport")
        reply = self.replies.pop(0)
        if callable(reply):
            return reply(request)
        return reply


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("HEROES_SETTINGS_PATH", str(tmp_path / "settings.toml"))
    for name in (
        "HEROES_BASE_URL",
        "HEROES_PATH",
        "HEROES_TIMEOUT",
        "HEROES_BACKEND",
        "HEROES_HOST",
        "HEROES_PORT",
        "HEROES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_service():
    """Build a ``HeroService`` over a :class:`RecordingTransport`.

    Returns ``(service, transport, messages)``.
    """

    from heroes.api_client import HTTPClient
    from heroes.services import HeroService, MessageService

    def _make(*replies: Reply):
        transport = RecordingTransport(*replies)
        messages = MessageService()
        service = HeroService(HTTPClient("http://test", transport=transport), messages)
        return service, transport, messages

    return _make
