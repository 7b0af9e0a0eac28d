from __future__ import annotations

import asyncio

import httpx
import pytest

from heroes.api_client import HTTPClient, LocalClient, create_client


def test_create_client_uses_configured_backend(monkeypatch):
    assert isinstance(create_client(), LocalClient)

    monkeypatch.setenv("HEROES_BACKEND", "http")
    monkeypatch.setenv("HEROES_BASE_URL", "http://heroes.example/")
    monkeypatch.setenv("HEROES_TIMEOUT", "2.5")
    client = create_client()
    assert isinstance(client, HTTPClient)
    assert client.base_url == "http://heroes.example"
    assert client.timeout == 2.5


def test_create_client_arguments_win(monkeypatch):
    monkeypatch.setenv("HEROES_BACKEND", "http")
    assert isinstance(create_client("local"), LocalClient)

    client = create_client("HTTP", base_url="http://other:9000")
    assert isinstance(client, HTTPClient)
    assert client.base_url == "http://other:9000"


def test_create_client_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_client("ftp")


def test_http_client_sends_relative_paths():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    async def scenario():
        async with HTTPClient("http://heroes.example:8000", transport=httpx.MockTransport(handler)) as client:
            await client.get("api/heroes/", params={"name": "dr"})
            await client.put("api/heroes", json={"id": 1, "name": "A"}, headers={"X-Probe": "1"})

    asyncio.run(scenario())

    assert str(seen[0].url) == "http://heroes.example:8000/api/heroes/?name=dr"
    assert seen[1].method == "PUT"
    assert seen[1].headers["x-probe"] == "1"


def test_http_client_propagates_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def scenario():
        client = HTTPClient(transport=httpx.MockTransport(handler))
        try:
            await client.get("api/heroes")
        finally:
            await client.aclose()

    with pytest.raises(httpx.ConnectError):
        asyncio.run(scenario())


def test_is_local():
    assert LocalClient().is_local() is True
    assert HTTPClient().is_local() is False
