from __future__ import annotations

import asyncio
import importlib

import httpx
import pytest
from fastapi.testclient import TestClient

from heroes.api_client import HTTPClient, LocalClient
from heroes.main import HeroStore, create_app
from heroes.mock_heroes import HEROES, InMemoryHeroProvider
from heroes.models import Hero
from heroes.services import HeroService, MessageService


@pytest.fixture
def client():
    return TestClient(create_app())


def test_list_returns_seed_data(client):
    resp = client.get("/api/heroes")
    assert resp.status_code == 200
    assert [h["name"] for h in resp.json()] == [h.name for h in HEROES]


def test_name_filter_is_case_insensitive(client):
    resp = client.get("/api/heroes/", params={"name": "MAG"})
    assert resp.status_code == 200
    assert {h["name"] for h in resp.json()} == {"Magneta", "Magma"}


def test_get_unknown_hero_is_404(client):
    resp = client.get("/api/heroes/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Hero with id=999 not found"


def test_post_assigns_next_id(client):
    resp = client.post("/api/heroes", json={"name": "Nova"})
    assert resp.status_code == 201
    assert resp.json() == {"id": 21, "name": "Nova"}


def test_post_duplicate_id_conflicts(client):
    resp = client.post("/api/heroes", json={"id": 12, "name": "Twin"})
    assert resp.status_code == 409


def test_put_updates_and_returns_no_content(client):
    resp = client.put("/api/heroes", json={"id": 13, "name": "Bombasto II"})
    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get("/api/heroes/13").json()["name"] == "Bombasto II"


def test_put_unknown_hero_is_404(client):
    resp = client.put("/api/heroes", json={"id": 999, "name": "Nobody"})
    assert resp.status_code == 404


def test_delete_returns_removed_hero(client):
    resp = client.delete("/api/heroes/14")
    assert resp.status_code == 200
    assert resp.json() == {"id": 14, "name": "Celeritas"}
    assert client.get("/api/heroes/14").status_code == 404


def test_gen_id_starts_at_eleven_for_empty_store():
    store = HeroStore([])
    assert store.gen_id() == 11
    assert store.add(Hero(name="First")).id == 11


def test_custom_heroes_path():
    client = TestClient(create_app(heroes_path="/v2/heroes/"))
    assert client.get("/v2/heroes").status_code == 200
    assert client.get("/api/heroes").status_code == 404


def test_store_does_not_mutate_provider():
    provider = InMemoryHeroProvider()
    local = TestClient(create_app(provider))
    local.put("/api/heroes", json={"id": 12, "name": "Renamed"})
    assert provider.find(12).name == "Dr. Nice"


# ---------------------------------------------------------------------------
# Service round trips against the in-process API


def test_service_round_trip_over_local_client():
    messages = MessageService()
    provider = InMemoryHeroProvider([Hero(id=1, name="Alpha"), Hero(id=2, name="Beta")])

    async def scenario():
        async with HeroService(LocalClient(provider), messages) as service:
            created = await service.add_hero(Hero(name="Gamma"))
            await service.update_hero(Hero(id=1, name="Alpha Prime"))
            fetched = await service.get_hero(1)
            found = await service.search_heroes("ga")
            deleted = await service.delete_hero(2)
            remaining = await service.get_heroes()
            missing = await service.get_hero(2)
            return created, fetched, found, deleted, remaining, missing

    created, fetched, found, deleted, remaining, missing = asyncio.run(scenario())

    assert created == Hero(id=3, name="Gamma")
    assert fetched == Hero(id=1, name="Alpha Prime")
    assert found == [Hero(id=3, name="Gamma")]
    assert deleted == Hero(id=2, name="Beta")
    assert remaining == [Hero(id=1, name="Alpha Prime"), Hero(id=3, name="Gamma")]
    assert missing is None
    assert messages.messages[:5] == [
        "HeroService: added hero w/ id=3",
        "HeroService: updated hero id=1",
        "HeroService: fetched hero id=1",
        'HeroService: found heroes matching "ga"',
        "HeroService: deleted hero id=2",
    ]
    assert messages.messages[5].startswith("HeroService: getHero id=2 failed: ")
    assert "404 Not Found" in messages.messages[5]


def test_local_client_instances_are_isolated():
    async def scenario():
        async with LocalClient() as first, LocalClient() as second:
            await first.delete("api/heroes/12")
            return (await second.get("api/heroes/12")).status_code

    assert asyncio.run(scenario()) == 200


def test_served_app_uses_configured_heroes_path(monkeypatch):
    import heroes.main as main

    monkeypatch.setenv("HEROES_PATH", "v2/heroes")
    served = importlib.reload(main).app
    monkeypatch.delenv("HEROES_PATH")
    importlib.reload(main)

    messages = MessageService()

    async def scenario():
        client = HTTPClient("http://srv", transport=httpx.ASGITransport(app=served))
        async with HeroService(client, messages, heroes_url="v2/heroes") as service:
            return await service.get_heroes()

    heroes = asyncio.run(scenario())

    assert [h.name for h in heroes] == [h.name for h in HEROES]
    assert messages.messages == []
