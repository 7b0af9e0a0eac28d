"""In-memory heroes web API.

Serves the ``api/heroes`` collection from seed data so the hero service can
run without a real backend, either in-process through
:class:`heroes.api_client.LocalClient` or under uvicorn via :func:`main`.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Response, status

from heroes import config
from heroes.mock_heroes import InMemoryHeroProvider
from heroes.models import Hero

logger = logging.getLogger(__name__)

FIRST_ID = 11


class HeroStore:
    """Mutable hero collection backing one application instance."""

    def __init__(self, heroes: List[Hero]) -> None:
        self._heroes: Dict[int, Hero] = {}
        for hero in heroes:
            if hero.id is not None:
                self._heroes[hero.id] = hero

    def gen_id(self) -> int:
        return max(self._heroes) + 1 if self._heroes else FIRST_ID

    def all(self, name: Optional[str] = None) -> List[Hero]:
        heroes = list(self._heroes.values())
        if name:
            needle = name.lower()
            heroes = [h for h in heroes if needle in h.name.lower()]
        return heroes

    def get(self, hero_id: int) -> Hero:
        try:
            return self._heroes[hero_id]
        except KeyError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Hero with id={hero_id} not found",
            ) from None

    def add(self, hero: Hero) -> Hero:
        if hero.id is None:
            hero = hero.model_copy(update={"id": self.gen_id()})
        elif hero.id in self._heroes:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Hero with id={hero.id} already exists",
            )
        self._heroes[hero.id] = hero
        logger.info("added hero id=%s", hero.id)
        return hero

    def update(self, hero: Hero) -> None:
        if hero.id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Hero id is required",
            )
        self.get(hero.id)
        self._heroes[hero.id] = hero
        logger.info("updated hero id=%s", hero.id)

    def remove(self, hero_id: int) -> Hero:
        hero = self.get(hero_id)
        del self._heroes[hero_id]
        logger.info("deleted hero id=%s", hero_id)
        return hero


def create_app(
    provider: Optional[InMemoryHeroProvider] = None,
    heroes_path: str = "api/heroes",
) -> FastAPI:
    provider = provider or InMemoryHeroProvider()
    store = HeroStore(provider.create_db())
    router = APIRouter(prefix="/" + heroes_path.strip("/"), tags=["heroes"])

    @router.get("", response_model=List[Hero])
    @router.get("/", response_model=List[Hero], include_in_schema=False)
    def list_heroes(name: Optional[str] = None) -> List[Hero]:
        return store.all(name)

    @router.get("/{hero_id}", response_model=Hero)
    def get_hero(hero_id: int) -> Hero:
        return store.get(hero_id)

    @router.post("", response_model=Hero, status_code=status.HTTP_201_CREATED)
    def add_hero(hero: Hero) -> Hero:
        return store.add(hero)

    @router.put("", status_code=status.HTTP_204_NO_CONTENT)
    def update_hero(hero: Hero) -> Response:
        store.update(hero)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{hero_id}", response_model=Hero)
    def delete_hero(hero_id: int) -> Hero:
        return store.remove(hero_id)

    app = FastAPI(title="Heroes in-memory API")
    app.state.store = store
    app.include_router(router)
    return app


app = create_app(heroes_path=config.get_api_settings()["heroes_path"])


def main() -> None:  # pragma: no cover - manual invocation path
    config.configure_logging()
    server = config.get_server_settings()
    uvicorn.run(app, host=server["host"], port=server["port"], log_level="info")


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
