"""Seed data for offline use and the in-memory API."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import Hero

HEROES: tuple[Hero, ...] = (
    Hero(id=12, name="Dr. Nice"),
    Hero(id=13, name="Bombasto"),
    Hero(id=14, name="Celeritas"),
    Hero(id=15, name="Magneta"),
    Hero(id=16, name="RubberMan"),
    Hero(id=17, name="Dynama"),
    Hero(id=18, name="Dr. IQ"),
    Hero(id=19, name="Magma"),
    Hero(id=20, name="Tornado"),
)


class InMemoryHeroProvider:
    """Read-only hero collection handed to services and the in-memory API.

    Callers always receive copies so the seed records cannot be mutated
    through the returned objects.
    """

    def __init__(self, heroes: Optional[Iterable[Hero]] = None) -> None:
        self._heroes: tuple[Hero, ...] = tuple(HEROES if heroes is None else heroes)

    def create_db(self) -> List[Hero]:
        return [hero.model_copy() for hero in self._heroes]

    def find(self, hero_id: int) -> Optional[Hero]:
        for hero in self._heroes:
            if hero.id == hero_id:
                return hero.model_copy()
        return None
