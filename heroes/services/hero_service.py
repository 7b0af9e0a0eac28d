"""Data access for the heroes collection.

Every live operation issues exactly one request through a
:class:`~heroes.api_client.BaseClient`, records what happened in the
:class:`~heroes.services.messages.MessageService` and never raises: failures
are logged and replaced by a fallback value so the UI keeps running.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter

from heroes.api_client import BaseClient
from heroes.mock_heroes import InMemoryHeroProvider
from heroes.models import Hero

from .messages import MessageService

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEROES_URL = "api/heroes"
JSON_HEADERS = {"Content-Type": "application/json"}

# Failures absorbed by the service boundary. ``ValueError`` covers JSON and
# pydantic decoding errors.
FAILURES = (httpx.HTTPError, ValueError)

_HERO_LIST = TypeAdapter(List[Hero])


def describe_error(error: BaseException) -> str:
    """Return a one-line, human readable message for ``error``."""

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return (
            f"Http failure response for {error.request.url}: "
            f"{response.status_code} {response.reason_phrase}"
        )
    return str(error) or type(error).__name__


def _body(response: httpx.Response) -> Any:
    response.raise_for_status()
    if not response.content:
        return None
    return response.json()


class HeroService:
    """Async CRUD operations against the heroes API."""

    def __init__(
        self,
        client: BaseClient,
        messages: MessageService,
        provider: Optional[InMemoryHeroProvider] = None,
        heroes_url: str = HEROES_URL,
    ) -> None:
        self.client = client
        self.messages = messages
        self.provider = provider or InMemoryHeroProvider()
        self.heroes_url = heroes_url.strip("/")

    # ------------------------------------------------------------------
    async def search_heroes(self, term: str) -> List[Hero]:
        """GET heroes whose name contains ``term``."""
        if not term.strip():
            return []

        def found(heroes: List[Hero]) -> None:
            if heroes:
                self._log(f'found heroes matching "{term}"')
            else:
                self._log(f'no heroes matching "{term}"')

        return await self._pipe(
            self._fetch_list("GET", f"{self.heroes_url}/", params={"name": term}),
            operation="searchHeroes",
            result=[],
            tap=found,
        )

    async def get_heroes(self) -> List[Hero]:
        """GET heroes from the server."""
        return await self._pipe(
            self._fetch_list("GET", self.heroes_url),
            operation="getHeroes",
            result=[],
        )

    async def get_hero(self, id: int) -> Optional[Hero]:
        """GET hero by id. The server answers 404 if ``id`` is unknown."""
        return await self._pipe(
            self._fetch_hero("GET", f"{self.heroes_url}/{id}"),
            operation=f"getHero id={id}",
            tap=lambda _: self._log(f"fetched hero id={id}"),
        )

    async def add_hero(self, hero: Hero) -> Optional[Hero]:
        """POST a new hero; the result carries the server-assigned id."""
        return await self._pipe(
            self._fetch_hero("POST", self.heroes_url, json=hero.to_payload(), headers=JSON_HEADERS),
            operation="addHero",
            tap=lambda new_hero: self._log(f"added hero w/ id={new_hero.id}"),
        )

    async def update_hero(self, hero: Hero) -> Any:
        """PUT the hero on the server and return its acknowledgment."""
        return await self._pipe(
            self._fetch("PUT", self.heroes_url, json=hero.to_payload(), headers=JSON_HEADERS),
            operation="updateHero",
            tap=lambda _: self._log(f"updated hero id={hero.id}"),
        )

    async def delete_hero(self, id: int) -> Optional[Hero]:
        """DELETE the hero from the server."""
        return await self._pipe(
            self._fetch_hero(
                "DELETE", f"{self.heroes_url}/{id}", optional=True, headers=JSON_HEADERS
            ),
            operation="deleteHero",
            tap=lambda _: self._log(f"deleted hero id={id}"),
        )

    # ------------------------------------------------------------------
    # Offline variants backed by the in-memory provider. Superseded by the
    # HTTP operations above and kept for the demo mode.
    def get_heroes_old(self) -> List[Hero]:
        heroes = self.provider.create_db()
        self.messages.add("HeroService: fetched heroes")
        return heroes

    def get_hero_old(self, id: int) -> Optional[Hero]:
        hero = self.provider.find(id)
        self.messages.add(f"HeroService: fetched hero id={id}")
        return hero

    # ------------------------------------------------------------------
    def handle_error(
        self, operation: str = "operation", result: Optional[T] = None
    ) -> Callable[[BaseException], Optional[T]]:
        """Return a handler that logs a failed ``operation`` and yields ``result``.

        The handler writes the raw error to the module logger, adds a
        ``"<operation> failed: <message>"`` entry to the message log and hands
        back ``result`` so the caller sees a normal value.
        """

        def handler(error: BaseException) -> Optional[T]:
            logger.error("%s failed", operation, exc_info=error)
            self._log(f"{operation} failed: {describe_error(error)}")
            return result

        return handler

    async def _pipe(
        self,
        work: Awaitable[T],
        *,
        operation: str,
        result: Optional[T] = None,
        tap: Optional[Callable[[T], None]] = None,
    ) -> Optional[T]:
        try:
            value = await work
        except FAILURES as error:
            return self.handle_error(operation, result)(error)
        if tap is not None:
            tap(value)
        return value

    async def _fetch(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self.client.request(method, url, **kwargs)
        return _body(response)

    async def _fetch_hero(
        self, method: str, url: str, *, optional: bool = False, **kwargs: Any
    ) -> Optional[Hero]:
        data = await self._fetch(method, url, **kwargs)
        if data is None:
            if optional:
                return None
            raise ValueError(f"empty response body for {method} {url}")
        return Hero.model_validate(data)

    async def _fetch_list(self, method: str, url: str, **kwargs: Any) -> List[Hero]:
        return _HERO_LIST.validate_python(await self._fetch(method, url, **kwargs))

    def _log(self, message: str) -> None:
        self.messages.add(f"HeroService: {message}")

    # ------------------------------------------------------------------
    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HeroService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
