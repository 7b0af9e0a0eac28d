"""In-memory API client using :class:`httpx.ASGITransport`."""

from __future__ import annotations

from typing import Optional

import httpx

from heroes.mock_heroes import InMemoryHeroProvider

from .base import BaseClient

LOCAL_BASE_URL = "http://heroes.local"


class LocalClient(BaseClient):
    """Client that runs the in-memory heroes API in-process.

    This allows the service to call the same endpoints without requiring an
    HTTP server to be running.  Each instance owns a fresh application, so the
    collection starts from the provider's seed data.
    """

    def __init__(
        self,
        provider: Optional[InMemoryHeroProvider] = None,
        heroes_path: str = "api/heroes",
    ) -> None:
        super().__init__()
        from heroes.main import create_app

        self._app = create_app(provider, heroes_path=heroes_path)

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=self._app),
            base_url=LOCAL_BASE_URL,
        )

    # ------------------------------------------------------------------
    def is_local(self) -> bool:  # pragma: no cover - trivial
        return True
