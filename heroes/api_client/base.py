"""Transport abstraction used by :class:`heroes.services.HeroService`.

This module defines :class:`BaseClient` which wraps the small subset of HTTP
functionality the hero service needs.  Concrete implementations simply need to
provide an :class:`httpx.AsyncClient` and return the raw
:class:`httpx.Response`; decoding and error policy stay with the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class BaseClient(ABC):
    """Small facade over :class:`httpx.AsyncClient`.

    The same service code runs against either the in-process API
    (:class:`~heroes.api_client.LocalClient`) or a real server
    (:class:`~heroes.api_client.HTTPClient`).
    """

    def __init__(self) -> None:
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------
    # request helpers
    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("POST", path, json=json, headers=headers)

    async def put(
        self,
        path: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("PUT", path, json=json, headers=headers)

    async def delete(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("DELETE", path, headers=headers)

    # ------------------------------------------------------------------
    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Perform a request and return the raw response object.

        Transport failures propagate as :class:`httpx.HTTPError`.
        """

        logger.debug("%s %s params=%s", method, path, params)
        return await self.http.request(
            method,
            path,
            params=params,
            json=json,
            headers=headers,
        )

    # ------------------------------------------------------------------
    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    @abstractmethod
    def _build_client(self) -> httpx.AsyncClient:
        """Create the underlying async client."""

    # ------------------------------------------------------------------
    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    def is_local(self) -> bool:
        """Return ``True`` if this client talks to an in-memory API."""

        return False
