"""HTTP client backend using :mod:`httpx`."""

from __future__ import annotations

from typing import Optional

import httpx

from .base import BaseClient


class HTTPClient(BaseClient):
    """Client that talks to a running API server via HTTP."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )
