"""API client backends for the hero service."""

from __future__ import annotations

from typing import Optional

from heroes import config

from .base import BaseClient
from .http_client import HTTPClient
from .local_client import LocalClient


def create_client(
    backend: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> BaseClient:
    """Build the configured backend; explicit arguments win over settings."""

    settings = config.get_api_settings()
    backend = (backend or settings["backend"]).lower()
    if backend == "local":
        return LocalClient(heroes_path=settings["heroes_path"])
    if backend == "http":
        return HTTPClient(
            base_url or settings["base_url"],
            timeout=timeout or settings["request_timeout_seconds"],
        )
    raise ValueError(f"Unknown backend: {backend!r}")


__all__ = ["BaseClient", "HTTPClient", "LocalClient", "create_client"]
