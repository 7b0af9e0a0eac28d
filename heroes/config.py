"""Application configuration values and helpers.

Centralizes runtime configuration for:
  - The heroes API endpoint (base URL, resource path, timeout, backend)
  - The embedded in-memory API server (host, port)
  - Logging level

Values can be provided via environment variables or a user settings file at
``~/.heroes/settings.toml``.

Environment variables (quick overrides):
  - HEROES_SETTINGS_PATH: alternate settings file
  - HEROES_BASE_URL: server root used by the HTTP backend
  - HEROES_PATH: heroes resource path relative to the base URL
  - HEROES_TIMEOUT: request timeout (seconds)
  - HEROES_BACKEND: ``local`` (in-process API) or ``http``
  - HEROES_HOST / HEROES_PORT: bind address of the in-memory API server
  - HEROES_LOG_LEVEL: logging level name
"""

from __future__ import annotations

import copy
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping

BASE_DIR = Path(__file__).resolve().parent
REPO_ROOT = BASE_DIR.parent

BACKENDS = ("local", "http")

_API_DEFAULTS: Dict[str, Any] = {
    "base_url": "http://127.0.0.1:8000",
    "heroes_path": "api/heroes",
    "request_timeout_seconds": 10.0,
    "backend": "local",
}

_SERVER_DEFAULTS: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8000,
}

_DEFAULT_LOG_LEVEL = "INFO"


def settings_path() -> Path:
    override = os.getenv("HEROES_SETTINGS_PATH")
    if override:
        return Path(override).expanduser().resolve()
    runtime_settings = REPO_ROOT / "settings.toml"
    if runtime_settings.exists():
        return runtime_settings
    return (Path.home() / ".heroes" / "settings.toml").resolve()


def _read_settings_dict() -> Dict[str, Any]:
    path = settings_path()
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def _section(name: str) -> Mapping[str, Any]:
    data = _read_settings_dict().get(name)
    return data if isinstance(data, Mapping) else {}


def _coerce_positive_float(value: Any, default: float) -> float:
    try:
        candidate = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return candidate if candidate > 0 else default


def _coerce_port(value: Any, default: int) -> int:
    try:
        candidate = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return candidate if 0 < candidate < 65536 else default


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def get_api_settings() -> Dict[str, Any]:
    """Return heroes API configuration with defaults applied."""
    settings = copy.deepcopy(_API_DEFAULTS)
    data = _section("api")

    settings["base_url"] = _text(
        os.getenv("HEROES_BASE_URL") or data.get("base_url"), settings["base_url"]
    ).rstrip("/")
    settings["heroes_path"] = _text(
        os.getenv("HEROES_PATH") or data.get("heroes_path"), settings["heroes_path"]
    ).strip("/")
    settings["request_timeout_seconds"] = _coerce_positive_float(
        os.getenv("HEROES_TIMEOUT") or data.get("request_timeout_seconds"),
        settings["request_timeout_seconds"],
    )
    backend = _text(os.getenv("HEROES_BACKEND") or data.get("backend"), settings["backend"]).lower()
    if backend in BACKENDS:
        settings["backend"] = backend
    return settings


def get_server_settings() -> Dict[str, Any]:
    """Return bind settings for the in-memory API server."""
    settings = copy.deepcopy(_SERVER_DEFAULTS)
    data = _section("server")
    settings["host"] = _text(os.getenv("HEROES_HOST") or data.get("host"), settings["host"])
    settings["port"] = _coerce_port(os.getenv("HEROES_PORT") or data.get("port"), settings["port"])
    return settings


def get_log_level() -> int:
    name = _text(
        os.getenv("HEROES_LOG_LEVEL") or _section("logging").get("level"),
        _DEFAULT_LOG_LEVEL,
    ).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: int | None = None) -> None:
    """Install the console log format used by the entry points."""
    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
