"""Service layer for the heroes client.

Both services are UI agnostic: the desktop console and tests use the same
objects.  The package re-exports them so callers can write
``from heroes.services import HeroService``.
"""

from .hero_service import HeroService, describe_error
from .messages import MessageService

__all__ = ["HeroService", "MessageService", "describe_error"]
