"""Append-only message log shown to the user."""

from __future__ import annotations

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[List[str]], None]


class MessageService:
    """Ordered, process-wide message log.

    Entries are never evicted; :meth:`clear` is the only way to drop them.
    A listener that raises is logged and skipped; it never reaches the caller
    of :meth:`add`.
    Listeners receive a snapshot of the log after every change so a UI can
    redraw without holding a reference to the internal list.
    """

    def __init__(self) -> None:
        self._messages: List[str] = []
        self._listeners: List[Listener] = []

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def add(self, message: str) -> None:
        self._messages.append(message)
        logger.debug("message: %s", message)
        self._notify()

    def clear(self) -> None:
        self._messages.clear()
        self._notify()

    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.messages
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("message listener %r failed", listener)

    def __len__(self) -> int:
        return len(self._messages)
