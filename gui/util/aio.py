"""Run coroutines from Qt callbacks on a single owned event loop."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class LoopRunner:
    """Owns one event loop for the lifetime of the window.

    ``httpx.AsyncClient`` connections are bound to the loop that opened them,
    so every service call must run on the same loop.
    """

    def __init__(self) -> None:
        self._loop = asyncio.new_event_loop()

    def run(self, work: Awaitable[T]) -> T:
        return self._loop.run_until_complete(work)

    def close(self) -> None:
        if not self._loop.is_closed():
            self._loop.close()
