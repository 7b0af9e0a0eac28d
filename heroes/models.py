from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Hero(BaseModel):
    """A hero record; ``id`` is assigned by the server on create."""

    id: Optional[int] = None
    name: str

    def to_payload(self) -> dict:
        """Return the JSON body sent to the API (``id`` omitted when unset)."""

        return self.model_dump(exclude_none=True)
