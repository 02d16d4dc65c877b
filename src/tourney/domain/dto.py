"""DTO — boundary-facing base model for every record type.

A DTO carries the record's identity plus whatever fields its domain
needs. Identity is nullable until the repository assigns one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class DTO(BaseModel):
    """Base data transfer object compared by identity.

    Two DTOs are equal iff they are the same class and share a non-null
    ``id``. A DTO whose ``id`` is None equals only itself.

    Example:
        >>> TournamentDTO(id=1, name="Spring Open") == TournamentDTO(id=1, name="Other")
        True
        >>> TournamentDTO(name="A") == TournamentDTO(name="A")
        False
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    id: int | None = None

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash((type(self), self.id))
