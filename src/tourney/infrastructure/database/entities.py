"""Entity base classes — identity and audit scaffolding for stored rows.

Entities are plain dataclasses whose field names match the columns of
their table. Equality is by identity: see :class:`SelfIdentifiedEntity`.
Subclasses must keep ``eq=False`` so the dataclass machinery does not
replace identity equality with field-by-field comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(kw_only=True, eq=False)
class EntityMetadata:
    """Audit timestamps, populated by the repository on write."""

    created_timestamp: datetime | None = None
    last_modified_timestamp: datetime | None = None


@dataclass(kw_only=True, eq=False)
class SelfIdentifiedEntity(EntityMetadata):
    """Entity with a numeric identity assigned on first persistence.

    Example:
        >>> TournamentEntity(id=1, name="A") == TournamentEntity(id=1, name="B")
        True
        >>> TournamentEntity(name="A") == TournamentEntity(name="A")
        False
    """

    id: int | None = None

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        # Unsaved entities only equal themselves
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash((type(self), self.id))


@dataclass(kw_only=True, eq=False)
class TournamentEntity(SelfIdentifiedEntity):
    """Row of the ``tournaments`` table."""

    name: str = ""
    game: str | None = None
    location: str | None = None
    start_date: date | None = None
    max_participants: int | None = None
