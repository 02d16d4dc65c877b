"""Repository contract shared by every storage backend."""

from __future__ import annotations

from typing import Protocol, TypeVar

EntityT = TypeVar("EntityT")


class RepositoryError(Exception):
    """Storage failed to complete a lookup, write, or delete.

    Absence is not an error: ``find_by_id`` returns None for a missing row.
    """


class Repository(Protocol[EntityT]):
    """Find, save, and delete entities by numeric identity.

    ``save`` is an upsert: an entity without an id is inserted and
    receives one; an entity with an id replaces the stored row.
    """

    def find_by_id(self, entity_id: int) -> EntityT | None: ...

    def save(self, entity: EntityT) -> EntityT | None: ...

    def delete(self, entity: EntityT) -> None: ...
