"""Mapper contract — pure conversion between an entity and its DTO."""

from __future__ import annotations

from typing import Protocol, TypeVar

EntityT = TypeVar("EntityT")
DtoT = TypeVar("DtoT")


class Mapper(Protocol[EntityT, DtoT]):
    """Bidirectional, stateless entity/DTO conversion.

    ``to_entity`` and ``from_entity`` preserve every non-identity field.
    Identity survives the round trip except on create, where the
    repository assigns it.
    """

    def to_entity(self, dto: DtoT) -> EntityT | None: ...

    def from_entity(self, entity: EntityT) -> DtoT | None: ...
