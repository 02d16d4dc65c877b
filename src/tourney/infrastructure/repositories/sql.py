"""SqlRepository — generic Core-table repository for entity dataclasses."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from tourney.infrastructure.database.entities import SelfIdentifiedEntity
from tourney.infrastructure.repositories.base import RepositoryError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Connection, Table

    from tourney.infrastructure.database.store import Database

EntityT = TypeVar("EntityT", bound=SelfIdentifiedEntity)

_AUDIT_FIELDS = frozenset({"created_timestamp", "last_modified_timestamp"})


class SqlRepository(Generic[EntityT]):
    """Stores one entity class in one table.

    Entity field names must match column names. Audit timestamps are
    written here: both on insert, only ``last_modified_timestamp`` on
    update. Every statement runs through ``database.transaction()`` and
    so joins the caller's transaction when one is open.
    """

    def __init__(self, database: Database, table: Table, entity_cls: type[EntityT]) -> None:
        field_names = [f.name for f in dataclasses.fields(entity_cls)]
        unknown = [name for name in field_names if name not in table.c]
        if unknown:
            msg = f"{entity_cls.__name__} fields have no column in {table.name!r}: {unknown}"
            raise ValueError(msg)

        self._database = database
        self._table = table
        self._entity_cls = entity_cls
        self._fields = field_names
        self._data_fields = [n for n in field_names if n != "id" and n not in _AUDIT_FIELDS]

    def find_by_id(self, entity_id: int) -> EntityT | None:
        try:
            with self._database.transaction() as conn:
                row = self._fetch(conn, entity_id)
        except SQLAlchemyError as exc:
            msg = f"Lookup of {self._table.name} id={entity_id} failed"
            raise RepositoryError(msg) from exc
        return self._to_entity(row) if row is not None else None

    def save(self, entity: EntityT) -> EntityT:
        now = datetime.now(UTC)
        values = {name: getattr(entity, name) for name in self._data_fields}
        table = self._table

        try:
            with self._database.transaction() as conn:
                entity_id = entity.id
                exists = entity_id is not None and self._fetch(conn, entity_id) is not None
                if exists:
                    conn.execute(
                        update(table)
                        .where(table.c.id == entity_id)
                        .values(**values, last_modified_timestamp=now)
                    )
                else:
                    values.update(created_timestamp=now, last_modified_timestamp=now)
                    if entity_id is not None:
                        values["id"] = entity_id
                    result = conn.execute(insert(table).values(**values))
                    entity_id = result.inserted_primary_key[0]
                row = self._fetch(conn, entity_id)
        except SQLAlchemyError as exc:
            msg = f"Save to {table.name} failed (id={entity.id})"
            raise RepositoryError(msg) from exc

        if row is None:
            msg = f"Row {entity_id} vanished from {table.name} during save"
            raise RepositoryError(msg)
        return self._to_entity(row)

    def delete(self, entity: EntityT) -> None:
        if entity.id is None:
            return
        try:
            with self._database.transaction() as conn:
                conn.execute(delete(self._table).where(self._table.c.id == entity.id))
        except SQLAlchemyError as exc:
            msg = f"Delete from {self._table.name} id={entity.id} failed"
            raise RepositoryError(msg) from exc

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    def _fetch(self, conn: Connection, entity_id: Any) -> Mapping[str, Any] | None:
        stmt = select(self._table).where(self._table.c.id == entity_id)
        return conn.execute(stmt).mappings().first()

    def _to_entity(self, row: Mapping[str, Any]) -> EntityT:
        return self._entity_cls(**{name: row[name] for name in self._fields})
