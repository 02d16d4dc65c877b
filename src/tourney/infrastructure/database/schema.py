"""SQLAlchemy Core table definitions for the tourney database.

Every record table carries an integer ``id`` primary key plus the two
audit columns that :class:`EntityMetadata` maps.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, Date, DateTime, Index, Integer, MetaData, Table, Text

metadata = MetaData()


def _audit_columns() -> list[Column[Any]]:
    return [
        Column("created_timestamp", DateTime(timezone=True), nullable=False),
        Column("last_modified_timestamp", DateTime(timezone=True), nullable=False),
    ]


tournaments = Table(
    "tournaments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("game", Text),
    Column("location", Text),
    Column("start_date", Date),
    Column("max_participants", Integer),
    *_audit_columns(),
)

Index("ix_tournaments_start_date", tournaments.c.start_date)
