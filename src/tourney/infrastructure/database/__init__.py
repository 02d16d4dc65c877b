"""SQLite persistence via SQLAlchemy Core: schema, engine, entities, transactions."""

from tourney.infrastructure.database.engine import create_db_engine, init_database
from tourney.infrastructure.database.entities import (
    EntityMetadata,
    SelfIdentifiedEntity,
    TournamentEntity,
)
from tourney.infrastructure.database.schema import metadata, tournaments
from tourney.infrastructure.database.store import Database

__all__ = [
    "Database",
    "EntityMetadata",
    "SelfIdentifiedEntity",
    "TournamentEntity",
    "create_db_engine",
    "init_database",
    "metadata",
    "tournaments",
]
