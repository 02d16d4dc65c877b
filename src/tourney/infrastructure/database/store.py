"""Database — engine owner and unit-of-work provider.

:meth:`Database.transaction` is the atomic boundary for one service
operation. The outermost call opens ``engine.begin()`` (commit on
success, rollback on any exception); nested calls on the same instance
join the open connection, so a repository used inside a service
operation writes within that operation's transaction. A storage error
raised while committing or rolling back surfaces as ``RepositoryError``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from tourney.infrastructure.database.engine import init_database
from tourney.infrastructure.repositories.base import RepositoryError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and tracks the active transaction per context."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._active: ContextVar[Connection | None] = ContextVar(
            f"tourney_txn_{id(self):x}", default=None
        )

    @classmethod
    def open(cls, db_path: Path, *, echo: bool = False) -> Database:
        """Initialize the schema at *db_path* and wrap the engine."""
        return cls(init_database(db_path, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def in_transaction(self) -> bool:
        return self._active.get() is not None

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield the active connection, opening a transaction if none is open."""
        active = self._active.get()
        if active is not None:
            yield active
            return

        try:
            with self._engine.begin() as conn:
                token = self._active.set(conn)
                try:
                    yield conn
                except Exception:
                    logger.debug("Rolling back transaction", exc_info=True)
                    raise
                finally:
                    self._active.reset(token)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Transaction failed: {exc}") from exc

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
