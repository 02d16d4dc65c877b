"""Shared pytest fixtures and test helpers for tourney tests."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from tourney.domain.tournaments import TournamentDTO
from tourney.infrastructure.database.engine import init_database
from tourney.infrastructure.database.store import Database


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / ".tourney" / "tourney.db"


@pytest.fixture
def db_engine(db_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(db_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def database(db_engine: Engine) -> Database:
    """Database wrapper over the temp engine."""
    return Database(db_engine)


@pytest.fixture
def impatient_database(db_path: Path, db_engine: Engine) -> Iterator[Database]:
    """Database over the temp file that gives up on a busy lock after 0.2s."""
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"timeout": 0.2})
    try:
        yield Database(engine)
    finally:
        engine.dispose()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test classes.
    """
    monkeypatch.delenv("TOURNEY_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_tournament(**overrides: object) -> TournamentDTO:
    """A valid tournament DTO, with *overrides* applied."""
    fields: dict[str, object] = {
        "name": "Spring Open",
        "game": "chess",
        "location": "Porto",
        "max_participants": 32,
    }
    fields.update(overrides)
    return TournamentDTO(**fields)


@contextmanager
def held_read_lock(db_path: Path) -> Iterator[None]:
    """Keep a reader transaction open on *db_path* so writers cannot commit."""
    conn = sqlite3.connect(db_path, isolation_level=None)
    try:
        conn.execute("BEGIN")
        conn.execute("SELECT * FROM tournaments").fetchall()
        yield
    finally:
        conn.close()
