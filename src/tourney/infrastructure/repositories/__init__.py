"""Repositories — key-addressable storage for entities."""

from tourney.infrastructure.repositories.base import Repository, RepositoryError
from tourney.infrastructure.repositories.sql import SqlRepository

__all__ = ["Repository", "RepositoryError", "SqlRepository"]
