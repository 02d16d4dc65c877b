"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tourney.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = ".tourney/tourney.db"
    echo: bool = False

