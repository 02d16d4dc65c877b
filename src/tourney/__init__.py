"""tourney — CRUD service layer for the Tourney Companion record store."""

__version__ = "0.1.0"
