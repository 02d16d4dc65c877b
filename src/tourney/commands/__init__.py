"""Subcommand modules for tourney.

Provides register_commands() which uses deferred imports to keep
``tourney --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from tourney.commands.tournament import tournament

    cli.add_command(tournament)
