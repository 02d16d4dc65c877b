"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Opens the database lazily so ``--help`` and
``--version`` never touch the filesystem, and routes results to
stdout/stderr with the matching exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from tourney.config.logging import configure_logging
from tourney.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tourney.config.settings import TourneySettings
    from tourney.infrastructure.database.store import Database
    from tourney.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TourneySettings) -> None:
        self.settings = settings
        self._database: Database | None = None

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            echo_sql=settings.database.echo,
        )

    @property
    def database(self) -> Database:
        """The database (opened on first access)."""
        if self._database is None:
            from tourney.infrastructure.database.store import Database

            self._database = Database.open(
                self.settings.db_path, echo=self.settings.database.echo
            )
        return self._database

    def close(self) -> None:
        if self._database is not None:
            self._database.close()
            self._database = None

    def emit(self, result: ServiceResult[Any]) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
