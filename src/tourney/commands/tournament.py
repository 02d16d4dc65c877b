"""Command group: tournament get/create/update/delete."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import click

from tourney.commands._base import TourneyGroup

if TYPE_CHECKING:
    from tourney.commands._context import AppContext


def _field_options(func: Any) -> Any:
    """Attach the editable tournament fields as options."""
    options = [
        click.option("--name", default=None, help="Tournament name."),
        click.option("--game", default=None, help="Game or discipline played."),
        click.option("--location", default=None, help="Venue or city."),
        click.option(
            "--start-date",
            type=click.DateTime(formats=["%Y-%m-%d"]),
            default=None,
            help="First day (YYYY-MM-DD).",
        ),
        click.option(
            "--max-participants",
            type=int,
            default=None,
            help="Participant cap.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _changes(
    name: str | None,
    game: str | None,
    location: str | None,
    start_date: datetime | None,
    max_participants: int | None,
) -> dict[str, Any]:
    """Collect the options the user actually supplied."""
    values: dict[str, Any] = {
        "name": name,
        "game": game,
        "location": location,
        "start_date": start_date.date() if start_date else None,
        "max_participants": max_participants,
    }
    return {key: value for key, value in values.items() if value is not None}


@click.group(
    cls=TourneyGroup,
    examples="""\
  tourney tournament create --name "Spring Open" --game chess --max-participants 32
  tourney tournament get 1
  tourney --json tournament update 1 --location Lisbon
  tourney tournament delete 1""",
)
def tournament() -> None:
    """Create, read, update, and delete tournaments."""


@tournament.command()
@click.argument("item_id", type=int)
@click.pass_obj
def get(app: AppContext, item_id: int) -> None:
    """Show the tournament with ITEM_ID."""
    from tourney.services.tournaments import TournamentService

    app.emit(TournamentService(app.database).get_by_id(item_id))


@tournament.command(
    examples="""\
  tourney tournament create --name "Spring Open"
  tourney tournament create --name "Club Cup" --start-date 2026-05-01 --max-participants 16""",
)
@_field_options
@click.pass_obj
def create(
    app: AppContext,
    name: str | None,
    game: str | None,
    location: str | None,
    start_date: datetime | None,
    max_participants: int | None,
) -> None:
    """Create a tournament."""
    from tourney.domain.tournaments import TournamentDTO
    from tourney.services.tournaments import TournamentService

    dto = TournamentDTO(**_changes(name, game, location, start_date, max_participants))
    app.emit(TournamentService(app.database).create(dto))


@tournament.command(
    examples="""\
  tourney tournament update 1 --name "Spring Open 2026"
  tourney --json tournament update 3 --max-participants 64""",
)
@click.argument("item_id", type=int)
@_field_options
@click.pass_obj
def update(
    app: AppContext,
    item_id: int,
    name: str | None,
    game: str | None,
    location: str | None,
    start_date: datetime | None,
    max_participants: int | None,
) -> None:
    """Update fields of the tournament with ITEM_ID. Unspecified fields are kept."""
    from tourney.services.tournaments import TournamentService

    changes = _changes(name, game, location, start_date, max_participants)
    app.emit(TournamentService(app.database).update_fields(item_id, changes))


@tournament.command()
@click.argument("item_id", type=int)
@click.pass_obj
def delete(app: AppContext, item_id: int) -> None:
    """Delete the tournament with ITEM_ID."""
    from tourney.services.tournaments import TournamentService

    app.emit(TournamentService(app.database).delete(item_id))
