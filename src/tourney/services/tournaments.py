"""TournamentService — CRUD for tournaments backed by SQLite."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tourney.domain.tournaments import TournamentDTO, TournamentValidator
from tourney.infrastructure.database.entities import TournamentEntity
from tourney.infrastructure.database.schema import tournaments
from tourney.infrastructure.repositories.sql import SqlRepository
from tourney.services.crud import CRUDService

if TYPE_CHECKING:
    from tourney.infrastructure.database.store import Database


class TournamentMapper:
    """Field-for-field conversion; audit timestamps stay on the entity."""

    def to_entity(self, dto: TournamentDTO) -> TournamentEntity:
        return TournamentEntity(
            id=dto.id,
            name=dto.name or "",
            game=dto.game,
            location=dto.location,
            start_date=dto.start_date,
            max_participants=dto.max_participants,
        )

    def from_entity(self, entity: TournamentEntity) -> TournamentDTO:
        return TournamentDTO(
            id=entity.id,
            name=entity.name,
            game=entity.game,
            location=entity.location,
            start_date=entity.start_date,
            max_participants=entity.max_participants,
        )


class TournamentService(CRUDService[TournamentEntity, TournamentDTO]):
    """Tournament CRUD; each operation is one database transaction."""

    resource = "tournament"

    def __init__(self, database: Database) -> None:
        super().__init__(
            SqlRepository(database, tournaments, TournamentEntity),
            TournamentMapper(),
            TournamentValidator(),
            unit_of_work=database.transaction,
        )
