"""Tournament records — DTO and write-time validation rules."""

from __future__ import annotations

from datetime import date

from tourney.domain.dto import DTO
from tourney.domain.validator import BaseValidator, Operation

NAME_MAX_LENGTH = 120
MIN_PARTICIPANTS = 2


class TournamentDTO(DTO):
    """A tournament as seen by callers of the service layer."""

    name: str | None = None
    game: str | None = None
    location: str | None = None
    start_date: date | None = None
    max_participants: int | None = None


class TournamentValidator(BaseValidator[TournamentDTO]):
    """Field rules shared by CREATE and UPDATE."""

    def check_fields(self, dto: TournamentDTO, operation: Operation) -> list[str]:
        violations: list[str] = []

        name = (dto.name or "").strip()
        if not name:
            violations.append("Tournament name is required.")
        elif len(name) > NAME_MAX_LENGTH:
            violations.append(f"Tournament name must be at most {NAME_MAX_LENGTH} characters.")

        if dto.max_participants is not None and dto.max_participants < MIN_PARTICIPANTS:
            violations.append(
                f"A tournament needs room for at least {MIN_PARTICIPANTS} participants."
            )

        return violations
