"""Validator contract — violations as an ordered list of messages."""

from __future__ import annotations

from enum import StrEnum
from typing import Generic, Protocol, TypeVar

from tourney.domain.dto import DTO

DtoT = TypeVar("DtoT", bound=DTO)
DtoT_contra = TypeVar("DtoT_contra", bound=DTO, contravariant=True)

NO_DTO_PROVIDED = "No DTO provided."
ID_REQUIRED = "An ID is required to update an item."


class Operation(StrEnum):
    """Kind of write being validated."""

    CREATE = "create"
    UPDATE = "update"


class DTOValidator(Protocol[DtoT_contra]):
    """Pure function of (dto, operation) -> violations. Empty means valid."""

    def validate(self, dto: DtoT_contra | None, operation: Operation) -> list[str]: ...


class BaseValidator(Generic[DtoT]):
    """Validator skeleton handling the checks every record type shares.

    A missing DTO short-circuits with a single violation. UPDATE requires
    an identity. Subclasses add field rules in :meth:`check_fields`.
    """

    def validate(self, dto: DtoT | None, operation: Operation) -> list[str]:
        if dto is None:
            return [NO_DTO_PROVIDED]

        violations: list[str] = []
        if operation is Operation.UPDATE and dto.id is None:
            violations.append(ID_REQUIRED)
        violations.extend(self.check_fields(dto, operation))
        return violations

    def check_fields(self, dto: DtoT, operation: Operation) -> list[str]:
        """Return field-level violations. No rules by default."""
        return []
