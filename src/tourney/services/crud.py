"""CRUDService — generic read/create/update/delete over three collaborators.

A service is wired from a repository (storage), a mapper (entity <-> DTO)
and a validator (violations per operation). Every public operation runs
inside one unit of work and returns a ServiceResult. Failures are raised
internally as ServiceException so that a transactional unit of work
rolls back, then converted to a failed result at the boundary.

Failure mapping:

=============================  ======  =================
Condition                      Status  Code
=============================  ======  =================
get: id missing                500     RETRIEVE_FAILED
get: id not stored             404     NOT_FOUND
save: validator violations     400     VALIDATION_FAILED
save: no mapped/stored result  500     SAVE_FAILED
delete: id missing/not stored  404     NOT_FOUND
storage error (any op)         500     *_FAILED
=============================  ======  =================
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager, nullcontext
from http import HTTPStatus
from typing import Any, ClassVar, Generic, TypeVar

from tourney.domain.dto import DTO
from tourney.domain.mapper import Mapper
from tourney.domain.validator import DTOValidator, Operation
from tourney.infrastructure.repositories.base import Repository, RepositoryError
from tourney.services.result import ServiceError, ServiceException, ServiceResult

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")
DtoT = TypeVar("DtoT", bound=DTO)

UnitOfWork = Callable[[], AbstractContextManager[Any]]


def _id_text(item_id: int | None) -> str:
    return "null" if item_id is None else str(item_id)


def _retrieve_failed(item_id: int | None) -> ServiceError:
    return ServiceError(
        code="RETRIEVE_FAILED",
        message=f"Failed to retrieve item with ID {_id_text(item_id)}.",
        status=HTTPStatus.INTERNAL_SERVER_ERROR.value,
        detail={"id": item_id},
    )


def _not_found(item_id: int) -> ServiceError:
    return ServiceError(
        code="NOT_FOUND",
        message=f"Unable to find item with ID {item_id}.",
        status=HTTPStatus.NOT_FOUND.value,
        detail={"id": item_id},
    )


def _nothing_to_delete(item_id: int | None) -> ServiceError:
    return ServiceError(
        code="NOT_FOUND",
        message=f"Item with ID {_id_text(item_id)} doesn't exist. Cannot delete it.",
        status=HTTPStatus.NOT_FOUND.value,
        detail={"id": item_id},
    )


def _delete_failed(item_id: int | None) -> ServiceError:
    return ServiceError(
        code="DELETE_FAILED",
        message=f"Failed to delete item with ID {_id_text(item_id)}.",
        status=HTTPStatus.INTERNAL_SERVER_ERROR.value,
        detail={"id": item_id},
    )


def _invalid(violations: list[str]) -> ServiceError:
    return ServiceError(
        code="VALIDATION_FAILED",
        message="Can't save item due to validation failures.",
        status=HTTPStatus.BAD_REQUEST.value,
        violations=violations,
    )


def _save_failed() -> ServiceError:
    return ServiceError(
        code="SAVE_FAILED",
        message="Failed to save supplied item.",
        status=HTTPStatus.INTERNAL_SERVER_ERROR.value,
    )


class CRUDService(Generic[EntityT, DtoT]):
    """Base service loaded with the common CRUD operations.

    Subclasses usually only bind collaborators and set :attr:`resource`,
    which names the operations in results (``"get_tournament"`` etc).

    Usage::

        class TournamentService(CRUDService[TournamentEntity, TournamentDTO]):
            resource = "tournament"

            def __init__(self, database: Database) -> None:
                super().__init__(
                    SqlRepository(database, tournaments, TournamentEntity),
                    TournamentMapper(),
                    TournamentValidator(),
                    unit_of_work=database.transaction,
                )
    """

    resource: ClassVar[str] = "item"

    def __init__(
        self,
        repository: Repository[EntityT],
        mapper: Mapper[EntityT, DtoT],
        validator: DTOValidator[DtoT],
        *,
        unit_of_work: UnitOfWork | None = None,
    ) -> None:
        self._repository = repository
        self._mapper = mapper
        self._validator = validator
        self._unit_of_work: UnitOfWork = unit_of_work or nullcontext

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_by_id(self, item_id: int | None) -> ServiceResult[DtoT]:
        """Look up an item by id and map it to its DTO."""
        return self._execute(
            "get", lambda: self._get_by_id(item_id), lambda: _retrieve_failed(item_id)
        )

    def create(self, dto: DtoT | None) -> ServiceResult[DtoT]:
        """Persist a new item. Any id set on *dto* is ignored."""
        return self._execute(
            "create", lambda: self._save(_without_id(dto), Operation.CREATE), _save_failed
        )

    def update(self, dto: DtoT | None) -> ServiceResult[DtoT]:
        """Persist changes to an item, keeping the id *dto* carries."""
        return self._execute("update", lambda: self._save(dto, Operation.UPDATE), _save_failed)

    def update_fields(
        self, item_id: int | None, changes: Mapping[str, Any]
    ) -> ServiceResult[DtoT]:
        """Overlay *changes* on the stored item and save it.

        The read and the write share one unit of work, so a concurrent
        delete cannot be undone by the save. Reports ``update_<resource>``;
        a missing item fails as in :meth:`get_by_id`.
        """
        return self._execute(
            "update", lambda: self._update_fields(item_id, changes), _save_failed
        )

    def delete(self, item_id: int | None) -> ServiceResult[DtoT]:
        """Delete the item with *item_id*. ``data`` is None on success."""
        return self._execute(
            "delete", lambda: self._delete(item_id), lambda: _delete_failed(item_id)
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute(
        self,
        verb: str,
        action: Callable[[], DtoT | None],
        storage_error: Callable[[], ServiceError],
    ) -> ServiceResult[DtoT]:
        """Run *action* in one unit of work and fold any failure into the result.

        *storage_error* builds the error reported when the unit of work
        itself fails, e.g. a commit refused by a locked database.
        """
        op = f"{verb}_{self.resource}"
        logger.debug("%s started", op)
        try:
            with self._unit_of_work():
                data = action()
        except ServiceException as exc:
            error = exc.error
        except RepositoryError:
            logger.warning("%s could not be committed", op, exc_info=True)
            error = storage_error()
        else:
            return ServiceResult(ok=True, op=op, data=data)

        logger.info("%s failed: %s (status=%d)", op, error.code, error.status)
        return ServiceResult(ok=False, op=op, error=error)

    def _get_by_id(self, item_id: int | None) -> DtoT:
        if item_id is None:
            raise ServiceException(_retrieve_failed(item_id))

        try:
            entity = self._repository.find_by_id(item_id)
        except RepositoryError as exc:
            logger.warning("Lookup of %s %s failed", self.resource, item_id, exc_info=True)
            raise ServiceException(_retrieve_failed(item_id)) from exc

        if entity is None:
            raise ServiceException(_not_found(item_id))

        dto = self._mapper.from_entity(entity)
        if dto is None:
            raise ServiceException(_retrieve_failed(item_id))
        return dto

    def _delete(self, item_id: int | None) -> None:
        if item_id is None:
            raise ServiceException(_nothing_to_delete(item_id))

        try:
            entity = self._repository.find_by_id(item_id)
            if entity is not None:
                self._repository.delete(entity)
        except RepositoryError as exc:
            logger.warning("Delete of %s %s failed", self.resource, item_id, exc_info=True)
            raise ServiceException(_delete_failed(item_id)) from exc

        if entity is None:
            raise ServiceException(_nothing_to_delete(item_id))

    def _update_fields(self, item_id: int | None, changes: Mapping[str, Any]) -> DtoT:
        current = self._get_by_id(item_id)
        overlay = {key: value for key, value in changes.items() if key != "id"}
        return self._save(current.model_copy(update=overlay), Operation.UPDATE)

    def _save(self, dto: DtoT | None, operation: Operation) -> DtoT:
        violations = list(self._validator.validate(dto, operation) or [])
        if violations:
            raise ServiceException(_invalid(violations))

        if dto is None:
            raise ServiceException(_save_failed())

        try:
            entity = self._mapper.to_entity(dto)
            persisted = self._repository.save(entity) if entity is not None else None
        except RepositoryError as exc:
            logger.warning("Save of %s failed", self.resource, exc_info=True)
            raise ServiceException(_save_failed()) from exc

        saved = self._mapper.from_entity(persisted) if persisted is not None else None
        if saved is None:
            raise ServiceException(_save_failed())
        return saved


def _without_id(dto: DtoT | None) -> DtoT | None:
    """Copy of *dto* with its id cleared; the caller's object is untouched."""
    if dto is None:
        return None
    return dto.model_copy(update={"id": None})
