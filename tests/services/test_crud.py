"""Tests for CRUDService — orchestration over mocked collaborators."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from unittest.mock import MagicMock, create_autospec

import pytest

from tourney.domain.dto import DTO
from tourney.domain.validator import Operation
from tourney.infrastructure.database.entities import SelfIdentifiedEntity
from tourney.infrastructure.repositories.base import RepositoryError
from tourney.infrastructure.repositories.sql import SqlRepository
from tourney.services.crud import CRUDService

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


@dataclass(kw_only=True, eq=False)
class SampleEntity(SelfIdentifiedEntity):
    label: str = ""


class SampleDTO(DTO):
    label: str = ""


class SampleMapper:
    def to_entity(self, dto: SampleDTO) -> SampleEntity:
        return SampleEntity(id=dto.id, label=dto.label)

    def from_entity(self, entity: SampleEntity) -> SampleDTO:
        return SampleDTO(id=entity.id, label=entity.label)


class SampleValidator:
    def validate(self, dto: SampleDTO | None, operation: Operation) -> list[str]:
        if dto is None:
            return ["No DTO provided."]
        return []


class SampleService(CRUDService[SampleEntity, SampleDTO]):
    pass


@pytest.fixture
def repository() -> MagicMock:
    return create_autospec(SqlRepository, instance=True)


@pytest.fixture
def service(repository: MagicMock) -> SampleService:
    return SampleService(repository, SampleMapper(), SampleValidator())


@pytest.fixture
def entity() -> SampleEntity:
    return SampleEntity(id=1, label="stored")


# ---------------------------------------------------------------------------
# get_by_id
# ---------------------------------------------------------------------------


class TestGetById:
    def test_happy_path(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity

        result = service.get_by_id(1)

        assert result.ok
        assert result.op == "get_item"
        assert result.data == SampleDTO(id=1)
        assert result.data.label == "stored"
        repository.find_by_id.assert_called_once_with(1)

    def test_not_found(self, service: SampleService, repository: MagicMock) -> None:
        repository.find_by_id.return_value = None

        result = service.get_by_id(1)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Unable to find item with ID 1."
        assert result.error.status == 404
        assert result.error.code == "NOT_FOUND"
        assert result.error.violations == []

    def test_id_not_provided(self, service: SampleService, repository: MagicMock) -> None:
        result = service.get_by_id(None)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Failed to retrieve item with ID null."
        assert result.error.status == 500
        repository.find_by_id.assert_not_called()

    def test_storage_error(self, service: SampleService, repository: MagicMock) -> None:
        repository.find_by_id.side_effect = RepositoryError("disk gone")

        result = service.get_by_id(7)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Failed to retrieve item with ID 7."
        assert result.error.status == 500

    def test_no_side_effects(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity
        service.get_by_id(1)
        repository.save.assert_not_called()
        repository.delete.assert_not_called()


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_happy_path(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.save.return_value = entity

        result = service.create(SampleDTO(id=1, label="new"))

        assert result.ok
        assert result.op == "create_item"
        assert result.data == SampleDTO(id=1)

    def test_caller_id_is_stripped(
        self, service: SampleService, repository: MagicMock
    ) -> None:
        repository.save.return_value = SampleEntity(id=42, label="new")

        result = service.create(SampleDTO(id=5, label="new"))

        saved_entity = repository.save.call_args.args[0]
        assert saved_entity.id is None
        assert result.data is not None
        assert result.data.id == 42

    def test_caller_dto_left_untouched(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.save.return_value = entity
        dto = SampleDTO(id=5, label="new")

        service.create(dto)

        assert dto.id == 5

    def test_invalid_data(self, service: SampleService, repository: MagicMock) -> None:
        result = service.create(None)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Can't save item due to validation failures."
        assert result.error.status == 400
        assert result.error.violations == ["No DTO provided."]
        repository.save.assert_not_called()

    def test_save_failure(self, service: SampleService, repository: MagicMock) -> None:
        repository.save.return_value = None

        result = service.create(SampleDTO(id=1))

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Failed to save supplied item."
        assert result.error.status == 500
        assert result.error.violations == []

    def test_storage_error(self, service: SampleService, repository: MagicMock) -> None:
        repository.save.side_effect = RepositoryError("locked")

        result = service.create(SampleDTO(label="x"))

        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SAVE_FAILED"
        assert result.error.status == 500

    def test_validator_sees_create_operation(self, repository: MagicMock) -> None:
        validator = MagicMock()
        validator.validate.return_value = []
        repository.save.return_value = SampleEntity(id=3)
        svc = SampleService(repository, SampleMapper(), validator)

        svc.create(SampleDTO(id=9, label="a"))

        dto_arg, op_arg = validator.validate.call_args.args
        assert op_arg is Operation.CREATE
        assert dto_arg.id is None

    def test_none_without_violations_is_save_failure(self, repository: MagicMock) -> None:
        """A validator that lets None through still cannot save it."""
        validator = MagicMock()
        validator.validate.return_value = []
        svc = SampleService(repository, SampleMapper(), validator)

        result = svc.create(None)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Failed to save supplied item."
        assert result.error.status == 500


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    def test_happy_path(
        self, service: SampleService, repository: MagicMock
    ) -> None:
        repository.save.return_value = SampleEntity(id=1, label="renamed")

        result = service.update(SampleDTO(id=1, label="renamed"))

        assert result.ok
        assert result.op == "update_item"
        assert result.data == SampleDTO(id=1)
        assert result.data.label == "renamed"

    def test_id_preserved(self, service: SampleService, repository: MagicMock) -> None:
        repository.save.return_value = SampleEntity(id=8)

        service.update(SampleDTO(id=8, label="x"))

        assert repository.save.call_args.args[0].id == 8

    def test_multiple_violations_reported_in_order(self, repository: MagicMock) -> None:
        validator = MagicMock()
        validator.validate.return_value = ["first", "second"]
        svc = SampleService(repository, SampleMapper(), validator)

        result = svc.update(SampleDTO(id=1))

        assert result.error is not None
        assert result.error.violations == ["first", "second"]
        assert validator.validate.call_args.args[1] is Operation.UPDATE

    def test_mapping_to_nothing_fails(self, repository: MagicMock) -> None:
        mapper = MagicMock()
        mapper.to_entity.return_value = None
        svc = SampleService(repository, mapper, SampleValidator())

        result = svc.update(SampleDTO(id=1))

        assert result.error is not None
        assert result.error.status == 500
        repository.save.assert_not_called()


class TestUpdateFields:
    def test_overlays_changes(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity
        repository.save.return_value = SampleEntity(id=1, label="renamed")

        result = service.update_fields(1, {"label": "renamed"})

        assert result.ok
        assert result.op == "update_item"
        saved = repository.save.call_args.args[0]
        assert saved.id == 1
        assert saved.label == "renamed"

    def test_id_change_is_ignored(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity
        repository.save.return_value = entity

        service.update_fields(1, {"id": 99, "label": "x"})

        assert repository.save.call_args.args[0].id == 1

    def test_missing_item(self, service: SampleService, repository: MagicMock) -> None:
        repository.find_by_id.return_value = None

        result = service.update_fields(5, {"label": "x"})

        assert result.op == "update_item"
        assert result.error is not None
        assert result.error.message == "Unable to find item with ID 5."
        assert result.error.status == 404
        repository.save.assert_not_called()

    def test_read_and_write_share_one_unit_of_work(
        self, repository: MagicMock, entity: SampleEntity
    ) -> None:
        opened: list[str] = []

        @contextmanager
        def uow() -> Iterator[None]:
            opened.append("uow")
            yield

        repository.find_by_id.return_value = entity
        repository.save.return_value = entity
        svc = SampleService(repository, SampleMapper(), SampleValidator(), unit_of_work=uow)

        assert svc.update_fields(1, {"label": "x"}).ok
        assert opened == ["uow"]


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    def test_happy_path(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity

        result = service.delete(1)

        assert result.ok
        assert result.op == "delete_item"
        assert result.data is None
        repository.delete.assert_called_once_with(entity)

    def test_missing_id(self, service: SampleService, repository: MagicMock) -> None:
        result = service.delete(None)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Item with ID null doesn't exist. Cannot delete it."
        assert result.error.status == 404
        repository.find_by_id.assert_not_called()

    def test_not_found(self, service: SampleService, repository: MagicMock) -> None:
        repository.find_by_id.return_value = None

        result = service.delete(1)

        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Item with ID 1 doesn't exist. Cannot delete it."
        assert result.error.status == 404
        repository.delete.assert_not_called()

    def test_storage_error(
        self, service: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity
        repository.delete.side_effect = RepositoryError("locked")

        result = service.delete(1)

        assert result.error is not None
        assert result.error.code == "DELETE_FAILED"
        assert result.error.message == "Failed to delete item with ID 1."


# ---------------------------------------------------------------------------
# Unit of work
# ---------------------------------------------------------------------------


class TestUnitOfWork:
    def _recording_uow(self, events: list[str]):  # type: ignore[no-untyped-def]
        @contextmanager
        def uow() -> Iterator[None]:
            events.append("begin")
            try:
                yield
            except Exception:
                events.append("rollback")
                raise
            events.append("commit")

        return uow

    def test_success_commits(self, repository: MagicMock, entity: SampleEntity) -> None:
        events: list[str] = []
        repository.find_by_id.return_value = entity
        svc = SampleService(
            repository, SampleMapper(), SampleValidator(), unit_of_work=self._recording_uow(events)
        )

        assert svc.get_by_id(1).ok
        assert events == ["begin", "commit"]

    def test_failure_rolls_back(self, repository: MagicMock) -> None:
        events: list[str] = []
        repository.find_by_id.return_value = None
        svc = SampleService(
            repository, SampleMapper(), SampleValidator(), unit_of_work=self._recording_uow(events)
        )

        result = svc.delete(3)

        assert not result.ok
        assert events == ["begin", "rollback"]


@contextmanager
def _refusing_commit() -> Iterator[None]:
    """Unit of work whose commit is refused by storage."""
    yield
    raise RepositoryError("database is locked")


class TestCommitFailure:
    @pytest.fixture
    def svc(self, repository: MagicMock) -> SampleService:
        return SampleService(
            repository, SampleMapper(), SampleValidator(), unit_of_work=_refusing_commit
        )

    def test_create(self, svc: SampleService, repository: MagicMock) -> None:
        repository.save.return_value = SampleEntity(id=1, label="new")

        result = svc.create(SampleDTO(label="new"))

        assert not result.ok
        assert result.op == "create_item"
        assert result.error is not None
        assert result.error.code == "SAVE_FAILED"
        assert result.error.message == "Failed to save supplied item."
        assert result.error.status == 500

    def test_update(self, svc: SampleService, repository: MagicMock) -> None:
        repository.save.return_value = SampleEntity(id=1)

        result = svc.update(SampleDTO(id=1))

        assert result.error is not None
        assert result.error.code == "SAVE_FAILED"

    def test_get(self, svc: SampleService, repository: MagicMock, entity: SampleEntity) -> None:
        repository.find_by_id.return_value = entity

        result = svc.get_by_id(1)

        assert result.data is None
        assert result.error is not None
        assert result.error.message == "Failed to retrieve item with ID 1."
        assert result.error.status == 500

    def test_delete(
        self, svc: SampleService, repository: MagicMock, entity: SampleEntity
    ) -> None:
        repository.find_by_id.return_value = entity

        result = svc.delete(1)

        assert result.error is not None
        assert result.error.code == "DELETE_FAILED"
        assert result.error.message == "Failed to delete item with ID 1."
        assert result.error.status == 500

    def test_earlier_failure_wins(self, svc: SampleService, repository: MagicMock) -> None:
        repository.find_by_id.return_value = None

        result = svc.get_by_id(4)

        assert result.error is not None
        assert result.error.status == 404


class TestResource:
    def test_subclass_resource_names_ops(self, repository: MagicMock) -> None:
        class MatchService(CRUDService[SampleEntity, SampleDTO]):
            resource = "match"

        svc = MatchService(repository, SampleMapper(), SampleValidator())
        repository.find_by_id.return_value = None
        assert svc.get_by_id(1).op == "get_match"
