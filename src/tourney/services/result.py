"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: Public service operations return ServiceResult; expected
failures never escape as exceptions. The CLI and any future transport
translate ``ServiceError.status`` into their own response codes.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    Attributes:
        code: Stable machine-readable identifier (e.g. ``"NOT_FOUND"``).
        message: Human-readable description.
        status: HTTP-style status code (400, 404, 500).
        violations: Validation messages, empty unless ``code`` is
            ``"VALIDATION_FAILED"``.
        detail: Extra context such as the requested id.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    status: int
    violations: list[str] = Field(default_factory=list)
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceException(Exception):
    """Raised to carry a ServiceError through exception-based control flow."""

    def __init__(self, error: ServiceError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def status(self) -> int:
        return self.error.status

    @property
    def violations(self) -> list[str]:
        return self.error.violations


class ServiceResult(BaseModel, Generic[DataT]):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_tournament"``).
        data: The resulting DTO on success; None for deletes and failures.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: DataT | None = None
    error: ServiceError | None = None

    def unwrap(self) -> DataT | None:
        """Return ``data``, or raise :class:`ServiceException` if the operation failed."""
        if self.ok:
            return self.data
        error = self.error or ServiceError(code="UNKNOWN", message="Unknown error", status=500)
        raise ServiceException(error)
