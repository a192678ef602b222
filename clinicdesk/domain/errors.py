"""Error taxonomy shared by the store adapter, services and routes."""

from __future__ import annotations


class ClinicDeskError(Exception):
    """Base class for failures raised by the application core."""

    code = "error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    @classmethod
    def default_message(cls) -> str:
        return "Unexpected error"

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.default_message()


class StoreError(ClinicDeskError):
    """The backing store rejected or failed to perform an operation."""

    code = "store_error"

    @classmethod
    def default_message(cls) -> str:
        return "The data store could not complete the operation"


class NotFoundError(ClinicDeskError, LookupError):
    """The requested record does not exist or is not visible to the caller."""

    code = "not_found"

    @classmethod
    def default_message(cls) -> str:
        return "Record not found"


class UnauthenticatedError(ClinicDeskError):
    """No current user could be resolved for an operation that requires one."""

    code = "unauthenticated"

    @classmethod
    def default_message(cls) -> str:
        return "No authenticated user"


class ValidationError(ClinicDeskError, ValueError):
    """Input rejected before reaching the store."""

    code = "validation_error"

    @classmethod
    def default_message(cls) -> str:
        return "Invalid input"


__all__ = [
    "ClinicDeskError",
    "NotFoundError",
    "StoreError",
    "UnauthenticatedError",
    "ValidationError",
]
