"""Uniform result envelope returned by the notification service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import ClinicDeskError

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """``{success, data?, error?}`` envelope for an upward-facing operation."""

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ClinicDeskError) -> "OperationResult[T]":
        return cls(success=False, error=error.message, error_code=error.code)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        return payload


__all__ = ["OperationResult"]
