"""Uniform ``{success, data, error}`` response body."""

from typing import Any

from pydantic import BaseModel


class OperationResponse(BaseModel):
    success: bool
    data: Any = None
    error: str | None = None


__all__ = ["OperationResponse"]
