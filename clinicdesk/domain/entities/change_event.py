"""Domain entity describing a change observed on a stored collection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """Signal that ``collection`` changed.

    No record payload is carried; subscribers re-query the store.
    """

    collection: str
    kind: ChangeKind


__all__ = ["ChangeEvent", "ChangeKind"]
