"""Domain entity representing a medicine held in the inventory."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

MEDICINE_STATUSES = ("available", "low_stock", "out_of_stock")


@dataclass
class Medicine:
    """Inventory entry for a single medicine."""

    id: int | None
    name: str
    quantity: int
    status: str = "available"
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_low_stock(self, threshold: int) -> bool:
        return self.quantity <= threshold


__all__ = ["MEDICINE_STATUSES", "Medicine"]
