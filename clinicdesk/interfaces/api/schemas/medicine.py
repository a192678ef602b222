"""Medicine schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MedicineStatus = Literal["available", "low_stock", "out_of_stock"]


class MedicineCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    quantity: int = Field(..., ge=0)
    status: MedicineStatus = "available"
    description: str | None = None


class MedicineUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    quantity: int | None = Field(default=None, ge=0)
    status: MedicineStatus | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


class MedicineRead(BaseModel):
    id: int
    name: str
    quantity: int
    status: str
    description: str | None = None
    is_low_stock: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
