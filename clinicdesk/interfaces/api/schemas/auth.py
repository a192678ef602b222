"""Pydantic models for authentication endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    type: str
    name: str


class RegisterRequest(BaseModel):
    """Self-service registration payload. Accounts are always of type ``user``."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    type: str
    created_at: datetime | None = None


__all__ = ["RegisterRequest", "Token", "UserRead"]
