"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .register_user import register_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "register_user",
]
