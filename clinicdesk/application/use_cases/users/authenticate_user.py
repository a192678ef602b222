"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from clinicdesk.infrastructure.repositories import UserRepository
from clinicdesk.infrastructure.security import verify_password


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    NOT_ADMIN = auto()


def authenticate_user(
    session: Session, email: str, password: str, *, require_admin: bool = False
):
    """Return the authentication result along with the user when possible."""

    repository = UserRepository(session)
    user = repository.get_by_email(email)

    if not user:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if require_admin and not user.is_admin():
        return user, AuthenticationStatus.NOT_ADMIN

    return user, AuthenticationStatus.SUCCESS
