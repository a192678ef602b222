"""FastAPI dependency utilities."""

from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from clinicdesk.application.auth import RequestAuthContext
from clinicdesk.application.use_cases.notifications import NotificationService
from clinicdesk.domain.entities import User
from clinicdesk.infrastructure.database import SessionLocal, get_db
from clinicdesk.infrastructure.realtime import ChangeFeed, change_feed
from clinicdesk.infrastructure.repositories import UserRepository
from clinicdesk.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("User not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return current_user


def get_session_factory() -> Callable[[], Session]:
    return SessionLocal


def get_change_feed() -> ChangeFeed:
    return change_feed


def get_notification_service(
    current_user: User = Depends(get_current_user),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    feed: ChangeFeed = Depends(get_change_feed),
) -> NotificationService:
    """Notification service acting on behalf of the authenticated user."""

    return NotificationService(session_factory, RequestAuthContext(current_user), feed=feed)
