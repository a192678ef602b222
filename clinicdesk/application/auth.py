"""Authentication collaborators consumed by the notification core."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
)
from clinicdesk.domain.entities import User, UserType

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthListener = Callable[[AuthEvent, Optional[User]], None]


class AuthProvider(Protocol):
    """Identity source queried before any per-user notification operation."""

    def current_user_id(self) -> int | None: ...

    def current_user_role(self) -> UserType | None: ...

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]: ...


class RequestAuthContext:
    """Fixed identity for the lifetime of a single request."""

    def __init__(self, user: User | None) -> None:
        self._user = user

    def current_user_id(self) -> int | None:
        return self._user.id if self._user else None

    def current_user_role(self) -> UserType | None:
        return self._user.type if self._user else None

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        return lambda: None


class AuthSession:
    """Interactive sign-in session that notifies listeners on every transition."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._user: User | None = None
        self._listeners: list[AuthListener] = []
        self._lock = threading.Lock()

    @property
    def user(self) -> User | None:
        return self._user

    def current_user_id(self) -> int | None:
        return self._user.id if self._user else None

    def current_user_role(self) -> UserType | None:
        return self._user.type if self._user else None

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return _unsubscribe

    def sign_in(
        self, email: str, password: str, *, require_admin: bool = False
    ) -> AuthenticationStatus:
        """Authenticate ``email`` and, on success, make it the current user."""

        with self._session_factory() as session:
            user, status = authenticate_user(
                session, email, password, require_admin=require_admin
            )
        if status is not AuthenticationStatus.SUCCESS:
            logger.info("Sign-in rejected for %s: %s", email, status.name)
            return status
        self._set_user(user, AuthEvent.SIGNED_IN)
        return status

    def sign_up(self, name: str, email: str, password: str) -> User:
        """Register a regular account and sign it in."""

        with self._session_factory() as session:
            user = register_user(session, name=name, email=email, password=password)
        self._set_user(user, AuthEvent.SIGNED_IN)
        return user

    def sign_out(self) -> None:
        if self._user is None:
            return
        self._set_user(None, AuthEvent.SIGNED_OUT)

    def _set_user(self, user: User | None, event: AuthEvent) -> None:
        self._user = user
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, user)
            except Exception:  # pragma: no cover - logged and skipped
                logger.exception("Auth listener failed on %s", event.value)


__all__ = [
    "AuthEvent",
    "AuthListener",
    "AuthProvider",
    "AuthSession",
    "RequestAuthContext",
]
