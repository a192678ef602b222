"""Authentication and registration endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
)
from clinicdesk.domain.entities import User
from clinicdesk.domain.errors import ValidationError
from clinicdesk.infrastructure.database import get_db
from clinicdesk.infrastructure.security import create_access_token
from clinicdesk.interfaces.api.dependencies import get_current_user
from clinicdesk.interfaces.api.schemas import RegisterRequest, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> Token:
    access_token = create_access_token(data={"sub": user.email, "type": user.type.value})
    return Token(access_token=access_token, type=user.type.value, name=user.name)


def _user_to_schema(user: User) -> UserRead:
    return UserRead(
        id=user.id or 0,
        name=user.name,
        email=user.email,
        type=user.type.value,
        created_at=user.created_at,
    )


def _login(db: Session, form_data: OAuth2PasswordRequestForm, *, require_admin: bool) -> Token:
    user, auth_status = authenticate_user(
        db, form_data.username, form_data.password, require_admin=require_admin
    )
    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if auth_status is AuthenticationStatus.NOT_ADMIN:
        logger.info("Rejected admin sign-in for non-admin %s", user.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin privileges required.",
        )
    return _issue_token(user)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Authenticate by email and password and return a JWT."""

    return _login(db, form_data, require_admin=False)


@router.post("/admin/token", response_model=Token)
def admin_login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Same as ``/auth/token`` but only administrators may sign in."""

    return _login(db, form_data, require_admin=True)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = register_user(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _user_to_schema(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    return _user_to_schema(current_user)
