"""Use case for registering users."""

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session

from clinicdesk.domain.entities import User, UserType
from clinicdesk.domain.errors import ValidationError
from clinicdesk.infrastructure.repositories import UserRepository
from clinicdesk.infrastructure.security import get_password_hash

MIN_PASSWORD_LENGTH = 6


def register_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    user_type: UserType = UserType.USER,
) -> User:
    """Create a new account ensuring unique email addresses."""

    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name:
        raise ValidationError("Name is required")
    try:
        email = validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as exc:
        raise ValidationError(f"A valid email address is required: {exc}") from exc
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValidationError("Email is already registered")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        type=user_type,
    )
    return repository.create(user)
