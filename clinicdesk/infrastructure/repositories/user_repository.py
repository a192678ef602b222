"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.domain.entities import User, UserType
from clinicdesk.domain.errors import StoreError, ValidationError
from clinicdesk.infrastructure.models import UserModel
from clinicdesk.utils import localize_stored_datetime


class UserRepository:
    """Provide lookup and creation of user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            type=user.type.value,
        )
        try:
            self.session.add(model)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValidationError("Email is already registered") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not store user: {exc}") from exc
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            type=UserType(model.type),
            created_at=localize_stored_datetime(model.created_at),
        )


__all__ = ["UserRepository"]
