"""Persistence helpers for the medicines inventory."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.domain.entities import ChangeKind, Medicine
from clinicdesk.domain.errors import NotFoundError, StoreError
from clinicdesk.infrastructure.models import MedicineModel
from clinicdesk.infrastructure.realtime import ChangeFeed, change_feed as default_feed
from clinicdesk.utils import localize_stored_datetime

COLLECTION = "medicines"


class MedicineRepository:
    """Provide CRUD operations for :class:`Medicine` objects."""

    def __init__(self, session: Session, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed if feed is not None else default_feed

    def list(self) -> Sequence[Medicine]:
        query = self.session.query(MedicineModel).order_by(
            MedicineModel.name.asc(), MedicineModel.id.asc()
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, medicine_id: int) -> Medicine | None:
        model = self.session.get(MedicineModel, medicine_id)
        return self._to_entity(model) if model else None

    def create(self, medicine: Medicine) -> Medicine:
        model = MedicineModel()
        self._apply_entity_to_model(model, medicine)
        self._commit(model)
        self.feed.publish(COLLECTION, ChangeKind.INSERT)
        return self._to_entity(model)

    def update(self, medicine: Medicine) -> Medicine:
        model = self.session.get(MedicineModel, medicine.id)
        if model is None:
            raise NotFoundError(f"Medicine {medicine.id} not found")
        self._apply_entity_to_model(model, medicine)
        self._commit(model)
        self.feed.publish(COLLECTION, ChangeKind.UPDATE)
        return self._to_entity(model)

    def delete(self, medicine_id: int) -> None:
        model = self.session.get(MedicineModel, medicine_id)
        if model is None:
            raise NotFoundError(f"Medicine {medicine_id} not found")
        try:
            self.session.delete(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not delete medicine: {exc}") from exc
        self.feed.publish(COLLECTION, ChangeKind.DELETE)

    def _commit(self, model: MedicineModel) -> None:
        try:
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not store medicine: {exc}") from exc
        self.session.refresh(model)

    @staticmethod
    def _apply_entity_to_model(model: MedicineModel, medicine: Medicine) -> None:
        model.name = medicine.name
        model.description = medicine.description
        model.quantity = medicine.quantity
        model.status = medicine.status

    @staticmethod
    def _to_entity(model: MedicineModel) -> Medicine:
        return Medicine(
            id=model.id,
            name=model.name,
            description=model.description,
            quantity=model.quantity,
            status=model.status,
            created_at=localize_stored_datetime(model.created_at),
            updated_at=localize_stored_datetime(model.updated_at),
        )


__all__ = ["MedicineRepository"]
