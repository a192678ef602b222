"""Endpoints for the medicines inventory."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.medicines import (
    add_medicine,
    delete_medicine,
    get_medicine,
    list_medicines as list_medicines_uc,
    update_medicine,
)
from clinicdesk.application.use_cases.notifications import NotificationService
from clinicdesk.config import get_settings
from clinicdesk.domain.entities import Medicine, User
from clinicdesk.domain.errors import NotFoundError, ValidationError
from clinicdesk.infrastructure.database import get_db
from clinicdesk.interfaces.api.dependencies import (
    get_current_user,
    get_notification_service,
    require_admin,
)
from clinicdesk.interfaces.api.schemas import MedicineCreate, MedicineRead, MedicineUpdate

router = APIRouter(prefix="/medicines", tags=["medicines"])


def _to_read_model(medicine: Medicine) -> MedicineRead:
    return MedicineRead(
        id=medicine.id or 0,
        name=medicine.name,
        quantity=medicine.quantity,
        status=medicine.status,
        description=medicine.description,
        is_low_stock=medicine.is_low_stock(get_settings().low_stock_threshold),
        created_at=medicine.created_at,
        updated_at=medicine.updated_at,
    )


@router.get("/", response_model=list[MedicineRead])
def list_medicines(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[MedicineRead]:
    return [_to_read_model(medicine) for medicine in list_medicines_uc(db)]


@router.get("/{medicine_id}", response_model=MedicineRead)
def read_medicine(
    medicine_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> MedicineRead:
    try:
        medicine = get_medicine(db, medicine_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return _to_read_model(medicine)


@router.post("/", response_model=MedicineRead, status_code=status.HTTP_201_CREATED)
def create_medicine(
    medicine_in: MedicineCreate,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> MedicineRead:
    """Add a medicine and broadcast the addition to every user."""

    try:
        medicine = add_medicine(
            db,
            name=medicine_in.name,
            quantity=medicine_in.quantity,
            status=medicine_in.status,
            description=medicine_in.description,
            notifier=notifier,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _to_read_model(medicine)


@router.put("/{medicine_id}", response_model=MedicineRead)
def edit_medicine(
    medicine_id: int,
    medicine_in: MedicineUpdate,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> MedicineRead:
    try:
        medicine = update_medicine(
            db, medicine_id, notifier=notifier, **medicine_in.model_dump(exclude_unset=True)
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _to_read_model(medicine)


@router.delete("/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_medicine(
    medicine_id: int,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_medicine(db, medicine_id, notifier=notifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
