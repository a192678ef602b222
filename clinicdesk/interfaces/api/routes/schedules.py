"""Endpoints for doctor schedules."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.notifications import NotificationService
from clinicdesk.application.use_cases.schedules import (
    add_schedule,
    delete_schedule,
    get_schedule,
    list_schedules as list_schedules_uc,
    update_schedule,
)
from clinicdesk.domain.entities import Schedule, User
from clinicdesk.domain.errors import NotFoundError, ValidationError
from clinicdesk.infrastructure.database import get_db
from clinicdesk.interfaces.api.dependencies import (
    get_current_user,
    get_notification_service,
    require_admin,
)
from clinicdesk.interfaces.api.schemas import ScheduleCreate, ScheduleRead, ScheduleUpdate

router = APIRouter(prefix="/schedules", tags=["schedules"])


def _to_read_model(schedule: Schedule) -> ScheduleRead:
    return ScheduleRead(
        id=schedule.id or 0,
        title=schedule.title,
        doctor=schedule.doctor,
        day=schedule.day,
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        status=schedule.status,
        created_at=schedule.created_at,
        updated_at=schedule.updated_at,
    )


@router.get("/", response_model=list[ScheduleRead])
def list_schedules(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[ScheduleRead]:
    return [_to_read_model(schedule) for schedule in list_schedules_uc(db)]


@router.get("/{schedule_id}", response_model=ScheduleRead)
def read_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> ScheduleRead:
    try:
        schedule = get_schedule(db, schedule_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return _to_read_model(schedule)


@router.post("/", response_model=ScheduleRead, status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule_in: ScheduleCreate,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> ScheduleRead:
    try:
        schedule = add_schedule(db, notifier=notifier, **schedule_in.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _to_read_model(schedule)


@router.put("/{schedule_id}", response_model=ScheduleRead)
def edit_schedule(
    schedule_id: int,
    schedule_in: ScheduleUpdate,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> ScheduleRead:
    try:
        schedule = update_schedule(
            db, schedule_id, notifier=notifier, **schedule_in.model_dump(exclude_unset=True)
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _to_read_model(schedule)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> Response:
    try:
        delete_schedule(db, schedule_id, notifier=notifier)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
