"""Endpoints exposing the notification feed of the authenticated user."""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends, Response, status

from clinicdesk.application.use_cases.notifications import NotificationService
from clinicdesk.domain.entities import Notification, User
from clinicdesk.domain.results import OperationResult
from clinicdesk.interfaces.api.dependencies import get_notification_service, require_admin
from clinicdesk.interfaces.api.schemas import (
    NotificationCreate,
    NotificationRead,
    OperationResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

_ERROR_STATUS = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        owner_id=notification.owner_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


def _to_response(
    response: Response,
    result: OperationResult,
    transform: Callable[[Any], Any] | None = None,
) -> OperationResponse:
    if not result.success:
        response.status_code = _ERROR_STATUS.get(
            result.error_code or "", status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return OperationResponse(success=False, error=result.error)
    data = transform(result.data) if transform is not None else result.data
    return OperationResponse(success=True, data=data)


@router.get("/", response_model=OperationResponse)
def list_notifications(
    response: Response,
    include_read: bool = False,
    service: NotificationService = Depends(get_notification_service),
) -> OperationResponse:
    """Return the notifications visible to the authenticated user, newest first."""

    result = service.get_user_notifications(include_read)
    return _to_response(
        response, result, lambda items: [_notification_to_schema(n) for n in items]
    )


@router.get("/unread-count", response_model=OperationResponse)
def unread_count(
    response: Response,
    service: NotificationService = Depends(get_notification_service),
) -> OperationResponse:
    return _to_response(response, service.get_unread_notification_count())


@router.post("/read-all", response_model=OperationResponse)
def mark_all_read(
    response: Response,
    service: NotificationService = Depends(get_notification_service),
) -> OperationResponse:
    return _to_response(response, service.mark_all_notifications_as_read())


@router.post("/{notification_id}/read", response_model=OperationResponse)
def mark_read(
    notification_id: int,
    response: Response,
    service: NotificationService = Depends(get_notification_service),
) -> OperationResponse:
    result = service.mark_notification_as_read(notification_id)
    return _to_response(response, result, _notification_to_schema)


@router.post("/", response_model=OperationResponse, status_code=status.HTTP_201_CREATED)
def send_notification(
    payload: NotificationCreate,
    response: Response,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> OperationResponse:
    """Send a notification to one user, or to everybody when ``owner_id`` is empty."""

    result = service.send_notification(payload.title, payload.message, payload.owner_id)
    return _to_response(response, result, _notification_to_schema)


@router.delete("/{notification_id}", response_model=OperationResponse)
def delete_notification(
    notification_id: int,
    response: Response,
    service: NotificationService = Depends(get_notification_service),
    _: User = Depends(require_admin),
) -> OperationResponse:
    return _to_response(response, service.delete_notification(notification_id))
