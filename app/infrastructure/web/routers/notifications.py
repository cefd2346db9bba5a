"""
Notifications router.
The caller's in-app notifications and channel preferences.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query

from app.infrastructure.web.dependencies import provide
from app.application.use_cases.notification_use_cases import (
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
    GetNotificationPreferencesUseCase,
    UpdateNotificationPreferencesUseCase,
    ListNotificationsQuery,
)
from app.application.dto.notification_dto import (
    NotificationResponseDTO,
    NotificationListResponseDTO,
    UpdateNotificationPreferencesRequestDTO,
    NotificationPreferencesResponseDTO,
)


router = APIRouter()


@router.get("", response_model=NotificationListResponseDTO)
async def list_notifications(
    use_case: Annotated[ListNotificationsUseCase, Depends(provide(ListNotificationsUseCase))],
    unread_only: bool = Query(False, description="Only unread notifications"),
    limit: int = Query(50, ge=1, le=200, description="Maximum number of notifications")
):
    """The caller's notifications, newest first, with the unread count."""
    return await use_case.execute(ListNotificationsQuery(unread_only=unread_only, limit=limit))


@router.get("/preferences", response_model=NotificationPreferencesResponseDTO)
async def get_notification_preferences(
    use_case: Annotated[GetNotificationPreferencesUseCase, Depends(provide(GetNotificationPreferencesUseCase))]
):
    return await use_case.execute(None)


@router.put("/preferences", response_model=NotificationPreferencesResponseDTO)
async def update_notification_preferences(
    request: UpdateNotificationPreferencesRequestDTO,
    use_case: Annotated[UpdateNotificationPreferencesUseCase, Depends(provide(UpdateNotificationPreferencesUseCase))]
):
    """
    Turn channels on or off per notification type.

    Example body: `{"channels": {"invoice_paid": {"email": false}}}`
    """
    return await use_case.execute(request)


@router.patch("/{notification_id}/read", response_model=NotificationResponseDTO)
async def mark_notification_read(
    notification_id: str,
    use_case: Annotated[MarkNotificationReadUseCase, Depends(provide(MarkNotificationReadUseCase))]
):
    return await use_case.execute(notification_id)
