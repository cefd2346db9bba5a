"""
Notification DTOs for the application layer.
"""

from typing import Optional, Dict, Any, List
from pydantic import Field

from .base_dto import UpdateRequestDTO, ResponseDTO, BaseDTO
from app.domain.models.notification import Notification, NotificationPreferences, NotificationType


class NotificationResponseDTO(ResponseDTO):
    """DTO for in-app notification responses."""

    user_id: str
    type: NotificationType
    title: str
    body: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    link_url: Optional[str] = None
    meta: Dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponseDTO":
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            body=notification.body,
            entity_type=notification.entity_type,
            entity_id=notification.entity_id,
            link_url=notification.link_url,
            meta=notification.meta,
            is_read=notification.is_read,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class NotificationListResponseDTO(BaseDTO):
    notifications: List[NotificationResponseDTO]
    unread_count: int


class UpdateNotificationPreferencesRequestDTO(UpdateRequestDTO):
    """Channel toggles keyed by notification type, e.g. {"invoice_paid": {"email": false}}."""

    channels: Dict[str, Dict[str, bool]]


class NotificationPreferencesResponseDTO(BaseDTO):
    user_id: str
    channels: Dict[str, Dict[str, bool]]

    @classmethod
    def from_domain(cls, preferences: NotificationPreferences) -> "NotificationPreferencesResponseDTO":
        return cls(user_id=preferences.user_id, channels=preferences.resolved())
