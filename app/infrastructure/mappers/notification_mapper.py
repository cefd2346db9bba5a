"""
Notification mappers.
"""

from app.domain.models.notification import Notification, NotificationPreferences, NotificationType
from app.infrastructure.db.models import NotificationModel, NotificationPreferencesModel
from .converters import naive_utc


class NotificationMapper:
    """Maps between Notification domain entity and NotificationModel."""

    def domain_to_model(self, notification: Notification) -> NotificationModel:
        return NotificationModel(
            id=notification.id,
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            body=notification.body,
            entity_type=notification.entity_type,
            entity_id=notification.entity_id,
            link_url=notification.link_url,
            meta=dict(notification.meta),
            is_read=notification.is_read,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )

    def model_to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title or "",
            body=model.body or "",
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            link_url=model.link_url,
            meta=dict(model.meta or {}),
            is_read=bool(model.is_read),
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class NotificationPreferencesMapper:

    def domain_to_model(self, preferences: NotificationPreferences) -> NotificationPreferencesModel:
        return NotificationPreferencesModel(
            id=preferences.id,
            user_id=preferences.user_id,
            # Copy nested dicts so JSON change detection sees a new value
            channels={k: dict(v) for k, v in preferences.channels.items()},
            created_at=preferences.created_at,
            updated_at=preferences.updated_at,
        )

    def model_to_domain(self, model: NotificationPreferencesModel) -> NotificationPreferences:
        return NotificationPreferences(
            id=model.id,
            user_id=model.user_id,
            channels={k: dict(v) for k, v in (model.channels or {}).items()},
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )
