"""
Notification domain models.
In-app notification records and the per-user channel preferences that decide
whether an event produces an in-app notification, an email, or both.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from app.domain.models.base import BaseEntity, ValidationError, AuthorizationError


class NotificationType(str, Enum):
    """Event types a user can be notified about."""
    CHEF_APPLIED = "chef_applied"
    APPLICATION_ACCEPTED = "application_accepted"
    APPLICATION_REJECTED = "application_rejected"
    GIG_CONFIRMED = "gig_confirmed"
    INVOICE_SUBMITTED = "invoice_submitted"
    INVOICE_PAID = "invoice_paid"
    REVIEW_SUBMITTED = "review_submitted"
    COMPANY_INVITE = "company_invite"


class NotificationChannel(str, Enum):
    IN_APP = "in_app"
    EMAIL = "email"


DEFAULT_CHANNELS: Dict[NotificationType, Dict[str, bool]] = {
    NotificationType.CHEF_APPLIED: {"in_app": True, "email": True},
    NotificationType.APPLICATION_ACCEPTED: {"in_app": True, "email": True},
    NotificationType.APPLICATION_REJECTED: {"in_app": True, "email": False},
    NotificationType.GIG_CONFIRMED: {"in_app": True, "email": True},
    NotificationType.INVOICE_SUBMITTED: {"in_app": True, "email": True},
    NotificationType.INVOICE_PAID: {"in_app": True, "email": True},
    NotificationType.REVIEW_SUBMITTED: {"in_app": True, "email": True},
    NotificationType.COMPANY_INVITE: {"in_app": True, "email": True},
}


@dataclass(eq=False)
class Notification(BaseEntity):
    """In-app notification for one user."""

    user_id: str = ""
    type: NotificationType = NotificationType.GIG_CONFIRMED
    title: str = ""
    body: str = ""
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    link_url: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    is_read: bool = False

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationError("Notification recipient is required", "user_id")
        if not self.title and not self.body:
            raise ValidationError("Notification needs a title or a body", "body")

    def ensure_owned_by(self, user_id: str) -> None:
        if self.user_id != user_id:
            raise AuthorizationError("You can only access your own notifications")

    def mark_read(self) -> None:
        self.is_read = True
        self.mark_as_updated()


@dataclass(eq=False)
class NotificationPreferences(BaseEntity):
    """
    Per-user channel toggles keyed by notification type.
    Types missing from `channels` fall back to DEFAULT_CHANNELS.
    """

    user_id: str = ""
    channels: Dict[str, Dict[str, bool]] = field(default_factory=dict)

    @classmethod
    def defaults_for(cls, user_id: str) -> "NotificationPreferences":
        return cls(user_id=user_id)

    def is_enabled(self, notification_type: NotificationType, channel: NotificationChannel) -> bool:
        configured = self.channels.get(notification_type.value, {})
        if channel.value in configured:
            return bool(configured[channel.value])
        return DEFAULT_CHANNELS[notification_type][channel.value]

    def update(self, changes: Dict[str, Dict[str, bool]]) -> None:
        """Merge channel toggles; unknown types or channels are rejected."""
        known_types = {t.value for t in NotificationType}
        known_channels = {c.value for c in NotificationChannel}
        for type_name, toggles in changes.items():
            if type_name not in known_types:
                raise ValidationError(f"Unknown notification type: {type_name}", "channels")
            for channel_name in toggles:
                if channel_name not in known_channels:
                    raise ValidationError(f"Unknown notification channel: {channel_name}", "channels")
            merged = dict(self.channels.get(type_name, {}))
            merged.update({k: bool(v) for k, v in toggles.items()})
            self.channels[type_name] = merged
        self.mark_as_updated()

    def resolved(self) -> Dict[str, Dict[str, bool]]:
        """Effective toggles for every type, defaults included."""
        return {
            t.value: {
                c.value: self.is_enabled(t, c) for c in NotificationChannel
            }
            for t in NotificationType
        }
