"""
Infrastructure event handlers.
Turns committed domain events into in-app notifications and emails.
"""

from .notification_handlers import (
    RecipientResolver,
    NotificationHandler,
    ApplicationNotificationHandler,
    GigConfirmedNotificationHandler,
    InvoiceNotificationHandler,
    ReviewNotificationHandler,
    CompanyInviteNotificationHandler,
)
from .event_setup import build_event_dispatcher

__all__ = [
    "RecipientResolver",
    "NotificationHandler",
    "ApplicationNotificationHandler",
    "GigConfirmedNotificationHandler",
    "InvoiceNotificationHandler",
    "ReviewNotificationHandler",
    "CompanyInviteNotificationHandler",
    "build_event_dispatcher",
]
