"""
Domain events for the application.
Event-driven architecture components for notifications.
"""

from .base import DomainEvent, EventHandler, EventDispatcher
from .gig_events import (
    ApplicationSubmitted,
    ApplicationAccepted,
    ApplicationRejected,
    GigConfirmed,
    ReviewSubmitted,
)
from .invoice_events import InvoiceSubmitted, InvoicePaid
from .company_events import CompanyInviteCreated

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "ApplicationSubmitted",
    "ApplicationAccepted",
    "ApplicationRejected",
    "GigConfirmed",
    "ReviewSubmitted",
    "InvoiceSubmitted",
    "InvoicePaid",
    "CompanyInviteCreated",
]
