"""
Event system setup and configuration.
Builds the dispatcher and registers every notification handler.
"""

import logging
from typing import Optional

from app.domain.events.base import EventDispatcher
from app.infrastructure.db.database import Database
from app.infrastructure.email import EmailService
from .notification_handlers import (
    RecipientResolver,
    ApplicationNotificationHandler,
    GigConfirmedNotificationHandler,
    InvoiceNotificationHandler,
    ReviewNotificationHandler,
    CompanyInviteNotificationHandler,
)

logger = logging.getLogger(__name__)


def build_event_dispatcher(
    database: Database,
    email_service: EmailService,
    recipients: Optional[RecipientResolver] = None
) -> EventDispatcher:
    """Create a dispatcher with all notification handlers registered."""

    dispatcher = EventDispatcher()

    application_handler = ApplicationNotificationHandler(database, email_service, recipients)
    gig_handler = GigConfirmedNotificationHandler(database, email_service, recipients)
    invoice_handler = InvoiceNotificationHandler(database, email_service, recipients)
    review_handler = ReviewNotificationHandler(database, email_service, recipients)
    invite_handler = CompanyInviteNotificationHandler(database, email_service, recipients)

    # Application workflow
    dispatcher.register_handler("ApplicationSubmitted", application_handler)
    dispatcher.register_handler("ApplicationAccepted", application_handler)
    dispatcher.register_handler("ApplicationRejected", application_handler)
    dispatcher.register_handler("GigConfirmed", gig_handler)

    # Invoices and reviews
    dispatcher.register_handler("InvoiceSubmitted", invoice_handler)
    dispatcher.register_handler("InvoicePaid", invoice_handler)
    dispatcher.register_handler("ReviewSubmitted", review_handler)

    # Companies
    dispatcher.register_handler("CompanyInviteCreated", invite_handler)

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.debug(f"Event {event_type}: {', '.join(handlers)} handlers")
    logger.info("Event handlers registered successfully")

    return dispatcher
