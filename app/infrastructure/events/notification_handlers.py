"""
Event handlers for in-app and email notifications.
Converts committed domain events into notification records and emails,
honouring each recipient's channel preferences.
"""

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, Optional

from app.domain.events.base import EventHandler, DomainEvent
from app.domain.events.gig_events import (
    ApplicationSubmitted,
    ApplicationAccepted,
    ApplicationRejected,
    GigConfirmed,
    ReviewSubmitted,
)
from app.domain.events.invoice_events import InvoiceSubmitted, InvoicePaid
from app.domain.events.company_events import CompanyInviteCreated
from app.domain.models.notification import (
    Notification,
    NotificationChannel,
    NotificationPreferences,
    NotificationType,
)
from app.domain.repositories.unit_of_work import UnitOfWork
from app.infrastructure.db.database import Database
from app.infrastructure.email import EmailService
from app.infrastructure.repositories.unit_of_work import SQLAlchemyUnitOfWork


logger = logging.getLogger(__name__)

EmailLookup = Callable[[str], Optional[str]]


def format_gbp(amount: Decimal) -> str:
    return f"£{Decimal(str(amount)):.2f}"


class RecipientResolver:
    """
    Finds the email address of a notification recipient.
    Business contact emails come first; the identity provider is asked otherwise.
    """

    def __init__(self, email_lookup: Optional[EmailLookup] = None):
        self.email_lookup = email_lookup

    async def email_for_user(self, user_id: str) -> Optional[str]:
        if self.email_lookup is None:
            return None
        return await asyncio.to_thread(self.email_lookup, user_id)

    async def email_for_business(self, business_id: str, contact_email: Optional[str]) -> Optional[str]:
        if contact_email:
            return contact_email
        return await self.email_for_user(business_id)


@dataclass
class Notice:
    """An in-app notification about to be written for one user."""
    user_id: str
    type: NotificationType
    title: str
    body: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    link_url: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_notification(self) -> Notification:
        notification = Notification(
            user_id=self.user_id,
            type=self.type,
            title=self.title,
            body=self.body,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            link_url=self.link_url,
            meta=self.meta,
        )
        notification.validate()
        return notification


class NotificationHandler(EventHandler):
    """
    Base handler for notification events.
    Each event is handled in its own session, separate from the request that
    raised it.
    """

    def __init__(
        self,
        database: Database,
        email_service: EmailService,
        recipients: Optional[RecipientResolver] = None
    ):
        self.database = database
        self.email_service = email_service
        self.recipients = recipients or RecipientResolver()

    @contextmanager
    def _unit_of_work(self) -> Iterator[UnitOfWork]:
        with self.database.session_scope() as session:
            yield SQLAlchemyUnitOfWork(session)

    def _preferences(self, uow: UnitOfWork, user_id: str) -> NotificationPreferences:
        return uow.notification_preferences.get_by_user(user_id) or NotificationPreferences.defaults_for(user_id)

    def _notify_in_app(self, uow: UnitOfWork, preferences: NotificationPreferences, notice: Notice) -> bool:
        """Write the notification if the recipient keeps the in-app channel on."""
        if not preferences.is_enabled(notice.type, NotificationChannel.IN_APP):
            logger.debug(f"In-app {notice.type.value} disabled for user {notice.user_id}")
            return False
        uow.notifications.save(notice.to_notification())
        return True

    def _log_email_result(self, kind: str, recipient: str, result: Dict[str, Any]) -> None:
        if result.get("success"):
            logger.info(f"{kind} email sent to {recipient}")
        else:
            logger.error(f"Failed to send {kind} email: {result.get('error')}")


class ApplicationNotificationHandler(NotificationHandler):
    """In-app notifications for the application workflow."""

    event_types = (ApplicationSubmitted, ApplicationAccepted, ApplicationRejected)

    async def handle(self, event: DomainEvent) -> None:
        with self._unit_of_work() as uow:
            notice = self._build_notice(uow, event)
            if notice is None:
                return
            self._notify_in_app(uow, self._preferences(uow, notice.user_id), notice)

    def _build_notice(self, uow: UnitOfWork, event: DomainEvent) -> Optional[Notice]:
        if isinstance(event, ApplicationSubmitted):
            chef = uow.chefs.get_by_id(event.chef_id)
            chef_name = chef.full_name if chef else "A chef"
            return Notice(
                user_id=event.business_id,
                type=NotificationType.CHEF_APPLIED,
                title="New application",
                body=f"{chef_name} applied to your gig: {event.gig_title}",
                entity_type="application",
                entity_id=event.application_id,
                link_url=f"/gigs/{event.gig_id}/applications",
                meta={"gig_id": event.gig_id, "chef_id": event.chef_id},
            )
        if isinstance(event, ApplicationAccepted):
            return Notice(
                user_id=event.chef_id,
                type=NotificationType.APPLICATION_ACCEPTED,
                title="Application accepted",
                body=f"You have been accepted for {event.gig_title}. Confirm to book the gig.",
                entity_type="application",
                entity_id=event.application_id,
                link_url=f"/gigs/view/{event.gig_id}",
                meta={"gig_id": event.gig_id},
            )
        if isinstance(event, ApplicationRejected):
            return Notice(
                user_id=event.chef_id,
                type=NotificationType.APPLICATION_REJECTED,
                title="Application update",
                body=f"Your application for {event.gig_title} was not successful.",
                entity_type="application",
                entity_id=event.application_id,
                meta={"gig_id": event.gig_id},
            )
        return None


class GigConfirmedNotificationHandler(NotificationHandler):
    """Tells the business that a chef confirmed and the gig is booked."""

    event_types = (GigConfirmed,)

    async def handle(self, event: GigConfirmed) -> None:
        with self._unit_of_work() as uow:
            preferences = self._preferences(uow, event.business_id)
            self._notify_in_app(uow, preferences, Notice(
                user_id=event.business_id,
                type=NotificationType.GIG_CONFIRMED,
                title="Gig confirmed",
                body=f"Chef {event.chef_first_name} has confirmed the gig: {event.gig_title}",
                entity_type="gig",
                entity_id=event.gig_id,
                link_url=f"/gigs/view/{event.gig_id}",
                meta={"application_id": event.application_id, "chef_id": event.chef_id},
            ))
            if not preferences.is_enabled(NotificationType.GIG_CONFIRMED, NotificationChannel.EMAIL):
                return
            business = uow.businesses.get_by_id(event.business_id)

        business_name = business.business_name if business else "there"
        recipient = await self.recipients.email_for_business(
            event.business_id, business.contact_email if business else None
        )
        if not recipient:
            logger.warning(f"No email address for business {event.business_id}, skipping gig confirmation email")
            return

        result = await self.email_service.send_gig_confirmed(
            to=recipient,
            business_name=business_name,
            chef_first_name=event.chef_first_name,
            gig_title=event.gig_title,
            gig_id=event.gig_id,
        )
        self._log_email_result("Gig confirmation", recipient, result)


class InvoiceNotificationHandler(NotificationHandler):
    """Handler for invoice-related notifications."""

    event_types = (InvoiceSubmitted, InvoicePaid)

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, InvoiceSubmitted):
            await self._handle_invoice_submitted(event)
        elif isinstance(event, InvoicePaid):
            await self._handle_invoice_paid(event)

    async def _handle_invoice_submitted(self, event: InvoiceSubmitted) -> None:
        """Notify the business that a chef has invoiced them."""
        with self._unit_of_work() as uow:
            business = uow.businesses.get_by_id(event.business_id)
            business_name = business.business_name if business else "Business"
            preferences = self._preferences(uow, event.business_id)
            self._notify_in_app(uow, preferences, Notice(
                user_id=event.business_id,
                type=NotificationType.INVOICE_SUBMITTED,
                title="New invoice received",
                body=f"{event.chef_name} submitted an invoice for {format_gbp(event.total_amount)}.",
                entity_type="invoice",
                entity_id=event.invoice_id,
                link_url="/business/invoices",
                meta={
                    "amount": str(event.total_amount),
                    "chef_name": event.chef_name,
                    "business_name": business_name,
                    "invoice_id": event.invoice_id,
                },
            ))
            if not preferences.is_enabled(NotificationType.INVOICE_SUBMITTED, NotificationChannel.EMAIL):
                return

        if business is None:
            logger.error(f"Business profile {event.business_id} not found, skipping invoice email")
            return
        recipient = await self.recipients.email_for_business(event.business_id, business.contact_email)
        if not recipient:
            logger.warning(f"No email address for business {event.business_id}, skipping invoice email")
            return

        result = await self.email_service.send_invoice_submitted(
            to=recipient,
            business_name=business_name,
            chef_name=event.chef_name,
            invoice_id=event.invoice_id,
            amount=event.total_amount,
            gig_title=event.gig_title,
        )
        self._log_email_result("Invoice submitted", recipient, result)

    async def _handle_invoice_paid(self, event: InvoicePaid) -> None:
        """Tell the chef their invoice was paid."""
        with self._unit_of_work() as uow:
            chef = uow.chefs.get_by_id(event.chef_id)
            preferences = self._preferences(uow, event.chef_id)
            self._notify_in_app(uow, preferences, Notice(
                user_id=event.chef_id,
                type=NotificationType.INVOICE_PAID,
                title="Invoice paid",
                body=f"{event.business_name} marked your invoice as paid for {format_gbp(event.total_amount)}.",
                entity_type="invoice",
                entity_id=event.invoice_id,
                link_url="/chef/invoices",
                meta={
                    "amount": str(event.total_amount),
                    "business_name": event.business_name,
                    "invoice_id": event.invoice_id,
                },
            ))
            if not preferences.is_enabled(NotificationType.INVOICE_PAID, NotificationChannel.EMAIL):
                return

        recipient = await self.recipients.email_for_user(event.chef_id)
        if not recipient:
            logger.warning(f"No email address for chef {event.chef_id}, skipping payment email")
            return

        result = await self.email_service.send_invoice_paid(
            to=recipient,
            chef_name=chef.full_name if chef else "Chef",
            business_name=event.business_name,
            invoice_id=event.invoice_id,
            amount=event.total_amount,
        )
        self._log_email_result("Invoice paid", recipient, result)


class ReviewNotificationHandler(NotificationHandler):
    event_types = (ReviewSubmitted,)

    async def handle(self, event: ReviewSubmitted) -> None:
        with self._unit_of_work() as uow:
            gig = uow.gigs.get_by_id(event.gig_id)
            gig_title = gig.title if gig else "a gig"
            self._notify_in_app(uow, self._preferences(uow, event.recipient_id), Notice(
                user_id=event.recipient_id,
                type=NotificationType.REVIEW_SUBMITTED,
                title="New review",
                body=f"You received a {event.rating}-star review for {gig_title}.",
                entity_type="review",
                entity_id=event.review_id,
                meta={"gig_id": event.gig_id, "rating": event.rating},
            ))


class CompanyInviteNotificationHandler(NotificationHandler):
    """Emails the invitee of a venue access invite."""

    event_types = (CompanyInviteCreated,)

    async def handle(self, event: CompanyInviteCreated) -> None:
        with self._unit_of_work() as uow:
            # The invitee may not have an account yet, so the inviter's toggle decides
            preferences = self._preferences(uow, event.invited_by)
        if not preferences.is_enabled(NotificationType.COMPANY_INVITE, NotificationChannel.EMAIL):
            logger.info(f"Invite emails disabled by user {event.invited_by}, invite {event.invite_id} not emailed")
            return

        result = await self.email_service.send_company_invite(
            to=event.invitee_email,
            business_name=event.business_name,
            role=event.role,
            token=event.token,
            expires_at=event.expires_at,
        )
        self._log_email_result("Company invite", event.invitee_email, result)
