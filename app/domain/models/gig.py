"""
Gig and GigApplication domain models.
A gig is posted by a business; chefs apply and move through a monotonic
status lifecycle: applied -> (shortlisted | rejected) -> accepted -> confirmed.
"""

from dataclasses import dataclass, field
from datetime import date, time, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, FrozenSet

from app.domain.models.base import BaseEntity, ValidationError, BusinessRuleViolation


class ApplicationStatus(str, Enum):
    """Gig application status."""
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    CONFIRMED = "confirmed"


# Statuses a business may set directly; confirmed is reserved for the chef
BUSINESS_SETTABLE_STATUSES: FrozenSet[ApplicationStatus] = frozenset({
    ApplicationStatus.APPLIED,
    ApplicationStatus.SHORTLISTED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.ACCEPTED,
})

ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset({
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    }),
    ApplicationStatus.SHORTLISTED: frozenset({
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACCEPTED,
    }),
    ApplicationStatus.ACCEPTED: frozenset({ApplicationStatus.CONFIRMED}),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.CONFIRMED: frozenset(),
}


@dataclass(eq=False)
class Gig(BaseEntity):
    """
    Gig entity.
    A gig is active until deactivated and booked once an application is confirmed.
    """

    created_by: str = ""  # business user id, also the venue id
    title: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: str = ""
    pay_rate: Decimal = Decimal("0")
    role: str = ""
    venue_type: str = ""

    dress_code: Optional[str] = None
    service_expectations: Optional[str] = None
    kitchen_details: Optional[str] = None
    equipment_provided: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    tips_available: bool = False

    is_active: bool = True
    is_booked: bool = False

    def validate(self) -> None:
        if not self.created_by:
            raise ValidationError("Gig must belong to a business", "created_by")
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required", "title")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date", "end_date")
        if self.pay_rate is None or self.pay_rate < 0:
            raise ValidationError("Pay rate cannot be negative", "pay_rate")

    @property
    def venue_id(self) -> str:
        return self.created_by

    def has_ended(self, today: Optional[date] = None) -> bool:
        """True once the gig's last day is in the past."""
        today = today or datetime.utcnow().date()
        return self.end_date is not None and self.end_date < today

    @property
    def is_open(self) -> bool:
        """Active gigs take applications until a chef confirms."""
        return self.is_active and not self.is_booked

    def mark_booked(self) -> None:
        """Mark the gig as booked after a confirmed application."""
        self.is_booked = True
        self.mark_as_updated()

    def deactivate(self) -> None:
        self.is_active = False
        self.mark_as_updated()


@dataclass(eq=False)
class GigApplication(BaseEntity):
    """
    GigApplication entity.
    Links one chef to one gig.
    """

    gig_id: str = ""
    chef_id: str = ""
    status: ApplicationStatus = ApplicationStatus.APPLIED
    confirmed: bool = False
    message: Optional[str] = None

    def validate(self) -> None:
        if not self.gig_id:
            raise ValidationError("Gig ID is required", "gig_id")
        if not self.chef_id:
            raise ValidationError("Chef ID is required", "chef_id")

    @property
    def applied_at(self) -> datetime:
        return self.created_at

    @property
    def is_terminal(self) -> bool:
        return self.status in (ApplicationStatus.REJECTED, ApplicationStatus.CONFIRMED)

    def can_transition_to(self, new_status: ApplicationStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def change_status(self, new_status: ApplicationStatus) -> None:
        """
        Move the application to a new status set by the business.

        Transitions are monotonic; rejected is terminal and confirmed can only
        be reached through confirm().
        """
        if new_status not in BUSINESS_SETTABLE_STATUSES:
            raise ValidationError(f"Status '{new_status.value}' cannot be set directly", "status")
        if new_status == self.status:
            return
        if not self.can_transition_to(new_status):
            raise BusinessRuleViolation(
                f"Cannot change application status from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.mark_as_updated()

    def accept(self) -> None:
        """Accept this application. Competing applications are rejected by the workflow."""
        if self.status == ApplicationStatus.ACCEPTED:
            raise BusinessRuleViolation("Application is already accepted")
        if self.is_terminal:
            raise BusinessRuleViolation(
                f"Cannot accept an application that is {self.status.value}"
            )
        self.status = ApplicationStatus.ACCEPTED
        self.mark_as_updated()

    def reject(self) -> None:
        if self.status == ApplicationStatus.CONFIRMED:
            raise BusinessRuleViolation("Cannot reject a confirmed application")
        self.status = ApplicationStatus.REJECTED
        self.mark_as_updated()

    def confirm(self) -> None:
        """Chef's final acceptance after being selected."""
        if self.confirmed or self.status == ApplicationStatus.CONFIRMED:
            raise BusinessRuleViolation("Application is already confirmed")
        if self.status != ApplicationStatus.ACCEPTED:
            raise BusinessRuleViolation("Application must be accepted before it can be confirmed")
        self.status = ApplicationStatus.CONFIRMED
        self.confirmed = True
        self.mark_as_updated()
