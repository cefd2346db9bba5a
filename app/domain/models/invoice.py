"""
GigInvoice domain model.
Chefs invoice the business after a confirmed gig; the business marks it paid.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from app.domain.models.base import BaseEntity, ValidationError, BusinessRuleViolation

TWO_PLACES = Decimal("0.01")


class InvoiceStatus(str, Enum):
    """Invoice status."""
    SUBMITTED = "submitted"
    PAID = "paid"


def calculate_total(hours_worked: Decimal, rate_per_hour: Decimal) -> Decimal:
    """Hours times hourly rate, rounded to pence."""
    return (Decimal(hours_worked) * Decimal(rate_per_hour)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(eq=False)
class GigInvoice(BaseEntity):
    """
    GigInvoice entity.
    At most one invoice exists per (gig, chef).
    """

    gig_id: str = ""
    chef_id: str = ""
    business_id: str = ""
    hours_worked: Decimal = Decimal("0")
    rate_per_hour: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    notes: Optional[str] = None

    payment_method: str = "bank"
    sort_code: Optional[str] = None
    account_number: Optional[str] = None
    is_manual: bool = False

    status: InvoiceStatus = InvoiceStatus.SUBMITTED
    paid_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        if not self.total_amount:
            self.total_amount = calculate_total(self.hours_worked, self.rate_per_hour)

    def validate(self) -> None:
        if not self.gig_id:
            raise ValidationError("Gig ID is required", "gig_id")
        if not self.chef_id:
            raise ValidationError("Chef ID is required", "chef_id")
        if not self.business_id:
            raise ValidationError("Business ID is required", "business_id")
        if self.hours_worked <= 0:
            raise ValidationError("Hours worked must be greater than zero", "hours_worked")
        if self.rate_per_hour < 0:
            raise ValidationError("Rate per hour cannot be negative", "rate_per_hour")

    @property
    def submitted_at(self) -> datetime:
        return self.created_at

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    def mark_paid(self, paid_at: Optional[datetime] = None) -> None:
        if self.is_paid:
            raise BusinessRuleViolation("Invoice is already paid")
        self.status = InvoiceStatus.PAID
        self.paid_at = paid_at or datetime.utcnow()
        self.mark_as_updated()
