"""
Domain events for the invoice lifecycle.
"""

from dataclasses import dataclass
from decimal import Decimal

from .base import DomainEvent


@dataclass
class InvoiceSubmitted(DomainEvent):
    """A chef invoiced a business for a gig."""

    invoice_id: str
    gig_id: str
    gig_title: str
    chef_id: str
    chef_name: str
    business_id: str
    hours_worked: Decimal
    rate_per_hour: Decimal
    total_amount: Decimal


@dataclass
class InvoicePaid(DomainEvent):
    """A business, or a finance member acting for it, marked an invoice paid."""

    invoice_id: str
    gig_id: str
    gig_title: str
    chef_id: str
    business_id: str
    business_name: str
    total_amount: Decimal
