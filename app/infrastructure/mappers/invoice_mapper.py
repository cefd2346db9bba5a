"""
Invoice mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from app.domain.models.invoice import GigInvoice, InvoiceStatus
from app.infrastructure.db.models import GigInvoiceModel
from .converters import naive_utc


class InvoiceMapper:
    """Maps between GigInvoice domain entity and GigInvoiceModel."""

    def domain_to_model(self, invoice: GigInvoice) -> GigInvoiceModel:
        return GigInvoiceModel(
            id=invoice.id,
            gig_id=invoice.gig_id,
            chef_id=invoice.chef_id,
            business_id=invoice.business_id,
            hours_worked=invoice.hours_worked,
            rate_per_hour=invoice.rate_per_hour,
            total_amount=invoice.total_amount,
            notes=invoice.notes,
            payment_method=invoice.payment_method,
            sort_code=invoice.sort_code,
            account_number=invoice.account_number,
            is_manual=invoice.is_manual,
            status=invoice.status,
            submitted_at=invoice.created_at,
            paid_at=invoice.paid_at,
            updated_at=invoice.updated_at,
        )

    def model_to_domain(self, model: GigInvoiceModel) -> GigInvoice:
        return GigInvoice(
            id=model.id,
            gig_id=model.gig_id,
            chef_id=model.chef_id,
            business_id=model.business_id,
            hours_worked=Decimal(model.hours_worked),
            rate_per_hour=Decimal(model.rate_per_hour),
            total_amount=Decimal(model.total_amount),
            notes=model.notes,
            payment_method=model.payment_method or "bank",
            sort_code=model.sort_code,
            account_number=model.account_number,
            is_manual=bool(model.is_manual),
            status=InvoiceStatus(model.status),
            paid_at=naive_utc(model.paid_at),
            created_at=naive_utc(model.submitted_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.submitted_at),
        )
