"""
Invoice repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import desc

from app.domain.models.base import DuplicateEntityError
from app.domain.models.invoice import GigInvoice
from app.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from app.infrastructure.db.models import GigInvoiceModel
from app.infrastructure.mappers.invoice_mapper import InvoiceMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyInvoiceRepository(SQLAlchemyRepository, InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    model = GigInvoiceModel
    mapper = InvoiceMapper()

    def save(self, invoice: GigInvoice) -> GigInvoice:
        """Save an invoice entity."""
        return self._save(
            invoice,
            lambda: DuplicateEntityError(
                "Invoice", "gig_id", invoice.gig_id,
                message="Invoice already exists for this gig"
            )
        )

    def get_by_id(self, invoice_id: str) -> Optional[GigInvoice]:
        """Get invoice by ID."""
        model = self.session.query(GigInvoiceModel).filter_by(id=invoice_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_gig_and_chef(self, gig_id: str, chef_id: str) -> Optional[GigInvoice]:
        model = self.session.query(GigInvoiceModel).filter_by(
            gig_id=gig_id,
            chef_id=chef_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_chef(self, chef_id: str) -> List[GigInvoice]:
        models = self.session.query(GigInvoiceModel).filter_by(
            chef_id=chef_id
        ).order_by(desc(GigInvoiceModel.submitted_at)).all()
        return self._to_domain_list(models)

    def list_by_business(self, business_id: str) -> List[GigInvoice]:
        models = self.session.query(GigInvoiceModel).filter_by(
            business_id=business_id
        ).order_by(desc(GigInvoiceModel.submitted_at)).all()
        return self._to_domain_list(models)
