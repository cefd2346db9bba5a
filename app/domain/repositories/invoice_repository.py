"""Invoice repository interface.
Defines the contract for gig invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.invoice import GigInvoice


class InvoiceRepository(ABC):
    """
    Repository interface for gig invoices.
    At most one invoice is stored per (gig, chef).
    """

    @abstractmethod
    def save(self, invoice: GigInvoice) -> GigInvoice:
        """
        Save an invoice entity.
        Raises DuplicateEntityError when the chef already invoiced the gig.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Optional[GigInvoice]:
        """
        Find an invoice by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_gig_and_chef(self, gig_id: str, chef_id: str) -> Optional[GigInvoice]:
        """
        Find the invoice a chef submitted for a gig.
        Used for uniqueness checks.
        """
        pass

    @abstractmethod
    def list_by_chef(self, chef_id: str) -> List[GigInvoice]:
        """
        Find all invoices submitted by a chef, newest first.
        """
        pass

    @abstractmethod
    def list_by_business(self, business_id: str) -> List[GigInvoice]:
        """
        Find all invoices addressed to a business, newest first.
        """
        pass
