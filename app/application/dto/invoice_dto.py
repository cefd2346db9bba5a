"""
Invoice DTOs for the application layer.
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, ResponseDTO, BaseDTO
from app.domain.models.invoice import GigInvoice, InvoiceStatus
from app.infrastructure.validation.validators import BankDetailsValidator, clean_text, optional


class CreateInvoiceRequestDTO(CreateRequestDTO):
    """
    DTO for a chef invoicing a gig.

    rate_per_hour falls back to the gig's pay rate. Bank details in the body
    are only used for manual invoices; otherwise the chef profile supplies them.
    """

    gig_id: str = Field(min_length=1)
    hours_worked: Decimal = Field(gt=0, le=1000, max_digits=7, decimal_places=2)
    rate_per_hour: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = Field(default=None, max_length=2000)
    payment_method: Optional[str] = Field(default=None, pattern=r'^(stripe|bank)$')
    is_manual: bool = False
    sort_code: Optional[str] = None
    account_number: Optional[str] = None

    @validator('notes', pre=True)
    def sanitize_notes(cls, v):
        return clean_text(v)

    @validator('sort_code', pre=True)
    def validate_sort_code(cls, v):
        return optional(BankDetailsValidator.validate_sort_code)(v)

    @validator('account_number', pre=True)
    def validate_account_number(cls, v):
        return optional(BankDetailsValidator.validate_account_number)(v)


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    gig_id: str
    chef_id: str
    business_id: str
    hours_worked: Decimal
    rate_per_hour: Decimal
    total_amount: Decimal
    notes: Optional[str] = None
    payment_method: str = "bank"
    sort_code: Optional[str] = None
    account_number: Optional[str] = None
    is_manual: bool = False
    status: InvoiceStatus
    submitted_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    gig_title: Optional[str] = None
    chef_name: Optional[str] = None
    business_name: Optional[str] = None

    @classmethod
    def from_domain(
        cls,
        invoice: GigInvoice,
        gig_title: Optional[str] = None,
        chef_name: Optional[str] = None,
        business_name: Optional[str] = None
    ) -> "InvoiceResponseDTO":
        return cls(
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
            submitted_at=invoice.submitted_at,
            paid_at=invoice.paid_at,
            gig_title=gig_title,
            chef_name=chef_name,
            business_name=business_name,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceCheckResponseDTO(BaseDTO):
    exists: bool
    invoice: Optional[InvoiceResponseDTO] = None


class InvoiceListResponseDTO(BaseDTO):
    invoices: List[InvoiceResponseDTO]
    total: int
