"""
Invoice router.
Chefs invoice venues for completed gigs; venues mark invoices as paid.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, status, Query

from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.web.dependencies import provide
from app.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    CheckInvoiceUseCase,
    ListChefInvoicesUseCase,
    ListBusinessInvoicesUseCase,
    MarkInvoicePaidUseCase,
    CheckInvoiceQuery,
)
from app.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    InvoiceResponseDTO,
    InvoiceCheckResponseDTO,
    InvoiceListResponseDTO,
)


router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InvoiceResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def create_invoice(
    request: CreateInvoiceRequestDTO,
    use_case: Annotated[CreateInvoiceUseCase, Depends(provide(CreateInvoiceUseCase))]
):
    """
    Submit an invoice for a gig as the calling chef.

    - **gig_id**: Gig being invoiced (one invoice per gig and chef)
    - **hours_worked**: Hours worked, greater than zero
    - **rate_per_hour**: Defaults to the gig's pay rate
    - **is_manual**: Use the bank details sent here instead of the profile's
    """
    return await use_case.execute(request)


@router.get("/check", response_model=InvoiceCheckResponseDTO)
async def check_invoice(
    use_case: Annotated[CheckInvoiceUseCase, Depends(provide(CheckInvoiceUseCase))],
    gig_id: str = Query(..., min_length=1),
    chef_id: str = Query(..., min_length=1)
):
    """Whether a chef already invoiced a gig."""
    return await use_case.execute(CheckInvoiceQuery(gig_id=gig_id, chef_id=chef_id))


@router.get("/chef/{chef_id}", response_model=InvoiceListResponseDTO)
async def list_chef_invoices(
    chef_id: str,
    use_case: Annotated[ListChefInvoicesUseCase, Depends(provide(ListChefInvoicesUseCase))]
):
    return await use_case.execute(chef_id)


@router.get("/business/{business_id}", response_model=InvoiceListResponseDTO)
async def list_business_invoices(
    business_id: str,
    use_case: Annotated[ListBusinessInvoicesUseCase, Depends(provide(ListBusinessInvoicesUseCase))]
):
    """Invoices received by a venue, for its owner and linked company staff."""
    return await use_case.execute(business_id)


@router.put("/{invoice_id}/mark-paid", response_model=InvoiceResponseDTO)
async def mark_invoice_paid(
    invoice_id: str,
    use_case: Annotated[MarkInvoicePaidUseCase, Depends(provide(MarkInvoicePaidUseCase))]
):
    return await use_case.execute(invoice_id)
