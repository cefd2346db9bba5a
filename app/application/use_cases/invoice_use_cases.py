"""
Invoice use cases for the application layer.
Chefs invoice a gig once; the business side marks invoices paid.
"""

import logging
from dataclasses import dataclass
from typing import List

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO, InvoiceResponseDTO, InvoiceCheckResponseDTO, InvoiceListResponseDTO
)
from app.domain.events.invoice_events import InvoiceSubmitted, InvoicePaid
from app.domain.models.base import EntityNotFoundError, AuthorizationError, DuplicateEntityError
from app.domain.models.company import CompanyRole
from app.domain.models.invoice import GigInvoice
from app.domain.models.profile import PaymentMethod
from app.domain.services.access_policy import VENUE_OPERATOR_ROLES

logger = logging.getLogger(__name__)

# Finance members may settle invoices on top of the venue operators
INVOICE_ROLES = VENUE_OPERATOR_ROLES | {CompanyRole.FINANCE}


@dataclass
class CheckInvoiceQuery:
    gig_id: str
    chef_id: str


class CreateInvoiceUseCase(CommandUseCase[CreateInvoiceRequestDTO, InvoiceResponseDTO]):
    """
    Use case for a chef submitting an invoice for a gig.

    The total is computed from hours and rate. Bank details come from the
    request for manual invoices and from the chef profile otherwise.
    """

    async def _execute_command_logic(self, request: CreateInvoiceRequestDTO) -> InvoiceResponseDTO:
        chef_id = self._require_user()

        gig = self.uow.gigs.get_by_id(request.gig_id)
        if gig is None:
            raise EntityNotFoundError("Gig", request.gig_id)

        if self.uow.invoices.get_by_gig_and_chef(gig.id, chef_id) is not None:
            raise DuplicateEntityError(
                "Invoice", "gig_id", gig.id, "Invoice already exists for this gig"
            )

        chef = self.uow.chefs.get_by_id(chef_id)
        if chef is None:
            raise EntityNotFoundError("Chef profile", chef_id)

        if request.is_manual and request.sort_code and request.account_number:
            sort_code, account_number = request.sort_code, request.account_number
        else:
            sort_code, account_number = chef.bank_sort_code, chef.bank_account_number

        payment_method = request.payment_method or (
            chef.payment_method.value if chef.payment_method else PaymentMethod.BANK.value
        )

        invoice = GigInvoice(
            gig_id=gig.id,
            chef_id=chef_id,
            business_id=gig.created_by,
            hours_worked=request.hours_worked,
            rate_per_hour=request.rate_per_hour if request.rate_per_hour is not None else gig.pay_rate,
            notes=request.notes,
            payment_method=payment_method,
            sort_code=sort_code,
            account_number=account_number,
            is_manual=request.is_manual,
        )
        invoice.validate()
        saved = self.uow.invoices.save(invoice)
        logger.info(f"Invoice {saved.id} submitted for gig {gig.id}: {saved.total_amount}")

        self._record_event(InvoiceSubmitted(
            invoice_id=saved.id,
            gig_id=gig.id,
            gig_title=gig.title,
            chef_id=chef_id,
            chef_name=chef.full_name,
            business_id=saved.business_id,
            hours_worked=saved.hours_worked,
            rate_per_hour=saved.rate_per_hour,
            total_amount=saved.total_amount,
        ))
        return InvoiceResponseDTO.from_domain(saved, gig_title=gig.title, chef_name=chef.full_name)


class CheckInvoiceUseCase(QueryUseCase[CheckInvoiceQuery, InvoiceCheckResponseDTO]):
    """Whether a chef has already invoiced a gig."""

    async def _execute_query(self, request: CheckInvoiceQuery) -> InvoiceCheckResponseDTO:
        user_id = self._require_user()
        invoice = self.uow.invoices.get_by_gig_and_chef(request.gig_id, request.chef_id)

        if user_id != request.chef_id:
            if invoice is None:
                raise AuthorizationError("You can only check your own invoices")
            self.access.can_access_venue(user_id, invoice.business_id, INVOICE_ROLES).ensure()

        return InvoiceCheckResponseDTO(
            exists=invoice is not None,
            invoice=InvoiceResponseDTO.from_domain(invoice) if invoice else None,
        )


class ListChefInvoicesUseCase(QueryUseCase[str, InvoiceListResponseDTO]):
    async def _execute_query(self, chef_id: str) -> InvoiceListResponseDTO:
        if self._require_user() != chef_id:
            raise AuthorizationError("You can only view your own invoices")

        invoices = self.uow.invoices.list_by_chef(chef_id)
        gigs = {g.id: g for g in self.uow.gigs.get_by_ids(list({i.gig_id for i in invoices}))}
        businesses = {
            b.id: b.business_name
            for b in self.uow.businesses.get_by_ids(list({i.business_id for i in invoices}))
        }
        items = [
            InvoiceResponseDTO.from_domain(
                i,
                gig_title=gigs[i.gig_id].title if i.gig_id in gigs else None,
                business_name=businesses.get(i.business_id),
            )
            for i in invoices
        ]
        return InvoiceListResponseDTO(invoices=items, total=len(items))


class ListBusinessInvoicesUseCase(QueryUseCase[str, InvoiceListResponseDTO]):
    """Invoices addressed to a venue, for its owner and company operators."""

    async def _execute_query(self, business_id: str) -> InvoiceListResponseDTO:
        self.access.can_access_venue(self._require_user(), business_id, INVOICE_ROLES).ensure(
            "You don't have access to this venue's invoices"
        )

        invoices = self.uow.invoices.list_by_business(business_id)
        gigs = {g.id: g for g in self.uow.gigs.get_by_ids(list({i.gig_id for i in invoices}))}
        chef_names = {}
        for chef_id in {i.chef_id for i in invoices}:
            chef = self.uow.chefs.get_by_id(chef_id)
            if chef is not None:
                chef_names[chef_id] = chef.full_name

        items = [
            InvoiceResponseDTO.from_domain(
                i,
                gig_title=gigs[i.gig_id].title if i.gig_id in gigs else None,
                chef_name=chef_names.get(i.chef_id),
            )
            for i in invoices
        ]
        return InvoiceListResponseDTO(invoices=items, total=len(items))


class MarkInvoicePaidUseCase(CommandUseCase[str, InvoiceResponseDTO]):
    """Business side settles an invoice; the chef is notified after commit."""

    async def _execute_command_logic(self, invoice_id: str) -> InvoiceResponseDTO:
        invoice = self.uow.invoices.get_by_id(invoice_id)
        if invoice is None:
            raise EntityNotFoundError("Invoice", invoice_id)

        self.access.can_access_venue(self._require_user(), invoice.business_id, INVOICE_ROLES).ensure(
            "Only the invoiced business can mark this invoice as paid"
        )

        invoice.mark_paid()
        saved = self.uow.invoices.save(invoice)

        gig = self.uow.gigs.get_by_id(saved.gig_id)
        business = self.uow.businesses.get_by_id(saved.business_id)
        business_name = business.business_name if business else "Business"
        gig_title = gig.title if gig else ""

        self._record_event(InvoicePaid(
            invoice_id=saved.id,
            gig_id=saved.gig_id,
            gig_title=gig_title,
            chef_id=saved.chef_id,
            business_id=saved.business_id,
            business_name=business_name,
            total_amount=saved.total_amount,
        ))
        return InvoiceResponseDTO.from_domain(saved, gig_title=gig_title, business_name=business_name)
