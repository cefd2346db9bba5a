"""
Unit tests for invoice and review use cases.
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

from app.application.dto.invoice_dto import CreateInvoiceRequestDTO
from app.application.dto.review_dto import CreateReviewRequestDTO
from app.application.use_cases.invoice_use_cases import (
    CreateInvoiceUseCase,
    CheckInvoiceUseCase,
    ListBusinessInvoicesUseCase,
    MarkInvoicePaidUseCase,
    CheckInvoiceQuery,
)
from app.application.use_cases.review_use_cases import (
    SubmitReviewUseCase,
    ListPendingReviewsUseCase,
    GetAverageRatingUseCase,
)
from app.domain.events.invoice_events import InvoiceSubmitted, InvoicePaid
from app.domain.models.base import (
    AuthorizationError, BusinessRuleViolation, DuplicateEntityError, EntityNotFoundError
)
from app.domain.models.company import Company, CompanyMember, CompanyRole, BusinessCompanyLink
from app.domain.models.gig import ApplicationStatus
from app.domain.models.profile import PaymentMethod
from tests.factories import add_chef, add_business, add_gig, add_application


def as_user(use_case, user_id):
    use_case.set_current_user(user_id)
    return use_case


def link_company_member(uow, user_id, role, venue_id="biz-1"):
    company = uow.companies.save(Company(name="Harbour Group", owner_user_id="owner-1"))
    uow.companies.add_member(CompanyMember(company_id=company.id, user_id=user_id, role=role))
    uow.company_links.save(BusinessCompanyLink(business_id=venue_id, company_id=company.id))
    uow.commit()
    return company


class TestCreateInvoice:
    """Test cases for chefs invoicing a gig."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    def _seed(self, uow):
        add_business(uow)
        add_chef(
            uow,
            payment_method=PaymentMethod.BANK,
            bank_sort_code="123456",
            bank_account_number="12345678",
        )
        return add_gig(uow)

    @pytest.mark.asyncio
    async def test_invoice_uses_gig_rate_and_profile_bank_details(self, uow):
        gig = self._seed(uow)

        result = await as_user(CreateInvoiceUseCase(uow, self.dispatcher), "chef-1").execute(
            CreateInvoiceRequestDTO(gig_id=gig.id, hours_worked=Decimal("8"))
        )

        assert Decimal(result.total_amount) == Decimal("120.00")
        assert Decimal(result.rate_per_hour) == Decimal("15.00")
        assert result.sort_code == "123456"
        assert result.payment_method == "bank"
        event = self.dispatcher.dispatch_all.await_args.args[0][0]
        assert isinstance(event, InvoiceSubmitted)
        assert event.business_id == "biz-1"
        assert event.chef_name == "Jamie Oliver"

    @pytest.mark.asyncio
    async def test_manual_invoice_uses_request_bank_details(self, uow):
        gig = self._seed(uow)

        result = await as_user(CreateInvoiceUseCase(uow), "chef-1").execute(CreateInvoiceRequestDTO(
            gig_id=gig.id,
            hours_worked=Decimal("5"),
            rate_per_hour=Decimal("20"),
            is_manual=True,
            sort_code="65-43-21",
            account_number="87654321",
        ))

        assert Decimal(result.total_amount) == Decimal("100.00")
        assert result.sort_code == "654321"
        assert result.account_number == "87654321"

    @pytest.mark.asyncio
    async def test_one_invoice_per_gig(self, uow):
        gig = self._seed(uow)
        request = CreateInvoiceRequestDTO(gig_id=gig.id, hours_worked=Decimal("8"))
        await as_user(CreateInvoiceUseCase(uow), "chef-1").execute(request)

        with pytest.raises(DuplicateEntityError, match="Invoice already exists"):
            await as_user(CreateInvoiceUseCase(uow), "chef-1").execute(request)

    @pytest.mark.asyncio
    async def test_unknown_gig(self, uow):
        with pytest.raises(EntityNotFoundError):
            await as_user(CreateInvoiceUseCase(uow), "chef-1").execute(
                CreateInvoiceRequestDTO(gig_id="missing", hours_worked=Decimal("1"))
            )


class TestInvoiceSettlement:
    """Test cases for the business side of invoices."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    async def _submit(self, uow):
        add_business(uow)
        add_chef(uow)
        gig = add_gig(uow)
        return await as_user(CreateInvoiceUseCase(uow), "chef-1").execute(
            CreateInvoiceRequestDTO(gig_id=gig.id, hours_worked=Decimal("8"))
        )

    @pytest.mark.asyncio
    async def test_owner_marks_paid(self, uow):
        invoice = await self._submit(uow)

        result = await as_user(MarkInvoicePaidUseCase(uow, self.dispatcher), "biz-1").execute(invoice.id)

        assert result.status == "paid"
        assert result.paid_at is not None
        event = self.dispatcher.dispatch_all.await_args.args[0][0]
        assert isinstance(event, InvoicePaid)
        assert event.business_name == "The Anchor"
        assert event.chef_id == "chef-1"

    @pytest.mark.asyncio
    async def test_paying_twice_fails(self, uow):
        invoice = await self._submit(uow)
        await as_user(MarkInvoicePaidUseCase(uow), "biz-1").execute(invoice.id)

        with pytest.raises(BusinessRuleViolation, match="already paid"):
            await as_user(MarkInvoicePaidUseCase(uow), "biz-1").execute(invoice.id)

    @pytest.mark.asyncio
    async def test_chef_cannot_mark_paid(self, uow):
        invoice = await self._submit(uow)

        with pytest.raises(AuthorizationError):
            await as_user(MarkInvoicePaidUseCase(uow), "chef-1").execute(invoice.id)

    @pytest.mark.asyncio
    async def test_finance_member_of_linked_company_can_list_and_pay(self, uow):
        invoice = await self._submit(uow)
        link_company_member(uow, "accountant", CompanyRole.FINANCE)

        listing = await as_user(ListBusinessInvoicesUseCase(uow), "accountant").execute("biz-1")
        assert listing.total == 1
        assert listing.invoices[0].chef_name == "Jamie Oliver"

        result = await as_user(MarkInvoicePaidUseCase(uow), "accountant").execute(invoice.id)
        assert result.status == "paid"

    @pytest.mark.asyncio
    async def test_check_invoice(self, uow):
        invoice = await self._submit(uow)

        own = await as_user(CheckInvoiceUseCase(uow), "chef-1").execute(
            CheckInvoiceQuery(gig_id=invoice.gig_id, chef_id="chef-1")
        )
        assert own.exists is True

        with pytest.raises(AuthorizationError):
            await as_user(CheckInvoiceUseCase(uow), "chef-2").execute(
                CheckInvoiceQuery(gig_id="other-gig", chef_id="chef-1")
            )


CHEF_RATINGS = {"organisation": 5, "equipment": 4, "welcoming": 5}
BUSINESS_RATINGS = {"timekeeping": 4, "appearance": 4, "role_fulfilment": 4}


class TestReviews:
    """Test cases for reviews between the parties of a confirmed gig."""

    def _seed(self, uow, days_ago=3, status=ApplicationStatus.CONFIRMED):
        add_business(uow)
        add_chef(uow)
        gig = add_gig(uow, days_ago=days_ago)
        add_application(uow, gig.id, status=status)
        return gig

    @pytest.mark.asyncio
    async def test_chef_reviews_business(self, uow):
        gig = self._seed(uow)

        result = await as_user(SubmitReviewUseCase(uow), "chef-1").execute(CreateReviewRequestDTO(
            gig_id=gig.id, recipient_id="biz-1", reviewer_type="chef", category_ratings=CHEF_RATINGS,
        ))

        assert result.rating == 5
        rating = await GetAverageRatingUseCase(uow).execute("biz-1")
        assert rating.total_reviews == 1
        assert rating.average_rating == 5.0

    @pytest.mark.asyncio
    async def test_review_requires_confirmed_booking(self, uow):
        gig = self._seed(uow, status=ApplicationStatus.ACCEPTED)

        with pytest.raises(AuthorizationError, match="confirmed gig"):
            await as_user(SubmitReviewUseCase(uow), "biz-1").execute(CreateReviewRequestDTO(
                gig_id=gig.id, recipient_id="chef-1", reviewer_type="business",
                category_ratings=BUSINESS_RATINGS,
            ))

    @pytest.mark.asyncio
    async def test_one_review_per_gig(self, uow):
        gig = self._seed(uow)
        request = CreateReviewRequestDTO(
            gig_id=gig.id, recipient_id="chef-1", reviewer_type="business",
            category_ratings=BUSINESS_RATINGS,
        )
        await as_user(SubmitReviewUseCase(uow), "biz-1").execute(request)

        with pytest.raises(DuplicateEntityError, match="already submitted"):
            await as_user(SubmitReviewUseCase(uow), "biz-1").execute(request)

    @pytest.mark.asyncio
    async def test_pending_reviews_for_both_sides(self, uow):
        gig = self._seed(uow)
        add_gig(uow, title="Future gig")

        chef_pending = await as_user(ListPendingReviewsUseCase(uow), "chef-1").execute("chef-1")
        business_pending = await as_user(ListPendingReviewsUseCase(uow), "biz-1").execute("biz-1")

        assert [p.gig_id for p in chef_pending.pending] == [gig.id]
        assert chef_pending.pending[0].recipient_name == "The Anchor"
        assert [p.recipient_id for p in business_pending.pending] == ["chef-1"]

    @pytest.mark.asyncio
    async def test_reviewed_gig_no_longer_pending(self, uow):
        gig = self._seed(uow)
        await as_user(SubmitReviewUseCase(uow), "chef-1").execute(CreateReviewRequestDTO(
            gig_id=gig.id, recipient_id="biz-1", reviewer_type="chef", category_ratings=CHEF_RATINGS,
        ))

        pending = await as_user(ListPendingReviewsUseCase(uow), "chef-1").execute("chef-1")

        assert pending.total == 0

    @pytest.mark.asyncio
    async def test_pending_reviews_of_someone_else(self, uow):
        with pytest.raises(AuthorizationError):
            await as_user(ListPendingReviewsUseCase(uow), "chef-1").execute("chef-2")
