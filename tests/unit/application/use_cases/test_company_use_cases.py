"""
Unit tests for company and invite use cases.
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock

from app.application.dto.company_dto import (
    CreateCompanyRequestDTO, InviteCompanyRequestDTO, AcceptInviteRequestDTO
)
from app.application.use_cases.company_use_cases import (
    CreateCompanyUseCase,
    InviteCompanyUseCase,
    AcceptInviteUseCase,
    VerifyInviteUseCase,
    ListAccessibleBusinessesUseCase,
    ListMyInvitesUseCase,
)
from app.domain.events.company_events import CompanyInviteCreated
from app.domain.models.base import AuthorizationError, BusinessRuleViolation, ConflictError
from app.domain.models.company import CompanyRole, InviteStatus
from tests.factories import add_business

COMPANY_OWNER = "company-owner"
COMPANY_EMAIL = "ops@harbour.co.uk"


def as_user(use_case, user_id, roles=None, email=None):
    use_case.set_current_user(user_id, roles, email)
    return use_case


class TestCreateCompany:
    """Test cases for company creation."""

    @pytest.mark.asyncio
    async def test_company_account_creates_company(self, uow):
        result = await as_user(CreateCompanyUseCase(uow), COMPANY_OWNER, ["company"]).execute(
            CreateCompanyRequestDTO(name="Harbour Group")
        )

        assert result.name == "Harbour Group"
        assert result.role == CompanyRole.OWNER.value
        member = uow.companies.get_member(result.id, COMPANY_OWNER)
        assert member.role == CompanyRole.OWNER

    @pytest.mark.asyncio
    async def test_requires_company_role(self, uow):
        with pytest.raises(AuthorizationError, match="Only company users"):
            await as_user(CreateCompanyUseCase(uow), "chef-1", ["chef"]).execute(
                CreateCompanyRequestDTO(name="Harbour Group")
            )

    @pytest.mark.asyncio
    async def test_one_company_per_owner(self, uow):
        request = CreateCompanyRequestDTO(name="Harbour Group")
        await as_user(CreateCompanyUseCase(uow), COMPANY_OWNER, ["company"]).execute(request)

        with pytest.raises(ConflictError, match="already own a company"):
            await as_user(CreateCompanyUseCase(uow), COMPANY_OWNER, ["company"]).execute(request)


class TestInviteFlow:
    """Test cases for venue-to-company invites."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    async def _invite(self, uow, expiry_days=14):
        add_business(uow)
        company = await as_user(CreateCompanyUseCase(uow), COMPANY_OWNER, ["company"]).execute(
            CreateCompanyRequestDTO(name="Harbour Group")
        )
        invite = await as_user(
            InviteCompanyUseCase(uow, self.dispatcher, expiry_days=expiry_days), "biz-1"
        ).execute(InviteCompanyRequestDTO(business_id="biz-1", invitee_email=COMPANY_EMAIL))
        token = uow.company_invites.get_by_id(invite.id).token
        return company, invite, token

    @pytest.mark.asyncio
    async def test_invite_publishes_event(self, uow):
        _, invite, token = await self._invite(uow)

        assert invite.status == InviteStatus.PENDING.value
        assert invite.business_name == "The Anchor"
        event = self.dispatcher.dispatch_all.await_args.args[0][0]
        assert isinstance(event, CompanyInviteCreated)
        assert event.invitee_email == COMPANY_EMAIL
        assert event.token == token
        assert event.invited_by == "biz-1"

    @pytest.mark.asyncio
    async def test_only_venue_owner_invites(self, uow):
        add_business(uow)

        with pytest.raises(AuthorizationError, match="your own business"):
            await as_user(InviteCompanyUseCase(uow), "intruder").execute(
                InviteCompanyRequestDTO(business_id="biz-1", invitee_email=COMPANY_EMAIL)
            )

    @pytest.mark.asyncio
    async def test_verify_and_accept(self, uow):
        company, _, token = await self._invite(uow)

        verified = await VerifyInviteUseCase(uow).execute(token)
        assert verified.valid is True
        assert verified.business_name == "The Anchor"

        result = await as_user(AcceptInviteUseCase(uow), COMPANY_OWNER, ["company"], COMPANY_EMAIL.upper()).execute(
            AcceptInviteRequestDTO(token=token, company_id=company.id)
        )
        assert result.link.business_id == "biz-1"
        assert result.link.role == CompanyRole.MANAGER.value
        assert result.invite.status == InviteStatus.ACCEPTED.value

        accessible = await as_user(ListAccessibleBusinessesUseCase(uow), COMPANY_OWNER).execute(None)
        assert [b.business_id for b in accessible.businesses] == ["biz-1"]

        reused = await VerifyInviteUseCase(uow).execute(token)
        assert reused.valid is False
        assert reused.reason == "Invitation is accepted"

    @pytest.mark.asyncio
    async def test_accept_with_wrong_email(self, uow):
        company, _, token = await self._invite(uow)

        with pytest.raises(AuthorizationError, match="sent to your email"):
            await as_user(AcceptInviteUseCase(uow), COMPANY_OWNER, ["company"], "other@example.com").execute(
                AcceptInviteRequestDTO(token=token, company_id=company.id)
            )

    @pytest.mark.asyncio
    async def test_expired_invite(self, uow):
        company, invite, token = await self._invite(uow)
        stored = uow.company_invites.get_by_id(invite.id)
        stored.expires_at = datetime.utcnow() - timedelta(minutes=1)
        uow.company_invites.save(stored)
        uow.commit()

        with pytest.raises(BusinessRuleViolation, match="expired"):
            await as_user(AcceptInviteUseCase(uow), COMPANY_OWNER, ["company"], COMPANY_EMAIL).execute(
                AcceptInviteRequestDTO(token=token, company_id=company.id)
            )
        assert uow.company_invites.get_by_id(invite.id).status == InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_verify_after_expiry_marks_invite_expired(self, uow):
        _, invite, token = await self._invite(uow)
        stored = uow.company_invites.get_by_id(invite.id)
        stored.expires_at = datetime.utcnow() - timedelta(minutes=1)
        uow.company_invites.save(stored)
        uow.commit()

        result = await VerifyInviteUseCase(uow).execute(token)

        assert result.valid is False
        assert result.reason == "Invitation has expired"
        assert uow.company_invites.get_by_id(invite.id).status == InviteStatus.EXPIRED

        again = await VerifyInviteUseCase(uow).execute(token)
        assert again.reason == "Invitation is expired"

    @pytest.mark.asyncio
    async def test_verify_unknown_token(self, uow):
        result = await VerifyInviteUseCase(uow).execute("not-a-token")

        assert result.valid is False
        assert result.reason == "Invalid token"

    @pytest.mark.asyncio
    async def test_my_invites_by_email(self, uow):
        await self._invite(uow)

        invites = await as_user(ListMyInvitesUseCase(uow), COMPANY_OWNER, email=COMPANY_EMAIL).execute(None)

        assert len(invites) == 1
        assert invites[0].business_name == "The Anchor"

        with pytest.raises(AuthorizationError, match="email address is required"):
            await as_user(ListMyInvitesUseCase(uow), COMPANY_OWNER).execute(None)
