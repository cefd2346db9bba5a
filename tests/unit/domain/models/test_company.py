"""
Unit tests for Company domain models.
"""

import pytest
from datetime import datetime, timedelta

from app.domain.models.company import (
    Company,
    CompanyRole,
    BusinessCompanyInvite,
    InviteStatus,
    DEFAULT_INVITE_EXPIRY_DAYS,
)
from app.domain.models.base import ValidationError, BusinessRuleViolation


class TestCompany:
    """Test cases for Company domain model."""

    def test_validate_requires_name(self):
        company = Company(name="", owner_user_id="user-1")

        with pytest.raises(ValidationError, match="Company name is required"):
            company.validate()

    def test_rename_strips_whitespace(self):
        company = Company(name="Old", owner_user_id="user-1")

        company.rename("  Harbour Group  ")

        assert company.name == "Harbour Group"

    def test_rename_to_blank_fails(self):
        company = Company(name="Old", owner_user_id="user-1")

        with pytest.raises(ValidationError):
            company.rename("   ")


class TestBusinessCompanyInvite:
    """Test cases for venue-to-company invites."""

    def setup_method(self):
        """Set up test fixtures."""
        self.now = datetime(2024, 1, 1, 12, 0)
        self.invite = BusinessCompanyInvite.issue(
            business_id="biz-1",
            invitee_email="  Ops@Harbour.co.uk ",
            created_by="biz-1",
            now=self.now,
        )

    def test_issue_defaults(self):
        """Test a new invite is pending, normalised and carries a token."""
        assert self.invite.status == InviteStatus.PENDING
        assert self.invite.role == CompanyRole.MANAGER
        assert self.invite.invitee_email == "ops@harbour.co.uk"
        assert self.invite.expires_at == self.now + timedelta(days=DEFAULT_INVITE_EXPIRY_DAYS)
        assert len(self.invite.token) == 48

    def test_issue_rejects_owner_role(self):
        with pytest.raises(ValidationError, match="owner role"):
            BusinessCompanyInvite.issue("biz-1", "a@b.com", "biz-1", role=CompanyRole.OWNER)

    def test_issue_rejects_invalid_email(self):
        with pytest.raises(ValidationError, match="Invalid email format"):
            BusinessCompanyInvite.issue("biz-1", "not-an-email", "biz-1")

    def test_is_expired(self):
        assert self.invite.is_expired(self.now) is False
        assert self.invite.is_expired(self.now + timedelta(days=15)) is True

    def test_addressed_to_is_case_insensitive(self):
        assert self.invite.addressed_to("OPS@harbour.co.uk") is True
        assert self.invite.addressed_to("someone@else.com") is False
        assert self.invite.addressed_to(None) is False

    def test_accept(self):
        accepted_at = self.now + timedelta(days=1)

        self.invite.accept("company-1", now=accepted_at)

        assert self.invite.status == InviteStatus.ACCEPTED
        assert self.invite.accepted_company_id == "company-1"
        assert self.invite.accepted_at == accepted_at

    def test_accept_is_single_use(self):
        """Test an accepted invite cannot be accepted again."""
        self.invite.accept("company-1")

        with pytest.raises(BusinessRuleViolation, match="Invite is accepted"):
            self.invite.accept("company-2")

    def test_expired_invite_cannot_be_accepted(self):
        self.invite.expire()

        with pytest.raises(BusinessRuleViolation, match="Invite is expired"):
            self.invite.accept("company-1")
