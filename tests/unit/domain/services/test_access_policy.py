"""
Unit tests for the AccessPolicy domain service.
"""

import pytest
from unittest.mock import Mock

from app.domain.models.base import AuthorizationError, EntityNotFoundError
from app.domain.models.company import Company, CompanyMember, CompanyRole, BusinessCompanyLink
from app.domain.services.access_policy import AccessPolicy, AccessOutcome, COMPANY_ADMIN_ROLES


class TestAccessPolicy:
    """Test cases for company and venue access checks."""

    def setup_method(self):
        """Set up test fixtures."""
        self.companies = Mock()
        self.links = Mock()
        self.businesses = Mock()
        self.policy = AccessPolicy(self.companies, self.links, self.businesses)

        self.companies.get_by_id.return_value = Company(id="co-1", name="Harbour Group", owner_user_id="owner")
        self.businesses.exists.return_value = True
        self.links.list_by_business.return_value = [
            BusinessCompanyLink(business_id="venue-1", company_id="co-1", role=CompanyRole.MANAGER)
        ]

    def _member_of(self, role, company_id="co-1"):
        member = CompanyMember(company_id=company_id, user_id="user-1", role=role)
        self.companies.get_member.return_value = member
        self.companies.list_memberships.return_value = [member]

    def test_venue_owner_always_authorized(self):
        decision = self.policy.can_access_venue("venue-1", "venue-1")

        assert decision.authorized is True
        assert decision.role == CompanyRole.OWNER
        self.businesses.exists.assert_not_called()

    def test_unknown_venue_is_not_found(self):
        self.businesses.exists.return_value = False

        decision = self.policy.can_access_venue("user-1", "venue-x")

        assert decision.outcome == AccessOutcome.NOT_FOUND
        with pytest.raises(EntityNotFoundError, match="Venue not found"):
            decision.ensure()

    def test_manager_of_linked_company_authorized(self):
        """Test a manager in a linked company may operate the venue."""
        self._member_of(CompanyRole.MANAGER)

        decision = self.policy.can_access_venue("user-1", "venue-1")

        assert decision.authorized is True
        assert decision.ensure() == CompanyRole.MANAGER

    def test_viewer_of_linked_company_forbidden(self):
        self._member_of(CompanyRole.VIEWER)

        decision = self.policy.can_access_venue("user-1", "venue-1")

        assert decision.outcome == AccessOutcome.FORBIDDEN
        assert decision.role == CompanyRole.VIEWER
        with pytest.raises(AuthorizationError, match="Custom message"):
            decision.ensure("Custom message")

    def test_finance_allowed_when_role_listed(self):
        self._member_of(CompanyRole.FINANCE)

        decision = self.policy.can_access_venue(
            "user-1", "venue-1", {CompanyRole.MANAGER, CompanyRole.FINANCE}
        )

        assert decision.authorized is True

    def test_member_of_unlinked_company_forbidden(self):
        """Test membership in a company without a link to the venue grants nothing."""
        self._member_of(CompanyRole.OWNER, company_id="co-2")

        decision = self.policy.can_access_venue("user-1", "venue-1")

        assert decision.outcome == AccessOutcome.FORBIDDEN
        assert decision.role is None

    def test_company_not_found(self):
        self.companies.get_by_id.return_value = None

        decision = self.policy.can_access_company("user-1", "co-x")

        assert decision.outcome == AccessOutcome.NOT_FOUND

    def test_non_member_forbidden_from_company(self):
        self.companies.get_member.return_value = None

        with pytest.raises(AuthorizationError, match="this company"):
            self.policy.can_access_company("user-1", "co-1").ensure()

    def test_company_admin_roles(self):
        self._member_of(CompanyRole.MANAGER)

        decision = self.policy.can_access_company("user-1", "co-1", COMPANY_ADMIN_ROLES)

        assert decision.outcome == AccessOutcome.FORBIDDEN
        assert decision.role == CompanyRole.MANAGER
