"""Access policy for company and venue resources.
Single place deciding whether a user may act on a company or a venue.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, FrozenSet

from app.domain.models.base import EntityNotFoundError, AuthorizationError
from app.domain.models.company import CompanyRole
from app.domain.repositories.profile_repository import BusinessProfileRepository
from app.domain.repositories.company_repository import (
    CompanyRepository,
    BusinessCompanyLinkRepository,
)

# Roles allowed to operate a venue on behalf of a linked company
VENUE_OPERATOR_ROLES: FrozenSet[CompanyRole] = frozenset({
    CompanyRole.OWNER,
    CompanyRole.ADMIN,
    CompanyRole.MANAGER,
})

COMPANY_ADMIN_ROLES: FrozenSet[CompanyRole] = frozenset({
    CompanyRole.OWNER,
    CompanyRole.ADMIN,
})

ALL_COMPANY_ROLES: FrozenSet[CompanyRole] = frozenset(CompanyRole)


class AccessOutcome(str, Enum):
    AUTHORIZED = "authorized"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessDecision:
    """Result of an access check, with the role the caller holds if any."""

    outcome: AccessOutcome
    role: Optional[CompanyRole] = None
    entity_type: str = "Resource"

    @property
    def authorized(self) -> bool:
        return self.outcome == AccessOutcome.AUTHORIZED

    def ensure(self, message: Optional[str] = None) -> CompanyRole:
        """
        Raise the matching domain error unless authorized.
        Returns the caller's role.
        """
        if self.outcome == AccessOutcome.NOT_FOUND:
            raise EntityNotFoundError(self.entity_type)
        if self.outcome == AccessOutcome.FORBIDDEN:
            raise AuthorizationError(message or f"You don't have access to this {self.entity_type.lower()}")
        return self.role


class AccessPolicy:
    """
    Domain service for ownership and company-role checks.
    A venue is a business profile; its owner always has access, and members
    of a linked company have access when their membership role is allowed.
    """

    def __init__(
        self,
        companies: CompanyRepository,
        links: BusinessCompanyLinkRepository,
        businesses: BusinessProfileRepository
    ):
        self.companies = companies
        self.links = links
        self.businesses = businesses

    def can_access_company(
        self,
        user_id: str,
        company_id: str,
        allowed_roles: Iterable[CompanyRole] = ALL_COMPANY_ROLES
    ) -> AccessDecision:
        if self.companies.get_by_id(company_id) is None:
            return AccessDecision(AccessOutcome.NOT_FOUND, entity_type="Company")

        member = self.companies.get_member(company_id, user_id)
        if member is None:
            return AccessDecision(AccessOutcome.FORBIDDEN, entity_type="Company")
        if member.role not in set(allowed_roles):
            return AccessDecision(AccessOutcome.FORBIDDEN, member.role, "Company")
        return AccessDecision(AccessOutcome.AUTHORIZED, member.role, "Company")

    def can_access_venue(
        self,
        user_id: str,
        venue_id: str,
        allowed_roles: Iterable[CompanyRole] = VENUE_OPERATOR_ROLES
    ) -> AccessDecision:
        if user_id == venue_id:
            return AccessDecision(AccessOutcome.AUTHORIZED, CompanyRole.OWNER, "Venue")
        if not self.businesses.exists(venue_id):
            return AccessDecision(AccessOutcome.NOT_FOUND, entity_type="Venue")

        allowed = set(allowed_roles)
        linked_companies = {link.company_id for link in self.links.list_by_business(venue_id)}
        best_role = None
        for membership in self.companies.list_memberships(user_id):
            if membership.company_id not in linked_companies:
                continue
            if membership.role in allowed:
                return AccessDecision(AccessOutcome.AUTHORIZED, membership.role, "Venue")
            best_role = membership.role
        return AccessDecision(AccessOutcome.FORBIDDEN, best_role, "Venue")
