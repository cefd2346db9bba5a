"""
Company use cases for the application layer.
Company creation and membership, and the invite flow through which a venue
hands operating access to a company.
"""

import logging
from dataclasses import dataclass
from typing import List

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.application.dto.company_dto import (
    CreateCompanyRequestDTO, UpdateCompanyRequestDTO, CompanyResponseDTO, CompanyMemberResponseDTO,
    InviteCompanyRequestDTO, AcceptInviteRequestDTO, CompanyInviteResponseDTO,
    VerifyInviteResponseDTO, BusinessLinkResponseDTO, AcceptInviteResponseDTO,
    AccessibleBusinessDTO, AccessibleBusinessesResponseDTO
)
from app.domain.events.company_events import CompanyInviteCreated
from app.domain.models.base import (
    EntityNotFoundError, AuthorizationError, BusinessRuleViolation, ConflictError
)
from app.domain.models.company import (
    Company, CompanyMember, CompanyRole, BusinessCompanyLink, BusinessCompanyInvite,
    DEFAULT_INVITE_EXPIRY_DAYS
)
from app.domain.services.access_policy import COMPANY_ADMIN_ROLES

logger = logging.getLogger(__name__)

COMPANY_ACCOUNT_ROLE = "company"
# Only the venue's own account may manage its invites
VENUE_OWNER_ONLY = ()


@dataclass
class UpdateCompanyCommand:
    company_id: str
    changes: UpdateCompanyRequestDTO


class CreateCompanyUseCase(CommandUseCase[CreateCompanyRequestDTO, CompanyResponseDTO]):
    """
    Use case for a company account creating its company.
    One company per owner; the owner is also recorded as a member.
    """

    async def _execute_command_logic(self, request: CreateCompanyRequestDTO) -> CompanyResponseDTO:
        user_id = self._require_user()
        if COMPANY_ACCOUNT_ROLE not in self.current_user_roles:
            raise AuthorizationError("Only company users can create companies")

        if self.uow.companies.get_by_owner(user_id) is not None:
            raise ConflictError("You already own a company")

        company = Company(name=request.name.strip(), owner_user_id=user_id)
        company.validate()
        saved = self.uow.companies.save(company)
        self.uow.companies.add_member(
            CompanyMember(company_id=saved.id, user_id=user_id, role=CompanyRole.OWNER)
        )
        logger.info(f"Company {saved.id} created by {user_id}")
        return CompanyResponseDTO.from_domain(saved, CompanyRole.OWNER)


class ListMyCompaniesUseCase(QueryUseCase[None, List[CompanyResponseDTO]]):
    async def _execute_query(self, request: None = None) -> List[CompanyResponseDTO]:
        user_id = self._require_user()
        roles = {m.company_id: m.role for m in self.uow.companies.list_memberships(user_id)}
        return [
            CompanyResponseDTO.from_domain(company, roles.get(company.id))
            for company in self.uow.companies.list_for_user(user_id)
        ]


class GetCompanyUseCase(QueryUseCase[str, CompanyResponseDTO]):
    async def _execute_query(self, company_id: str) -> CompanyResponseDTO:
        role = self.access.can_access_company(self._require_user(), company_id).ensure(
            "You can only access companies you are a member of"
        )
        return CompanyResponseDTO.from_domain(self.uow.companies.get_by_id(company_id), role)


class UpdateCompanyUseCase(CommandUseCase[UpdateCompanyCommand, CompanyResponseDTO]):
    async def _execute_command_logic(self, request: UpdateCompanyCommand) -> CompanyResponseDTO:
        role = self.access.can_access_company(self._require_user(), request.company_id).ensure(
            "You can only update companies you are a member of"
        )
        company = self.uow.companies.get_by_id(request.company_id)
        company.rename(request.changes.name)
        return CompanyResponseDTO.from_domain(self.uow.companies.save(company), role)


class ListCompanyMembersUseCase(QueryUseCase[str, List[CompanyMemberResponseDTO]]):
    async def _execute_query(self, company_id: str) -> List[CompanyMemberResponseDTO]:
        self.access.can_access_company(self._require_user(), company_id).ensure(
            "Not a member of this company"
        )
        return [CompanyMemberResponseDTO.from_domain(m) for m in self.uow.companies.list_members(company_id)]


class InviteCompanyUseCase(CommandUseCase[InviteCompanyRequestDTO, CompanyInviteResponseDTO]):
    """
    Use case for a venue inviting a company by email.
    The invitee is emailed after commit, subject to the inviter's preferences.
    """

    def __init__(self, unit_of_work, event_dispatcher=None, expiry_days: int = DEFAULT_INVITE_EXPIRY_DAYS):
        super().__init__(unit_of_work, event_dispatcher)
        self.expiry_days = expiry_days

    async def _execute_command_logic(self, request: InviteCompanyRequestDTO) -> CompanyInviteResponseDTO:
        user_id = self._require_user()
        self.access.can_access_venue(user_id, request.business_id, VENUE_OWNER_ONLY).ensure(
            "You can only send invites for your own business"
        )
        business = self.uow.businesses.get_by_id(request.business_id)
        if business is None:
            raise EntityNotFoundError("Business profile", request.business_id)

        invite = BusinessCompanyInvite.issue(
            business_id=business.id,
            invitee_email=request.invitee_email,
            created_by=user_id,
            role=CompanyRole(request.role),
            expiry_days=self.expiry_days,
        )
        saved = self.uow.company_invites.save(invite)

        self._record_event(CompanyInviteCreated(
            invite_id=saved.id,
            business_id=business.id,
            business_name=business.business_name,
            invitee_email=saved.invitee_email,
            role=saved.role.value,
            token=saved.token,
            invited_by=user_id,
            expires_at=saved.expires_at,
        ))
        return CompanyInviteResponseDTO.from_domain(saved, business.business_name)


class AcceptInviteUseCase(CommandUseCase[AcceptInviteRequestDTO, AcceptInviteResponseDTO]):
    """
    Use case for a company owner or admin accepting a venue invite.

    The invite must be pending, unexpired and addressed to the caller's
    email. Accepting links the venue to the company with the invited role.
    """

    async def _execute_command_logic(self, request: AcceptInviteRequestDTO) -> AcceptInviteResponseDTO:
        user_id = self._require_user()
        invite = self.uow.company_invites.get_by_token(request.token)
        if invite is None:
            raise EntityNotFoundError("Invite")
        if not invite.is_pending:
            raise BusinessRuleViolation(f"Invitation is {invite.status.value}")
        if invite.is_expired():
            invite.expire()
            self.uow.company_invites.save(invite)
            self.uow.commit()
            raise BusinessRuleViolation("Invitation has expired")

        if not invite.addressed_to(self.current_user_email):
            raise AuthorizationError("You can only accept invitations sent to your email address")

        self.access.can_access_company(user_id, request.company_id, COMPANY_ADMIN_ROLES).ensure(
            "Insufficient permissions for this company"
        )

        link = self.uow.company_links.get(invite.business_id, request.company_id)
        if link is None:
            link = BusinessCompanyLink(
                business_id=invite.business_id, company_id=request.company_id, role=invite.role
            )
        else:
            link.role = invite.role
            link.mark_as_updated()
        saved_link = self.uow.company_links.save(link)

        invite.accept(request.company_id)
        saved_invite = self.uow.company_invites.save(invite)
        logger.info(f"Invite {invite.id} accepted: venue {invite.business_id} linked to {request.company_id}")

        return AcceptInviteResponseDTO(
            link=BusinessLinkResponseDTO.from_domain(saved_link),
            invite=CompanyInviteResponseDTO.from_domain(saved_invite),
        )


class VerifyInviteUseCase(CommandUseCase[str, VerifyInviteResponseDTO]):
    """
    Public check of an invite token. Never raises for bad tokens; an expired
    pending invite is marked expired on the way.
    """

    async def _execute_command_logic(self, token: str) -> VerifyInviteResponseDTO:
        invite = self.uow.company_invites.get_by_token(token)
        if invite is None:
            return VerifyInviteResponseDTO(valid=False, reason="Invalid token")

        if invite.is_pending and invite.is_expired():
            invite.expire()
            self.uow.company_invites.save(invite)
            return VerifyInviteResponseDTO(valid=False, reason="Invitation has expired")

        if not invite.is_pending:
            return VerifyInviteResponseDTO(valid=False, reason=f"Invitation is {invite.status.value}")

        business = self.uow.businesses.get_by_id(invite.business_id)
        return VerifyInviteResponseDTO(
            valid=True,
            invitee_email=invite.invitee_email,
            role=invite.role,
            business_name=business.business_name if business else "Unknown Business",
            expires_at=invite.expires_at,
        )


class ListBusinessInvitesUseCase(QueryUseCase[str, List[CompanyInviteResponseDTO]]):
    async def _execute_query(self, business_id: str) -> List[CompanyInviteResponseDTO]:
        self.access.can_access_venue(self._require_user(), business_id, VENUE_OWNER_ONLY).ensure(
            "You can only view invites for your own business"
        )
        return [
            CompanyInviteResponseDTO.from_domain(i)
            for i in self.uow.company_invites.list_by_business(business_id)
        ]


class ListMyInvitesUseCase(QueryUseCase[None, List[CompanyInviteResponseDTO]]):
    """Invites addressed to the caller's email."""

    async def _execute_query(self, request: None = None) -> List[CompanyInviteResponseDTO]:
        self._require_user()
        if not self.current_user_email:
            raise AuthorizationError("An email address is required to list invites")

        invites = self.uow.company_invites.list_by_email(self.current_user_email)
        names = {
            b.id: b.business_name
            for b in self.uow.businesses.get_by_ids(list({i.business_id for i in invites}))
        }
        return [CompanyInviteResponseDTO.from_domain(i, names.get(i.business_id)) for i in invites]


class ListAccessibleBusinessesUseCase(QueryUseCase[None, AccessibleBusinessesResponseDTO]):
    """Venues the caller owns or operates through company membership."""

    async def _execute_query(self, request: None = None) -> AccessibleBusinessesResponseDTO:
        user_id = self._require_user()
        result: List[AccessibleBusinessDTO] = []

        own = self.uow.businesses.get_by_id(user_id)
        if own is not None:
            result.append(AccessibleBusinessDTO(
                business_id=own.id,
                business_name=own.business_name,
                location=own.location,
                member_role=CompanyRole.OWNER,
            ))

        memberships = {m.company_id: m for m in self.uow.companies.list_memberships(user_id)}
        if memberships:
            companies = {c.id: c for c in self.uow.companies.list_for_user(user_id)}
            links = self.uow.company_links.list_by_companies(list(memberships))
            businesses = {
                b.id: b for b in self.uow.businesses.get_by_ids(list({l.business_id for l in links}))
            }
            for link in links:
                business = businesses.get(link.business_id)
                company = companies.get(link.company_id)
                result.append(AccessibleBusinessDTO(
                    business_id=link.business_id,
                    business_name=business.business_name if business else None,
                    location=business.location if business else None,
                    company_id=link.company_id,
                    company_name=company.name if company else None,
                    link_role=link.role,
                    member_role=memberships[link.company_id].role,
                ))

        return AccessibleBusinessesResponseDTO(businesses=result, total=len(result))
