"""
Company mappers: companies, members, venue links and invites.
"""

from app.domain.models.company import (
    Company,
    CompanyMember,
    CompanyRole,
    BusinessCompanyLink,
    BusinessCompanyInvite,
    InviteStatus,
)
from app.infrastructure.db.models import (
    CompanyModel,
    CompanyMemberModel,
    BusinessCompanyLinkModel,
    BusinessCompanyInviteModel,
)
from .converters import naive_utc


class CompanyMapper:
    """Maps between Company domain entity and CompanyModel."""

    def domain_to_model(self, company: Company) -> CompanyModel:
        return CompanyModel(
            id=company.id,
            name=company.name,
            owner_user_id=company.owner_user_id,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )

    def model_to_domain(self, model: CompanyModel) -> Company:
        return Company(
            id=model.id,
            name=model.name,
            owner_user_id=model.owner_user_id,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class CompanyMemberMapper:

    def domain_to_model(self, member: CompanyMember) -> CompanyMemberModel:
        return CompanyMemberModel(
            id=member.id,
            company_id=member.company_id,
            user_id=member.user_id,
            role=member.role,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )

    def model_to_domain(self, model: CompanyMemberModel) -> CompanyMember:
        return CompanyMember(
            id=model.id,
            company_id=model.company_id,
            user_id=model.user_id,
            role=CompanyRole(model.role),
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class BusinessCompanyLinkMapper:

    def domain_to_model(self, link: BusinessCompanyLink) -> BusinessCompanyLinkModel:
        return BusinessCompanyLinkModel(
            id=link.id,
            business_id=link.business_id,
            company_id=link.company_id,
            role=link.role,
            created_at=link.created_at,
            updated_at=link.updated_at,
        )

    def model_to_domain(self, model: BusinessCompanyLinkModel) -> BusinessCompanyLink:
        return BusinessCompanyLink(
            id=model.id,
            business_id=model.business_id,
            company_id=model.company_id,
            role=CompanyRole(model.role),
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class BusinessCompanyInviteMapper:
    """Maps between BusinessCompanyInvite and BusinessCompanyInviteModel."""

    def domain_to_model(self, invite: BusinessCompanyInvite) -> BusinessCompanyInviteModel:
        return BusinessCompanyInviteModel(
            id=invite.id,
            business_id=invite.business_id,
            invitee_email=invite.invitee_email,
            role=invite.role,
            token=invite.token,
            status=invite.status,
            created_by=invite.created_by,
            expires_at=invite.expires_at,
            accepted_at=invite.accepted_at,
            accepted_company_id=invite.accepted_company_id,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )

    def model_to_domain(self, model: BusinessCompanyInviteModel) -> BusinessCompanyInvite:
        return BusinessCompanyInvite(
            id=model.id,
            business_id=model.business_id,
            invitee_email=model.invitee_email,
            role=CompanyRole(model.role),
            token=model.token,
            status=InviteStatus(model.status),
            created_by=model.created_by,
            expires_at=naive_utc(model.expires_at),
            accepted_at=naive_utc(model.accepted_at),
            accepted_company_id=model.accepted_company_id,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )
