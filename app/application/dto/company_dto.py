"""
Company DTOs for the application layer.
Companies, their members, venue links and venue-to-company invites.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, UpdateRequestDTO, ResponseDTO, BaseDTO
from app.domain.models.company import (
    Company, CompanyMember, CompanyRole, BusinessCompanyLink, BusinessCompanyInvite, InviteStatus
)
from app.infrastructure.validation.validators import DataValidator, clean_text


class CreateCompanyRequestDTO(CreateRequestDTO):
    name: str = Field(min_length=1, max_length=255, description="Company name")

    @validator('name', pre=True)
    def sanitize_name(cls, v):
        return clean_text(v)


class UpdateCompanyRequestDTO(UpdateRequestDTO):
    name: str = Field(min_length=1, max_length=255)

    @validator('name', pre=True)
    def sanitize_name(cls, v):
        return clean_text(v)


class CompanyResponseDTO(ResponseDTO):
    """DTO for company responses. `role` is the caller's role when known."""

    name: str
    owner_user_id: str
    role: Optional[CompanyRole] = None

    @classmethod
    def from_domain(cls, company: Company, role: Optional[CompanyRole] = None) -> "CompanyResponseDTO":
        return cls(
            id=company.id,
            name=company.name,
            owner_user_id=company.owner_user_id,
            role=role,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


class CompanyMemberResponseDTO(ResponseDTO):
    company_id: str
    user_id: str
    role: CompanyRole

    @classmethod
    def from_domain(cls, member: CompanyMember) -> "CompanyMemberResponseDTO":
        return cls(
            id=member.id,
            company_id=member.company_id,
            user_id=member.user_id,
            role=member.role,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )


class InviteCompanyRequestDTO(CreateRequestDTO):
    """DTO for a venue inviting a company by email."""

    business_id: str = Field(min_length=1)
    invitee_email: str = Field(max_length=255)
    role: CompanyRole = CompanyRole.MANAGER

    @validator('invitee_email', pre=True)
    def validate_email(cls, v):
        return DataValidator.validate_email(v)

    @validator('role')
    def reject_owner_role(cls, v):
        if v == CompanyRole.OWNER.value:
            raise ValueError("Invites cannot grant the owner role")
        return v


class AcceptInviteRequestDTO(CreateRequestDTO):
    token: str = Field(min_length=1, max_length=128)
    company_id: str = Field(min_length=1, description="Company that takes over the venue")


class CompanyInviteResponseDTO(ResponseDTO):
    """DTO for invite responses. The token is never echoed back."""

    business_id: str
    invitee_email: str
    role: CompanyRole
    status: InviteStatus
    created_by: str
    expires_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    accepted_company_id: Optional[str] = None
    business_name: Optional[str] = None

    @classmethod
    def from_domain(
        cls,
        invite: BusinessCompanyInvite,
        business_name: Optional[str] = None
    ) -> "CompanyInviteResponseDTO":
        return cls(
            id=invite.id,
            business_id=invite.business_id,
            invitee_email=invite.invitee_email,
            role=invite.role,
            status=invite.status,
            created_by=invite.created_by,
            expires_at=invite.expires_at,
            accepted_at=invite.accepted_at,
            accepted_company_id=invite.accepted_company_id,
            business_name=business_name,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )


class VerifyInviteResponseDTO(BaseDTO):
    valid: bool
    invitee_email: Optional[str] = None
    role: Optional[CompanyRole] = None
    business_name: Optional[str] = None
    expires_at: Optional[datetime] = None
    reason: Optional[str] = None


class BusinessLinkResponseDTO(ResponseDTO):
    business_id: str
    company_id: str
    role: CompanyRole

    @classmethod
    def from_domain(cls, link: BusinessCompanyLink) -> "BusinessLinkResponseDTO":
        return cls(
            id=link.id,
            business_id=link.business_id,
            company_id=link.company_id,
            role=link.role,
            created_at=link.created_at,
            updated_at=link.updated_at,
        )


class AcceptInviteResponseDTO(BaseDTO):
    link: BusinessLinkResponseDTO
    invite: CompanyInviteResponseDTO


class AccessibleBusinessDTO(BaseDTO):
    """A venue the caller can operate through one of their companies."""

    business_id: str
    business_name: Optional[str] = None
    location: Optional[str] = None
    company_id: Optional[str] = None
    company_name: Optional[str] = None
    link_role: Optional[CompanyRole] = None
    member_role: CompanyRole


class AccessibleBusinessesResponseDTO(BaseDTO):
    businesses: List[AccessibleBusinessDTO]
    total: int
