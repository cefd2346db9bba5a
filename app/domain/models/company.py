"""
Company domain models.
A company groups several venues (business profiles) under role-based
membership. Venues grant a company access through single-use invites.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from app.domain.models.base import BaseEntity, ValidationError, BusinessRuleViolation, Email

INVITE_TOKEN_BYTES = 24
DEFAULT_INVITE_EXPIRY_DAYS = 14


class CompanyRole(str, Enum):
    """Role of a user inside a company, or of a company over a venue."""
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    FINANCE = "finance"
    VIEWER = "viewer"


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


@dataclass(eq=False)
class Company(BaseEntity):
    """Company entity. Each owner may create one company."""

    name: str = ""
    owner_user_id: str = ""

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Company name is required", "name")
        if not self.owner_user_id:
            raise ValidationError("Company owner is required", "owner_user_id")

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Company name is required", "name")
        self.name = name.strip()
        self.mark_as_updated()


@dataclass(eq=False)
class CompanyMember(BaseEntity):
    company_id: str = ""
    user_id: str = ""
    role: CompanyRole = CompanyRole.VIEWER


@dataclass(eq=False)
class BusinessCompanyLink(BaseEntity):
    """Grants a company access to a venue with the given role."""

    business_id: str = ""
    company_id: str = ""
    role: CompanyRole = CompanyRole.MANAGER


@dataclass(eq=False)
class BusinessCompanyInvite(BaseEntity):
    """
    Invite from a venue to a company, addressed to an email.
    Single use; pending until accepted, revoked or past its expiry.
    """

    business_id: str = ""
    invitee_email: str = ""
    role: CompanyRole = CompanyRole.MANAGER
    token: str = ""
    status: InviteStatus = InviteStatus.PENDING
    created_by: str = ""
    expires_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    accepted_company_id: Optional[str] = None

    @classmethod
    def issue(
        cls,
        business_id: str,
        invitee_email: str,
        created_by: str,
        role: CompanyRole = CompanyRole.MANAGER,
        expiry_days: int = DEFAULT_INVITE_EXPIRY_DAYS,
        now: Optional[datetime] = None
    ) -> "BusinessCompanyInvite":
        """Create a pending invite with a fresh token."""
        if role == CompanyRole.OWNER:
            raise ValidationError("Invites cannot grant the owner role", "role")
        now = now or datetime.utcnow()
        invite = cls(
            business_id=business_id,
            invitee_email=str(Email(invitee_email.strip().lower())),
            role=role,
            token=secrets.token_hex(INVITE_TOKEN_BYTES),
            created_by=created_by,
            expires_at=now + timedelta(days=expiry_days),
            created_at=now,
            updated_at=now,
        )
        return invite

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.utcnow()
        return self.expires_at is not None and self.expires_at < now

    def expire(self) -> None:
        self.status = InviteStatus.EXPIRED
        self.mark_as_updated()

    def addressed_to(self, email: Optional[str]) -> bool:
        return Email(self.invitee_email).matches(email)

    def accept(self, company_id: str, now: Optional[datetime] = None) -> None:
        if not self.is_pending:
            raise BusinessRuleViolation(f"Invite is {self.status.value}")
        self.status = InviteStatus.ACCEPTED
        self.accepted_at = now or datetime.utcnow()
        self.accepted_company_id = company_id
        self.mark_as_updated()
