"""
Company repository interfaces.
Companies, their members, the venues linked to them and the invites
venues send to companies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.company import (
    Company,
    CompanyMember,
    BusinessCompanyLink,
    BusinessCompanyInvite,
)


class CompanyRepository(ABC):
    """Repository interface for companies and their membership."""

    @abstractmethod
    def save(self, company: Company) -> Company:
        """
        Save a company.
        Raises ConflictError when the owner already has a company.
        """
        pass

    @abstractmethod
    def get_by_id(self, company_id: str) -> Optional[Company]:
        """
        Get a company by id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_owner(self, owner_user_id: str) -> Optional[Company]:
        pass

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Company]:
        """Companies the user is a member of, newest first."""
        pass

    @abstractmethod
    def add_member(self, member: CompanyMember) -> CompanyMember:
        """
        Add a user to a company.
        Raises DuplicateEntityError when the user is already a member.
        """
        pass

    @abstractmethod
    def get_member(self, company_id: str, user_id: str) -> Optional[CompanyMember]:
        pass

    @abstractmethod
    def list_members(self, company_id: str) -> List[CompanyMember]:
        pass

    @abstractmethod
    def list_memberships(self, user_id: str) -> List[CompanyMember]:
        """Every membership held by a user."""
        pass


class BusinessCompanyLinkRepository(ABC):
    """Repository interface for venue to company access links."""

    @abstractmethod
    def save(self, link: BusinessCompanyLink) -> BusinessCompanyLink:
        pass

    @abstractmethod
    def get(self, business_id: str, company_id: str) -> Optional[BusinessCompanyLink]:
        """
        Get the link between a venue and a company.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_by_company(self, company_id: str) -> List[BusinessCompanyLink]:
        pass

    @abstractmethod
    def list_by_companies(self, company_ids: List[str]) -> List[BusinessCompanyLink]:
        pass

    @abstractmethod
    def list_by_business(self, business_id: str) -> List[BusinessCompanyLink]:
        pass


class CompanyInviteRepository(ABC):
    """Repository interface for business to company invites."""

    @abstractmethod
    def save(self, invite: BusinessCompanyInvite) -> BusinessCompanyInvite:
        pass

    @abstractmethod
    def get_by_id(self, invite_id: str) -> Optional[BusinessCompanyInvite]:
        pass

    @abstractmethod
    def get_by_token(self, token: str) -> Optional[BusinessCompanyInvite]:
        """
        Get an invite by its secret token.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_by_business(self, business_id: str) -> List[BusinessCompanyInvite]:
        """Invites sent by a venue, newest first."""
        pass

    @abstractmethod
    def list_by_email(self, email: str) -> List[BusinessCompanyInvite]:
        """Invites addressed to an email, matched case-insensitively."""
        pass
