"""
Company repository implementations using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import desc, func

from app.domain.models.base import ConflictError, DuplicateEntityError
from app.domain.models.company import (
    Company,
    CompanyMember,
    BusinessCompanyLink,
    BusinessCompanyInvite,
)
from app.domain.repositories.company_repository import (
    CompanyRepository,
    BusinessCompanyLinkRepository,
    CompanyInviteRepository,
)
from app.infrastructure.db.models import (
    CompanyModel,
    CompanyMemberModel,
    BusinessCompanyLinkModel,
    BusinessCompanyInviteModel,
)
from app.infrastructure.mappers.company_mapper import (
    CompanyMapper,
    CompanyMemberMapper,
    BusinessCompanyLinkMapper,
    BusinessCompanyInviteMapper,
)
from .base_repository import SQLAlchemyRepository


class SQLAlchemyCompanyRepository(SQLAlchemyRepository, CompanyRepository):
    """SQLAlchemy implementation of company repository."""

    model = CompanyModel
    mapper = CompanyMapper()

    def __init__(self, session):
        super().__init__(session)
        self.member_mapper = CompanyMemberMapper()

    def save(self, company: Company) -> Company:
        return self._save(company, lambda: ConflictError("You already own a company"))

    def get_by_id(self, company_id: str) -> Optional[Company]:
        model = self.session.query(CompanyModel).filter_by(id=company_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_owner(self, owner_user_id: str) -> Optional[Company]:
        model = self.session.query(CompanyModel).filter_by(owner_user_id=owner_user_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_for_user(self, user_id: str) -> List[Company]:
        models = self.session.query(CompanyModel).join(
            CompanyMemberModel, CompanyMemberModel.company_id == CompanyModel.id
        ).filter(
            CompanyMemberModel.user_id == user_id
        ).order_by(desc(CompanyModel.created_at)).all()
        return self._to_domain_list(models)

    def add_member(self, member: CompanyMember) -> CompanyMember:
        """Add a member, reusing the shared save path with the member mapper."""
        repository = _MemberRepository(self.session)
        return repository._save(
            member,
            lambda: DuplicateEntityError("CompanyMember", "user_id", member.user_id,
                                         message="User is already a member of this company")
        )

    def get_member(self, company_id: str, user_id: str) -> Optional[CompanyMember]:
        model = self.session.query(CompanyMemberModel).filter_by(
            company_id=company_id,
            user_id=user_id
        ).first()
        if not model:
            return None
        return self.member_mapper.model_to_domain(model)

    def list_members(self, company_id: str) -> List[CompanyMember]:
        models = self.session.query(CompanyMemberModel).filter_by(
            company_id=company_id
        ).order_by(CompanyMemberModel.created_at).all()
        return [self.member_mapper.model_to_domain(model) for model in models]

    def list_memberships(self, user_id: str) -> List[CompanyMember]:
        models = self.session.query(CompanyMemberModel).filter_by(user_id=user_id).all()
        return [self.member_mapper.model_to_domain(model) for model in models]


class _MemberRepository(SQLAlchemyRepository):
    model = CompanyMemberModel
    mapper = CompanyMemberMapper()


class SQLAlchemyBusinessCompanyLinkRepository(SQLAlchemyRepository, BusinessCompanyLinkRepository):
    """SQLAlchemy implementation of venue-company link repository."""

    model = BusinessCompanyLinkModel
    mapper = BusinessCompanyLinkMapper()

    def save(self, link: BusinessCompanyLink) -> BusinessCompanyLink:
        return self._save(
            link,
            lambda: DuplicateEntityError("BusinessCompanyLink", "company_id", link.company_id,
                                         message="Company is already linked to this business")
        )

    def get(self, business_id: str, company_id: str) -> Optional[BusinessCompanyLink]:
        model = self.session.query(BusinessCompanyLinkModel).filter_by(
            business_id=business_id,
            company_id=company_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_company(self, company_id: str) -> List[BusinessCompanyLink]:
        models = self.session.query(BusinessCompanyLinkModel).filter_by(
            company_id=company_id
        ).order_by(desc(BusinessCompanyLinkModel.created_at)).all()
        return self._to_domain_list(models)

    def list_by_companies(self, company_ids: List[str]) -> List[BusinessCompanyLink]:
        if not company_ids:
            return []
        models = self.session.query(BusinessCompanyLinkModel).filter(
            BusinessCompanyLinkModel.company_id.in_(company_ids)
        ).order_by(desc(BusinessCompanyLinkModel.created_at)).all()
        return self._to_domain_list(models)

    def list_by_business(self, business_id: str) -> List[BusinessCompanyLink]:
        models = self.session.query(BusinessCompanyLinkModel).filter_by(
            business_id=business_id
        ).order_by(desc(BusinessCompanyLinkModel.created_at)).all()
        return self._to_domain_list(models)


class SQLAlchemyCompanyInviteRepository(SQLAlchemyRepository, CompanyInviteRepository):
    """SQLAlchemy implementation of company invite repository."""

    model = BusinessCompanyInviteModel
    mapper = BusinessCompanyInviteMapper()

    def save(self, invite: BusinessCompanyInvite) -> BusinessCompanyInvite:
        return self._save(invite, lambda: DuplicateEntityError("BusinessCompanyInvite", "token", "***"))

    def get_by_id(self, invite_id: str) -> Optional[BusinessCompanyInvite]:
        model = self.session.query(BusinessCompanyInviteModel).filter_by(id=invite_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_token(self, token: str) -> Optional[BusinessCompanyInvite]:
        model = self.session.query(BusinessCompanyInviteModel).filter_by(token=token).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_business(self, business_id: str) -> List[BusinessCompanyInvite]:
        models = self.session.query(BusinessCompanyInviteModel).filter_by(
            business_id=business_id
        ).order_by(desc(BusinessCompanyInviteModel.created_at)).all()
        return self._to_domain_list(models)

    def list_by_email(self, email: str) -> List[BusinessCompanyInvite]:
        models = self.session.query(BusinessCompanyInviteModel).filter(
            func.lower(BusinessCompanyInviteModel.invitee_email) == email.strip().lower()
        ).order_by(desc(BusinessCompanyInviteModel.created_at)).all()
        return self._to_domain_list(models)
