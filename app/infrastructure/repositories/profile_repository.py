"""
Profile repository implementations using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import desc

from app.domain.models.base import DuplicateEntityError
from app.domain.models.profile import ChefProfile, BusinessProfile
from app.domain.repositories.profile_repository import (
    ChefProfileRepository,
    BusinessProfileRepository,
)
from app.infrastructure.db.models import ChefProfileModel, BusinessProfileModel
from app.infrastructure.mappers.profile_mapper import ChefProfileMapper, BusinessProfileMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyChefProfileRepository(SQLAlchemyRepository, ChefProfileRepository):
    """SQLAlchemy implementation of chef profile repository."""

    model = ChefProfileModel
    mapper = ChefProfileMapper()

    def save(self, profile: ChefProfile) -> ChefProfile:
        return self._save(profile, lambda: DuplicateEntityError("ChefProfile", "id", profile.id))

    def get_by_id(self, chef_id: str) -> Optional[ChefProfile]:
        model = self.session.query(ChefProfileModel).filter_by(id=chef_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def exists(self, chef_id: str) -> bool:
        return self.session.query(ChefProfileModel.id).filter_by(id=chef_id).first() is not None


class SQLAlchemyBusinessProfileRepository(SQLAlchemyRepository, BusinessProfileRepository):
    """SQLAlchemy implementation of business profile repository."""

    model = BusinessProfileModel
    mapper = BusinessProfileMapper()

    def save(self, profile: BusinessProfile) -> BusinessProfile:
        return self._save(profile, lambda: DuplicateEntityError("BusinessProfile", "id", profile.id))

    def get_by_id(self, business_id: str) -> Optional[BusinessProfile]:
        model = self.session.query(BusinessProfileModel).filter_by(id=business_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_ids(self, business_ids: List[str]) -> List[BusinessProfile]:
        if not business_ids:
            return []
        models = self.session.query(BusinessProfileModel).filter(
            BusinessProfileModel.id.in_(business_ids)
        ).order_by(BusinessProfileModel.business_name).all()
        return self._to_domain_list(models)

    def exists(self, business_id: str) -> bool:
        return self.session.query(BusinessProfileModel.id).filter_by(id=business_id).first() is not None

    def search(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        limit: int = 50
    ) -> List[BusinessProfile]:
        """Search businesses by name and location."""
        query = self.session.query(BusinessProfileModel)
        if name:
            query = query.filter(BusinessProfileModel.business_name.ilike(f"%{name}%"))
        if location:
            query = query.filter(BusinessProfileModel.location.ilike(f"%{location}%"))
        models = query.order_by(desc(BusinessProfileModel.created_at)).limit(limit).all()
        return self._to_domain_list(models)
