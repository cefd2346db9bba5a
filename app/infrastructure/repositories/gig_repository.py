"""
Gig and application repository implementations using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List
from sqlalchemy import desc

from app.domain.models.base import DuplicateEntityError
from app.domain.models.gig import Gig, GigApplication, ApplicationStatus
from app.domain.repositories.gig_repository import GigRepository, GigApplicationRepository
from app.infrastructure.db.models import GigModel, GigApplicationModel
from app.infrastructure.mappers.gig_mapper import GigMapper, GigApplicationMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyGigRepository(SQLAlchemyRepository, GigRepository):
    """SQLAlchemy implementation of gig repository."""

    model = GigModel
    mapper = GigMapper()

    def save(self, gig: Gig) -> Gig:
        return self._save(gig, lambda: DuplicateEntityError("Gig", "id", gig.id))

    def get_by_id(self, gig_id: str) -> Optional[Gig]:
        """Get gig by ID."""
        model = self.session.query(GigModel).filter_by(id=gig_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_ids(self, gig_ids: List[str]) -> List[Gig]:
        if not gig_ids:
            return []
        models = self.session.query(GigModel).filter(GigModel.id.in_(gig_ids)).all()
        return self._to_domain_list(models)

    def list_by_creator(self, business_id: str) -> List[Gig]:
        models = self.session.query(GigModel).filter_by(
            created_by=business_id
        ).order_by(desc(GigModel.created_at)).all()
        return self._to_domain_list(models)

    def list_active(self) -> List[Gig]:
        models = self.session.query(GigModel).filter_by(
            is_active=True,
            is_booked=False
        ).order_by(desc(GigModel.created_at)).all()
        return self._to_domain_list(models)


class SQLAlchemyGigApplicationRepository(SQLAlchemyRepository, GigApplicationRepository):
    """SQLAlchemy implementation of gig application repository."""

    model = GigApplicationModel
    mapper = GigApplicationMapper()

    def save(self, application: GigApplication) -> GigApplication:
        return self._save(
            application,
            lambda: DuplicateEntityError(
                "GigApplication", "gig_id", application.gig_id,
                message="You have already applied to this gig"
            )
        )

    def get_by_id(self, application_id: str) -> Optional[GigApplication]:
        model = self.session.query(GigApplicationModel).filter_by(id=application_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_gig_and_chef(self, gig_id: str, chef_id: str) -> Optional[GigApplication]:
        model = self.session.query(GigApplicationModel).filter_by(
            gig_id=gig_id,
            chef_id=chef_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_gig(self, gig_id: str) -> List[GigApplication]:
        models = self.session.query(GigApplicationModel).filter_by(
            gig_id=gig_id
        ).order_by(desc(GigApplicationModel.applied_at)).all()
        return self._to_domain_list(models)

    def list_by_chef(self, chef_id: str) -> List[GigApplication]:
        models = self.session.query(GigApplicationModel).filter_by(
            chef_id=chef_id
        ).order_by(desc(GigApplicationModel.applied_at)).all()
        return self._to_domain_list(models)

    def list_by_chef_and_status(
        self,
        chef_id: str,
        statuses: List[ApplicationStatus]
    ) -> List[GigApplication]:
        models = self.session.query(GigApplicationModel).filter(
            GigApplicationModel.chef_id == chef_id,
            GigApplicationModel.status.in_(list(statuses))
        ).order_by(desc(GigApplicationModel.applied_at)).all()
        return self._to_domain_list(models)

    def reject_competing(self, gig_id: str, accepted_application_id: str) -> int:
        """
        Reject every other open application of the gig in one statement.
        Rejected and confirmed applications are terminal and left untouched.
        """
        count = self.session.query(GigApplicationModel).filter(
            GigApplicationModel.gig_id == gig_id,
            GigApplicationModel.id != accepted_application_id,
            GigApplicationModel.status.notin_([ApplicationStatus.REJECTED, ApplicationStatus.CONFIRMED])
        ).update(
            {
                GigApplicationModel.status: ApplicationStatus.REJECTED,
                GigApplicationModel.updated_at: datetime.utcnow(),
            },
            synchronize_session="fetch"
        )
        self.session.flush()
        return count
