"""
Review repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import desc, func

from app.domain.models.base import DuplicateEntityError
from app.domain.models.review import Review
from app.domain.repositories.review_repository import ReviewRepository
from app.infrastructure.db.models import ReviewModel
from app.infrastructure.mappers.review_mapper import ReviewMapper
from .base_repository import SQLAlchemyRepository


class SQLAlchemyReviewRepository(SQLAlchemyRepository, ReviewRepository):
    """SQLAlchemy implementation of review repository."""

    model = ReviewModel
    mapper = ReviewMapper()

    def save(self, review: Review) -> Review:
        return self._save(
            review,
            lambda: DuplicateEntityError(
                "Review", "gig_id", review.gig_id,
                message="Review already submitted for this gig"
            )
        )

    def get_by_gig_and_reviewer(self, gig_id: str, reviewer_id: str) -> Optional[Review]:
        model = self.session.query(ReviewModel).filter_by(
            gig_id=gig_id,
            reviewer_id=reviewer_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_recipient(self, recipient_id: str) -> List[Review]:
        models = self.session.query(ReviewModel).filter_by(
            recipient_id=recipient_id
        ).order_by(desc(ReviewModel.created_at)).all()
        return self._to_domain_list(models)

    def list_by_reviewer(self, reviewer_id: str) -> List[Review]:
        models = self.session.query(ReviewModel).filter_by(
            reviewer_id=reviewer_id
        ).order_by(desc(ReviewModel.created_at)).all()
        return self._to_domain_list(models)

    def average_rating(self, recipient_id: str) -> Optional[float]:
        value = self.session.query(func.avg(ReviewModel.rating)).filter_by(
            recipient_id=recipient_id
        ).scalar()
        return round(float(value), 1) if value is not None else None
