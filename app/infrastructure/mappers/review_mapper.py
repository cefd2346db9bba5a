"""
Review mapper.
"""

from app.domain.models.review import Review, ReviewerType
from app.infrastructure.db.models import ReviewModel
from .converters import naive_utc


class ReviewMapper:
    """Maps between Review domain entity and ReviewModel."""

    def domain_to_model(self, review: Review) -> ReviewModel:
        return ReviewModel(
            id=review.id,
            gig_id=review.gig_id,
            reviewer_id=review.reviewer_id,
            recipient_id=review.recipient_id,
            reviewer_type=review.reviewer_type,
            rating=review.rating,
            comment=review.comment,
            category_ratings=dict(review.category_ratings),
            created_at=review.created_at,
            updated_at=review.updated_at,
        )

    def model_to_domain(self, model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            gig_id=model.gig_id,
            reviewer_id=model.reviewer_id,
            recipient_id=model.recipient_id,
            reviewer_type=ReviewerType(model.reviewer_type),
            rating=model.rating,
            comment=model.comment,
            category_ratings=dict(model.category_ratings or {}),
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )
