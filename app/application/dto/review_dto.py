"""
Review DTOs for the application layer.
"""

from typing import Optional, List, Dict
from datetime import date
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, ResponseDTO, BaseDTO
from app.domain.models.review import Review, ReviewerType, ReviewSummary, MIN_RATING, MAX_RATING
from app.infrastructure.validation.validators import clean_text


class CreateReviewRequestDTO(CreateRequestDTO):
    """DTO for submitting a review after a gig."""

    gig_id: str = Field(min_length=1)
    recipient_id: str = Field(min_length=1)
    reviewer_type: ReviewerType
    comment: Optional[str] = Field(default=None, max_length=2000)
    category_ratings: Dict[str, int] = Field(description="Category name to 1-5 rating")

    @validator('comment', pre=True)
    def sanitize_comment(cls, v):
        return clean_text(v)

    @validator('category_ratings')
    def validate_ratings(cls, v):
        for name, value in v.items():
            if not MIN_RATING <= value <= MAX_RATING:
                raise ValueError(f"{name} must be between {MIN_RATING} and {MAX_RATING}")
        return v


class ReviewResponseDTO(ResponseDTO):
    """DTO for review responses."""

    gig_id: str
    reviewer_id: str
    recipient_id: str
    reviewer_type: ReviewerType
    rating: int
    comment: Optional[str] = None
    category_ratings: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewResponseDTO":
        return cls(
            id=review.id,
            gig_id=review.gig_id,
            reviewer_id=review.reviewer_id,
            recipient_id=review.recipient_id,
            reviewer_type=review.reviewer_type,
            rating=review.rating,
            comment=review.comment,
            category_ratings=review.category_ratings,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ReviewSummaryResponseDTO(BaseDTO):
    recipient_id: str
    total_reviews: int
    average_rating: float
    category_averages: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, summary: ReviewSummary) -> "ReviewSummaryResponseDTO":
        return cls(
            recipient_id=summary.recipient_id,
            total_reviews=summary.total_reviews,
            average_rating=summary.average_rating,
            category_averages=summary.category_averages,
        )


class RatingResponseDTO(BaseDTO):
    recipient_id: str
    average_rating: float
    total_reviews: int


class ReviewCheckResponseDTO(BaseDTO):
    exists: bool
    review: Optional[ReviewResponseDTO] = None


class PendingReviewDTO(BaseDTO):
    """A finished booking the user has not reviewed yet."""

    gig_id: str
    gig_title: str
    gig_end_date: Optional[date] = None
    recipient_id: str
    recipient_name: Optional[str] = None
    reviewer_type: ReviewerType


class PendingReviewsResponseDTO(BaseDTO):
    pending: List[PendingReviewDTO]
    total: int
