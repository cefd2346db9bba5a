"""
Review domain model.
Either party reviews the other after a gig with an overall rating and
category sub-ratings that depend on who is reviewing whom.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, List, Tuple

from app.domain.models.base import BaseEntity, ValidationError

MIN_RATING = 1
MAX_RATING = 5


class ReviewerType(str, Enum):
    """Who wrote the review."""
    CHEF = "chef"
    BUSINESS = "business"


# Category ratings a reviewer of each type must provide
REVIEW_CATEGORIES: Dict[ReviewerType, Tuple[str, ...]] = {
    ReviewerType.CHEF: ("organisation", "equipment", "welcoming"),
    ReviewerType.BUSINESS: ("timekeeping", "appearance", "role_fulfilment"),
}


@dataclass(eq=False)
class Review(BaseEntity):
    """
    Review entity.
    At most one review exists per (gig, reviewer).
    """

    gig_id: str = ""
    reviewer_id: str = ""
    recipient_id: str = ""
    reviewer_type: ReviewerType = ReviewerType.CHEF
    rating: int = 0
    comment: Optional[str] = None
    category_ratings: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        if not self.rating and self.category_ratings:
            self.rating = overall_rating(self.category_ratings)

    def validate(self) -> None:
        if not self.gig_id:
            raise ValidationError("Gig ID is required", "gig_id")
        if not self.reviewer_id:
            raise ValidationError("Reviewer ID is required", "reviewer_id")
        if not self.recipient_id:
            raise ValidationError("Recipient ID is required", "recipient_id")
        if self.reviewer_id == self.recipient_id:
            raise ValidationError("You cannot review yourself", "recipient_id")

        expected = REVIEW_CATEGORIES[self.reviewer_type]
        for name in expected:
            value = self.category_ratings.get(name)
            if value is None:
                raise ValidationError(f"Rating for {name} is required", name)
            _check_rating(value, name)
        unknown = set(self.category_ratings) - set(expected)
        if unknown:
            raise ValidationError(
                f"Unexpected rating categories for a {self.reviewer_type.value} review: "
                f"{', '.join(sorted(unknown))}",
                "category_ratings"
            )
        _check_rating(self.rating, "rating")


def _check_rating(value: int, field_name: str) -> None:
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(
            f"{field_name} must be between {MIN_RATING} and {MAX_RATING}", field_name
        )


def overall_rating(category_ratings: Dict[str, int]) -> int:
    """Rounded mean of the provided category ratings, 0 when none are set."""
    values = [v for v in category_ratings.values() if v and v > 0]
    if not values:
        return 0
    # Round half up, as 4.5 stars should read as 5
    return int(sum(values) / len(values) + 0.5)


@dataclass
class ReviewSummary:
    """Aggregated ratings for one recipient."""

    recipient_id: str
    total_reviews: int = 0
    average_rating: float = 0.0
    category_averages: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_reviews(cls, recipient_id: str, reviews: List[Review]) -> "ReviewSummary":
        if not reviews:
            return cls(recipient_id=recipient_id)

        totals: Dict[str, List[int]] = {}
        for review in reviews:
            for name, value in review.category_ratings.items():
                if value:
                    totals.setdefault(name, []).append(value)

        return cls(
            recipient_id=recipient_id,
            total_reviews=len(reviews),
            average_rating=round(sum(r.rating for r in reviews) / len(reviews), 1),
            category_averages={
                name: round(sum(values) / len(values), 1)
                for name, values in sorted(totals.items())
            },
        )
