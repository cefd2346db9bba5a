"""
Review repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.review import Review


class ReviewRepository(ABC):
    """Repository interface for reviews."""

    @abstractmethod
    def save(self, review: Review) -> Review:
        """
        Save a review.
        Raises DuplicateEntityError when the reviewer already reviewed the gig.
        """
        pass

    @abstractmethod
    def get_by_gig_and_reviewer(self, gig_id: str, reviewer_id: str) -> Optional[Review]:
        """
        Get the review a user left for a gig.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_by_recipient(self, recipient_id: str) -> List[Review]:
        """Reviews received by a user, newest first."""
        pass

    @abstractmethod
    def list_by_reviewer(self, reviewer_id: str) -> List[Review]:
        """Reviews written by a user, newest first."""
        pass

    @abstractmethod
    def average_rating(self, recipient_id: str) -> Optional[float]:
        """
        Mean overall rating received by a user.
        Returns None when the user has no reviews.
        """
        pass
