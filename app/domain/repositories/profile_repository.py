"""
Profile repository interfaces.
Define the contract for chef and business profile persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.profile import ChefProfile, BusinessProfile


class ChefProfileRepository(ABC):
    """Repository interface for chef profiles, keyed by the owning user id."""

    @abstractmethod
    def save(self, profile: ChefProfile) -> ChefProfile:
        """
        Insert or update a chef profile.
        The profile id is the auth user id, so inserts never generate one.
        """
        pass

    @abstractmethod
    def get_by_id(self, chef_id: str) -> Optional[ChefProfile]:
        """
        Get a chef profile by user id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def exists(self, chef_id: str) -> bool:
        pass


class BusinessProfileRepository(ABC):
    """Repository interface for business profiles (venues)."""

    @abstractmethod
    def save(self, profile: BusinessProfile) -> BusinessProfile:
        """Insert or update a business profile."""
        pass

    @abstractmethod
    def get_by_id(self, business_id: str) -> Optional[BusinessProfile]:
        """
        Get a business profile by user id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_ids(self, business_ids: List[str]) -> List[BusinessProfile]:
        """Get every business profile whose id is in the list."""
        pass

    @abstractmethod
    def exists(self, business_id: str) -> bool:
        pass

    @abstractmethod
    def search(
        self,
        name: Optional[str] = None,
        location: Optional[str] = None,
        limit: int = 50
    ) -> List[BusinessProfile]:
        """
        Search businesses by name and location.
        Both filters are case-insensitive substring matches.
        """
        pass
