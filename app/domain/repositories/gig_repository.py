"""
Gig and application repository interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.gig import Gig, GigApplication, ApplicationStatus


class GigRepository(ABC):
    """Repository interface for gigs."""

    @abstractmethod
    def save(self, gig: Gig) -> Gig:
        """
        Save a gig entity.
        New gigs get an id assigned on insert.
        """
        pass

    @abstractmethod
    def get_by_id(self, gig_id: str) -> Optional[Gig]:
        """
        Get a gig by id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_ids(self, gig_ids: List[str]) -> List[Gig]:
        pass

    @abstractmethod
    def list_by_creator(self, business_id: str) -> List[Gig]:
        """Gigs posted by a business, newest first."""
        pass

    @abstractmethod
    def list_active(self) -> List[Gig]:
        """Active gigs not yet booked, newest first."""
        pass


class GigApplicationRepository(ABC):
    """Repository interface for gig applications."""

    @abstractmethod
    def save(self, application: GigApplication) -> GigApplication:
        """
        Save an application.
        Raises DuplicateEntityError when the chef already applied to the gig.
        """
        pass

    @abstractmethod
    def get_by_id(self, application_id: str) -> Optional[GigApplication]:
        """
        Get an application by id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_gig_and_chef(self, gig_id: str, chef_id: str) -> Optional[GigApplication]:
        pass

    @abstractmethod
    def list_by_gig(self, gig_id: str) -> List[GigApplication]:
        """Applications for a gig, newest first."""
        pass

    @abstractmethod
    def list_by_chef(self, chef_id: str) -> List[GigApplication]:
        """Applications made by a chef, newest first."""
        pass

    @abstractmethod
    def list_by_chef_and_status(
        self,
        chef_id: str,
        statuses: List[ApplicationStatus]
    ) -> List[GigApplication]:
        """Applications of a chef in any of the given statuses."""
        pass

    @abstractmethod
    def reject_competing(self, gig_id: str, accepted_application_id: str) -> int:
        """
        Reject every other non-rejected application of the gig.
        Returns the number of applications rejected.
        """
        pass
