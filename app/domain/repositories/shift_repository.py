"""
Time tracking repository interfaces.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from app.domain.models.shift import WorkShift, ShiftStatus, VenueStaff, VenueCheckinToken


class WorkShiftRepository(ABC):
    """Repository interface for work shifts."""

    @abstractmethod
    def save(self, shift: WorkShift) -> WorkShift:
        """
        Save a shift.
        Raises ConflictError when a second open shift would exist for the chef.
        """
        pass

    @abstractmethod
    def get_by_id(self, shift_id: str) -> Optional[WorkShift]:
        """
        Get a shift by id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_open_for_chef(self, chef_id: str) -> Optional[WorkShift]:
        """The chef's open shift, or None."""
        pass

    @abstractmethod
    def list_by_chef(
        self,
        chef_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        venue_id: Optional[str] = None,
        gig_id: Optional[str] = None
    ) -> List[WorkShift]:
        """Shifts of a chef by clock-in time, newest first."""
        pass

    @abstractmethod
    def list_by_venue(
        self,
        venue_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[ShiftStatus] = None
    ) -> List[WorkShift]:
        """Shifts worked at a venue by clock-in time, newest first."""
        pass


class VenueStaffRepository(ABC):
    """Repository interface for venue staff rosters."""

    @abstractmethod
    def save(self, staff: VenueStaff) -> VenueStaff:
        pass

    @abstractmethod
    def get_by_id(self, staff_id: str) -> Optional[VenueStaff]:
        pass

    @abstractmethod
    def get_by_venue_and_chef(self, venue_id: str, chef_id: str) -> Optional[VenueStaff]:
        pass

    @abstractmethod
    def list_by_venue(self, venue_id: str, active_only: bool = False) -> List[VenueStaff]:
        pass

    @abstractmethod
    def list_by_chef(self, chef_id: str, active_only: bool = True) -> List[VenueStaff]:
        """Staff entries of a chef across venues."""
        pass


class CheckinTokenRepository(ABC):
    """Repository interface for permanent venue QR tokens."""

    @abstractmethod
    def get_by_venue(self, venue_id: str) -> Optional[VenueCheckinToken]:
        pass

    @abstractmethod
    def get_by_token(self, token: str) -> Optional[VenueCheckinToken]:
        """
        Resolve a scanned token to its venue.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def save(self, token: VenueCheckinToken) -> VenueCheckinToken:
        pass
