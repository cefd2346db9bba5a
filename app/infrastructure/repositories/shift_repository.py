"""
Time tracking repository implementations using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List
from sqlalchemy import desc

from app.domain.models.base import ConflictError, DuplicateEntityError
from app.domain.models.shift import WorkShift, ShiftStatus, VenueStaff, VenueCheckinToken
from app.domain.repositories.shift_repository import (
    WorkShiftRepository,
    VenueStaffRepository,
    CheckinTokenRepository,
)
from app.infrastructure.db.models import WorkShiftModel, VenueStaffModel, VenueCheckinTokenModel
from app.infrastructure.mappers.shift_mapper import (
    WorkShiftMapper,
    VenueStaffMapper,
    CheckinTokenMapper,
)
from .base_repository import SQLAlchemyRepository


class SQLAlchemyWorkShiftRepository(SQLAlchemyRepository, WorkShiftRepository):
    """SQLAlchemy implementation of work shift repository."""

    model = WorkShiftModel
    mapper = WorkShiftMapper()

    def save(self, shift: WorkShift) -> WorkShift:
        # The partial unique index rejects a second open shift for the chef
        return self._save(shift, lambda: ConflictError("You already have an open shift"))

    def get_by_id(self, shift_id: str) -> Optional[WorkShift]:
        model = self.session.query(WorkShiftModel).filter_by(id=shift_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_open_for_chef(self, chef_id: str) -> Optional[WorkShift]:
        model = self.session.query(WorkShiftModel).filter_by(
            chef_id=chef_id,
            status=ShiftStatus.OPEN
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_chef(
        self,
        chef_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        venue_id: Optional[str] = None,
        gig_id: Optional[str] = None
    ) -> List[WorkShift]:
        query = self.session.query(WorkShiftModel).filter_by(chef_id=chef_id)
        if venue_id:
            query = query.filter_by(venue_id=venue_id)
        if gig_id:
            query = query.filter_by(gig_id=gig_id)
        query = self._in_range(query, start, end)
        return self._to_domain_list(query.order_by(desc(WorkShiftModel.clock_in_at)).all())

    def list_by_venue(
        self,
        venue_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[ShiftStatus] = None
    ) -> List[WorkShift]:
        query = self.session.query(WorkShiftModel).filter_by(venue_id=venue_id)
        if status:
            query = query.filter_by(status=status)
        query = self._in_range(query, start, end)
        return self._to_domain_list(query.order_by(desc(WorkShiftModel.clock_in_at)).all())

    @staticmethod
    def _in_range(query, start: Optional[datetime], end: Optional[datetime]):
        if start:
            query = query.filter(WorkShiftModel.clock_in_at >= start)
        if end:
            query = query.filter(WorkShiftModel.clock_in_at <= end)
        return query


class SQLAlchemyVenueStaffRepository(SQLAlchemyRepository, VenueStaffRepository):
    """SQLAlchemy implementation of venue staff repository."""

    model = VenueStaffModel
    mapper = VenueStaffMapper()

    def save(self, staff: VenueStaff) -> VenueStaff:
        return self._save(
            staff,
            lambda: DuplicateEntityError("VenueStaff", "chef_id", staff.chef_id,
                                         message="Chef is already staff at this venue")
        )

    def get_by_id(self, staff_id: str) -> Optional[VenueStaff]:
        model = self.session.query(VenueStaffModel).filter_by(id=staff_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_venue_and_chef(self, venue_id: str, chef_id: str) -> Optional[VenueStaff]:
        model = self.session.query(VenueStaffModel).filter_by(
            venue_id=venue_id,
            chef_id=chef_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_venue(self, venue_id: str, active_only: bool = False) -> List[VenueStaff]:
        query = self.session.query(VenueStaffModel).filter_by(venue_id=venue_id)
        if active_only:
            query = query.filter_by(is_active=True)
        return self._to_domain_list(query.order_by(desc(VenueStaffModel.created_at)).all())

    def list_by_chef(self, chef_id: str, active_only: bool = True) -> List[VenueStaff]:
        query = self.session.query(VenueStaffModel).filter_by(chef_id=chef_id)
        if active_only:
            query = query.filter_by(is_active=True)
        return self._to_domain_list(query.order_by(desc(VenueStaffModel.created_at)).all())


class SQLAlchemyCheckinTokenRepository(SQLAlchemyRepository, CheckinTokenRepository):

    model = VenueCheckinTokenModel
    mapper = CheckinTokenMapper()

    def get_by_venue(self, venue_id: str) -> Optional[VenueCheckinToken]:
        model = self.session.query(VenueCheckinTokenModel).filter_by(venue_id=venue_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_token(self, token: str) -> Optional[VenueCheckinToken]:
        model = self.session.query(VenueCheckinTokenModel).filter_by(token=token).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def save(self, token: VenueCheckinToken) -> VenueCheckinToken:
        return self._save(token, lambda: ConflictError("Venue already has a check-in token"))
