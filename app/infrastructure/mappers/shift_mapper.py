"""
Time tracking mappers.
"""

from decimal import Decimal

from app.domain.models.shift import (
    WorkShift,
    ShiftStatus,
    ClockMethod,
    VenueStaff,
    VenueCheckinToken,
)
from app.infrastructure.db.models import WorkShiftModel, VenueStaffModel, VenueCheckinTokenModel
from .converters import naive_utc


class WorkShiftMapper:
    """Maps between WorkShift domain entity and WorkShiftModel."""

    def domain_to_model(self, shift: WorkShift) -> WorkShiftModel:
        return WorkShiftModel(
            id=shift.id,
            chef_id=shift.chef_id,
            venue_id=shift.venue_id,
            gig_id=shift.gig_id,
            clock_in_at=shift.clock_in_at,
            clock_out_at=shift.clock_out_at,
            clock_in_method=shift.clock_in_method,
            clock_out_method=shift.clock_out_method,
            break_minutes=shift.break_minutes,
            status=shift.status,
            venue_note=shift.venue_note,
            created_at=shift.created_at,
            updated_at=shift.updated_at,
        )

    def model_to_domain(self, model: WorkShiftModel) -> WorkShift:
        return WorkShift(
            id=model.id,
            chef_id=model.chef_id,
            venue_id=model.venue_id,
            gig_id=model.gig_id,
            clock_in_at=naive_utc(model.clock_in_at),
            clock_out_at=naive_utc(model.clock_out_at),
            clock_in_method=ClockMethod(model.clock_in_method),
            clock_out_method=ClockMethod(model.clock_out_method) if model.clock_out_method else None,
            break_minutes=model.break_minutes or 0,
            status=ShiftStatus(model.status),
            venue_note=model.venue_note,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class VenueStaffMapper:

    def domain_to_model(self, staff: VenueStaff) -> VenueStaffModel:
        return VenueStaffModel(
            id=staff.id,
            venue_id=staff.venue_id,
            chef_id=staff.chef_id,
            role=staff.role,
            hourly_rate=staff.hourly_rate,
            is_active=staff.is_active,
            created_by=staff.created_by,
            created_at=staff.created_at,
            updated_at=staff.updated_at,
        )

    def model_to_domain(self, model: VenueStaffModel) -> VenueStaff:
        return VenueStaff(
            id=model.id,
            venue_id=model.venue_id,
            chef_id=model.chef_id,
            role=model.role,
            hourly_rate=Decimal(model.hourly_rate) if model.hourly_rate is not None else None,
            is_active=bool(model.is_active),
            created_by=model.created_by,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )


class CheckinTokenMapper:

    def domain_to_model(self, token: VenueCheckinToken) -> VenueCheckinTokenModel:
        return VenueCheckinTokenModel(
            id=token.id,
            venue_id=token.venue_id,
            token=token.token,
            created_by=token.created_by,
            created_at=token.created_at,
            updated_at=token.updated_at,
        )

    def model_to_domain(self, model: VenueCheckinTokenModel) -> VenueCheckinToken:
        return VenueCheckinToken(
            id=model.id,
            venue_id=model.venue_id,
            token=model.token,
            created_by=model.created_by,
            created_at=naive_utc(model.created_at),
            updated_at=naive_utc(model.updated_at) or naive_utc(model.created_at),
        )
