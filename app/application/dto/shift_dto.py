"""
Time tracking DTOs for the application layer.
Clock-in/out, shift review, venue staff and QR check-in.
"""

from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from pydantic import Field, validator

from .base_dto import CreateRequestDTO, UpdateRequestDTO, RequestDTO, ResponseDTO, BaseDTO, DateRangeRequestDTO
from .gig_dto import GigSummaryDTO
from app.domain.models.shift import WorkShift, VenueStaff, ShiftStatus, ClockMethod, REVIEW_STATUSES
from app.infrastructure.validation.validators import clean_text


class ClockInRequestDTO(CreateRequestDTO):
    venue_id: str = Field(min_length=1)
    gig_id: Optional[str] = None
    method: ClockMethod = ClockMethod.MANUAL


class ClockOutRequestDTO(UpdateRequestDTO):
    shift_id: str = Field(min_length=1)
    method: ClockMethod = ClockMethod.MANUAL


class UpdateShiftStatusRequestDTO(UpdateRequestDTO):
    """Venue decision on a submitted shift."""

    status: ShiftStatus
    venue_note: Optional[str] = Field(default=None, max_length=2000)

    @validator('status')
    def validate_status(cls, v):
        if v not in {s.value for s in REVIEW_STATUSES}:
            raise ValueError("Status must be approved, disputed or void")
        return v

    @validator('venue_note', pre=True)
    def sanitize_note(cls, v):
        return clean_text(v)


class MyShiftsRequestDTO(DateRangeRequestDTO):
    venue_id: Optional[str] = None
    gig_id: Optional[str] = None


class VenueShiftsRequestDTO(DateRangeRequestDTO):
    status: Optional[ShiftStatus] = None


class VenueSummaryDTO(BaseDTO):
    id: str
    business_name: str
    location: str = ""


class ShiftResponseDTO(ResponseDTO):
    """DTO for shift responses."""

    chef_id: str
    venue_id: str
    gig_id: Optional[str] = None
    clock_in_at: datetime
    clock_out_at: Optional[datetime] = None
    clock_in_method: ClockMethod
    clock_out_method: Optional[ClockMethod] = None
    break_minutes: int = 0
    status: ShiftStatus
    venue_note: Optional[str] = None
    worked_minutes: Optional[int] = None
    venue: Optional[VenueSummaryDTO] = None
    gig: Optional[GigSummaryDTO] = None
    chef_name: Optional[str] = None

    @classmethod
    def from_domain(
        cls,
        shift: WorkShift,
        venue: Optional[VenueSummaryDTO] = None,
        gig: Optional[GigSummaryDTO] = None,
        chef_name: Optional[str] = None
    ) -> "ShiftResponseDTO":
        return cls(
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
            worked_minutes=shift.worked_minutes,
            venue=venue,
            gig=gig,
            chef_name=chef_name,
            created_at=shift.created_at,
            updated_at=shift.updated_at,
        )


class OpenShiftResponseDTO(BaseDTO):
    shift: Optional[ShiftResponseDTO] = None


class AddStaffRequestDTO(CreateRequestDTO):
    chef_id: str = Field(min_length=1)
    role: Optional[str] = Field(default=None, max_length=100)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    @validator('role', pre=True)
    def sanitize_role(cls, v):
        return clean_text(v)


class UpdateStaffRequestDTO(UpdateRequestDTO):
    role: Optional[str] = Field(default=None, max_length=100)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None

    @validator('role', pre=True)
    def sanitize_role(cls, v):
        return clean_text(v)


class StaffResponseDTO(ResponseDTO):
    venue_id: str
    chef_id: str
    role: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    is_active: bool = True
    created_by: Optional[str] = None
    chef_name: Optional[str] = None

    @classmethod
    def from_domain(cls, staff: VenueStaff, chef_name: Optional[str] = None) -> "StaffResponseDTO":
        return cls(
            id=staff.id,
            venue_id=staff.venue_id,
            chef_id=staff.chef_id,
            role=staff.role,
            hourly_rate=staff.hourly_rate,
            is_active=staff.is_active,
            created_by=staff.created_by,
            chef_name=chef_name,
            created_at=staff.created_at,
            updated_at=staff.updated_at,
        )


class StaffVenueDTO(BaseDTO):
    """A venue where the caller is active staff."""

    staff_id: str
    venue: VenueSummaryDTO
    role: Optional[str] = None
    hourly_rate: Optional[Decimal] = None


class AcceptedGigDTO(BaseDTO):
    application_id: str
    status: str
    gig: GigSummaryDTO
    venue: Optional[VenueSummaryDTO] = None


class GenerateQrRequestDTO(CreateRequestDTO):
    venue_id: str = Field(min_length=1)


class ValidateQrRequestDTO(RequestDTO):
    token: str = Field(min_length=1, max_length=128)


class CheckinTokenResponseDTO(BaseDTO):
    venue_id: str
    token: str
    created_at: Optional[datetime] = None


class QrScanResultDTO(BaseDTO):
    """Outcome of scanning a venue QR code: `clock_in` or `clock_out`."""

    action: str
    shift: ShiftResponseDTO
    venue: VenueSummaryDTO
