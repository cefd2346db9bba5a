"""
Time tracking domain models.
Venue staff rosters, work shifts recorded by clock-in/clock-out, and the
permanent per-venue QR check-in token.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from app.domain.models.base import (
    BaseEntity,
    TimeRange,
    ValidationError,
    BusinessRuleViolation,
    AuthorizationError,
)

CHECKIN_TOKEN_BYTES = 16


class ShiftStatus(str, Enum):
    """Work shift status."""
    OPEN = "open"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    DISPUTED = "disputed"
    VOID = "void"


# Statuses a venue operator may set when reviewing a shift
REVIEW_STATUSES = (ShiftStatus.APPROVED, ShiftStatus.DISPUTED, ShiftStatus.VOID)


class ClockMethod(str, Enum):
    """How a clock-in or clock-out was recorded."""
    MANUAL = "manual"
    QR = "qr"
    NFC = "nfc"


@dataclass(eq=False)
class VenueStaff(BaseEntity):
    """A chef on a venue's recurring staff roster."""

    venue_id: str = ""
    chef_id: str = ""
    role: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    is_active: bool = True
    created_by: Optional[str] = None

    def validate(self) -> None:
        if not self.venue_id:
            raise ValidationError("Venue ID is required", "venue_id")
        if not self.chef_id:
            raise ValidationError("Chef ID is required", "chef_id")
        if self.hourly_rate is not None and self.hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative", "hourly_rate")

    def deactivate(self) -> None:
        self.is_active = False
        self.mark_as_updated()

    def reactivate(self, role: Optional[str] = None, hourly_rate: Optional[Decimal] = None) -> None:
        self.is_active = True
        if role is not None:
            self.role = role
        if hourly_rate is not None:
            self.hourly_rate = hourly_rate
        self.mark_as_updated()


@dataclass(eq=False)
class WorkShift(BaseEntity):
    """
    WorkShift entity.
    A chef holds at most one open shift at a time.
    """

    chef_id: str = ""
    venue_id: str = ""
    gig_id: Optional[str] = None
    clock_in_at: Optional[datetime] = None
    clock_out_at: Optional[datetime] = None
    clock_in_method: ClockMethod = ClockMethod.MANUAL
    clock_out_method: Optional[ClockMethod] = None
    break_minutes: int = 0
    status: ShiftStatus = ShiftStatus.OPEN
    venue_note: Optional[str] = None

    @classmethod
    def open(
        cls,
        chef_id: str,
        venue_id: str,
        gig_id: Optional[str] = None,
        method: ClockMethod = ClockMethod.MANUAL,
        at: Optional[datetime] = None
    ) -> "WorkShift":
        shift = cls(
            chef_id=chef_id,
            venue_id=venue_id,
            gig_id=gig_id,
            clock_in_at=at or datetime.utcnow(),
            clock_in_method=method,
            status=ShiftStatus.OPEN,
            break_minutes=0,
        )
        shift.validate()
        return shift

    def validate(self) -> None:
        if not self.chef_id:
            raise ValidationError("Chef ID is required", "chef_id")
        if not self.venue_id:
            raise ValidationError("Venue ID is required", "venue_id")
        if self.clock_in_at is None:
            raise ValidationError("Clock-in time is required", "clock_in_at")
        if self.break_minutes < 0:
            raise ValidationError("Break minutes cannot be negative", "break_minutes")

    @property
    def is_open(self) -> bool:
        return self.status == ShiftStatus.OPEN

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.clock_in_at, self.clock_out_at)

    @property
    def worked_minutes(self) -> Optional[int]:
        """Minutes between clock-in and clock-out, less breaks."""
        minutes = self.time_range.duration_minutes
        if minutes is None:
            return None
        return max(minutes - self.break_minutes, 0)

    def ensure_owned_by(self, chef_id: str) -> None:
        if self.chef_id != chef_id:
            raise AuthorizationError("Not your shift")

    def clock_out(self, method: ClockMethod = ClockMethod.MANUAL, at: Optional[datetime] = None) -> None:
        if not self.is_open:
            raise BusinessRuleViolation("Shift is not open")
        closed = self.time_range.close(at or datetime.utcnow())
        self.clock_out_at = closed.end
        self.clock_out_method = method
        self.status = ShiftStatus.SUBMITTED
        self.mark_as_updated()

    def review(self, status: ShiftStatus, venue_note: Optional[str] = None) -> None:
        """
        Venue decision on a submitted shift.
        Only submitted shifts can be approved or disputed; void overrides any state.
        """
        if status not in REVIEW_STATUSES:
            raise ValidationError("Status must be approved, disputed or void", "status")
        if status != ShiftStatus.VOID and self.status != ShiftStatus.SUBMITTED:
            raise BusinessRuleViolation("Only submitted shifts can be approved or disputed")
        self.status = status
        if venue_note is not None:
            self.venue_note = venue_note
        self.mark_as_updated()


@dataclass(eq=False)
class VenueCheckinToken(BaseEntity):
    """Permanent QR token identifying a venue for check-in."""

    venue_id: str = ""
    token: str = ""
    created_by: Optional[str] = None

    @classmethod
    def generate(cls, venue_id: str, created_by: str) -> "VenueCheckinToken":
        return cls(
            venue_id=venue_id,
            token=secrets.token_urlsafe(CHECKIN_TOKEN_BYTES),
            created_by=created_by,
        )
