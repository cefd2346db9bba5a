"""
Unit tests for time tracking domain models.
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from app.domain.models.shift import (
    WorkShift,
    ShiftStatus,
    ClockMethod,
    VenueStaff,
    VenueCheckinToken,
)
from app.domain.models.base import ValidationError, BusinessRuleViolation, AuthorizationError


class TestWorkShift:
    """Test cases for WorkShift domain model."""

    def setup_method(self):
        """Set up test fixtures."""
        self.start = datetime(2024, 3, 1, 9, 0)
        self.shift = WorkShift.open("chef-1", "venue-1", at=self.start)

    def test_open_shift(self):
        assert self.shift.is_open is True
        assert self.shift.clock_in_at == self.start
        assert self.shift.clock_in_method == ClockMethod.MANUAL
        assert self.shift.gig_id is None
        assert self.shift.worked_minutes is None

    def test_open_requires_venue(self):
        with pytest.raises(ValidationError, match="Venue ID is required"):
            WorkShift.open("chef-1", "")

    def test_clock_out_submits_shift(self):
        """Test clocking out closes the shift and records the method."""
        self.shift.clock_out(ClockMethod.QR, at=self.start + timedelta(hours=8))

        assert self.shift.status == ShiftStatus.SUBMITTED
        assert self.shift.clock_out_method == ClockMethod.QR
        assert self.shift.worked_minutes == 480

    def test_worked_minutes_subtracts_breaks(self):
        self.shift.break_minutes = 30
        self.shift.clock_out(at=self.start + timedelta(hours=8))

        assert self.shift.worked_minutes == 450

    def test_clock_out_before_clock_in_fails(self):
        with pytest.raises(ValidationError, match="End time cannot be before start time"):
            self.shift.clock_out(at=self.start - timedelta(minutes=1))

    def test_clock_out_twice_fails(self):
        self.shift.clock_out(at=self.start + timedelta(hours=1))

        with pytest.raises(BusinessRuleViolation, match="Shift is not open"):
            self.shift.clock_out(at=self.start + timedelta(hours=2))

    def test_ensure_owned_by(self):
        self.shift.ensure_owned_by("chef-1")

        with pytest.raises(AuthorizationError, match="Not your shift"):
            self.shift.ensure_owned_by("chef-2")

    def test_review_submitted_shift(self):
        """Test a venue can approve a submitted shift with a note."""
        self.shift.clock_out(at=self.start + timedelta(hours=4))

        self.shift.review(ShiftStatus.APPROVED, "Thanks!")

        assert self.shift.status == ShiftStatus.APPROVED
        assert self.shift.venue_note == "Thanks!"

    def test_review_open_shift_fails(self):
        with pytest.raises(BusinessRuleViolation, match="Only submitted shifts"):
            self.shift.review(ShiftStatus.DISPUTED)

    def test_void_overrides_any_state(self):
        self.shift.review(ShiftStatus.VOID)

        assert self.shift.status == ShiftStatus.VOID

    def test_review_rejects_non_review_status(self):
        with pytest.raises(ValidationError):
            self.shift.review(ShiftStatus.OPEN)


class TestVenueStaff:
    """Test cases for VenueStaff domain model."""

    def test_negative_rate_rejected(self):
        staff = VenueStaff(venue_id="v", chef_id="c", hourly_rate=Decimal("-5"))

        with pytest.raises(ValidationError, match="Hourly rate cannot be negative"):
            staff.validate()

    def test_deactivate_and_reactivate(self):
        """Test a removed staff member can be reactivated with new terms."""
        staff = VenueStaff(venue_id="v", chef_id="c", role="Line cook", hourly_rate=Decimal("14"))

        staff.deactivate()
        assert staff.is_active is False

        staff.reactivate(role="Sous chef")
        assert staff.is_active is True
        assert staff.role == "Sous chef"
        assert staff.hourly_rate == Decimal("14")


class TestVenueCheckinToken:

    def test_generate_unique_tokens(self):
        first = VenueCheckinToken.generate("venue-1", "owner-1")
        second = VenueCheckinToken.generate("venue-1", "owner-1")

        assert first.venue_id == "venue-1"
        assert first.created_by == "owner-1"
        assert len(first.token) >= 16
        assert first.token != second.token
