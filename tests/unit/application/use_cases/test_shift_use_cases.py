"""
Unit tests for time tracking use cases.
"""

import pytest

from app.application.dto.shift_dto import (
    ClockInRequestDTO, ClockOutRequestDTO, AddStaffRequestDTO, UpdateShiftStatusRequestDTO
)
from app.application.use_cases.shift_use_cases import (
    CLOCK_IN,
    CLOCK_OUT,
    ClockInUseCase,
    ClockOutUseCase,
    GetOpenShiftUseCase,
    AddStaffUseCase,
    UpdateShiftStatusUseCase,
    GenerateCheckinTokenUseCase,
    ScanCheckinTokenUseCase,
    AddStaffCommand,
    UpdateShiftStatusCommand,
)
from app.domain.models.base import (
    AuthorizationError, BusinessRuleViolation, ConflictError, DuplicateEntityError, EntityNotFoundError
)
from app.domain.models.gig import ApplicationStatus
from app.domain.models.shift import VenueStaff, ShiftStatus
from tests.factories import add_chef, add_business, add_gig, add_application


def as_user(use_case, user_id):
    use_case.set_current_user(user_id)
    return use_case


def add_staff(uow, venue_id="biz-1", chef_id="chef-1", is_active=True):
    staff = VenueStaff(venue_id=venue_id, chef_id=chef_id, is_active=is_active, created_by=venue_id)
    uow.venue_staff.save(staff)
    uow.commit()
    return staff


class TestClockIn:
    """Test cases for clock-in eligibility."""

    @pytest.mark.asyncio
    async def test_staff_can_clock_in_without_gig(self, uow):
        add_business(uow)
        add_chef(uow)
        add_staff(uow)

        result = await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))

        assert result.status == ShiftStatus.OPEN.value
        assert result.venue.business_name == "The Anchor"
        assert result.gig is None

    @pytest.mark.asyncio
    async def test_inactive_staff_cannot_clock_in(self, uow):
        add_business(uow)
        add_staff(uow, is_active=False)

        with pytest.raises(AuthorizationError, match="not staff"):
            await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))

    @pytest.mark.asyncio
    async def test_booked_chef_can_clock_in_for_gig(self, uow):
        add_business(uow)
        gig = add_gig(uow)
        add_application(uow, gig.id, status=ApplicationStatus.CONFIRMED)

        result = await as_user(ClockInUseCase(uow), "chef-1").execute(
            ClockInRequestDTO(venue_id="biz-1", gig_id=gig.id)
        )

        assert result.gig_id == gig.id
        assert result.gig.title == gig.title

    @pytest.mark.asyncio
    async def test_applicant_not_booked_cannot_clock_in(self, uow):
        add_business(uow)
        gig = add_gig(uow)
        add_application(uow, gig.id, status=ApplicationStatus.SHORTLISTED)

        with pytest.raises(AuthorizationError, match="not booked"):
            await as_user(ClockInUseCase(uow), "chef-1").execute(
                ClockInRequestDTO(venue_id="biz-1", gig_id=gig.id)
            )

    @pytest.mark.asyncio
    async def test_gig_must_belong_to_venue(self, uow):
        add_business(uow)
        add_business(uow, "biz-2", "The Crown")
        gig = add_gig(uow, created_by="biz-2")
        add_application(uow, gig.id, status=ApplicationStatus.ACCEPTED)

        with pytest.raises(BusinessRuleViolation, match="does not belong to this venue"):
            await as_user(ClockInUseCase(uow), "chef-1").execute(
                ClockInRequestDTO(venue_id="biz-1", gig_id=gig.id)
            )

    @pytest.mark.asyncio
    async def test_second_open_shift_conflicts(self, uow):
        """Test a chef holds at most one open shift."""
        add_business(uow)
        add_staff(uow)
        await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))

        with pytest.raises(ConflictError, match="already have an open shift"):
            await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))


class TestClockOutAndReview:
    """Test cases for closing and reviewing shifts."""

    @pytest.mark.asyncio
    async def test_clock_out_then_approve(self, uow):
        add_business(uow)
        add_chef(uow)
        add_staff(uow)
        shift = await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))

        closed = await as_user(ClockOutUseCase(uow), "chef-1").execute(ClockOutRequestDTO(shift_id=shift.id))
        assert closed.status == ShiftStatus.SUBMITTED.value
        assert closed.clock_out_at is not None

        open_shift = await as_user(GetOpenShiftUseCase(uow), "chef-1").execute(None)
        assert open_shift.shift is None

        reviewed = await as_user(UpdateShiftStatusUseCase(uow), "biz-1").execute(UpdateShiftStatusCommand(
            shift_id=shift.id,
            changes=UpdateShiftStatusRequestDTO(status=ShiftStatus.APPROVED, venue_note="Great work"),
        ))
        assert reviewed.status == ShiftStatus.APPROVED.value
        assert reviewed.chef_name == "Jamie Oliver"

    @pytest.mark.asyncio
    async def test_cannot_clock_out_someone_elses_shift(self, uow):
        add_business(uow)
        add_staff(uow)
        shift = await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))

        with pytest.raises(AuthorizationError, match="Not your shift"):
            await as_user(ClockOutUseCase(uow), "chef-2").execute(ClockOutRequestDTO(shift_id=shift.id))

    @pytest.mark.asyncio
    async def test_unknown_shift(self, uow):
        with pytest.raises(EntityNotFoundError):
            await as_user(ClockOutUseCase(uow), "chef-1").execute(ClockOutRequestDTO(shift_id="missing"))


class TestStaffRoster:

    @pytest.mark.asyncio
    async def test_add_staff_twice_fails(self, uow):
        add_business(uow)
        add_chef(uow)
        command = AddStaffCommand(venue_id="biz-1", staff=AddStaffRequestDTO(chef_id="chef-1", role="Commis"))

        created = await as_user(AddStaffUseCase(uow), "biz-1").execute(command)
        assert created.chef_name == "Jamie Oliver"
        assert created.is_active is True

        with pytest.raises(DuplicateEntityError, match="already staff"):
            await as_user(AddStaffUseCase(uow), "biz-1").execute(command)

    @pytest.mark.asyncio
    async def test_re_adding_inactive_staff_reactivates(self, uow):
        add_business(uow)
        add_chef(uow)
        staff = add_staff(uow, is_active=False)
        command = AddStaffCommand(venue_id="biz-1", staff=AddStaffRequestDTO(chef_id="chef-1"))

        result = await as_user(AddStaffUseCase(uow), "biz-1").execute(command)

        assert result.id == staff.id
        assert result.is_active is True


class TestQrCheckin:
    """Test cases for the venue QR toggle."""

    @pytest.mark.asyncio
    async def test_token_is_permanent(self, uow):
        add_business(uow)

        first = await as_user(GenerateCheckinTokenUseCase(uow), "biz-1").execute("biz-1")
        second = await as_user(GenerateCheckinTokenUseCase(uow), "biz-1").execute("biz-1")

        assert first.token == second.token

    @pytest.mark.asyncio
    async def test_scan_toggles_shift(self, uow):
        add_business(uow)
        add_staff(uow)
        token = await as_user(GenerateCheckinTokenUseCase(uow), "biz-1").execute("biz-1")

        clock_in = await as_user(ScanCheckinTokenUseCase(uow), "chef-1").execute(token.token)
        clock_out = await as_user(ScanCheckinTokenUseCase(uow), "chef-1").execute(token.token)

        assert clock_in.action == CLOCK_IN
        assert clock_in.shift.clock_in_method == "qr"
        assert clock_out.action == CLOCK_OUT
        assert clock_out.shift.status == ShiftStatus.SUBMITTED.value
        assert clock_out.venue.id == "biz-1"

    @pytest.mark.asyncio
    async def test_scan_with_open_shift_elsewhere(self, uow):
        add_business(uow)
        add_business(uow, "biz-2", "The Crown")
        add_staff(uow)
        add_staff(uow, venue_id="biz-2")
        await as_user(ClockInUseCase(uow), "chef-1").execute(ClockInRequestDTO(venue_id="biz-1"))
        token = await as_user(GenerateCheckinTokenUseCase(uow), "biz-2").execute("biz-2")

        with pytest.raises(BusinessRuleViolation, match="another venue"):
            await as_user(ScanCheckinTokenUseCase(uow), "chef-1").execute(token.token)

    @pytest.mark.asyncio
    async def test_scan_invalid_token(self, uow):
        with pytest.raises(EntityNotFoundError, match="Invalid check-in code"):
            await as_user(ScanCheckinTokenUseCase(uow), "chef-1").execute("nope")
