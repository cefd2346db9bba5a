"""
Time tracking use cases for the application layer.
Clock-in/out, venue review of shifts, staff rosters and QR check-in.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List, Optional

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.application.dto.gig_dto import GigSummaryDTO
from app.application.dto.shift_dto import (
    ClockInRequestDTO, ClockOutRequestDTO, UpdateShiftStatusRequestDTO, MyShiftsRequestDTO,
    VenueShiftsRequestDTO, VenueSummaryDTO, ShiftResponseDTO, OpenShiftResponseDTO,
    AddStaffRequestDTO, UpdateStaffRequestDTO, StaffResponseDTO, StaffVenueDTO, AcceptedGigDTO,
    CheckinTokenResponseDTO, QrScanResultDTO
)
from app.domain.models.base import (
    EntityNotFoundError, AuthorizationError, BusinessRuleViolation, ConflictError, DuplicateEntityError
)
from app.domain.models.gig import ApplicationStatus
from app.domain.models.shift import WorkShift, VenueStaff, ShiftStatus, ClockMethod, VenueCheckinToken

logger = logging.getLogger(__name__)

CLOCK_IN = "clock_in"
CLOCK_OUT = "clock_out"

BOOKED_STATUSES = [ApplicationStatus.ACCEPTED, ApplicationStatus.CONFIRMED]


@dataclass
class VenueShiftsQuery:
    venue_id: str
    filters: VenueShiftsRequestDTO


@dataclass
class UpdateShiftStatusCommand:
    shift_id: str
    changes: UpdateShiftStatusRequestDTO


@dataclass
class AddStaffCommand:
    venue_id: str
    staff: AddStaffRequestDTO


@dataclass
class UpdateStaffCommand:
    venue_id: str
    staff_id: str
    changes: UpdateStaffRequestDTO


@dataclass
class DeactivateStaffCommand:
    venue_id: str
    staff_id: str


def start_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min) if day else None


def end_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.max) if day else None


class ShiftSupportMixin:
    """Lookups and response building shared by time tracking use cases."""

    def _venue_summary(self, venue_id: str) -> Optional[VenueSummaryDTO]:
        business = self.uow.businesses.get_by_id(venue_id)
        if business is None:
            return None
        return VenueSummaryDTO(id=business.id, business_name=business.business_name, location=business.location)

    def _shift_dto(self, shift: WorkShift, with_chef: bool = False) -> ShiftResponseDTO:
        gig = self.uow.gigs.get_by_id(shift.gig_id) if shift.gig_id else None
        chef_name = None
        if with_chef:
            chef = self.uow.chefs.get_by_id(shift.chef_id)
            chef_name = chef.full_name if chef else None
        return ShiftResponseDTO.from_domain(
            shift,
            venue=self._venue_summary(shift.venue_id),
            gig=GigSummaryDTO.from_domain(gig) if gig else None,
            chef_name=chef_name,
        )

    def _get_shift(self, shift_id: str) -> WorkShift:
        shift = self.uow.shifts.get_by_id(shift_id)
        if shift is None:
            raise EntityNotFoundError("Shift", shift_id)
        return shift

    def _ensure_venue_access(self, venue_id: str) -> None:
        self.access.can_access_venue(self._require_user(), venue_id).ensure(
            "You don't have access to this venue"
        )

    def _is_active_staff(self, venue_id: str, chef_id: str) -> bool:
        staff = self.uow.venue_staff.get_by_venue_and_chef(venue_id, chef_id)
        return staff is not None and staff.is_active

    def _clock_in(
        self,
        chef_id: str,
        venue_id: str,
        gig_id: Optional[str],
        method: ClockMethod
    ) -> WorkShift:
        """
        Open a shift after checking the chef may work at the venue.
        With a gig the chef needs an accepted or confirmed application for it;
        without one the chef must be active staff at the venue.
        """
        if self.uow.shifts.get_open_for_chef(chef_id) is not None:
            raise ConflictError("You already have an open shift")

        if gig_id:
            gig = self.uow.gigs.get_by_id(gig_id)
            if gig is None:
                raise EntityNotFoundError("Gig", gig_id)
            if gig.venue_id != venue_id:
                raise BusinessRuleViolation("Gig does not belong to this venue")
            application = self.uow.applications.get_by_gig_and_chef(gig_id, chef_id)
            if application is None or application.status not in BOOKED_STATUSES:
                raise AuthorizationError("You are not booked for this gig")
        elif not self._is_active_staff(venue_id, chef_id):
            raise AuthorizationError("You are not staff at this venue")

        shift = WorkShift.open(chef_id=chef_id, venue_id=venue_id, gig_id=gig_id, method=method)
        saved = self.uow.shifts.save(shift)
        logger.info(f"Chef {chef_id} clocked in at venue {venue_id} ({method.value})")
        return saved

    def _clock_out(self, shift: WorkShift, method: ClockMethod) -> WorkShift:
        shift.ensure_owned_by(self._require_user())
        shift.clock_out(method)
        saved = self.uow.shifts.save(shift)
        logger.info(f"Chef {shift.chef_id} clocked out of shift {shift.id} ({method.value})")
        return saved


class ClockInUseCase(ShiftSupportMixin, CommandUseCase[ClockInRequestDTO, ShiftResponseDTO]):
    async def _execute_command_logic(self, request: ClockInRequestDTO) -> ShiftResponseDTO:
        shift = self._clock_in(
            self._require_user(), request.venue_id, request.gig_id, ClockMethod(request.method)
        )
        return self._shift_dto(shift)


class ClockOutUseCase(ShiftSupportMixin, CommandUseCase[ClockOutRequestDTO, ShiftResponseDTO]):
    async def _execute_command_logic(self, request: ClockOutRequestDTO) -> ShiftResponseDTO:
        shift = self._get_shift(request.shift_id)
        return self._shift_dto(self._clock_out(shift, ClockMethod(request.method)))


class UpdateShiftStatusUseCase(ShiftSupportMixin, CommandUseCase[UpdateShiftStatusCommand, ShiftResponseDTO]):
    """Venue side approves, disputes or voids a shift."""

    async def _execute_command_logic(self, request: UpdateShiftStatusCommand) -> ShiftResponseDTO:
        shift = self._get_shift(request.shift_id)
        self._ensure_venue_access(shift.venue_id)

        shift.review(ShiftStatus(request.changes.status), request.changes.venue_note)
        return self._shift_dto(self.uow.shifts.save(shift), with_chef=True)


class GetOpenShiftUseCase(ShiftSupportMixin, QueryUseCase[None, OpenShiftResponseDTO]):
    async def _execute_query(self, request: None = None) -> OpenShiftResponseDTO:
        shift = self.uow.shifts.get_open_for_chef(self._require_user())
        return OpenShiftResponseDTO(shift=self._shift_dto(shift) if shift else None)


class ListMyShiftsUseCase(ShiftSupportMixin, QueryUseCase[MyShiftsRequestDTO, List[ShiftResponseDTO]]):
    async def _execute_query(self, request: MyShiftsRequestDTO) -> List[ShiftResponseDTO]:
        shifts = self.uow.shifts.list_by_chef(
            self._require_user(),
            start=start_of_day(request.date_from),
            end=end_of_day(request.date_to),
            venue_id=request.venue_id,
            gig_id=request.gig_id,
        )
        return [self._shift_dto(s) for s in shifts]


class ListVenueShiftsUseCase(ShiftSupportMixin, QueryUseCase[VenueShiftsQuery, List[ShiftResponseDTO]]):
    async def _execute_query(self, request: VenueShiftsQuery) -> List[ShiftResponseDTO]:
        self._ensure_venue_access(request.venue_id)
        filters = request.filters
        shifts = self.uow.shifts.list_by_venue(
            request.venue_id,
            start=start_of_day(filters.date_from),
            end=end_of_day(filters.date_to),
            status=ShiftStatus(filters.status) if filters.status else None,
        )
        return [self._shift_dto(s, with_chef=True) for s in shifts]


class ListStaffVenuesUseCase(ShiftSupportMixin, QueryUseCase[None, List[StaffVenueDTO]]):
    """Venues where the caller is active staff."""

    async def _execute_query(self, request: None = None) -> List[StaffVenueDTO]:
        result = []
        for staff in self.uow.venue_staff.list_by_chef(self._require_user(), active_only=True):
            venue = self._venue_summary(staff.venue_id)
            if venue is None:
                continue
            result.append(StaffVenueDTO(
                staff_id=staff.id, venue=venue, role=staff.role, hourly_rate=staff.hourly_rate
            ))
        return result


class ListAcceptedGigsUseCase(ShiftSupportMixin, QueryUseCase[None, List[AcceptedGigDTO]]):
    """Gigs the caller is booked on, for picking one at clock-in."""

    async def _execute_query(self, request: None = None) -> List[AcceptedGigDTO]:
        applications = self.uow.applications.list_by_chef_and_status(self._require_user(), BOOKED_STATUSES)
        gigs = {g.id: g for g in self.uow.gigs.get_by_ids([a.gig_id for a in applications])}
        result = []
        for application in applications:
            gig = gigs.get(application.gig_id)
            if gig is None:
                continue
            result.append(AcceptedGigDTO(
                application_id=application.id,
                status=ApplicationStatus(application.status).value,
                gig=GigSummaryDTO.from_domain(gig),
                venue=self._venue_summary(gig.venue_id),
            ))
        return result


class ListVenueStaffUseCase(ShiftSupportMixin, QueryUseCase[str, List[StaffResponseDTO]]):
    async def _execute_query(self, venue_id: str) -> List[StaffResponseDTO]:
        self._ensure_venue_access(venue_id)
        result = []
        for staff in self.uow.venue_staff.list_by_venue(venue_id):
            chef = self.uow.chefs.get_by_id(staff.chef_id)
            result.append(StaffResponseDTO.from_domain(staff, chef.full_name if chef else None))
        return result


class AddStaffUseCase(ShiftSupportMixin, CommandUseCase[AddStaffCommand, StaffResponseDTO]):
    """
    Add a chef to a venue's roster.
    A previously deactivated chef is reactivated instead of duplicated.
    """

    async def _execute_command_logic(self, request: AddStaffCommand) -> StaffResponseDTO:
        self._ensure_venue_access(request.venue_id)
        body = request.staff

        chef = self.uow.chefs.get_by_id(body.chef_id)
        if chef is None:
            raise EntityNotFoundError("Chef profile", body.chef_id)

        staff = self.uow.venue_staff.get_by_venue_and_chef(request.venue_id, body.chef_id)
        if staff is not None and staff.is_active:
            raise DuplicateEntityError(
                "VenueStaff", "chef_id", body.chef_id, "Chef is already staff at this venue"
            )
        if staff is not None:
            staff.reactivate(role=body.role, hourly_rate=body.hourly_rate)
        else:
            staff = VenueStaff(
                venue_id=request.venue_id,
                chef_id=body.chef_id,
                role=body.role,
                hourly_rate=body.hourly_rate,
                created_by=self._require_user(),
            )
        staff.validate()
        return StaffResponseDTO.from_domain(self.uow.venue_staff.save(staff), chef.full_name)


class StaffMemberMixin(ShiftSupportMixin):
    def _get_staff(self, venue_id: str, staff_id: str) -> VenueStaff:
        self._ensure_venue_access(venue_id)
        staff = self.uow.venue_staff.get_by_id(staff_id)
        if staff is None or staff.venue_id != venue_id:
            raise EntityNotFoundError("Staff member", staff_id)
        return staff


class UpdateStaffUseCase(StaffMemberMixin, CommandUseCase[UpdateStaffCommand, StaffResponseDTO]):
    async def _execute_command_logic(self, request: UpdateStaffCommand) -> StaffResponseDTO:
        staff = self._get_staff(request.venue_id, request.staff_id)
        changes = request.changes.changes()

        if changes.get("is_active") is False:
            staff.deactivate()
        elif changes.get("is_active") is True and not staff.is_active:
            staff.reactivate()
        if "role" in changes:
            staff.role = changes["role"]
        if "hourly_rate" in changes:
            staff.hourly_rate = changes["hourly_rate"]
        staff.mark_as_updated()
        staff.validate()
        return StaffResponseDTO.from_domain(self.uow.venue_staff.save(staff))


class DeactivateStaffUseCase(StaffMemberMixin, CommandUseCase[DeactivateStaffCommand, StaffResponseDTO]):
    async def _execute_command_logic(self, request: DeactivateStaffCommand) -> StaffResponseDTO:
        staff = self._get_staff(request.venue_id, request.staff_id)
        staff.deactivate()
        return StaffResponseDTO.from_domain(self.uow.venue_staff.save(staff))


class GenerateCheckinTokenUseCase(ShiftSupportMixin, CommandUseCase[str, CheckinTokenResponseDTO]):
    """Return the venue's permanent QR token, creating it on first use."""

    async def _execute_command_logic(self, venue_id: str) -> CheckinTokenResponseDTO:
        self._ensure_venue_access(venue_id)
        token = self.uow.checkin_tokens.get_by_venue(venue_id)
        if token is None:
            token = self.uow.checkin_tokens.save(
                VenueCheckinToken.generate(venue_id, self._require_user())
            )
        return CheckinTokenResponseDTO(venue_id=venue_id, token=token.token, created_at=token.created_at)


class GetCheckinTokenUseCase(ShiftSupportMixin, QueryUseCase[str, CheckinTokenResponseDTO]):
    async def _execute_query(self, venue_id: str) -> CheckinTokenResponseDTO:
        self._ensure_venue_access(venue_id)
        token = self.uow.checkin_tokens.get_by_venue(venue_id)
        if token is None:
            raise EntityNotFoundError("Check-in token", message="No check-in code for this venue yet")
        return CheckinTokenResponseDTO(venue_id=venue_id, token=token.token, created_at=token.created_at)


class ScanCheckinTokenUseCase(ShiftSupportMixin, CommandUseCase[str, QrScanResultDTO]):
    """
    Scanning a venue QR code toggles the caller's shift there:
    an open shift at the venue is clocked out, otherwise a new one is opened.
    """

    async def _execute_command_logic(self, token_value: str) -> QrScanResultDTO:
        chef_id = self._require_user()
        token = self.uow.checkin_tokens.get_by_token(token_value)
        if token is None:
            raise EntityNotFoundError("Check-in token", message="Invalid check-in code")

        venue = self._venue_summary(token.venue_id)
        if venue is None:
            raise EntityNotFoundError("Venue", token.venue_id)

        open_shift = self.uow.shifts.get_open_for_chef(chef_id)
        if open_shift is not None:
            if open_shift.venue_id != token.venue_id:
                raise BusinessRuleViolation("You have an open shift at another venue")
            shift = self._clock_out(open_shift, ClockMethod.QR)
            return QrScanResultDTO(action=CLOCK_OUT, shift=self._shift_dto(shift), venue=venue)

        shift = self._clock_in(chef_id, token.venue_id, None, ClockMethod.QR)
        return QrScanResultDTO(action=CLOCK_IN, shift=self._shift_dto(shift), venue=venue)
