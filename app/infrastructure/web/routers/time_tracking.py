"""
Time tracking router.
Clock-in/out, shift review, venue staff rosters and QR check-in.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Query, Response, status

from app.infrastructure.rate_limiting import clock_rate_limit
from app.infrastructure.web.dependencies import provide
from app.application.use_cases.shift_use_cases import (
    CLOCK_IN,
    ClockInUseCase,
    ClockOutUseCase,
    UpdateShiftStatusUseCase,
    GetOpenShiftUseCase,
    ListMyShiftsUseCase,
    ListVenueShiftsUseCase,
    ListStaffVenuesUseCase,
    ListAcceptedGigsUseCase,
    ListVenueStaffUseCase,
    AddStaffUseCase,
    UpdateStaffUseCase,
    DeactivateStaffUseCase,
    GenerateCheckinTokenUseCase,
    GetCheckinTokenUseCase,
    ScanCheckinTokenUseCase,
    VenueShiftsQuery,
    UpdateShiftStatusCommand,
    AddStaffCommand,
    UpdateStaffCommand,
    DeactivateStaffCommand,
)
from app.application.dto.shift_dto import (
    ClockInRequestDTO,
    ClockOutRequestDTO,
    UpdateShiftStatusRequestDTO,
    MyShiftsRequestDTO,
    VenueShiftsRequestDTO,
    ShiftResponseDTO,
    OpenShiftResponseDTO,
    AddStaffRequestDTO,
    UpdateStaffRequestDTO,
    StaffResponseDTO,
    StaffVenueDTO,
    AcceptedGigDTO,
    GenerateQrRequestDTO,
    ValidateQrRequestDTO,
    CheckinTokenResponseDTO,
    QrScanResultDTO,
)


router = APIRouter()


# Shifts

@router.get("/shifts/open", response_model=OpenShiftResponseDTO)
async def get_open_shift(
    use_case: Annotated[GetOpenShiftUseCase, Depends(provide(GetOpenShiftUseCase))]
):
    """The caller's open shift with its venue and gig, if any."""
    return await use_case.execute(None)


@router.get("/shifts/my", response_model=List[ShiftResponseDTO])
async def list_my_shifts(
    filters: Annotated[MyShiftsRequestDTO, Query()],
    use_case: Annotated[ListMyShiftsUseCase, Depends(provide(ListMyShiftsUseCase))]
):
    """
    The caller's shifts, newest first.

    - **date_from**, **date_to**: clock-in date range (inclusive)
    - **venue_id**, **gig_id**: optional filters
    """
    return await use_case.execute(filters)


@router.get("/shifts/venue/{venue_id}", response_model=List[ShiftResponseDTO])
async def list_venue_shifts(
    venue_id: str,
    filters: Annotated[VenueShiftsRequestDTO, Query()],
    use_case: Annotated[ListVenueShiftsUseCase, Depends(provide(ListVenueShiftsUseCase))]
):
    return await use_case.execute(VenueShiftsQuery(venue_id=venue_id, filters=filters))


@router.post(
    "/clock-in",
    status_code=status.HTTP_201_CREATED,
    response_model=ShiftResponseDTO,
    dependencies=[Depends(clock_rate_limit)]
)
async def clock_in(
    request: ClockInRequestDTO,
    use_case: Annotated[ClockInUseCase, Depends(provide(ClockInUseCase))]
):
    """
    Open a shift at a venue.

    With **gig_id** the caller must be booked on that gig at this venue;
    without one the caller must be active staff at the venue.
    """
    return await use_case.execute(request)


@router.post("/clock-out", response_model=ShiftResponseDTO, dependencies=[Depends(clock_rate_limit)])
async def clock_out(
    request: ClockOutRequestDTO,
    use_case: Annotated[ClockOutUseCase, Depends(provide(ClockOutUseCase))]
):
    return await use_case.execute(request)


@router.patch("/shifts/{shift_id}/status", response_model=ShiftResponseDTO)
async def update_shift_status(
    shift_id: str,
    request: UpdateShiftStatusRequestDTO,
    use_case: Annotated[UpdateShiftStatusUseCase, Depends(provide(UpdateShiftStatusUseCase))]
):
    """Approve, dispute or void a shift as venue staff with access."""
    return await use_case.execute(UpdateShiftStatusCommand(shift_id=shift_id, changes=request))


# Staff

@router.get("/venues/staff", response_model=List[StaffVenueDTO])
async def list_staff_venues(
    use_case: Annotated[ListStaffVenuesUseCase, Depends(provide(ListStaffVenuesUseCase))]
):
    """Venues where the caller is active staff."""
    return await use_case.execute(None)


@router.get("/gigs/accepted", response_model=List[AcceptedGigDTO])
async def list_accepted_gigs(
    use_case: Annotated[ListAcceptedGigsUseCase, Depends(provide(ListAcceptedGigsUseCase))]
):
    return await use_case.execute(None)


@router.get("/venue/{venue_id}/staff", response_model=List[StaffResponseDTO])
async def list_venue_staff(
    venue_id: str,
    use_case: Annotated[ListVenueStaffUseCase, Depends(provide(ListVenueStaffUseCase))]
):
    return await use_case.execute(venue_id)


@router.post("/venue/{venue_id}/staff", status_code=status.HTTP_201_CREATED, response_model=StaffResponseDTO)
async def add_venue_staff(
    venue_id: str,
    request: AddStaffRequestDTO,
    use_case: Annotated[AddStaffUseCase, Depends(provide(AddStaffUseCase))]
):
    """Add a chef to the venue roster, reactivating them if they were removed."""
    return await use_case.execute(AddStaffCommand(venue_id=venue_id, staff=request))


@router.patch("/venue/{venue_id}/staff/{staff_id}", response_model=StaffResponseDTO)
async def update_venue_staff(
    venue_id: str,
    staff_id: str,
    request: UpdateStaffRequestDTO,
    use_case: Annotated[UpdateStaffUseCase, Depends(provide(UpdateStaffUseCase))]
):
    return await use_case.execute(UpdateStaffCommand(venue_id=venue_id, staff_id=staff_id, changes=request))


@router.delete("/venue/{venue_id}/staff/{staff_id}", response_model=StaffResponseDTO)
async def deactivate_venue_staff(
    venue_id: str,
    staff_id: str,
    use_case: Annotated[DeactivateStaffUseCase, Depends(provide(DeactivateStaffUseCase))]
):
    """Remove a chef from the roster. The record is kept, marked inactive."""
    return await use_case.execute(DeactivateStaffCommand(venue_id=venue_id, staff_id=staff_id))


# QR check-in

@router.post("/qr/generate", response_model=CheckinTokenResponseDTO)
async def generate_qr(
    request: GenerateQrRequestDTO,
    use_case: Annotated[GenerateCheckinTokenUseCase, Depends(provide(GenerateCheckinTokenUseCase))]
):
    """Get or create the venue's permanent check-in token."""
    return await use_case.execute(request.venue_id)


@router.post("/qr/validate", response_model=QrScanResultDTO, dependencies=[Depends(clock_rate_limit)])
async def validate_qr(
    request: ValidateQrRequestDTO,
    response: Response,
    use_case: Annotated[ScanCheckinTokenUseCase, Depends(provide(ScanCheckinTokenUseCase))]
):
    """
    Scan a venue QR code.

    Clocks the caller out of an open shift at the venue (200), otherwise
    clocks them in as staff (201).
    """
    result = await use_case.execute(request.token)
    if result.action == CLOCK_IN:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.get("/qr/venue/{venue_id}", response_model=CheckinTokenResponseDTO)
async def get_venue_qr(
    venue_id: str,
    use_case: Annotated[GetCheckinTokenUseCase, Depends(provide(GetCheckinTokenUseCase))]
):
    return await use_case.execute(venue_id)
