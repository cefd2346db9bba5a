"""
Application router.
Accept/reject/confirm workflow for gig applications and the bookings
that result from it.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends

from app.infrastructure.web.dependencies import provide
from app.application.use_cases.gig_use_cases import (
    ListMyApplicationsUseCase,
    UpdateApplicationStatusUseCase,
    AcceptApplicationUseCase,
    ConfirmApplicationUseCase,
    ListAcceptedApplicationsUseCase,
    ListConfirmedBookingsUseCase,
    UpdateApplicationStatusCommand,
)
from app.application.dto.gig_dto import (
    UpdateApplicationStatusRequestDTO,
    ApplicationResponseDTO,
    AcceptApplicationResponseDTO,
    ConfirmApplicationResponseDTO,
)


router = APIRouter()


@router.get("/applications/mine", response_model=List[ApplicationResponseDTO])
async def list_my_applications(
    use_case: Annotated[ListMyApplicationsUseCase, Depends(provide(ListMyApplicationsUseCase))]
):
    return await use_case.execute(None)


@router.get("/applications/accepted", response_model=List[ApplicationResponseDTO])
async def list_accepted_applications(
    use_case: Annotated[ListAcceptedApplicationsUseCase, Depends(provide(ListAcceptedApplicationsUseCase))]
):
    """Applications of the caller accepted by a venue and awaiting confirmation."""
    return await use_case.execute(None)


@router.put("/applications/{application_id}/status", response_model=ApplicationResponseDTO)
async def update_application_status(
    application_id: str,
    request: UpdateApplicationStatusRequestDTO,
    use_case: Annotated[UpdateApplicationStatusUseCase, Depends(provide(UpdateApplicationStatusUseCase))]
):
    """
    Move an application forward: applied, shortlisted, accepted or rejected.

    Accepting here rejects the other applications of the gig. Confirmation
    is only possible through the confirm endpoint.
    """
    return await use_case.execute(
        UpdateApplicationStatusCommand(application_id=application_id, changes=request)
    )


@router.put("/applications/{application_id}/accept", response_model=AcceptApplicationResponseDTO)
async def accept_application(
    application_id: str,
    use_case: Annotated[AcceptApplicationUseCase, Depends(provide(AcceptApplicationUseCase))]
):
    """Accept a chef for a gig and reject every competing application."""
    return await use_case.execute(application_id)


@router.put("/applications/{application_id}/confirm", response_model=ConfirmApplicationResponseDTO)
async def confirm_application(
    application_id: str,
    use_case: Annotated[ConfirmApplicationUseCase, Depends(provide(ConfirmApplicationUseCase))]
):
    """Confirm an accepted application as the applicant; the gig becomes booked."""
    return await use_case.execute(application_id)


@router.get("/bookings/confirmed", response_model=List[ApplicationResponseDTO])
async def list_confirmed_bookings(
    use_case: Annotated[ListConfirmedBookingsUseCase, Depends(provide(ListConfirmedBookingsUseCase))]
):
    return await use_case.execute(None)
