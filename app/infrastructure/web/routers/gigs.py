"""
Gig router.
Handles gig postings and chef applications to them.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, status

from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.web.dependencies import provide
from app.application.use_cases.gig_use_cases import (
    CreateGigUseCase,
    UpdateGigUseCase,
    GetGigUseCase,
    ListMyGigsUseCase,
    ListActiveGigsUseCase,
    ListGigApplicationsUseCase,
    ApplyToGigUseCase,
    UpdateGigCommand,
)
from app.application.dto.gig_dto import (
    CreateGigRequestDTO,
    UpdateGigRequestDTO,
    GigResponseDTO,
    ApplyToGigRequestDTO,
    ApplicationResponseDTO,
)


router = APIRouter()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=GigResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def create_gig(
    request: CreateGigRequestDTO,
    use_case: Annotated[CreateGigUseCase, Depends(provide(CreateGigUseCase))]
):
    """
    Post a new gig for the caller's venue.

    - **title**, **location**, **role**: required
    - **start_date**, **end_date**: end date cannot precede start date
    - **start_time**, **end_time**: shift hours
    - **pay_rate**: hourly rate in GBP
    """
    return await use_case.execute(request)


@router.get("/mine", response_model=List[GigResponseDTO])
async def list_my_gigs(
    use_case: Annotated[ListMyGigsUseCase, Depends(provide(ListMyGigsUseCase))]
):
    return await use_case.execute(None)


@router.get("/all", response_model=List[GigResponseDTO])
async def list_active_gigs(
    use_case: Annotated[ListActiveGigsUseCase, Depends(provide(ListActiveGigsUseCase))]
):
    """Active gigs open to applications, newest first."""
    return await use_case.execute(None)


@router.post(
    "/apply",
    status_code=status.HTTP_201_CREATED,
    response_model=ApplicationResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def apply_to_gig(
    request: ApplyToGigRequestDTO,
    use_case: Annotated[ApplyToGigUseCase, Depends(provide(ApplyToGigUseCase))]
):
    """Apply to a gig as the calling chef. A chef can apply once per gig."""
    return await use_case.execute(request)


@router.get("/{gig_id}", response_model=GigResponseDTO)
async def get_gig(
    gig_id: str,
    use_case: Annotated[GetGigUseCase, Depends(provide(GetGigUseCase))]
):
    return await use_case.execute(gig_id)


@router.put("/{gig_id}", response_model=GigResponseDTO)
async def update_gig(
    gig_id: str,
    request: UpdateGigRequestDTO,
    use_case: Annotated[UpdateGigUseCase, Depends(provide(UpdateGigUseCase))]
):
    """Update a gig. Only its creator may do this."""
    return await use_case.execute(UpdateGigCommand(gig_id=gig_id, changes=request))


@router.get("/{gig_id}/applications", response_model=List[ApplicationResponseDTO])
async def list_gig_applications(
    gig_id: str,
    use_case: Annotated[ListGigApplicationsUseCase, Depends(provide(ListGigApplicationsUseCase))]
):
    """Applications to a gig, for anyone with access to its venue."""
    return await use_case.execute(gig_id)
