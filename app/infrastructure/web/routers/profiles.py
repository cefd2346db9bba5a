"""
Profile router.
Chef and business profiles, chef payment details and business search.
"""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from app.infrastructure.web.dependencies import provide
from app.application.use_cases.profile_use_cases import (
    UpsertChefProfileUseCase,
    GetChefProfileUseCase,
    UpdateChefProfileUseCase,
    UpdatePaymentMethodUseCase,
    UpsertBusinessProfileUseCase,
    GetBusinessProfileUseCase,
    UpdateBusinessProfileUseCase,
    SearchBusinessesUseCase,
    UpdateChefProfileCommand,
    UpdateBusinessProfileCommand,
    UpdatePaymentMethodCommand,
    SearchBusinessesQuery,
)
from app.application.dto.profile_dto import (
    CreateChefProfileRequestDTO,
    UpdateChefProfileRequestDTO,
    ChefProfileResponseDTO,
    CreateBusinessProfileRequestDTO,
    UpdateBusinessProfileRequestDTO,
    BusinessProfileResponseDTO,
    UpdatePaymentMethodRequestDTO,
    PaymentMethodResponseDTO,
)


router = APIRouter()


@router.post("/profiles/chef", status_code=status.HTTP_201_CREATED, response_model=ChefProfileResponseDTO)
async def upsert_chef_profile(
    request: CreateChefProfileRequestDTO,
    response: Response,
    use_case: Annotated[UpsertChefProfileUseCase, Depends(provide(UpsertChefProfileUseCase))]
):
    """
    Create or replace the caller's chef profile.

    Returns 201 when the profile is created and 200 when it already existed.
    """
    profile, created = await use_case.execute(request)
    if not created:
        response.status_code = status.HTTP_200_OK
    return profile


@router.get("/profiles/chef/{chef_id}", response_model=ChefProfileResponseDTO)
async def get_chef_profile(
    chef_id: str,
    use_case: Annotated[GetChefProfileUseCase, Depends(provide(GetChefProfileUseCase))]
):
    return await use_case.execute(chef_id)


@router.put("/profiles/chef/{chef_id}", response_model=ChefProfileResponseDTO)
async def update_chef_profile(
    chef_id: str,
    request: UpdateChefProfileRequestDTO,
    use_case: Annotated[UpdateChefProfileUseCase, Depends(provide(UpdateChefProfileUseCase))]
):
    """Update a chef profile. Only the profile owner may do this."""
    return await use_case.execute(UpdateChefProfileCommand(chef_id=chef_id, changes=request))


@router.put("/chefs/payment-method/{chef_id}", response_model=PaymentMethodResponseDTO)
async def update_payment_method(
    chef_id: str,
    request: UpdatePaymentMethodRequestDTO,
    use_case: Annotated[UpdatePaymentMethodUseCase, Depends(provide(UpdatePaymentMethodUseCase))]
):
    """
    Set how a chef is paid.

    - **payment_method**: `stripe` or `bank`
    - **bank_sort_code**, **bank_account_number**: required for `bank`
    """
    return await use_case.execute(UpdatePaymentMethodCommand(chef_id=chef_id, changes=request))


@router.post("/profiles/business", status_code=status.HTTP_201_CREATED, response_model=BusinessProfileResponseDTO)
async def upsert_business_profile(
    request: CreateBusinessProfileRequestDTO,
    response: Response,
    use_case: Annotated[UpsertBusinessProfileUseCase, Depends(provide(UpsertBusinessProfileUseCase))]
):
    profile, created = await use_case.execute(request)
    if not created:
        response.status_code = status.HTTP_200_OK
    return profile


@router.get("/profiles/business/{business_id}", response_model=BusinessProfileResponseDTO)
async def get_business_profile(
    business_id: str,
    use_case: Annotated[GetBusinessProfileUseCase, Depends(provide(GetBusinessProfileUseCase))]
):
    return await use_case.execute(business_id)


@router.put("/profiles/business/{business_id}", response_model=BusinessProfileResponseDTO)
async def update_business_profile(
    business_id: str,
    request: UpdateBusinessProfileRequestDTO,
    use_case: Annotated[UpdateBusinessProfileUseCase, Depends(provide(UpdateBusinessProfileUseCase))]
):
    return await use_case.execute(UpdateBusinessProfileCommand(business_id=business_id, changes=request))


@router.get("/businesses/search", response_model=List[BusinessProfileResponseDTO])
async def search_businesses(
    use_case: Annotated[SearchBusinessesUseCase, Depends(provide(SearchBusinessesUseCase))],
    name: Optional[str] = Query(None, description="Case-insensitive match on the business name"),
    location: Optional[str] = Query(None, description="Case-insensitive match on the location"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of results")
):
    return await use_case.execute(SearchBusinessesQuery(name=name, location=location, limit=limit))
