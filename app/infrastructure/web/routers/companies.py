"""
Company router.
Companies, their members, and the invites through which venues grant a
company access.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.auth import CurrentUser
from app.infrastructure.web.dependencies import (
    provide,
    provide_public,
    UnitOfWorkDep,
    DispatcherDep,
    SettingsDep,
)
from app.application.use_cases.company_use_cases import (
    CreateCompanyUseCase,
    ListMyCompaniesUseCase,
    GetCompanyUseCase,
    UpdateCompanyUseCase,
    ListCompanyMembersUseCase,
    InviteCompanyUseCase,
    AcceptInviteUseCase,
    VerifyInviteUseCase,
    ListBusinessInvitesUseCase,
    ListMyInvitesUseCase,
    ListAccessibleBusinessesUseCase,
    UpdateCompanyCommand,
)
from app.application.dto.company_dto import (
    CreateCompanyRequestDTO,
    UpdateCompanyRequestDTO,
    CompanyResponseDTO,
    CompanyMemberResponseDTO,
    InviteCompanyRequestDTO,
    AcceptInviteRequestDTO,
    CompanyInviteResponseDTO,
    VerifyInviteResponseDTO,
    AcceptInviteResponseDTO,
    AccessibleBusinessesResponseDTO,
)


router = APIRouter()


def get_invite_company_use_case(
    uow: UnitOfWorkDep,
    dispatcher: DispatcherDep,
    settings: SettingsDep,
    user: CurrentUser
) -> InviteCompanyUseCase:
    """Invite use case with the configured invite lifetime."""
    use_case = InviteCompanyUseCase(uow, dispatcher, expiry_days=settings.invite_expiry_days)
    use_case.set_current_user(user.id, user.roles, user.email)
    return use_case


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def create_company(
    request: CreateCompanyRequestDTO,
    use_case: Annotated[CreateCompanyUseCase, Depends(provide(CreateCompanyUseCase))]
):
    """
    Create the caller's company. Requires a company account; one company per owner.
    """
    return await use_case.execute(request)


@router.get("/mine", response_model=List[CompanyResponseDTO])
async def list_my_companies(
    use_case: Annotated[ListMyCompaniesUseCase, Depends(provide(ListMyCompaniesUseCase))]
):
    return await use_case.execute(None)


@router.post(
    "/invite-company",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyInviteResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def invite_company(
    request: InviteCompanyRequestDTO,
    use_case: Annotated[InviteCompanyUseCase, Depends(get_invite_company_use_case)]
):
    """
    Invite a company, by email, to manage one of the caller's venues.

    - **business_id**: Venue owned by the caller
    - **invitee_email**: Address the invitation is sent to
    - **role**: Role granted to the company (default `manager`)
    """
    return await use_case.execute(request)


@router.post("/accept-invite", response_model=AcceptInviteResponseDTO)
async def accept_invite(
    request: AcceptInviteRequestDTO,
    use_case: Annotated[AcceptInviteUseCase, Depends(provide(AcceptInviteUseCase))]
):
    """Accept a venue invite on behalf of a company the caller owns or administers."""
    return await use_case.execute(request)


@router.get("/accessible-businesses", response_model=AccessibleBusinessesResponseDTO)
async def list_accessible_businesses(
    use_case: Annotated[ListAccessibleBusinessesUseCase, Depends(provide(ListAccessibleBusinessesUseCase))]
):
    return await use_case.execute(None)


@router.get("/invites/verify", response_model=VerifyInviteResponseDTO)
async def verify_invite(
    use_case: Annotated[VerifyInviteUseCase, Depends(provide_public(VerifyInviteUseCase))],
    token: str = Query(..., min_length=1)
):
    """
    Check an invite token without signing in.
    Unknown, used or expired tokens answer 400 with the reason.
    """
    result = await use_case.execute(token)
    if not result.valid:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json", exclude_none=True)
        )
    return result


@router.get("/invites/mine", response_model=List[CompanyInviteResponseDTO])
async def list_my_invites(
    use_case: Annotated[ListMyInvitesUseCase, Depends(provide(ListMyInvitesUseCase))]
):
    return await use_case.execute(None)


@router.get("/invites/business/{business_id}", response_model=List[CompanyInviteResponseDTO])
async def list_business_invites(
    business_id: str,
    use_case: Annotated[ListBusinessInvitesUseCase, Depends(provide(ListBusinessInvitesUseCase))]
):
    return await use_case.execute(business_id)


@router.get("/{company_id}/members", response_model=List[CompanyMemberResponseDTO])
async def list_company_members(
    company_id: str,
    use_case: Annotated[ListCompanyMembersUseCase, Depends(provide(ListCompanyMembersUseCase))]
):
    """Members of a company, visible to its members only."""
    return await use_case.execute(company_id)


@router.get("/{company_id}", response_model=CompanyResponseDTO)
async def get_company(
    company_id: str,
    use_case: Annotated[GetCompanyUseCase, Depends(provide(GetCompanyUseCase))]
):
    return await use_case.execute(company_id)


@router.put("/{company_id}", response_model=CompanyResponseDTO)
async def update_company(
    company_id: str,
    request: UpdateCompanyRequestDTO,
    use_case: Annotated[UpdateCompanyUseCase, Depends(provide(UpdateCompanyUseCase))]
):
    return await use_case.execute(UpdateCompanyCommand(company_id=company_id, changes=request))
