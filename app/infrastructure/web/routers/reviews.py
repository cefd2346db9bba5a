"""
Review router.
Chefs and venues rate each other after a confirmed gig.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, status, Query

from app.infrastructure.rate_limiting import create_rate_limit
from app.infrastructure.web.dependencies import provide
from app.application.use_cases.review_use_cases import (
    SubmitReviewUseCase,
    ListReviewsForRecipientUseCase,
    ListReviewsGivenUseCase,
    GetReviewSummaryUseCase,
    GetAverageRatingUseCase,
    CheckReviewUseCase,
    ListPendingReviewsUseCase,
    CheckReviewQuery,
)
from app.application.dto.review_dto import (
    CreateReviewRequestDTO,
    ReviewResponseDTO,
    ReviewSummaryResponseDTO,
    RatingResponseDTO,
    ReviewCheckResponseDTO,
    PendingReviewsResponseDTO,
)


router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewResponseDTO,
    dependencies=[Depends(create_rate_limit)]
)
async def submit_review(
    request: CreateReviewRequestDTO,
    use_case: Annotated[SubmitReviewUseCase, Depends(provide(SubmitReviewUseCase))]
):
    """
    Review the other party of a confirmed gig.

    - **rating**: Overall rating, 1 to 5
    - Category ratings are optional and also range from 1 to 5
    """
    return await use_case.execute(request)


@router.get("/check", response_model=ReviewCheckResponseDTO)
async def check_review(
    use_case: Annotated[CheckReviewUseCase, Depends(provide(CheckReviewUseCase))],
    gig_id: str = Query(..., min_length=1),
    reviewer_id: str = Query(..., min_length=1)
):
    return await use_case.execute(CheckReviewQuery(gig_id=gig_id, reviewer_id=reviewer_id))


@router.get("/recipient/{recipient_id}", response_model=List[ReviewResponseDTO])
async def list_reviews_for_recipient(
    recipient_id: str,
    use_case: Annotated[ListReviewsForRecipientUseCase, Depends(provide(ListReviewsForRecipientUseCase))]
):
    return await use_case.execute(recipient_id)


@router.get("/given/{reviewer_id}", response_model=List[ReviewResponseDTO])
async def list_reviews_given(
    reviewer_id: str,
    use_case: Annotated[ListReviewsGivenUseCase, Depends(provide(ListReviewsGivenUseCase))]
):
    return await use_case.execute(reviewer_id)


@router.get("/pending/{user_id}", response_model=PendingReviewsResponseDTO)
async def list_pending_reviews(
    user_id: str,
    use_case: Annotated[ListPendingReviewsUseCase, Depends(provide(ListPendingReviewsUseCase))]
):
    """Finished gigs the caller took part in and has not reviewed yet."""
    return await use_case.execute(user_id)


@router.get("/summary/{recipient_id}", response_model=ReviewSummaryResponseDTO)
async def get_review_summary(
    recipient_id: str,
    use_case: Annotated[GetReviewSummaryUseCase, Depends(provide(GetReviewSummaryUseCase))]
):
    return await use_case.execute(recipient_id)


@router.get("/rating/{recipient_id}", response_model=RatingResponseDTO)
async def get_average_rating(
    recipient_id: str,
    use_case: Annotated[GetAverageRatingUseCase, Depends(provide(GetAverageRatingUseCase))]
):
    return await use_case.execute(recipient_id)
