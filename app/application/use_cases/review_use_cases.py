"""
Review use cases for the application layer.
Both sides of a confirmed booking review each other once per gig.
"""

from dataclasses import dataclass
from typing import List

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.application.dto.review_dto import (
    CreateReviewRequestDTO, ReviewResponseDTO, ReviewSummaryResponseDTO, RatingResponseDTO,
    ReviewCheckResponseDTO, PendingReviewDTO, PendingReviewsResponseDTO
)
from app.domain.events.gig_events import ReviewSubmitted
from app.domain.models.base import EntityNotFoundError, AuthorizationError, DuplicateEntityError
from app.domain.models.gig import ApplicationStatus
from app.domain.models.review import Review, ReviewerType, ReviewSummary


@dataclass
class CheckReviewQuery:
    gig_id: str
    reviewer_id: str


class SubmitReviewUseCase(CommandUseCase[CreateReviewRequestDTO, ReviewResponseDTO]):
    """
    Use case for reviewing the other party of a confirmed gig.

    A chef reviews the business that posted the gig; the business reviews a
    chef whose application was confirmed.
    """

    async def _execute_command_logic(self, request: CreateReviewRequestDTO) -> ReviewResponseDTO:
        reviewer_id = self._require_user()

        gig = self.uow.gigs.get_by_id(request.gig_id)
        if gig is None:
            raise EntityNotFoundError("Gig", request.gig_id)

        reviewer_type = ReviewerType(request.reviewer_type)
        if reviewer_type == ReviewerType.CHEF:
            booked_chef, business_id = reviewer_id, request.recipient_id
        else:
            booked_chef, business_id = request.recipient_id, reviewer_id

        application = self.uow.applications.get_by_gig_and_chef(gig.id, booked_chef)
        if gig.created_by != business_id or application is None or not application.confirmed:
            raise AuthorizationError("You can only review the other party of a confirmed gig")

        if self.uow.reviews.get_by_gig_and_reviewer(gig.id, reviewer_id) is not None:
            raise DuplicateEntityError(
                "Review", "gig_id", gig.id, "Review already submitted for this gig"
            )

        review = Review(
            gig_id=gig.id,
            reviewer_id=reviewer_id,
            recipient_id=request.recipient_id,
            reviewer_type=reviewer_type,
            comment=request.comment,
            category_ratings=dict(request.category_ratings),
        )
        review.validate()
        saved = self.uow.reviews.save(review)

        self._record_event(ReviewSubmitted(
            review_id=saved.id,
            gig_id=gig.id,
            reviewer_id=reviewer_id,
            recipient_id=saved.recipient_id,
            rating=saved.rating,
        ))
        return ReviewResponseDTO.from_domain(saved)


class ListReviewsForRecipientUseCase(QueryUseCase[str, List[ReviewResponseDTO]]):
    async def _execute_query(self, recipient_id: str) -> List[ReviewResponseDTO]:
        return [ReviewResponseDTO.from_domain(r) for r in self.uow.reviews.list_by_recipient(recipient_id)]


class ListReviewsGivenUseCase(QueryUseCase[str, List[ReviewResponseDTO]]):
    async def _execute_query(self, reviewer_id: str) -> List[ReviewResponseDTO]:
        return [ReviewResponseDTO.from_domain(r) for r in self.uow.reviews.list_by_reviewer(reviewer_id)]


class GetReviewSummaryUseCase(QueryUseCase[str, ReviewSummaryResponseDTO]):
    """Overall and per-category averages for a recipient."""

    async def _execute_query(self, recipient_id: str) -> ReviewSummaryResponseDTO:
        reviews = self.uow.reviews.list_by_recipient(recipient_id)
        return ReviewSummaryResponseDTO.from_domain(ReviewSummary.from_reviews(recipient_id, reviews))


class GetAverageRatingUseCase(QueryUseCase[str, RatingResponseDTO]):
    async def _execute_query(self, recipient_id: str) -> RatingResponseDTO:
        average = self.uow.reviews.average_rating(recipient_id)
        total = len(self.uow.reviews.list_by_recipient(recipient_id))
        return RatingResponseDTO(
            recipient_id=recipient_id,
            average_rating=average or 0.0,
            total_reviews=total,
        )


class CheckReviewUseCase(QueryUseCase[CheckReviewQuery, ReviewCheckResponseDTO]):
    async def _execute_query(self, request: CheckReviewQuery) -> ReviewCheckResponseDTO:
        review = self.uow.reviews.get_by_gig_and_reviewer(request.gig_id, request.reviewer_id)
        return ReviewCheckResponseDTO(
            exists=review is not None,
            review=ReviewResponseDTO.from_domain(review) if review else None,
        )


class ListPendingReviewsUseCase(QueryUseCase[str, PendingReviewsResponseDTO]):
    """
    Finished, confirmed bookings the user has not reviewed yet.

    As a chef: gigs the user confirmed, to be reviewed against the posting
    business. As a business: the user's gigs with a confirmed chef.
    """

    async def _execute_query(self, user_id: str) -> PendingReviewsResponseDTO:
        if self._require_user() != user_id:
            raise AuthorizationError("You can only view your own pending reviews")

        reviewed = {r.gig_id for r in self.uow.reviews.list_by_reviewer(user_id)}
        pending: List[PendingReviewDTO] = []

        confirmed = self.uow.applications.list_by_chef_and_status(user_id, [ApplicationStatus.CONFIRMED])
        gigs = self.uow.gigs.get_by_ids([a.gig_id for a in confirmed])
        businesses = {
            b.id: b.business_name
            for b in self.uow.businesses.get_by_ids(list({g.created_by for g in gigs}))
        }
        for gig in gigs:
            if gig.id in reviewed or not gig.has_ended():
                continue
            pending.append(PendingReviewDTO(
                gig_id=gig.id,
                gig_title=gig.title,
                gig_end_date=gig.end_date,
                recipient_id=gig.created_by,
                recipient_name=businesses.get(gig.created_by),
                reviewer_type=ReviewerType.CHEF,
            ))

        for gig in self.uow.gigs.list_by_creator(user_id):
            if gig.id in reviewed or not gig.has_ended():
                continue
            for application in self.uow.applications.list_by_gig(gig.id):
                if not application.confirmed:
                    continue
                chef = self.uow.chefs.get_by_id(application.chef_id)
                pending.append(PendingReviewDTO(
                    gig_id=gig.id,
                    gig_title=gig.title,
                    gig_end_date=gig.end_date,
                    recipient_id=application.chef_id,
                    recipient_name=chef.full_name if chef else None,
                    reviewer_type=ReviewerType.BUSINESS,
                ))

        return PendingReviewsResponseDTO(pending=pending, total=len(pending))
