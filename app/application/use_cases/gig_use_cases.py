"""
Gig and application use cases for the application layer.
Posting gigs, applying, and the accept/confirm booking workflow.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase, apply_changes
from app.application.dto.gig_dto import (
    CreateGigRequestDTO, UpdateGigRequestDTO, GigResponseDTO, GigSummaryDTO,
    ApplyToGigRequestDTO, UpdateApplicationStatusRequestDTO, ApplicationResponseDTO,
    AcceptApplicationResponseDTO, ConfirmApplicationResponseDTO
)
from app.domain.events.gig_events import (
    ApplicationSubmitted, ApplicationAccepted, ApplicationRejected, GigConfirmed
)
from app.domain.models.base import (
    EntityNotFoundError, AuthorizationError, BusinessRuleViolation, DuplicateEntityError
)
from app.domain.models.gig import Gig, GigApplication, ApplicationStatus

logger = logging.getLogger(__name__)


@dataclass
class UpdateGigCommand:
    gig_id: str
    changes: UpdateGigRequestDTO


@dataclass
class UpdateApplicationStatusCommand:
    application_id: str
    changes: UpdateApplicationStatusRequestDTO


class GigLookupMixin:
    """Loaders shared by gig and application use cases."""

    def _get_gig(self, gig_id: str) -> Gig:
        gig = self.uow.gigs.get_by_id(gig_id)
        if gig is None:
            raise EntityNotFoundError("Gig", gig_id)
        return gig

    def _get_application(self, application_id: str) -> GigApplication:
        application = self.uow.applications.get_by_id(application_id)
        if application is None:
            raise EntityNotFoundError("Application", application_id)
        return application

    def _chef_names(self, chef_ids: List[str]) -> Dict[str, str]:
        names = {}
        for chef_id in set(chef_ids):
            profile = self.uow.chefs.get_by_id(chef_id)
            if profile is not None:
                names[chef_id] = profile.full_name
        return names

    def _gigs_by_id(self, gig_ids: List[str]) -> Dict[str, Gig]:
        return {gig.id: gig for gig in self.uow.gigs.get_by_ids(list(set(gig_ids)))}

    def _ensure_venue_access(self, gig: Gig) -> None:
        self.access.can_access_venue(self._require_user(), gig.venue_id).ensure(
            "You don't have access to this gig's applications"
        )


class CreateGigUseCase(CommandUseCase[CreateGigRequestDTO, GigResponseDTO]):
    """Use case for a business posting a new gig."""

    async def _execute_command_logic(self, request: CreateGigRequestDTO) -> GigResponseDTO:
        user_id = self._require_user()
        fields = request.model_dump(exclude_none=True)
        gig = Gig(created_by=user_id, **fields)
        gig.validate()
        saved = self.uow.gigs.save(gig)
        logger.info(f"Gig {saved.id} created by {user_id}")
        return GigResponseDTO.from_domain(saved)


class UpdateGigUseCase(GigLookupMixin, CommandUseCase[UpdateGigCommand, GigResponseDTO]):
    """Use case for the creator editing a gig."""

    async def _execute_command_logic(self, request: UpdateGigCommand) -> GigResponseDTO:
        gig = self._get_gig(request.gig_id)
        if gig.created_by != self._require_user():
            raise AuthorizationError("Only the business that posted this gig can edit it")

        apply_changes(gig, request.changes.changes())
        return GigResponseDTO.from_domain(self.uow.gigs.save(gig))


class GetGigUseCase(GigLookupMixin, QueryUseCase[str, GigResponseDTO]):
    async def _execute_query(self, gig_id: str) -> GigResponseDTO:
        gig = self._get_gig(gig_id)
        business = self.uow.businesses.get_by_id(gig.created_by)
        return GigResponseDTO.from_domain(gig, business.business_name if business else None)


class ListMyGigsUseCase(QueryUseCase[None, List[GigResponseDTO]]):
    async def _execute_query(self, request: None = None) -> List[GigResponseDTO]:
        gigs = self.uow.gigs.list_by_creator(self._require_user())
        return [GigResponseDTO.from_domain(gig) for gig in gigs]


class ListActiveGigsUseCase(QueryUseCase[None, List[GigResponseDTO]]):
    """All active gigs, newest first, with the posting business's name."""

    async def _execute_query(self, request: None = None) -> List[GigResponseDTO]:
        gigs = self.uow.gigs.list_active()
        businesses = {
            b.id: b.business_name
            for b in self.uow.businesses.get_by_ids(list({g.created_by for g in gigs}))
        }
        return [GigResponseDTO.from_domain(gig, businesses.get(gig.created_by)) for gig in gigs]


class ListGigApplicationsUseCase(GigLookupMixin, QueryUseCase[str, List[ApplicationResponseDTO]]):
    """Applications for a gig, visible to anyone who can operate its venue."""

    async def _execute_query(self, gig_id: str) -> List[ApplicationResponseDTO]:
        gig = self._get_gig(gig_id)
        self._ensure_venue_access(gig)

        applications = self.uow.applications.list_by_gig(gig_id)
        names = self._chef_names([a.chef_id for a in applications])
        return [
            ApplicationResponseDTO.from_domain(a, gig, names.get(a.chef_id))
            for a in applications
        ]


class ApplyToGigUseCase(GigLookupMixin, CommandUseCase[ApplyToGigRequestDTO, ApplicationResponseDTO]):
    """Use case for a chef applying to a gig. One application per chef and gig."""

    async def _execute_command_logic(self, request: ApplyToGigRequestDTO) -> ApplicationResponseDTO:
        chef_id = self._require_user()
        gig = self._get_gig(request.gig_id)
        if gig.is_booked:
            raise BusinessRuleViolation("Gig is already booked")
        if not gig.is_open:
            raise BusinessRuleViolation("This gig is no longer accepting applications")

        chef = self.uow.chefs.get_by_id(chef_id)
        if chef is None:
            raise EntityNotFoundError("Chef profile", chef_id)

        if self.uow.applications.get_by_gig_and_chef(gig.id, chef_id) is not None:
            raise DuplicateEntityError(
                "Application", "gig_id", gig.id, "You have already applied to this gig"
            )

        application = GigApplication(gig_id=gig.id, chef_id=chef_id, message=request.message)
        application.validate()
        saved = self.uow.applications.save(application)

        self._record_event(ApplicationSubmitted(
            application_id=saved.id,
            gig_id=gig.id,
            gig_title=gig.title,
            chef_id=chef_id,
            business_id=gig.created_by,
        ))
        return ApplicationResponseDTO.from_domain(saved, gig, chef.full_name)


class ListMyApplicationsUseCase(GigLookupMixin, QueryUseCase[None, List[ApplicationResponseDTO]]):
    async def _execute_query(self, request: None = None) -> List[ApplicationResponseDTO]:
        applications = self.uow.applications.list_by_chef(self._require_user())
        gigs = self._gigs_by_id([a.gig_id for a in applications])
        return [ApplicationResponseDTO.from_domain(a, gigs.get(a.gig_id)) for a in applications]


class ApplicationAcceptanceMixin(GigLookupMixin):
    """
    Accept one chef for a gig.

    A booked gig cannot accept anyone else. In the same transaction every
    other open application of the gig is rejected. The chef is notified
    after commit.
    """

    def _accept(self, application: GigApplication, gig: Gig) -> AcceptApplicationResponseDTO:
        if gig.is_booked:
            raise BusinessRuleViolation("Gig is already booked")
        application.accept()
        saved = self.uow.applications.save(application)
        rejected_count = self.uow.applications.reject_competing(gig.id, saved.id)

        logger.info(
            f"Application {saved.id} accepted for gig {gig.id}; "
            f"{rejected_count} competing application(s) rejected"
        )
        self._record_event(ApplicationAccepted(
            application_id=saved.id,
            gig_id=gig.id,
            gig_title=gig.title,
            chef_id=saved.chef_id,
            rejected_count=rejected_count,
        ))
        return AcceptApplicationResponseDTO(
            accepted_application=ApplicationResponseDTO.from_domain(saved, gig),
            rejected_count=rejected_count,
        )


class AcceptApplicationUseCase(ApplicationAcceptanceMixin, CommandUseCase[str, AcceptApplicationResponseDTO]):
    async def _execute_command_logic(self, application_id: str) -> AcceptApplicationResponseDTO:
        application = self._get_application(application_id)
        gig = self._get_gig(application.gig_id)
        self._ensure_venue_access(gig)
        return self._accept(application, gig)


class UpdateApplicationStatusUseCase(
    ApplicationAcceptanceMixin, CommandUseCase[UpdateApplicationStatusCommand, ApplicationResponseDTO]
):
    """
    Business-side status change. Transitions are monotonic; moving to
    accepted runs the full accept workflow.
    """

    async def _execute_command_logic(self, request: UpdateApplicationStatusCommand) -> ApplicationResponseDTO:
        application = self._get_application(request.application_id)
        gig = self._get_gig(application.gig_id)
        self._ensure_venue_access(gig)

        new_status = ApplicationStatus(request.changes.status)
        if new_status == ApplicationStatus.ACCEPTED and application.status != ApplicationStatus.ACCEPTED:
            return self._accept(application, gig).accepted_application

        previous = application.status
        application.change_status(new_status)
        saved = self.uow.applications.save(application)

        if new_status == ApplicationStatus.REJECTED and previous != ApplicationStatus.REJECTED:
            self._record_event(ApplicationRejected(
                application_id=saved.id,
                gig_id=gig.id,
                gig_title=gig.title,
                chef_id=saved.chef_id,
            ))
        return ApplicationResponseDTO.from_domain(saved, gig)


class ConfirmApplicationUseCase(GigLookupMixin, CommandUseCase[str, ConfirmApplicationResponseDTO]):
    """
    Chef's final confirmation of an accepted application.
    Books the gig and notifies the business after commit.
    """

    async def _execute_command_logic(self, application_id: str) -> ConfirmApplicationResponseDTO:
        chef_id = self._require_user()
        application = self._get_application(application_id)
        if application.chef_id != chef_id:
            raise AuthorizationError("You can only confirm your own applications")

        chef = self.uow.chefs.get_by_id(chef_id)
        if chef is None:
            raise EntityNotFoundError("Chef profile", chef_id)

        application.confirm()
        saved = self.uow.applications.save(application)

        gig = self._get_gig(saved.gig_id)
        gig.mark_booked()
        self.uow.gigs.save(gig)

        self._record_event(GigConfirmed(
            application_id=saved.id,
            gig_id=gig.id,
            gig_title=gig.title,
            chef_id=chef_id,
            chef_first_name=chef.first_name,
            business_id=gig.created_by,
        ))
        return ConfirmApplicationResponseDTO(
            application=ApplicationResponseDTO.from_domain(saved, gig, chef.full_name),
            gig=GigSummaryDTO.from_domain(gig),
        )


class ListAcceptedApplicationsUseCase(GigLookupMixin, QueryUseCase[None, List[ApplicationResponseDTO]]):
    """Applications accepted by a business and awaiting the chef's confirmation."""

    async def _execute_query(self, request: None = None) -> List[ApplicationResponseDTO]:
        applications = [
            a for a in self.uow.applications.list_by_chef_and_status(
                self._require_user(), [ApplicationStatus.ACCEPTED]
            )
            if not a.confirmed
        ]
        gigs = self._gigs_by_id([a.gig_id for a in applications])
        return [ApplicationResponseDTO.from_domain(a, gigs.get(a.gig_id)) for a in applications]


class ListConfirmedBookingsUseCase(GigLookupMixin, QueryUseCase[None, List[ApplicationResponseDTO]]):
    async def _execute_query(self, request: None = None) -> List[ApplicationResponseDTO]:
        applications = self.uow.applications.list_by_chef_and_status(
            self._require_user(), [ApplicationStatus.CONFIRMED]
        )
        gigs = self._gigs_by_id([a.gig_id for a in applications])
        return [ApplicationResponseDTO.from_domain(a, gigs.get(a.gig_id)) for a in applications]
