"""
Unit tests for gig posting and the apply/accept/confirm workflow.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

from app.application.dto.gig_dto import (
    CreateGigRequestDTO, ApplyToGigRequestDTO, UpdateApplicationStatusRequestDTO, UpdateGigRequestDTO
)
from app.application.use_cases.gig_use_cases import (
    CreateGigUseCase,
    UpdateGigUseCase,
    ApplyToGigUseCase,
    AcceptApplicationUseCase,
    UpdateApplicationStatusUseCase,
    ConfirmApplicationUseCase,
    ListGigApplicationsUseCase,
    ListAcceptedApplicationsUseCase,
    ListActiveGigsUseCase,
    UpdateGigCommand,
    UpdateApplicationStatusCommand,
)
from app.domain.events.gig_events import ApplicationSubmitted, ApplicationAccepted, GigConfirmed
from app.domain.models.base import (
    AuthorizationError, BusinessRuleViolation, DuplicateEntityError, EntityNotFoundError
)
from app.domain.models.gig import ApplicationStatus
from tests.factories import add_chef, add_business, add_gig, add_application


def as_user(use_case, user_id):
    use_case.set_current_user(user_id)
    return use_case


class TestCreateGig:
    """Test cases for posting gigs."""

    @pytest.mark.asyncio
    async def test_create_gig(self, uow):
        add_business(uow)
        request = CreateGigRequestDTO(
            title="Brunch chef",
            start_date=date(2030, 1, 5),
            end_date=date(2030, 1, 5),
            location="Bristol",
            pay_rate=Decimal("16.50"),
            role="Chef de partie",
        )

        result = await as_user(CreateGigUseCase(uow), "biz-1").execute(request)

        assert result.id is not None
        assert result.created_by == "biz-1"
        assert result.is_active is True
        assert uow.gigs.get_by_id(result.id).title == "Brunch chef"

    @pytest.mark.asyncio
    async def test_create_requires_user(self, uow):
        request = CreateGigRequestDTO(
            title="Brunch chef", start_date=date(2030, 1, 5), end_date=date(2030, 1, 5),
            location="Bristol", pay_rate=Decimal("16.50"), role="Chef",
        )

        with pytest.raises(AuthorizationError, match="authentication required"):
            await CreateGigUseCase(uow).execute(request)

    @pytest.mark.asyncio
    async def test_only_creator_can_edit(self, uow):
        gig = add_gig(uow)
        command = UpdateGigCommand(gig_id=gig.id, changes=UpdateGigRequestDTO(title="New title"))

        with pytest.raises(AuthorizationError):
            await as_user(UpdateGigUseCase(uow), "someone-else").execute(command)

        result = await as_user(UpdateGigUseCase(uow), "biz-1").execute(command)
        assert result.title == "New title"

    @pytest.mark.asyncio
    async def test_browse_lists_only_open_gigs(self, uow):
        add_business(uow)
        open_gig = add_gig(uow, title="Brunch chef")
        add_gig(uow, title="Filled shift", is_booked=True)
        add_gig(uow, title="Withdrawn shift", is_active=False)

        result = await as_user(ListActiveGigsUseCase(uow), "chef-1").execute(None)

        assert [g.id for g in result] == [open_gig.id]
        assert result[0].business_name == "The Anchor"


class TestApplyToGig:
    """Test cases for chefs applying to gigs."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    @pytest.mark.asyncio
    async def test_apply_publishes_event(self, uow):
        add_business(uow)
        add_chef(uow)
        gig = add_gig(uow)

        use_case = as_user(ApplyToGigUseCase(uow, self.dispatcher), "chef-1")
        result = await use_case.execute(ApplyToGigRequestDTO(gig_id=gig.id, message="Keen!"))

        assert result.status == ApplicationStatus.APPLIED.value
        assert result.chef_name == "Jamie Oliver"
        events = self.dispatcher.dispatch_all.await_args.args[0]
        assert len(events) == 1
        assert isinstance(events[0], ApplicationSubmitted)
        assert events[0].business_id == "biz-1"

    @pytest.mark.asyncio
    async def test_apply_twice_fails(self, uow):
        add_chef(uow)
        gig = add_gig(uow)
        add_application(uow, gig.id)

        with pytest.raises(DuplicateEntityError, match="already applied"):
            await as_user(ApplyToGigUseCase(uow, self.dispatcher), "chef-1").execute(
                ApplyToGigRequestDTO(gig_id=gig.id)
            )
        self.dispatcher.dispatch_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_apply_to_inactive_gig_fails(self, uow):
        add_chef(uow)
        gig = add_gig(uow, is_active=False)

        with pytest.raises(BusinessRuleViolation, match="no longer accepting"):
            await as_user(ApplyToGigUseCase(uow), "chef-1").execute(ApplyToGigRequestDTO(gig_id=gig.id))

    @pytest.mark.asyncio
    async def test_apply_to_booked_gig_fails(self, uow):
        add_chef(uow)
        gig = add_gig(uow, is_booked=True)

        with pytest.raises(BusinessRuleViolation, match="already booked"):
            await as_user(ApplyToGigUseCase(uow, self.dispatcher), "chef-1").execute(
                ApplyToGigRequestDTO(gig_id=gig.id)
            )
        assert uow.applications.list_by_gig(gig.id) == []

    @pytest.mark.asyncio
    async def test_apply_without_chef_profile(self, uow):
        gig = add_gig(uow)

        with pytest.raises(EntityNotFoundError, match="Chef profile"):
            await as_user(ApplyToGigUseCase(uow), "chef-1").execute(ApplyToGigRequestDTO(gig_id=gig.id))


class TestAcceptAndConfirm:
    """Test cases for the booking workflow."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = Mock()
        self.dispatcher.dispatch_all = AsyncMock()

    def _seed(self, uow):
        add_business(uow)
        add_chef(uow, "chef-1", "Jamie Oliver")
        add_chef(uow, "chef-2", "Nigella Lawson")
        add_chef(uow, "chef-3", "Marco White")
        gig = add_gig(uow)
        first = add_application(uow, gig.id, "chef-1")
        second = add_application(uow, gig.id, "chef-2", ApplicationStatus.SHORTLISTED)
        third = add_application(uow, gig.id, "chef-3", ApplicationStatus.REJECTED)
        return gig, first, second, third

    @pytest.mark.asyncio
    async def test_accept_rejects_competing_applications(self, uow):
        gig, first, second, third = self._seed(uow)

        result = await as_user(AcceptApplicationUseCase(uow, self.dispatcher), "biz-1").execute(first.id)

        assert result.accepted_application.status == ApplicationStatus.ACCEPTED.value
        assert result.rejected_count == 1
        assert uow.applications.get_by_id(second.id).status == ApplicationStatus.REJECTED
        assert uow.applications.get_by_id(third.id).status == ApplicationStatus.REJECTED

        event = self.dispatcher.dispatch_all.await_args.args[0][0]
        assert isinstance(event, ApplicationAccepted)
        assert event.rejected_count == 1

    @pytest.mark.asyncio
    async def test_accept_by_outsider_forbidden(self, uow):
        gig, first, _, _ = self._seed(uow)

        with pytest.raises(AuthorizationError):
            await as_user(AcceptApplicationUseCase(uow), "chef-2").execute(first.id)

        assert uow.applications.get_by_id(first.id).status == ApplicationStatus.APPLIED

    @pytest.mark.asyncio
    async def test_status_update_to_accepted_runs_accept_workflow(self, uow):
        gig, first, second, _ = self._seed(uow)
        command = UpdateApplicationStatusCommand(
            application_id=second.id,
            changes=UpdateApplicationStatusRequestDTO(status=ApplicationStatus.ACCEPTED),
        )

        result = await as_user(UpdateApplicationStatusUseCase(uow, self.dispatcher), "biz-1").execute(command)

        assert result.status == ApplicationStatus.ACCEPTED.value
        assert uow.applications.get_by_id(first.id).status == ApplicationStatus.REJECTED

    @pytest.mark.asyncio
    async def test_status_cannot_go_backwards(self, uow):
        gig, _, second, _ = self._seed(uow)
        command = UpdateApplicationStatusCommand(
            application_id=second.id,
            changes=UpdateApplicationStatusRequestDTO(status=ApplicationStatus.APPLIED),
        )

        with pytest.raises(BusinessRuleViolation):
            await as_user(UpdateApplicationStatusUseCase(uow), "biz-1").execute(command)

    @pytest.mark.asyncio
    async def test_confirm_books_gig(self, uow):
        gig, first, _, _ = self._seed(uow)
        await as_user(AcceptApplicationUseCase(uow), "biz-1").execute(first.id)

        result = await as_user(ConfirmApplicationUseCase(uow, self.dispatcher), "chef-1").execute(first.id)

        assert result.application.status == ApplicationStatus.CONFIRMED.value
        assert result.application.confirmed is True
        assert uow.gigs.get_by_id(gig.id).is_booked is True
        event = self.dispatcher.dispatch_all.await_args.args[0][0]
        assert isinstance(event, GigConfirmed)
        assert event.chef_first_name == "Jamie"
        assert event.business_id == "biz-1"

    @pytest.mark.asyncio
    async def test_booked_gig_cannot_accept_another_chef(self, uow):
        gig, first, second, _ = self._seed(uow)
        await as_user(AcceptApplicationUseCase(uow), "biz-1").execute(first.id)
        await as_user(ConfirmApplicationUseCase(uow), "chef-1").execute(first.id)
        add_chef(uow, "chef-4", "Rick Stein")
        late = add_application(uow, gig.id, "chef-4")

        with pytest.raises(BusinessRuleViolation, match="already booked"):
            await as_user(AcceptApplicationUseCase(uow), "biz-1").execute(late.id)

        command = UpdateApplicationStatusCommand(
            application_id=late.id,
            changes=UpdateApplicationStatusRequestDTO(status=ApplicationStatus.ACCEPTED),
        )
        with pytest.raises(BusinessRuleViolation, match="already booked"):
            await as_user(UpdateApplicationStatusUseCase(uow), "biz-1").execute(command)

        stored = uow.applications.get_by_id(first.id)
        assert stored.status == ApplicationStatus.CONFIRMED
        assert stored.confirmed is True
        assert uow.applications.get_by_id(late.id).status == ApplicationStatus.APPLIED

    @pytest.mark.asyncio
    async def test_confirm_someone_elses_application(self, uow):
        gig, first, _, _ = self._seed(uow)
        await as_user(AcceptApplicationUseCase(uow), "biz-1").execute(first.id)

        with pytest.raises(AuthorizationError, match="your own applications"):
            await as_user(ConfirmApplicationUseCase(uow), "chef-2").execute(first.id)

    @pytest.mark.asyncio
    async def test_confirm_before_accept(self, uow):
        gig, first, _, _ = self._seed(uow)

        with pytest.raises(BusinessRuleViolation, match="must be accepted"):
            await as_user(ConfirmApplicationUseCase(uow), "chef-1").execute(first.id)
        assert uow.gigs.get_by_id(gig.id).is_booked is False

    @pytest.mark.asyncio
    async def test_accepted_list_excludes_confirmed(self, uow):
        gig, first, _, _ = self._seed(uow)
        other_gig = add_gig(uow, title="Sunday roast")
        add_application(uow, other_gig.id, "chef-1", ApplicationStatus.ACCEPTED)
        await as_user(AcceptApplicationUseCase(uow), "biz-1").execute(first.id)
        await as_user(ConfirmApplicationUseCase(uow), "chef-1").execute(first.id)

        result = await as_user(ListAcceptedApplicationsUseCase(uow), "chef-1").execute(None)

        assert [a.gig_id for a in result] == [other_gig.id]

    @pytest.mark.asyncio
    async def test_list_applications_includes_chef_names(self, uow):
        gig, _, _, _ = self._seed(uow)

        result = await as_user(ListGigApplicationsUseCase(uow), "biz-1").execute(gig.id)

        assert {a.chef_name for a in result} == {"Jamie Oliver", "Nigella Lawson", "Marco White"}

    @pytest.mark.asyncio
    async def test_event_failure_does_not_fail_command(self, uow):
        gig, first, _, _ = self._seed(uow)
        self.dispatcher.dispatch_all.side_effect = RuntimeError("mail server down")

        result = await as_user(AcceptApplicationUseCase(uow, self.dispatcher), "biz-1").execute(first.id)

        assert result.accepted_application.status == ApplicationStatus.ACCEPTED.value
