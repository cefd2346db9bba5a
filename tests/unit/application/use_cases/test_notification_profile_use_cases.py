"""
Unit tests for notification and profile use cases.
"""

import pytest

from app.application.dto.notification_dto import UpdateNotificationPreferencesRequestDTO
from app.application.dto.profile_dto import (
    CreateChefProfileRequestDTO, UpdatePaymentMethodRequestDTO
)
from app.application.use_cases.base_use_case import BaseUseCase, QueryUseCase
from app.application.use_cases.notification_use_cases import (
    ListNotificationsUseCase,
    MarkNotificationReadUseCase,
    GetNotificationPreferencesUseCase,
    UpdateNotificationPreferencesUseCase,
    ListNotificationsQuery,
)
from app.application.use_cases.profile_use_cases import (
    UpsertChefProfileUseCase,
    UpdatePaymentMethodUseCase,
    UpdatePaymentMethodCommand,
)
from app.domain.models.base import AuthorizationError, EntityNotFoundError, ValidationError
from app.domain.models.notification import Notification, NotificationType


def as_user(use_case, user_id):
    use_case.set_current_user(user_id)
    return use_case


class EchoQuery(QueryUseCase[str, str]):
    async def _execute_query(self, request: str) -> str:
        return request.upper()


class TestBaseUseCase:
    """Test cases for shared use case behaviour."""

    @pytest.mark.asyncio
    async def test_execution_is_timed(self):
        use_case = EchoQuery(unit_of_work=None)

        assert await use_case.execute("hi") == "HI"
        assert use_case.execution_end >= use_case.execution_start

    def test_set_current_user(self):
        use_case = EchoQuery(unit_of_work=None).set_current_user("user-1", ["chef"], "a@b.com")

        assert isinstance(use_case, BaseUseCase)
        assert use_case.current_user_id == "user-1"
        assert use_case.current_user_roles == ["chef"]
        assert use_case.current_user_email == "a@b.com"

    def test_require_role(self):
        use_case = EchoQuery(unit_of_work=None).set_current_user("user-1", ["chef"])

        use_case._require_role("chef")
        with pytest.raises(AuthorizationError, match="Role 'business' required"):
            use_case._require_role("business")


class TestNotifications:
    """Test cases for the notification inbox."""

    def _notify(self, uow, user_id="user-1", title="Gig confirmed", is_read=False):
        notification = Notification(
            user_id=user_id, type=NotificationType.GIG_CONFIRMED, title=title, body="...", is_read=is_read
        )
        uow.notifications.save(notification)
        uow.commit()
        return notification

    @pytest.mark.asyncio
    async def test_list_with_unread_count(self, uow):
        self._notify(uow, title="First")
        self._notify(uow, title="Second", is_read=True)
        self._notify(uow, user_id="user-2")

        result = await as_user(ListNotificationsUseCase(uow), "user-1").execute(ListNotificationsQuery())
        unread = await as_user(ListNotificationsUseCase(uow), "user-1").execute(
            ListNotificationsQuery(unread_only=True)
        )

        assert len(result.notifications) == 2
        assert result.unread_count == 1
        assert [n.title for n in unread.notifications] == ["First"]

    @pytest.mark.asyncio
    async def test_mark_read(self, uow):
        notification = self._notify(uow)

        result = await as_user(MarkNotificationReadUseCase(uow), "user-1").execute(notification.id)

        assert result.is_read is True

    @pytest.mark.asyncio
    async def test_cannot_mark_someone_elses(self, uow):
        notification = self._notify(uow)

        with pytest.raises(AuthorizationError):
            await as_user(MarkNotificationReadUseCase(uow), "user-2").execute(notification.id)

    @pytest.mark.asyncio
    async def test_mark_missing(self, uow):
        with pytest.raises(EntityNotFoundError):
            await as_user(MarkNotificationReadUseCase(uow), "user-1").execute("missing")

    @pytest.mark.asyncio
    async def test_preferences_default_then_update(self, uow):
        defaults = await as_user(GetNotificationPreferencesUseCase(uow), "user-1").execute(None)
        assert defaults.channels["application_rejected"] == {"in_app": True, "email": False}

        await as_user(UpdateNotificationPreferencesUseCase(uow), "user-1").execute(
            UpdateNotificationPreferencesRequestDTO(channels={"invoice_paid": {"email": False}})
        )
        updated = await as_user(GetNotificationPreferencesUseCase(uow), "user-1").execute(None)

        assert updated.channels["invoice_paid"] == {"in_app": True, "email": False}

    @pytest.mark.asyncio
    async def test_preferences_reject_unknown_type(self, uow):
        with pytest.raises(ValidationError):
            await as_user(UpdateNotificationPreferencesUseCase(uow), "user-1").execute(
                UpdateNotificationPreferencesRequestDTO(channels={"birthday": {"email": True}})
            )


class TestChefProfile:
    """Test cases for chef profile use cases."""

    @pytest.mark.asyncio
    async def test_upsert_creates_then_updates(self, uow):
        request = CreateChefProfileRequestDTO(full_name="Jamie Oliver", location="London", skills=["Pastry"])

        created, was_created = await as_user(UpsertChefProfileUseCase(uow), "chef-1").execute(request)
        assert was_created is True
        assert created.id == "chef-1"

        again = CreateChefProfileRequestDTO(full_name="Jamie Oliver", location="Leeds")
        updated, was_created = await as_user(UpsertChefProfileUseCase(uow), "chef-1").execute(again)
        assert was_created is False
        assert updated.location == "Leeds"
        assert updated.skills == ["Pastry"]

    @pytest.mark.asyncio
    async def test_bank_payment_needs_details(self, uow):
        await as_user(UpsertChefProfileUseCase(uow), "chef-1").execute(
            CreateChefProfileRequestDTO(full_name="Jamie Oliver", location="London")
        )

        with pytest.raises(ValidationError, match="Sort code and account number are required"):
            await as_user(UpdatePaymentMethodUseCase(uow), "chef-1").execute(UpdatePaymentMethodCommand(
                chef_id="chef-1",
                changes=UpdatePaymentMethodRequestDTO(payment_method="bank"),
            ))

    @pytest.mark.asyncio
    async def test_payment_method_of_someone_else(self, uow):
        with pytest.raises(AuthorizationError):
            await as_user(UpdatePaymentMethodUseCase(uow), "chef-2").execute(UpdatePaymentMethodCommand(
                chef_id="chef-1",
                changes=UpdatePaymentMethodRequestDTO(payment_method="stripe"),
            ))
