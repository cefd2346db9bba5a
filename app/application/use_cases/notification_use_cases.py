"""
Notification use cases for the application layer.
"""

from dataclasses import dataclass

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.application.dto.notification_dto import (
    NotificationResponseDTO, NotificationListResponseDTO,
    UpdateNotificationPreferencesRequestDTO, NotificationPreferencesResponseDTO
)
from app.domain.models.base import EntityNotFoundError
from app.domain.models.notification import NotificationPreferences

DEFAULT_NOTIFICATION_LIMIT = 50


@dataclass
class ListNotificationsQuery:
    unread_only: bool = False
    limit: int = DEFAULT_NOTIFICATION_LIMIT


class ListNotificationsUseCase(QueryUseCase[ListNotificationsQuery, NotificationListResponseDTO]):
    """The caller's notifications, newest first."""

    async def _execute_query(self, request: ListNotificationsQuery) -> NotificationListResponseDTO:
        user_id = self._require_user()
        notifications = self.uow.notifications.list_by_user(
            user_id, unread_only=request.unread_only, limit=request.limit
        )
        unread = self.uow.notifications.list_by_user(user_id, unread_only=True, limit=None)
        return NotificationListResponseDTO(
            notifications=[NotificationResponseDTO.from_domain(n) for n in notifications],
            unread_count=len(unread),
        )


class MarkNotificationReadUseCase(CommandUseCase[str, NotificationResponseDTO]):
    async def _execute_command_logic(self, notification_id: str) -> NotificationResponseDTO:
        notification = self.uow.notifications.get_by_id(notification_id)
        if notification is None:
            raise EntityNotFoundError("Notification", notification_id)

        notification.ensure_owned_by(self._require_user())
        notification.mark_read()
        return NotificationResponseDTO.from_domain(self.uow.notifications.save(notification))


class GetNotificationPreferencesUseCase(QueryUseCase[None, NotificationPreferencesResponseDTO]):
    """Effective channel toggles; users without stored preferences get the defaults."""

    async def _execute_query(self, request: None = None) -> NotificationPreferencesResponseDTO:
        user_id = self._require_user()
        preferences = self.uow.notification_preferences.get_by_user(user_id)
        if preferences is None:
            preferences = NotificationPreferences.defaults_for(user_id)
        return NotificationPreferencesResponseDTO.from_domain(preferences)


class UpdateNotificationPreferencesUseCase(
    CommandUseCase[UpdateNotificationPreferencesRequestDTO, NotificationPreferencesResponseDTO]
):
    async def _execute_command_logic(
        self, request: UpdateNotificationPreferencesRequestDTO
    ) -> NotificationPreferencesResponseDTO:
        user_id = self._require_user()
        preferences = self.uow.notification_preferences.get_by_user(user_id)
        if preferences is None:
            preferences = NotificationPreferences.defaults_for(user_id)

        preferences.update(request.channels)
        saved = self.uow.notification_preferences.save(preferences)
        return NotificationPreferencesResponseDTO.from_domain(saved)
