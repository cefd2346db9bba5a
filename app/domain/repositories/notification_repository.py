"""
Notification repository interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.notification import Notification, NotificationPreferences


class NotificationRepository(ABC):
    """Repository interface for in-app notifications."""

    @abstractmethod
    def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        """
        Get a notification by id.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_by_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: Optional[int] = None
    ) -> List[Notification]:
        """Notifications of a user, newest first."""
        pass


class NotificationPreferencesRepository(ABC):
    """Repository interface for per-user notification channel preferences."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> Optional[NotificationPreferences]:
        """
        Get stored preferences for a user.
        Returns None when the user never changed their preferences.
        """
        pass

    @abstractmethod
    def save(self, preferences: NotificationPreferences) -> NotificationPreferences:
        pass
