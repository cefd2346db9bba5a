"""
Notification repository implementations using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy import desc

from app.domain.models.base import DuplicateEntityError
from app.domain.models.notification import Notification, NotificationPreferences
from app.domain.repositories.notification_repository import (
    NotificationRepository,
    NotificationPreferencesRepository,
)
from app.infrastructure.db.models import NotificationModel, NotificationPreferencesModel
from app.infrastructure.mappers.notification_mapper import (
    NotificationMapper,
    NotificationPreferencesMapper,
)
from .base_repository import SQLAlchemyRepository


class SQLAlchemyNotificationRepository(SQLAlchemyRepository, NotificationRepository):
    """SQLAlchemy implementation of notification repository."""

    model = NotificationModel
    mapper = NotificationMapper()

    def save(self, notification: Notification) -> Notification:
        return self._save(notification, lambda: DuplicateEntityError("Notification", "id", notification.id))

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        model = self.session.query(NotificationModel).filter_by(id=notification_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_by_user(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: Optional[int] = None
    ) -> List[Notification]:
        query = self.session.query(NotificationModel).filter_by(user_id=user_id)
        if unread_only:
            query = query.filter_by(is_read=False)
        query = query.order_by(desc(NotificationModel.created_at))
        if limit:
            query = query.limit(limit)
        return self._to_domain_list(query.all())


class SQLAlchemyNotificationPreferencesRepository(SQLAlchemyRepository, NotificationPreferencesRepository):

    model = NotificationPreferencesModel
    mapper = NotificationPreferencesMapper()

    def get_by_user(self, user_id: str) -> Optional[NotificationPreferences]:
        model = self.session.query(NotificationPreferencesModel).filter_by(user_id=user_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def save(self, preferences: NotificationPreferences) -> NotificationPreferences:
        return self._save(
            preferences,
            lambda: DuplicateEntityError("NotificationPreferences", "user_id", preferences.user_id)
        )
