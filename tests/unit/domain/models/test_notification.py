"""
Unit tests for notification domain models.
"""

import pytest

from app.domain.models.notification import (
    Notification,
    NotificationPreferences,
    NotificationType,
    NotificationChannel,
)
from app.domain.models.base import ValidationError, AuthorizationError


class TestNotification:
    """Test cases for Notification domain model."""

    def test_validate_requires_recipient(self):
        notification = Notification(user_id="", title="Hello")

        with pytest.raises(ValidationError, match="recipient is required"):
            notification.validate()

    def test_validate_requires_content(self):
        notification = Notification(user_id="user-1")

        with pytest.raises(ValidationError):
            notification.validate()

    def test_mark_read(self):
        notification = Notification(user_id="user-1", title="Hello")

        notification.mark_read()

        assert notification.is_read is True

    def test_ensure_owned_by(self):
        notification = Notification(user_id="user-1", title="Hello")

        with pytest.raises(AuthorizationError):
            notification.ensure_owned_by("user-2")


class TestNotificationPreferences:
    """Test cases for per-user channel preferences."""

    def setup_method(self):
        """Set up test fixtures."""
        self.preferences = NotificationPreferences.defaults_for("user-1")

    def test_defaults(self):
        """Test defaults enable everything except rejection emails."""
        assert self.preferences.is_enabled(NotificationType.GIG_CONFIRMED, NotificationChannel.EMAIL) is True
        assert self.preferences.is_enabled(NotificationType.APPLICATION_REJECTED, NotificationChannel.IN_APP) is True
        assert self.preferences.is_enabled(NotificationType.APPLICATION_REJECTED, NotificationChannel.EMAIL) is False

    def test_update_merges_toggles(self):
        self.preferences.update({"invoice_paid": {"email": False}})
        self.preferences.update({"invoice_paid": {"in_app": False}})

        assert self.preferences.channels["invoice_paid"] == {"email": False, "in_app": False}
        assert self.preferences.is_enabled(NotificationType.INVOICE_PAID, NotificationChannel.EMAIL) is False

    def test_update_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown notification type: party"):
            self.preferences.update({"party": {"email": True}})

    def test_update_unknown_channel(self):
        with pytest.raises(ValidationError, match="Unknown notification channel: sms"):
            self.preferences.update({"invoice_paid": {"sms": True}})

    def test_resolved_covers_every_type(self):
        self.preferences.update({"gig_confirmed": {"email": False}})

        resolved = self.preferences.resolved()

        assert set(resolved) == {t.value for t in NotificationType}
        assert resolved["gig_confirmed"] == {"in_app": True, "email": False}
        assert resolved["chef_applied"] == {"in_app": True, "email": True}
