"""
Unit tests for Gig and GigApplication domain models.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from app.domain.models.gig import Gig, GigApplication, ApplicationStatus
from app.domain.models.base import ValidationError, BusinessRuleViolation


class TestGig:
    """Test cases for Gig domain model."""

    def test_create_gig_defaults(self):
        """Test a new gig is active and not booked."""
        gig = Gig(created_by="biz-1", title="Sous chef for Saturday")

        assert gig.is_active is True
        assert gig.is_booked is False
        assert gig.venue_id == "biz-1"

    def test_validate_requires_title(self):
        gig = Gig(created_by="biz-1", title="   ")

        with pytest.raises(ValidationError, match="Title is required"):
            gig.validate()

    def test_validate_rejects_end_before_start(self):
        """Test a gig cannot end before it starts."""
        gig = Gig(
            created_by="biz-1",
            title="Brunch",
            start_date=date(2024, 5, 10),
            end_date=date(2024, 5, 9),
        )

        with pytest.raises(ValidationError) as exc_info:
            gig.validate()
        assert exc_info.value.field == "end_date"

    def test_validate_rejects_negative_pay(self):
        gig = Gig(created_by="biz-1", title="Brunch", pay_rate=Decimal("-1"))

        with pytest.raises(ValidationError, match="Pay rate cannot be negative"):
            gig.validate()

    def test_has_ended(self):
        """Test a gig has ended only once its last day is in the past."""
        today = date(2024, 6, 1)
        finished = Gig(created_by="b", title="t", end_date=today - timedelta(days=1))
        running = Gig(created_by="b", title="t", end_date=today)
        undated = Gig(created_by="b", title="t")

        assert finished.has_ended(today) is True
        assert running.has_ended(today) is False
        assert undated.has_ended(today) is False

    def test_mark_booked(self):
        gig = Gig(created_by="b", title="t")
        before = gig.updated_at

        gig.mark_booked()

        assert gig.is_booked is True
        assert gig.updated_at >= before

    def test_is_open_until_booked_or_deactivated(self):
        booked = Gig(created_by="b", title="t")
        booked.mark_booked()
        closed = Gig(created_by="b", title="t")
        closed.deactivate()

        assert Gig(created_by="b", title="t").is_open is True
        assert booked.is_open is False
        assert closed.is_open is False


class TestGigApplication:
    """Test cases for the application status lifecycle."""

    def setup_method(self):
        """Set up test fixtures."""
        self.application = GigApplication(gig_id="gig-1", chef_id="chef-1")

    def test_new_application_is_applied(self):
        assert self.application.status == ApplicationStatus.APPLIED
        assert self.application.confirmed is False

    def test_shortlist_then_accept(self):
        """Test the forward path applied -> shortlisted -> accepted."""
        self.application.change_status(ApplicationStatus.SHORTLISTED)
        self.application.change_status(ApplicationStatus.ACCEPTED)

        assert self.application.status == ApplicationStatus.ACCEPTED

    def test_change_to_same_status_is_noop(self):
        self.application.change_status(ApplicationStatus.APPLIED)

        assert self.application.status == ApplicationStatus.APPLIED

    def test_cannot_move_backwards(self):
        """Test transitions are monotonic."""
        self.application.change_status(ApplicationStatus.SHORTLISTED)

        with pytest.raises(BusinessRuleViolation, match="from shortlisted to applied"):
            self.application.change_status(ApplicationStatus.APPLIED)

    def test_rejected_is_terminal(self):
        self.application.change_status(ApplicationStatus.REJECTED)

        with pytest.raises(BusinessRuleViolation):
            self.application.change_status(ApplicationStatus.ACCEPTED)

    def test_confirmed_cannot_be_set_directly(self):
        """Test only the chef can confirm, through confirm()."""
        with pytest.raises(ValidationError) as exc_info:
            self.application.change_status(ApplicationStatus.CONFIRMED)
        assert exc_info.value.field == "status"

    def test_accept_twice_fails(self):
        self.application.accept()

        with pytest.raises(BusinessRuleViolation, match="already accepted"):
            self.application.accept()

    def test_accept_rejected_fails(self):
        self.application.reject()

        with pytest.raises(BusinessRuleViolation, match="Cannot accept an application that is rejected"):
            self.application.accept()

    def test_confirm_requires_acceptance(self):
        """Test a chef cannot confirm before being accepted."""
        with pytest.raises(BusinessRuleViolation, match="must be accepted"):
            self.application.confirm()

    def test_confirm_after_accept(self):
        self.application.accept()
        self.application.confirm()

        assert self.application.status == ApplicationStatus.CONFIRMED
        assert self.application.confirmed is True
        assert self.application.is_terminal is True

    def test_confirm_twice_fails(self):
        self.application.accept()
        self.application.confirm()

        with pytest.raises(BusinessRuleViolation, match="already confirmed"):
            self.application.confirm()

    def test_cannot_reject_confirmed(self):
        self.application.accept()
        self.application.confirm()

        with pytest.raises(BusinessRuleViolation, match="Cannot reject a confirmed application"):
            self.application.reject()
