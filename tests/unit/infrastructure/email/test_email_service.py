"""
Unit tests for email rendering and delivery.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock, patch

from app.config import Settings
from app.infrastructure.email import EmailService, EmailMessage, EmailTemplateLoader


class TestEmailTemplateLoader:
    """Test cases for EmailTemplateLoader."""

    def setup_method(self):
        """Set up test fixtures."""
        self.loader = EmailTemplateLoader()

    @pytest.mark.asyncio
    async def test_renders_invoice_paid(self):
        html = await self.loader.render_template("invoice_paid.html", {
            "chef_name": "Jamie",
            "business_name": "The Anchor",
            "invoice_id": "inv-1",
            "amount": Decimal("1250"),
            "url": "http://localhost:5000/chef/invoices",
        })

        assert "Hi Jamie, The Anchor marked your invoice" in html
        assert "£1,250.00" in html
        assert "View invoice" in html

    @pytest.mark.asyncio
    async def test_context_is_escaped(self):
        html = await self.loader.render_template("gig_confirmed.html", {
            "business_name": "<b>Anchor</b>", "chef_first_name": "Jamie", "gig_title": "Brunch",
        })

        assert "&lt;b&gt;Anchor&lt;/b&gt;" in html

    @pytest.mark.asyncio
    async def test_missing_template_falls_back(self):
        html = await self.loader.render_template("missing.html", {"url": "http://x/y"})

        assert "You have a new notification" in html
        assert 'href="http://x/y"' in html

    def test_lists_templates(self):
        assert self.loader.list_templates() == [
            "base.html", "company_invite.html", "gig_confirmed.html", "invoice_paid.html", "invoice_submitted.html",
        ]
        assert self.loader.template_exists("company_invite.html")

    def test_filters(self):
        assert self.loader.env.filters["currency"]("9.5") == "£9.50"
        assert self.loader.env.filters["date"](datetime(2024, 3, 1)) == "01/03/2024"
        assert self.loader.env.filters["capitalize_words"]("finance_manager") == "Finance Manager"


class TestEmailService:
    """Test cases for EmailService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = EmailService(app_base_url="https://thechefpantry.co/")

    def test_unconfigured_service_has_no_transport(self):
        assert self.service.transport is None
        assert not self.service.is_configured

    def test_transport_selection(self):
        smtp = EmailService(smtp_host="smtp.example.com", smtp_user="u", smtp_password="p")
        resend = EmailService(provider="resend", resend_api_key="re_key")

        assert smtp.transport == "smtp"
        assert resend.transport == "resend"

    def test_from_settings(self):
        service = EmailService.from_settings(Settings(email_provider="resend", resend_api_key="re_key"))

        assert service.transport == "resend"
        assert service.from_address == "noreply@thechefpantry.co"

    def test_links_use_base_url(self):
        assert self.service.link("/gigs/view/gig-1") == "https://thechefpantry.co/gigs/view/gig-1"

    @pytest.mark.asyncio
    async def test_unconfigured_service_logs_email(self):
        result = await self.service.send_gig_confirmed(
            to="kitchen@anchor.co.uk",
            business_name="The Anchor",
            chef_first_name="Jamie",
            gig_title="Brunch",
            gig_id="gig-1",
        )

        assert result["success"] is True
        assert result["logged"] is True
        [logged] = self.service.get_sent_emails()
        assert logged["to"] == "kitchen@anchor.co.uk"
        assert logged["subject"] == "Gig confirmed: Brunch"
        assert logged["template"] == "gig_confirmed"

        self.service.clear_sent_emails()
        assert self.service.get_sent_emails() == []

    @pytest.mark.asyncio
    async def test_invite_link_carries_token(self):
        loader = Mock()
        loader.render_template = Mock(side_effect=self._render_context)
        service = EmailService(app_base_url="https://thechefpantry.co", template_loader=loader)

        await service.send_company_invite(
            to="ops@harbour.co.uk", business_name="The Anchor", role="manager",
            token="abc123", expires_at=datetime(2024, 3, 15),
        )

        assert self.rendered["url"] == "https://thechefpantry.co/company/invites/accept?token=abc123"

    async def _render_context(self, template_name, context):
        self.rendered = context
        return "<p>invite</p>"

    @pytest.mark.asyncio
    async def test_resend_delivery(self):
        service = EmailService(provider="resend", resend_api_key="re_key")
        response = Mock(content=b'{"id": "msg-1"}')
        response.json.return_value = {"id": "msg-1"}

        with patch("app.infrastructure.email.email_service.requests.post", return_value=response) as post:
            result = await service.send_email(EmailMessage(
                to="jamie@example.com", subject="Invoice paid", template="invoice_paid",
                context={"amount": Decimal("10")},
            ))

        assert result["success"] is True
        assert result["message_id"] == "msg-1"
        assert post.call_args.kwargs["headers"] == {"Authorization": "Bearer re_key"}
        assert post.call_args.kwargs["json"]["from"] == "Chef Pantry <noreply@thechefpantry.co>"

    @pytest.mark.asyncio
    async def test_delivery_failure_is_reported(self):
        service = EmailService(provider="resend", resend_api_key="re_key")

        with patch("app.infrastructure.email.email_service.requests.post", side_effect=ConnectionError("down")):
            result = await service.send_email(EmailMessage(to="a@b.com", subject="Hi", template="invoice_paid"))

        assert result["success"] is False
        assert result["error"] == "down"
