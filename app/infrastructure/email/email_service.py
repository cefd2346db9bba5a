"""
Email service for transactional marketplace notifications.
Renders Jinja2 templates and delivers them through SMTP or the Resend API.
"""

import asyncio
import re
import smtplib
import logging
from typing import List, Dict, Any, Optional
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

import requests

from app.config import Settings
from .template_loader import EmailTemplateLoader


logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    """Email message data."""
    to: str
    subject: str
    template: str
    context: Dict[str, Any] = field(default_factory=dict)
    from_name: Optional[str] = None
    from_address: Optional[str] = None


class EmailService:
    """Sends notification emails; delivery failures are reported, never raised."""

    def __init__(
        self,
        provider: str = "smtp",
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        resend_api_key: Optional[str] = None,
        resend_api_url: str = "https://api.resend.com/emails",
        from_name: str = "Chef Pantry",
        from_address: str = "noreply@thechefpantry.co",
        timeout_seconds: int = 10,
        app_base_url: str = "http://localhost:5000",
        template_loader: Optional[EmailTemplateLoader] = None
    ):
        self.provider = provider
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.resend_api_key = resend_api_key
        self.resend_api_url = resend_api_url
        self.from_name = from_name
        self.from_address = from_address
        self.timeout_seconds = timeout_seconds
        self.app_base_url = app_base_url.rstrip("/")
        self.template_loader = template_loader or EmailTemplateLoader(app_name=from_name)
        self.sent_emails: List[Dict[str, Any]] = []  # Logged messages when no transport is set

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        return cls(
            provider=settings.email_provider,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_user=settings.smtp_user,
            smtp_password=settings.smtp_password,
            resend_api_key=settings.resend_api_key,
            resend_api_url=settings.resend_api_url,
            from_name=settings.email_from_name,
            from_address=settings.email_from_address,
            timeout_seconds=settings.email_timeout_seconds,
            app_base_url=settings.app_base_url,
        )

    @property
    def transport(self) -> Optional[str]:
        """Configured delivery transport, or None when emails are only logged."""
        if self.provider == "resend" and self.resend_api_key:
            return "resend"
        if self.provider == "smtp" and all([self.smtp_host, self.smtp_user, self.smtp_password]):
            return "smtp"
        return None

    @property
    def is_configured(self) -> bool:
        return self.transport is not None

    def link(self, path: str) -> str:
        return f"{self.app_base_url}/{path.lstrip('/')}"

    async def send_email(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Send an email message.

        Args:
            message: Email message to send

        Returns:
            Result dictionary with success status and details
        """
        try:
            html_content = await self.template_loader.render_template(
                f"{message.template}.html",
                message.context
            )

            transport = self.transport
            if transport is None:
                logger.warning("Email transport not configured, email will be logged instead")
                return self._log_email(message, html_content)

            if transport == "resend":
                result = await self._send_via_resend(message, html_content)
            else:
                result = await self._send_via_smtp(message, html_content)

            logger.info(f"Email sent successfully to {message.to}: {message.subject}")
            return result

        except Exception as e:
            logger.error(f"Failed to send email to {message.to}: {str(e)}")
            return {
                "success": False,
                "error": str(e),
                "timestamp": datetime.now().isoformat()
            }

    async def send_invoice_submitted(
        self,
        to: str,
        business_name: str,
        chef_name: str,
        invoice_id: str,
        amount: Decimal,
        gig_title: Optional[str] = None
    ) -> Dict[str, Any]:
        """Tell a business that a chef has invoiced them."""
        message = EmailMessage(
            to=to,
            subject=f"New invoice from {chef_name}",
            template="invoice_submitted",
            context={
                "business_name": business_name,
                "chef_name": chef_name,
                "invoice_id": invoice_id,
                "amount": amount,
                "gig_title": gig_title,
                "url": self.link("/business/invoices"),
            }
        )
        return await self.send_email(message)

    async def send_invoice_paid(
        self,
        to: str,
        chef_name: str,
        business_name: str,
        invoice_id: str,
        amount: Decimal
    ) -> Dict[str, Any]:
        """Tell a chef that their invoice was paid."""
        message = EmailMessage(
            to=to,
            subject="Invoice paid",
            template="invoice_paid",
            context={
                "chef_name": chef_name,
                "business_name": business_name,
                "invoice_id": invoice_id,
                "amount": amount,
                "url": self.link("/chef/invoices"),
            }
        )
        return await self.send_email(message)

    async def send_gig_confirmed(
        self,
        to: str,
        business_name: str,
        chef_first_name: str,
        gig_title: str,
        gig_id: str
    ) -> Dict[str, Any]:
        message = EmailMessage(
            to=to,
            subject=f"Gig confirmed: {gig_title}",
            template="gig_confirmed",
            context={
                "business_name": business_name,
                "chef_first_name": chef_first_name,
                "gig_title": gig_title,
                "url": self.link(f"/gigs/view/{gig_id}"),
            }
        )
        return await self.send_email(message)

    async def send_company_invite(
        self,
        to: str,
        business_name: str,
        role: str,
        token: str,
        expires_at: datetime
    ) -> Dict[str, Any]:
        """Invite a company, by email, to manage a venue."""
        message = EmailMessage(
            to=to,
            subject=f"{business_name} invited your company to Chef Pantry",
            template="company_invite",
            context={
                "business_name": business_name,
                "role": role,
                "expires_at": expires_at,
                "url": self.link(f"/company/invites/accept?token={token}"),
            }
        )
        return await self.send_email(message)

    def _sender(self, message: EmailMessage) -> str:
        return f"{message.from_name or self.from_name} <{message.from_address or self.from_address}>"

    def _create_mime_message(self, message: EmailMessage, html_content: str) -> MIMEMultipart:
        """Create MIME message with plain text and HTML parts."""
        mime_msg = MIMEMultipart("alternative")
        mime_msg["Subject"] = message.subject
        mime_msg["From"] = self._sender(message)
        mime_msg["To"] = message.to

        text_content = re.sub(r"<[^>]+>", "", html_content)
        mime_msg.attach(MIMEText(text_content, "plain", "utf-8"))
        mime_msg.attach(MIMEText(html_content, "html", "utf-8"))
        return mime_msg

    async def _send_via_smtp(self, message: EmailMessage, html_content: str) -> Dict[str, Any]:
        """Send email via SMTP server in a worker thread."""
        mime_message = self._create_mime_message(message, html_content)

        def deliver() -> None:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout_seconds) as server:
                server.starttls()
                server.login(self.smtp_user, self.smtp_password)
                server.send_message(mime_message, to_addrs=[message.to])

        await asyncio.to_thread(deliver)
        return {
            "success": True,
            "transport": "smtp",
            "recipients": [message.to],
            "timestamp": datetime.now().isoformat()
        }

    async def _send_via_resend(self, message: EmailMessage, html_content: str) -> Dict[str, Any]:
        """Send email through the Resend HTTP API."""
        payload = {
            "from": self._sender(message),
            "to": [message.to],
            "subject": message.subject,
            "html": html_content,
        }
        response = await asyncio.to_thread(
            requests.post,
            self.resend_api_url,
            json=payload,
            headers={"Authorization": f"Bearer {self.resend_api_key}"},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        body = response.json() if response.content else {}
        return {
            "success": True,
            "transport": "resend",
            "message_id": body.get("id"),
            "recipients": [message.to],
            "timestamp": datetime.now().isoformat()
        }

    def _log_email(self, message: EmailMessage, html_content: str) -> Dict[str, Any]:
        """Log email instead of sending (for development)."""
        email_log = {
            "timestamp": datetime.now().isoformat(),
            "to": message.to,
            "subject": message.subject,
            "template": message.template,
            "html_preview": html_content[:200] + "..." if len(html_content) > 200 else html_content,
        }
        self.sent_emails.append(email_log)

        logger.info(f"Email logged (transport not configured): {message.subject} to {message.to}")

        return {
            "success": True,
            "logged": True,
            "message": "Email logged successfully (transport not configured)",
            "timestamp": email_log["timestamp"]
        }

    def get_sent_emails(self) -> List[Dict[str, Any]]:
        """Get list of logged emails (for development/testing)."""
        return self.sent_emails.copy()

    def clear_sent_emails(self) -> None:
        self.sent_emails.clear()
