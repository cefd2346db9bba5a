"""
Email infrastructure.
Handles email templates and SMTP/Resend delivery.
"""

from .email_service import EmailService, EmailMessage
from .template_loader import EmailTemplateLoader

__all__ = [
    "EmailService",
    "EmailMessage",
    "EmailTemplateLoader"
]
