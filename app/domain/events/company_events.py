"""
Domain events related to companies and venue access invites.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Tuple

from .base import DomainEvent


@dataclass
class CompanyInviteCreated(DomainEvent):
    """Event fired when a venue invites a company to manage it."""

    # The token is a credential and stays out of the event log
    redacted_fields: ClassVar[Tuple[str, ...]] = ("token",)

    invite_id: str
    business_id: str
    business_name: str
    invitee_email: str
    role: str
    token: str
    invited_by: str
    expires_at: datetime
