"""
Domain events related to gigs and applications.
Raised by the application workflow and turned into notifications after commit.
"""

from dataclasses import dataclass

from .base import DomainEvent


@dataclass
class ApplicationSubmitted(DomainEvent):
    """Event fired when a chef applies to a gig."""

    application_id: str
    gig_id: str
    gig_title: str
    chef_id: str
    business_id: str


@dataclass
class ApplicationAccepted(DomainEvent):
    """Event fired when a business accepts a chef; competing applications are rejected with it."""

    application_id: str
    gig_id: str
    gig_title: str
    chef_id: str
    rejected_count: int = 0


@dataclass
class ApplicationRejected(DomainEvent):
    application_id: str
    gig_id: str
    gig_title: str
    chef_id: str


@dataclass
class GigConfirmed(DomainEvent):
    """Event fired when a chef confirms an accepted gig and the gig is booked."""

    application_id: str
    gig_id: str
    gig_title: str
    chef_id: str
    chef_first_name: str
    business_id: str


@dataclass
class ReviewSubmitted(DomainEvent):
    review_id: str
    gig_id: str
    reviewer_id: str
    recipient_id: str
    rating: int
