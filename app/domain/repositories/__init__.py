"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .profile_repository import ChefProfileRepository, BusinessProfileRepository
from .gig_repository import GigRepository, GigApplicationRepository
from .invoice_repository import InvoiceRepository
from .review_repository import ReviewRepository
from .notification_repository import NotificationRepository, NotificationPreferencesRepository
from .company_repository import (
    CompanyRepository,
    BusinessCompanyLinkRepository,
    CompanyInviteRepository,
)
from .shift_repository import WorkShiftRepository, VenueStaffRepository, CheckinTokenRepository
from .unit_of_work import UnitOfWork

__all__ = [
    "ChefProfileRepository",
    "BusinessProfileRepository",
    "GigRepository",
    "GigApplicationRepository",
    "InvoiceRepository",
    "ReviewRepository",
    "NotificationRepository",
    "NotificationPreferencesRepository",
    "CompanyRepository",
    "BusinessCompanyLinkRepository",
    "CompanyInviteRepository",
    "WorkShiftRepository",
    "VenueStaffRepository",
    "CheckinTokenRepository",
    "UnitOfWork",
]
