"""
Unit of work interface.
Groups the repositories used by one workflow behind a single transaction.
"""

from abc import ABC, abstractmethod

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


class UnitOfWork(ABC):
    """
    Transaction boundary shared by the repositories of one request.
    Nothing is persisted until commit() is called.
    """

    chefs: ChefProfileRepository
    businesses: BusinessProfileRepository
    gigs: GigRepository
    applications: GigApplicationRepository
    invoices: InvoiceRepository
    reviews: ReviewRepository
    notifications: NotificationRepository
    notification_preferences: NotificationPreferencesRepository
    companies: CompanyRepository
    company_links: BusinessCompanyLinkRepository
    company_invites: CompanyInviteRepository
    shifts: WorkShiftRepository
    venue_staff: VenueStaffRepository
    checkin_tokens: CheckinTokenRepository

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
