"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .profile_repository import SQLAlchemyChefProfileRepository, SQLAlchemyBusinessProfileRepository
from .gig_repository import SQLAlchemyGigRepository, SQLAlchemyGigApplicationRepository
from .invoice_repository import SQLAlchemyInvoiceRepository
from .review_repository import SQLAlchemyReviewRepository
from .notification_repository import (
    SQLAlchemyNotificationRepository,
    SQLAlchemyNotificationPreferencesRepository,
)
from .company_repository import (
    SQLAlchemyCompanyRepository,
    SQLAlchemyBusinessCompanyLinkRepository,
    SQLAlchemyCompanyInviteRepository,
)
from .shift_repository import (
    SQLAlchemyWorkShiftRepository,
    SQLAlchemyVenueStaffRepository,
    SQLAlchemyCheckinTokenRepository,
)
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "SQLAlchemyChefProfileRepository",
    "SQLAlchemyBusinessProfileRepository",
    "SQLAlchemyGigRepository",
    "SQLAlchemyGigApplicationRepository",
    "SQLAlchemyInvoiceRepository",
    "SQLAlchemyReviewRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyNotificationPreferencesRepository",
    "SQLAlchemyCompanyRepository",
    "SQLAlchemyBusinessCompanyLinkRepository",
    "SQLAlchemyCompanyInviteRepository",
    "SQLAlchemyWorkShiftRepository",
    "SQLAlchemyVenueStaffRepository",
    "SQLAlchemyCheckinTokenRepository",
    "SQLAlchemyUnitOfWork",
]
