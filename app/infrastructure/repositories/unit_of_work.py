"""
SQLAlchemy unit of work.
One session, one transaction, every repository bound to it.
"""

import logging

from sqlalchemy.orm import Session

from app.domain.repositories.unit_of_work import UnitOfWork
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

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over a single SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session
        self.chefs = SQLAlchemyChefProfileRepository(session)
        self.businesses = SQLAlchemyBusinessProfileRepository(session)
        self.gigs = SQLAlchemyGigRepository(session)
        self.applications = SQLAlchemyGigApplicationRepository(session)
        self.invoices = SQLAlchemyInvoiceRepository(session)
        self.reviews = SQLAlchemyReviewRepository(session)
        self.notifications = SQLAlchemyNotificationRepository(session)
        self.notification_preferences = SQLAlchemyNotificationPreferencesRepository(session)
        self.companies = SQLAlchemyCompanyRepository(session)
        self.company_links = SQLAlchemyBusinessCompanyLinkRepository(session)
        self.company_invites = SQLAlchemyCompanyInviteRepository(session)
        self.shifts = SQLAlchemyWorkShiftRepository(session)
        self.venue_staff = SQLAlchemyVenueStaffRepository(session)
        self.checkin_tokens = SQLAlchemyCheckinTokenRepository(session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        logger.debug("Rolling back unit of work")
        self.session.rollback()
