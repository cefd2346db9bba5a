"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .profile_mapper import ChefProfileMapper, BusinessProfileMapper
from .gig_mapper import GigMapper, GigApplicationMapper
from .invoice_mapper import InvoiceMapper
from .review_mapper import ReviewMapper
from .notification_mapper import NotificationMapper, NotificationPreferencesMapper
from .company_mapper import (
    CompanyMapper,
    CompanyMemberMapper,
    BusinessCompanyLinkMapper,
    BusinessCompanyInviteMapper,
)
from .shift_mapper import WorkShiftMapper, VenueStaffMapper, CheckinTokenMapper

__all__ = [
    "ChefProfileMapper",
    "BusinessProfileMapper",
    "GigMapper",
    "GigApplicationMapper",
    "InvoiceMapper",
    "ReviewMapper",
    "NotificationMapper",
    "NotificationPreferencesMapper",
    "CompanyMapper",
    "CompanyMemberMapper",
    "BusinessCompanyLinkMapper",
    "BusinessCompanyInviteMapper",
    "WorkShiftMapper",
    "VenueStaffMapper",
    "CheckinTokenMapper",
]
