"""
Domain models for the Chef Pantry marketplace.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    ConflictError,
    AuthorizationError,
    ValueObject,
    Email,
    TimeRange,
)

# Domain entities
from .profile import ChefProfile, BusinessProfile, PaymentMethod
from .gig import Gig, GigApplication, ApplicationStatus
from .invoice import GigInvoice, InvoiceStatus, calculate_total
from .review import Review, ReviewerType, ReviewSummary, REVIEW_CATEGORIES
from .notification import (
    Notification,
    NotificationPreferences,
    NotificationType,
    NotificationChannel,
)
from .company import (
    Company,
    CompanyMember,
    CompanyRole,
    BusinessCompanyLink,
    BusinessCompanyInvite,
    InviteStatus,
)
from .shift import (
    VenueStaff,
    WorkShift,
    ShiftStatus,
    ClockMethod,
    VenueCheckinToken,
)

__all__ = [
    "BaseEntity",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ConflictError",
    "AuthorizationError",
    "ValueObject",
    "Email",
    "TimeRange",
    "ChefProfile",
    "BusinessProfile",
    "PaymentMethod",
    "Gig",
    "GigApplication",
    "ApplicationStatus",
    "GigInvoice",
    "InvoiceStatus",
    "calculate_total",
    "Review",
    "ReviewerType",
    "ReviewSummary",
    "REVIEW_CATEGORIES",
    "Notification",
    "NotificationPreferences",
    "NotificationType",
    "NotificationChannel",
    "Company",
    "CompanyMember",
    "CompanyRole",
    "BusinessCompanyLink",
    "BusinessCompanyInvite",
    "InviteStatus",
    "VenueStaff",
    "WorkShift",
    "ShiftStatus",
    "ClockMethod",
    "VenueCheckinToken",
]
