"""
Domain services for the Chef Pantry marketplace.
"""

from .access_policy import (
    AccessPolicy,
    AccessDecision,
    AccessOutcome,
    VENUE_OPERATOR_ROLES,
    COMPANY_ADMIN_ROLES,
    ALL_COMPANY_ROLES,
)

__all__ = [
    "AccessPolicy",
    "AccessDecision",
    "AccessOutcome",
    "VENUE_OPERATOR_ROLES",
    "COMPANY_ADMIN_ROLES",
    "ALL_COMPANY_ROLES",
]
