"""
Authentication infrastructure module.
Handles bearer token verification and the current-user dependencies.
"""

from .jwt_handler import JWTHandler, AuthenticatedUser
from .supabase_auth import SupabaseAuthService
from .dependencies import (
    IdentityVerifier,
    CurrentUser,
    build_identity_verifier,
    get_identity_verifier,
    get_current_user,
    get_current_user_id,
)

__all__ = [
    "JWTHandler",
    "AuthenticatedUser",
    "SupabaseAuthService",
    "IdentityVerifier",
    "CurrentUser",
    "build_identity_verifier",
    "get_identity_verifier",
    "get_current_user",
    "get_current_user_id",
]
