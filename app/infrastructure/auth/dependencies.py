"""
Authentication dependencies for FastAPI.
The identity verifier is built at startup and kept on app.state.
"""

from typing import Optional, Annotated, Union

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import Settings
from app.domain.models.base import ValidationError
from app.infrastructure.auth.jwt_handler import JWTHandler, AuthenticatedUser
from app.infrastructure.auth.supabase_auth import SupabaseAuthService

IdentityVerifier = Union[JWTHandler, SupabaseAuthService]

# Security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


def build_identity_verifier(settings: Settings) -> IdentityVerifier:
    """Local JWT verification or a round trip to Supabase, per configuration."""
    if settings.auth_verification == "supabase":
        return SupabaseAuthService(
            settings.supabase_url,
            settings.supabase_anon_key,
            settings.supabase_service_key,
        )
    return JWTHandler(settings.supabase_jwt_secret, settings.jwt_algorithm)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """Dependency to get the configured identity verifier."""
    return request.app.state.identity_verifier


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)]
) -> AuthenticatedUser:
    """
    FastAPI dependency to get the authenticated caller.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    try:
        return verifier.authenticate(credentials.credentials)
    except ValidationError as e:
        raise _unauthorized(e.message)


def get_current_user_id(
    user: Annotated[AuthenticatedUser, Depends(get_current_user)]
) -> str:
    """FastAPI dependency to get current authenticated user ID."""
    return user.id


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
