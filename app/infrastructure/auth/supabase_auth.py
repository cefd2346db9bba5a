"""
Supabase authentication service.
Verifies access tokens against the Supabase auth server and looks up
account emails for notification delivery.
"""

import logging
from typing import Optional

from supabase import create_client, Client

from app.domain.models.base import ValidationError
from app.infrastructure.auth.jwt_handler import AuthenticatedUser

logger = logging.getLogger(__name__)


class SupabaseAuthService:
    """Service for Supabase authentication operations."""

    def __init__(self, supabase_url: str, anon_key: str, service_key: Optional[str] = None):
        self.supabase: Client = create_client(supabase_url, anon_key)
        self._admin: Optional[Client] = (
            create_client(supabase_url, service_key) if service_key else None
        )

    def authenticate(self, access_token: str) -> AuthenticatedUser:
        """
        Resolve the user behind an access token.

        Raises:
            ValidationError: If the auth server rejects the token
        """
        try:
            response = self.supabase.auth.get_user(access_token)
        except Exception as e:
            raise ValidationError(f"Token validation failed: {str(e)}")

        if response is None or response.user is None:
            raise ValidationError("Invalid or expired token")

        user = response.user
        return AuthenticatedUser.from_claims(user.id, user.email, user.user_metadata)

    def get_user_email(self, user_id: str) -> Optional[str]:
        """
        Email of an account, using the service role key.
        Returns None when the lookup is unavailable or fails.
        """
        if self._admin is None:
            return None
        try:
            response = self._admin.auth.admin.get_user_by_id(user_id)
        except Exception as e:
            logger.warning(f"Could not look up email for user {user_id}: {str(e)}")
            return None
        return response.user.email if response and response.user else None
