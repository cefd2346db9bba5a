"""
JWT token handler for Supabase authentication.
Validates access tokens locally with the project's JWT secret.
"""

from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from jose import JWTError, jwt as jose_jwt

from app.domain.models.base import ValidationError


@dataclass
class AuthenticatedUser:
    """Identity of the caller as asserted by the auth provider."""

    id: str
    email: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> Optional[str]:
        return self.roles[0] if self.roles else None

    @classmethod
    def from_claims(cls, user_id: str, email: Optional[str], user_metadata: Optional[Dict[str, Any]]) -> "AuthenticatedUser":
        """Build a user from token claims; the account role lives in user_metadata."""
        metadata = dict(user_metadata or {})
        role = metadata.get("role")
        return cls(id=user_id, email=email, roles=[role] if role else [], metadata=metadata)


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, jwt_secret: str, jwt_algorithm: str = "HS256"):
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a Supabase JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid or expired
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            # Supabase tokens carry aud=authenticated; the signature is what we trust
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}")

        if 'sub' not in payload:
            raise ValidationError("Token missing user ID (sub claim)")

        if 'exp' not in payload:
            raise ValidationError("Token missing expiration (exp claim)")

        return payload

    def authenticate(self, token: str) -> AuthenticatedUser:
        payload = self.verify_token(token)
        return AuthenticatedUser.from_claims(
            payload['sub'], payload.get('email'), payload.get('user_metadata')
        )

    def get_user_id(self, token: str) -> str:
        return self.verify_token(token)['sub']

    def is_token_valid(self, token: str) -> bool:
        """Check if token is valid without raising exceptions."""
        try:
            self.verify_token(token)
            return True
        except ValidationError:
            return False

    def generate_test_token(
        self,
        user_id: str,
        email: str = "test@example.com",
        role: Optional[str] = None,
        expires_minutes: int = 60
    ) -> str:
        """
        Generate a JWT shaped like a Supabase access token, for development and tests.

        Args:
            user_id: User ID to include in token
            email: User email
            role: Account role stored in user_metadata (chef, business, company)
            expires_minutes: Token expiration in minutes (default: 60)
        """
        now = datetime.utcnow()
        expire = now + timedelta(minutes=expires_minutes)

        payload = {
            "sub": user_id,
            "email": email,
            "role": "authenticated",
            "user_metadata": {"role": role} if role else {},
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "aud": "authenticated",
            "iss": "supabase"
        }

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
