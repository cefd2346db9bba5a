"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, validator

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173", "http://localhost:5000"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="Chef Pantry API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    app_base_url: str = Field(default="http://localhost:5000", description="Public URL used in email links")

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'chef_pantry.db'}",
        description="SQLAlchemy database URL"
    )
    database_echo: bool = Field(default=False)

    # Supabase Configuration
    supabase_url: str = Field(default="https://example.supabase.co", description="Supabase project URL")
    supabase_anon_key: str = Field(default="temp-key", description="Supabase anonymous key")
    supabase_service_key: str = Field(default="temp-key", description="Supabase service role key")
    supabase_jwt_secret: str = Field(
        default="development-secret-key-change-in-production",
        description="Secret used by Supabase to sign access tokens"
    )

    # Token verification: "jwt" verifies locally, "supabase" asks the auth server
    auth_verification: str = Field(default="jwt")
    jwt_algorithm: str = Field(default="HS256")

    # CORS
    cors_origins: str | List[str] = Field(
        default="http://localhost:3000,http://localhost:5173,http://localhost:5000"
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Rate Limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_requests: int = Field(default=100)
    rate_limit_period: int = Field(default=60)  # seconds

    # Request guards
    max_request_size: int = Field(default=1024 * 1024, description="Largest accepted request body in bytes")

    # Sentry (Optional)
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    # Email Configuration
    email_provider: str = Field(default="smtp", description="smtp or resend")
    smtp_host: Optional[str] = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: Optional[str] = Field(default=None)
    resend_api_key: Optional[str] = Field(default=None)
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    email_from_name: str = Field(default="Chef Pantry")
    email_from_address: str = Field(default="noreply@thechefpantry.co")
    email_timeout_seconds: int = Field(default=10)

    # Marketplace rules
    invite_expiry_days: int = Field(default=14)

    @validator("cors_origins", pre=True)
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v or v.strip() == "":
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return list(DEFAULT_CORS_ORIGINS)
        return v

    @validator("auth_verification")
    def validate_auth_verification(cls, v):
        """Only local JWT verification or remote Supabase lookup are supported."""
        if v not in ("jwt", "supabase"):
            raise ValueError("auth_verification must be 'jwt' or 'supabase'")
        return v

    @validator("email_provider")
    def validate_email_provider(cls, v):
        if v not in ("smtp", "resend"):
            raise ValueError("email_provider must be 'smtp' or 'resend'")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def validate_environment(self) -> None:
        """
        Refuse to start a production deployment on placeholder credentials.
        Checked once by get_settings() when ENVIRONMENT=production.
        """
        placeholders = {
            "supabase_url": "https://example.supabase.co",
            "supabase_anon_key": "temp-key",
            "supabase_service_key": "temp-key",
            "supabase_jwt_secret": "development-secret-key-change-in-production",
        }
        problems = [name.upper() for name, placeholder in placeholders.items()
                    if getattr(self, name) in ("", placeholder)]

        if self.email_provider == "resend" and not self.resend_api_key:
            problems.append("RESEND_API_KEY")
        if self.database_url.startswith("sqlite"):
            problems.append("DATABASE_URL (sqlite is for local development only)")

        if problems:
            raise ValueError(f"Production settings are incomplete: {', '.join(problems)}")


@lru_cache()
def get_settings() -> Settings:
    """Settings for the running process, read from the environment once."""
    settings = Settings()
    if settings.is_production:
        settings.validate_environment()
    return settings
