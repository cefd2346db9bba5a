"""
Unit tests for application settings.
"""

import pytest

from app.config import Settings, DEFAULT_CORS_ORIGINS


class TestSettings:
    """Test cases for Settings."""

    def test_cors_origins_from_comma_separated_string(self):
        settings = Settings(cors_origins="https://thechefpantry.co, https://admin.thechefpantry.co")

        assert settings.cors_origins == ["https://thechefpantry.co", "https://admin.thechefpantry.co"]

    def test_blank_cors_origins_fall_back_to_defaults(self):
        assert Settings(cors_origins="  ").cors_origins == DEFAULT_CORS_ORIGINS

    def test_unknown_auth_verification_rejected(self):
        with pytest.raises(ValueError):
            Settings(auth_verification="magic-link")

    def test_unknown_email_provider_rejected(self):
        with pytest.raises(ValueError):
            Settings(email_provider="carrier-pigeon")

    def test_production_refuses_placeholder_credentials(self):
        settings = Settings(environment="production")

        with pytest.raises(ValueError) as exc_info:
            settings.validate_environment()

        message = str(exc_info.value)
        assert "SUPABASE_JWT_SECRET" in message
        assert "DATABASE_URL" in message

    def test_complete_production_settings_pass(self):
        settings = Settings(
            environment="production",
            database_url="postgresql://pantry@db/pantry",
            supabase_url="https://pantry.supabase.co",
            supabase_anon_key="anon",
            supabase_service_key="service",
            supabase_jwt_secret="a-real-secret",
            email_provider="resend",
            resend_api_key="re_123",
        )

        settings.validate_environment()
        assert settings.is_production
        assert not settings.is_development
