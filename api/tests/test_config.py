"""
Tests for settings loading.
"""

import pytest

from config import DEFAULT_PORT, load_settings, parse_phone_exposure
from domain.exceptions import ConfigurationError
from models.enums import PhoneExposure

ENV_VARS = [
    'MONGODB_URI', 'DB_NAME', 'MONGODB_DATABASE', 'PORT', 'PHONE_EXPOSURE', 'EXPOSE_PHONE',
    'TWILIO_SID', 'TWILIO_TOKEN', 'TWILIO_FROM', 'SMS_BRAND', 'FRONTEND_URL', 'CORS_ALLOWED_ORIGINS',
    'MONGODB_MAX_POOL_SIZE'
]


@pytest.fixture
def env(monkeypatch):
    """Clean environment with a database URI."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('MONGODB_URI', 'mongodb://localhost:27017/raktasewa')
    monkeypatch.setenv('ENVIRONMENT', 'test')
    return monkeypatch


class TestLoadSettings:
    """Test environment parsing."""

    def test_defaults(self, env):
        """Test values when only the URI is set."""
        settings = load_settings()

        assert settings.mongodb_uri == 'mongodb://localhost:27017/raktasewa'
        assert settings.database_name is None
        assert settings.port == DEFAULT_PORT
        assert settings.phone_exposure is PhoneExposure.EXPOSE
        assert settings.sms_brand == 'RaktaSewa'
        assert not settings.twilio.is_complete

    def test_missing_uri(self, env):
        """Test the database URI is required."""
        env.delenv('MONGODB_URI')

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_database_name_override(self, env):
        """Test DB_NAME wins over MONGODB_DATABASE."""
        env.setenv('MONGODB_DATABASE', 'other')
        assert load_settings().database_name == 'other'

        env.setenv('DB_NAME', 'donors')
        assert load_settings().database_name == 'donors'

    def test_twilio_credentials(self, env):
        """Test provider configuration."""
        env.setenv('TWILIO_SID', 'ACxxx')
        env.setenv('TWILIO_TOKEN', 'secret')
        env.setenv('TWILIO_FROM', '+15005550006')

        assert load_settings().twilio.is_complete

    def test_invalid_number(self, env):
        """Test non-numeric port."""
        env.setenv('PORT', 'eighty')

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_cors_origins(self, env):
        """Test configured origins."""
        env.setenv('FRONTEND_URL', 'https://donors.example.org')
        env.setenv('CORS_ALLOWED_ORIGINS', 'https://a.example.org, https://b.example.org')

        assert load_settings().cors_origins == [
            'https://donors.example.org', 'https://a.example.org', 'https://b.example.org'
        ]


class TestPhoneExposure:
    """Test the exposure policy switch."""

    def test_explicit_policy(self):
        """Test PHONE_EXPOSURE values."""
        assert parse_phone_exposure('mask-only') is PhoneExposure.MASK_ONLY
        assert parse_phone_exposure(' EXPOSE ') is PhoneExposure.EXPOSE

    def test_legacy_flag(self):
        """Test EXPOSE_PHONE when PHONE_EXPOSURE is unset."""
        assert parse_phone_exposure(None, 'false') is PhoneExposure.MASK_ONLY
        assert parse_phone_exposure(None, 'true') is PhoneExposure.EXPOSE
        assert parse_phone_exposure(None) is PhoneExposure.EXPOSE

    def test_explicit_policy_wins(self):
        """Test precedence over the legacy flag."""
        assert parse_phone_exposure('expose', 'false') is PhoneExposure.EXPOSE

    def test_invalid_policy(self):
        """Test unknown values."""
        with pytest.raises(ConfigurationError):
            parse_phone_exposure('sometimes')
