"""Tests for configuration validation."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from jwtdemo.core.config import Settings

VALID_SECRET = "s" * 32


class TestJwtSecretValidation:
    def test_valid_secret_accepted(self):
        settings = Settings(_env_file=None, jwt_secret_key=VALID_SECRET)
        assert settings.effective_jwt_secret_key == VALID_SECRET

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, jwt_secret_key="Secret!")
        assert "32 characters" in str(exc_info.value)

    def test_secret_read_from_environment(self):
        with patch.dict(os.environ, {"JWT_SECRET_KEY": "e" * 40}):
            assert Settings(_env_file=None).jwt_secret_key == "e" * 40

    def test_generated_secret_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.jwt_secret_key is None
        secret = settings.effective_jwt_secret_key
        assert len(secret) == 64
        # Stable for the lifetime of the settings object
        assert settings.effective_jwt_secret_key == secret
        assert Settings(_env_file=None, jwt_secret_key=None).effective_jwt_secret_key != secret


class TestDefaults:
    def test_token_defaults(self):
        settings = Settings(_env_file=None, jwt_secret_key=VALID_SECRET)
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_ttl_seconds == 180
        assert settings.client_sweep_interval_seconds == 60
        assert settings.api_prefix == "/api"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/api", "/api"),
            ("api", "/api"),
            ("/api/", "/api"),
            ("", ""),
            ("/", ""),
            ("/v1/auth", "/v1/auth"),
        ],
    )
    def test_api_prefix_normalized(self, raw, expected):
        settings = Settings(_env_file=None, jwt_secret_key=VALID_SECRET, api_prefix=raw)
        assert settings.api_prefix == expected

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, jwt_access_token_expire_minutes=0)


class TestSecurityConfiguration:
    def test_no_warnings_when_configured(self):
        settings = Settings(_env_file=None, jwt_secret_key=VALID_SECRET, debug=False)
        assert settings.check_security_configuration() == []

    def test_warns_about_ephemeral_secret(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        warnings = settings.check_security_configuration()
        assert any("JWT_SECRET_KEY" in w for w in warnings)

    def test_warns_about_debug(self):
        settings = Settings(_env_file=None, jwt_secret_key=VALID_SECRET, debug=True)
        assert any("DEBUG" in w for w in settings.check_security_configuration())
