"""
Storefront Backend — Settings Tests
======================================

What:  Environment loading, defaults, validation and immutability of Settings.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from storefront.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("RATE_LIMIT_PER_MINUTE", "BACKEND_PORT", "ADMIN_USER", "ADMIN_PASS"):
            monkeypatch.delenv(name, raising=False)

        s = Settings(_env_file=None)

        assert s.rate_limit_per_minute == 60
        assert s.backend_port == 3000
        assert s.admin_user == "admin"
        assert s.admin_pass == "password"
        assert s.jwt_expiry_seconds == 3600

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "5")
        monkeypatch.setenv("API_KEY", "from-env")

        s = Settings(_env_file=None)

        assert s.rate_limit_per_minute == 5
        assert s.api_key == "from-env"

    def test_rate_limit_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, rate_limit_per_minute=0)

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_frozen(self):
        s = Settings(_env_file=None)

        with pytest.raises(PydanticValidationError):
            s.rate_limit_per_minute = 1

    def test_cors_origins_list(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_missing_credentials_reported_together(self):
        s = Settings(_env_file=None, api_key="", jwt_secret="")

        with pytest.raises(ValueError) as exc_info:
            s.validate_required_for_production()

        assert "API_KEY must be set" in str(exc_info.value)
        assert "JWT_SECRET must be set" in str(exc_info.value)

    def test_configured_credentials_pass(self):
        Settings(
            _env_file=None, api_key="k", jwt_secret="s" * 32
        ).validate_required_for_production()
