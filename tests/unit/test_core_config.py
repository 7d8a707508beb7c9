"""Unit tests for Settings validation.

Settings are constructed directly with keyword arguments so the tests
do not depend on the process environment or a local .env file.
"""

import pytest
from pydantic import ValidationError

from rolegate.core.config import Settings
from rolegate.core.enums import Environment

STRONG = "x" * 32


def make_settings(**overrides) -> Settings:
    values = {
        "jwt_access_secret": "a" * 32,
        "jwt_refresh_secret": "r" * 32,
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.is_development
        assert settings.permission_cache_ttl_seconds == 900
        assert settings.access_token_expire_minutes == 15
        assert settings.redis_url is None

    @pytest.mark.parametrize("field", ["jwt_access_secret", "jwt_refresh_secret"])
    def test_short_secret_rejected(self, field):
        with pytest.raises(ValidationError, match="at least 32"):
            make_settings(**{field: "short"})

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError, match="bcrypt_rounds"):
            make_settings(bcrypt_rounds=rounds)

    def test_non_positive_cache_ttl_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(permission_cache_ttl_seconds=0)

    def test_reset_url_trailing_slash_removed(self):
        settings = make_settings(password_reset_url_base="https://app.example.com/reset/")

        assert settings.password_reset_url_base == "https://app.example.com/reset"

    @pytest.mark.parametrize(
        ("environment", "testing", "production"),
        [
            (Environment.TESTING, True, False),
            (Environment.CI, True, False),
            (Environment.PRODUCTION, False, True),
        ],
    )
    def test_environment_flags(self, environment, testing, production):
        settings = make_settings(environment=environment)

        assert settings.is_testing is testing
        assert settings.is_production is production
        assert not settings.is_development

    def test_environment_from_env_var(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("JWT_ACCESS_SECRET", STRONG)
        monkeypatch.setenv("JWT_REFRESH_SECRET", STRONG + "y")

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert settings.jwt_access_secret == STRONG
