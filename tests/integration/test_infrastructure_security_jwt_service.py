"""Integration tests for JWTService with real PyJWT signing.

Tests cover:
- Access/refresh round trips
- Expiry (frozen clock)
- Token type confusion and tampering
- Constructor secret validation
"""

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from rolegate.core.enums import ErrorCode
from rolegate.core.result import Failure, Success
from rolegate.infrastructure.security import JWTService
from tests.conftest import ACCESS_SECRET, REFRESH_SECRET


@pytest.fixture
def service():
    return JWTService(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


@pytest.mark.integration
class TestJWTServiceIntegration:
    # =========================================================================
    # Round trips
    # =========================================================================

    def test_access_token_round_trip(self, service):
        user_id = uuid7()

        result = service.verify_access_token(
            service.issue_access_token(user_id, "ada@example.com")
        )

        assert isinstance(result, Success)
        assert result.value.user_id == user_id
        assert result.value.email == "ada@example.com"

    def test_refresh_token_carries_version(self, service):
        user_id = uuid7()

        result = service.verify_refresh_token(service.issue_refresh_token(user_id, 3))

        assert result.value.user_id == user_id
        assert result.value.token_version == 3
        assert service.is_refresh_token_current(result.value, 3)
        assert not service.is_refresh_token_current(result.value, 4)

    def test_each_token_has_unique_jti(self, service):
        user_id = uuid7()

        first = service.issue_access_token(user_id, "a@b.io")
        second = service.issue_access_token(user_id, "a@b.io")

        claims = [
            jwt.decode(t, ACCESS_SECRET, algorithms=["HS256"]) for t in (first, second)
        ]
        assert claims[0]["jti"] != claims[1]["jti"]
        assert claims[0]["type"] == "access"

    # =========================================================================
    # Expiry
    # =========================================================================

    def test_access_token_expires_after_fifteen_minutes(self, service):
        with freeze_time("2026-10-18 09:00:00") as frozen:
            token = service.issue_access_token(uuid7(), "a@b.io")

            frozen.tick(timedelta(minutes=14, seconds=59))
            assert isinstance(service.verify_access_token(token), Success)

            frozen.tick(timedelta(seconds=2))
            result = service.verify_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert result.error.details["reason"] == "ExpiredSignatureError"

    def test_refresh_token_expires_after_seven_days(self, service):
        with freeze_time("2026-10-18 09:00:00") as frozen:
            token = service.issue_refresh_token(uuid7(), 0)
            frozen.tick(timedelta(days=7, seconds=1))

            result = service.verify_refresh_token(token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_access_ttl_seconds(self):
        service = JWTService(
            access_secret=ACCESS_SECRET,
            refresh_secret=REFRESH_SECRET,
            access_expire_minutes=5,
        )

        assert service.access_token_ttl_seconds == 300

    # =========================================================================
    # Rejections
    # =========================================================================

    def test_refresh_token_rejected_as_access_token(self, service):
        token = service.issue_refresh_token(uuid7(), 0)

        result = service.verify_access_token(token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_access_token_rejected_as_refresh_token(self, service):
        token = service.issue_access_token(uuid7(), "a@b.io")

        result = service.verify_refresh_token(token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_token_signed_with_other_key_rejected(self, service):
        other = JWTService(
            access_secret="z" * 40, refresh_secret="y" * 40
        )
        token = other.issue_access_token(uuid7(), "a@b.io")

        result = service.verify_access_token(token)

        assert result.error.details["reason"] == "InvalidSignatureError"

    def test_tampered_token_rejected(self, service):
        token = service.issue_access_token(uuid7(), "a@b.io")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert isinstance(service.verify_access_token(tampered), Failure)

    def test_malformed_subject_rejected(self, service):
        token = jwt.encode(
            {"sub": "not-a-uuid", "email": "a@b.io", "type": "access",
             "iat": 1_700_000_000, "exp": 4_000_000_000},
            ACCESS_SECRET,
            algorithm="HS256",
        )

        result = service.verify_access_token(token)

        assert result.error.details["reason"] == "malformed_claims"

    # =========================================================================
    # Construction
    # =========================================================================

    def test_short_secret_raises(self):
        with pytest.raises(ValueError, match="32 bytes"):
            JWTService(access_secret="short", refresh_secret=REFRESH_SECRET)

    def test_equal_secrets_raise(self):
        with pytest.raises(ValueError, match="differ"):
            JWTService(access_secret=ACCESS_SECRET, refresh_secret=ACCESS_SECRET)
