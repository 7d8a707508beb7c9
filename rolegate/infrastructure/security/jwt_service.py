"""JWT token service (adapter).

Implements TokenServiceProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenServiceProtocol (no inheritance required)
    - Injected via dependency container

Security:
    - Separate secrets for access and refresh tokens
    - 256-bit secret minimum for each
    - ``type`` claim prevents using one token kind in place of the other
    - Unique JWT ID (jti) per token

Revocation:
    - Access tokens are stateless and expire on their own (short TTL)
    - Refresh tokens carry the user's token version (``ver``); bumping
      the stored version revokes every outstanding refresh token
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.value_objects import AccessTokenPayload, RefreshTokenPayload

MIN_SECRET_BYTES = 32
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _invalid_token(reason: str) -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.TOKEN_INVALID,
        message="Invalid or expired token",
        details={"reason": reason},
    )


class JWTService:
    """Access and refresh token issuing/verification.

    Usage:
        token_service = JWTService(
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
        )
        token = token_service.issue_access_token(user.id, user.email)

        match token_service.verify_access_token(token):
            case Success(value=payload):
                user_id = payload.user_id
            case Failure(error=err):
                ...
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_expire_minutes: int = 15,
        refresh_expire_days: int = 7,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            access_secret: HMAC key for access tokens (>= 32 bytes).
            refresh_secret: HMAC key for refresh tokens (>= 32 bytes).
            access_expire_minutes: Access token lifetime.
            refresh_expire_days: Refresh token lifetime.
            algorithm: HMAC algorithm (default HS256).

        Raises:
            ValueError: If a secret is too short or both secrets are equal.
        """
        for secret in (access_secret, refresh_secret):
            if len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
                msg = "JWT secret keys must be at least 32 bytes (256 bits)"
                raise ValueError(msg)
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must differ")

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = timedelta(minutes=access_expire_minutes)
        self._refresh_ttl = timedelta(days=refresh_expire_days)
        self._algorithm = algorithm

    @property
    def access_token_ttl_seconds(self) -> int:
        return int(self._access_ttl.total_seconds())

    def _encode(
        self, claims: dict[str, Any], secret: str, ttl: timedelta
    ) -> str:
        now = datetime.now(UTC)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, secret, algorithm=self._algorithm)
        return token

    def _decode(
        self, token: str, secret: str, expected_type: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        try:
            # Signature and exp are validated by PyJWT
            claims: dict[str, Any] = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except InvalidTokenError as e:
            return Failure(error=_invalid_token(type(e).__name__))

        if claims.get("type") != expected_type:
            return Failure(error=_invalid_token("wrong_token_type"))
        return Success(value=claims)

    def issue_access_token(self, user_id: UUID, email: str) -> str:
        """Issue a signed access token.

        Args:
            user_id: Token subject.
            email: User email (carried for convenience, not trusted for authz).

        Returns:
            JWT string.

        Example:
            >>> service.verify_access_token(service.issue_access_token(uid, "a@b.io"))
            Success(value=AccessTokenPayload(user_id=uid, email='a@b.io'))
        """
        return self._encode(
            {"sub": str(user_id), "email": email, "type": ACCESS_TOKEN_TYPE},
            self._access_secret,
            self._access_ttl,
        )

    def issue_refresh_token(self, user_id: UUID, token_version: int) -> str:
        """Issue a signed refresh token bound to a token version."""
        return self._encode(
            {"sub": str(user_id), "ver": token_version, "type": REFRESH_TOKEN_TYPE},
            self._refresh_secret,
            self._refresh_ttl,
        )

    def verify_access_token(
        self, token: str
    ) -> Result[AccessTokenPayload, AuthenticationError]:
        """Verify an access token.

        Returns:
            Success(AccessTokenPayload), or Failure(AuthenticationError)
            with TOKEN_INVALID for bad signature, expiry, wrong type or
            malformed claims.
        """
        match self._decode(token, self._access_secret, ACCESS_TOKEN_TYPE):
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=claims):
                try:
                    return Success(
                        value=AccessTokenPayload(
                            user_id=UUID(str(claims["sub"])),
                            email=str(claims["email"]),
                        )
                    )
                except (KeyError, ValueError):
                    return Failure(error=_invalid_token("malformed_claims"))
            case _:
                # Unreachable but needed for type checker
                return Failure(error=_invalid_token("unknown"))

    def verify_refresh_token(
        self, token: str
    ) -> Result[RefreshTokenPayload, AuthenticationError]:
        """Verify a refresh token.

        Only the signature, expiry and claims are checked here. Whether the
        token is still current is decided by is_refresh_token_current().
        """
        match self._decode(token, self._refresh_secret, REFRESH_TOKEN_TYPE):
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=claims):
                version = claims.get("ver")
                if not isinstance(version, int) or isinstance(version, bool):
                    return Failure(error=_invalid_token("malformed_claims"))
                try:
                    user_id = UUID(str(claims["sub"]))
                except ValueError:
                    return Failure(error=_invalid_token("malformed_claims"))
                return Success(
                    value=RefreshTokenPayload(user_id=user_id, token_version=version)
                )
            case _:
                # Unreachable but needed for type checker
                return Failure(error=_invalid_token("unknown"))

    def is_refresh_token_current(
        self, payload: RefreshTokenPayload, current_version: int
    ) -> bool:
        """Check a verified refresh token against the stored version.

        A mismatch means the token was revoked (logout, password change),
        which callers report separately from an invalid signature.
        """
        return payload.token_version == current_version
