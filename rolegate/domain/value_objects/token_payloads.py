"""Verified token payloads.

Produced by the token service after signature and expiry checks pass.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenPayload:
    """Claims carried by a short-lived access token."""

    user_id: UUID
    email: str


@dataclass(frozen=True, slots=True, kw_only=True)
class RefreshTokenPayload:
    """Claims carried by a refresh token.

    Attributes:
        user_id: Token owner.
        token_version: User.token_version at issue time. The token is
            current only while this equals the stored version.
    """

    user_id: UUID
    token_version: int
