"""Token service protocol.

Issues and verifies signed access and refresh tokens.
"""

from typing import Protocol
from uuid import UUID

from rolegate.core.errors import AuthenticationError
from rolegate.core.result import Result
from rolegate.domain.value_objects import AccessTokenPayload, RefreshTokenPayload


class TokenServiceProtocol(Protocol):
    """Access/refresh token issuing and verification."""

    @property
    def access_token_ttl_seconds(self) -> int:
        """Access token lifetime in seconds."""
        ...

    def issue_access_token(self, user_id: UUID, email: str) -> str:
        """Issue a short-lived access token."""
        ...

    def issue_refresh_token(self, user_id: UUID, token_version: int) -> str:
        """Issue a refresh token bound to the user's current token version."""
        ...

    def verify_access_token(
        self, token: str
    ) -> Result[AccessTokenPayload, AuthenticationError]:
        """Verify signature, expiry and type of an access token."""
        ...

    def verify_refresh_token(
        self, token: str
    ) -> Result[RefreshTokenPayload, AuthenticationError]:
        """Verify signature, expiry and type of a refresh token."""
        ...

    def is_refresh_token_current(
        self, payload: RefreshTokenPayload, current_version: int
    ) -> bool:
        """Check a verified refresh token against the stored token version."""
        ...
