"""Password reset token service.

Generates raw reset tokens and the sha256 hash that is stored.

Security:
    - 32 random bytes (256 bits) from the secrets module
    - Only the hash is persisted; lookup hashes the presented token and
      matches it exactly
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

TOKEN_BYTES = 32


class PasswordResetTokenService:
    """Implements PasswordResetTokenServiceProtocol.

    Args:
        expire_minutes: Token lifetime (default 60).
    """

    def __init__(self, expire_minutes: int = 60) -> None:
        self._expire_minutes = expire_minutes

    def generate_token(self) -> str:
        """Generate a raw token (64 hex characters)."""
        return secrets.token_hex(TOKEN_BYTES)

    def hash_token(self, raw_token: str) -> str:
        """sha256 hex digest of the raw token."""
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()

    def calculate_expiration(self) -> datetime:
        """Expiry for a token generated now."""
        return datetime.now(UTC) + timedelta(minutes=self._expire_minutes)
