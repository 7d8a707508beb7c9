"""Password reset token entity.

Only the sha256 hash of the raw token is stored. The raw value is
delivered to the user out-of-band and never persisted.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class PasswordResetToken:
    """Single-use password reset record.

    Attributes:
        id: Unique identifier.
        user_id: Owner of the reset request.
        token_hash: sha256 hex digest of the raw token.
        expires_at: Expiry timestamp (UTC).
        used_at: When the token was consumed, None if unused.
        created_at: Creation timestamp.
    """

    id: UUID
    user_id: UUID
    token_hash: str
    expires_at: datetime
    used_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check the token is unused and not expired.

        Args:
            now: Reference time (defaults to current UTC time).

        Returns:
            bool: True if the token can still be consumed.
        """
        now = now or datetime.now(UTC)
        return self.used_at is None and self.expires_at > now
