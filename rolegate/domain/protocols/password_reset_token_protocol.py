"""Password reset token service protocol."""

from datetime import datetime
from typing import Protocol


class PasswordResetTokenServiceProtocol(Protocol):
    """Generates raw reset tokens and their one-way hashes."""

    def generate_token(self) -> str:
        """Generate a high-entropy raw token (delivered to the user)."""
        ...

    def hash_token(self, raw_token: str) -> str:
        """Hash a raw token for storage and lookup."""
        ...

    def calculate_expiration(self) -> datetime:
        """Expiry timestamp for a token generated now (UTC)."""
        ...
