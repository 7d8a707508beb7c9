"""PasswordResetRepository protocol.

Semantics:
    - At most one active reset token per user: create() deletes
      prior tokens for the same user.
    - Lookup is by exact hash match, never by raw token.
    - consume() marks the token used and applies the new password in a
      single transaction, so a token authorizes at most one change.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities.password_reset_token import PasswordResetToken


class PasswordResetRepository(Protocol):
    """Password reset token repository protocol (port)."""

    async def create(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> PasswordResetToken:
        """Replace the user's reset tokens with a new one."""
        ...

    async def find_valid_by_hash(
        self, token_hash: str, now: datetime
    ) -> PasswordResetToken | None:
        """Find an unused, unexpired token by hash."""
        ...

    async def consume(
        self,
        reset_id: UUID,
        *,
        user_id: UUID,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Atomically mark the token used and change the user's password.

        The password update also bumps the user's token version.

        Returns:
            True if this call consumed the token, False if it was already
            used or expired.
        """
        ...
