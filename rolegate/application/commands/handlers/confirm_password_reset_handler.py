"""Confirm password reset handler.

Flow:
1. Hash the presented raw token
2. Look up a valid (unused, unexpired) record by exact hash
3. Hash the new password
4. Consume the token and change the password atomically (also bumps
   token_version, revoking refresh tokens)
5. Invalidate the user's cached permission set
6. Return Success

A token authorizes at most one password change: a second attempt, or a
concurrent one that loses the race, fails with RESET_TOKEN_INVALID.
"""

from datetime import UTC, datetime

from rolegate.application.commands.auth_commands import ConfirmPasswordReset
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ValidationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    PasswordResetRepository,
    PasswordResetTokenServiceProtocol,
)


def invalid_reset_token() -> ValidationError:
    return ValidationError(
        code=ErrorCode.RESET_TOKEN_INVALID,
        message="Invalid or expired reset token",
        field="token",
    )


class ConfirmPasswordResetHandler:
    """Handler for ConfirmPasswordReset command."""

    def __init__(
        self,
        reset_repo: PasswordResetRepository,
        reset_token_service: PasswordResetTokenServiceProtocol,
        password_service: PasswordHashingProtocol,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._reset_repo = reset_repo
        self._reset_token_service = reset_token_service
        self._password_service = password_service
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(
        self, cmd: ConfirmPasswordReset
    ) -> Result[None, ValidationError]:
        """Handle reset confirmation.

        Returns:
            Success(None), or Failure(ValidationError) with RESET_TOKEN_INVALID.
        """
        now = datetime.now(UTC)

        # Step 1-2: Lookup by hash
        token_hash = self._reset_token_service.hash_token(cmd.token)
        record = await self._reset_repo.find_valid_by_hash(token_hash, now)
        if record is None:
            self._logger.info("password_reset_failed", reason="invalid_or_expired")
            return Failure(error=invalid_reset_token())

        # Step 3: Hash new password
        password_hash = self._password_service.hash_password(cmd.new_password)

        # Step 4: Atomic consume
        consumed = await self._reset_repo.consume(
            record.id,
            user_id=record.user_id,
            password_hash=password_hash,
            now=now,
        )
        if not consumed:
            self._logger.info(
                "password_reset_failed",
                reason="already_consumed",
                user_id=str(record.user_id),
            )
            return Failure(error=invalid_reset_token())

        # Step 5: Invalidate cache
        await self._permission_cache.invalidate(record.user_id)

        self._logger.info("password_reset_completed", user_id=str(record.user_id))
        return Success(value=None)
