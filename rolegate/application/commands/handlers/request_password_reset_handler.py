"""Request password reset handler.

Flow:
1. Find user by email
2. If found: generate raw token, store only its hash (prior tokens for
   the user are deleted), deliver the reset link out-of-band
3. Return the same PasswordResetRequested response in every case

Security:
- Identical response for existing and unknown emails (no enumeration)
- Raw token and its hash are never logged; the email is logged only as
  a short fingerprint
"""

import hashlib

from rolegate.application.commands.auth_commands import RequestPasswordReset
from rolegate.application.dtos import PasswordResetRequested
from rolegate.core.result import Result, Success
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordResetNotifierProtocol,
    PasswordResetRepository,
    PasswordResetTokenServiceProtocol,
    UserRepository,
)


def email_fingerprint(email: str) -> str:
    """Short, non-reversible identifier for log correlation."""
    return hashlib.sha256(email.encode("utf-8")).hexdigest()[:12]


class RequestPasswordResetHandler:
    """Handler for RequestPasswordReset command."""

    def __init__(
        self,
        user_repo: UserRepository,
        reset_repo: PasswordResetRepository,
        reset_token_service: PasswordResetTokenServiceProtocol,
        notifier: PasswordResetNotifierProtocol,
        logger: LoggerProtocol,
        reset_url_base: str,
    ) -> None:
        """Initialize handler.

        Args:
            reset_url_base: Frontend page receiving ``?token=<raw>``.
        """
        self._user_repo = user_repo
        self._reset_repo = reset_repo
        self._reset_token_service = reset_token_service
        self._notifier = notifier
        self._logger = logger
        self._reset_url_base = reset_url_base.rstrip("/")

    async def handle(
        self, cmd: RequestPasswordReset
    ) -> Result[PasswordResetRequested, None]:
        """Handle reset request. Always succeeds."""
        email = cmd.email.strip().lower()
        fingerprint = email_fingerprint(email)

        # Step 1: Find user
        user = await self._user_repo.find_by_email(email)

        # Step 2: Issue token for known, active accounts only
        if user is None or not user.is_active:
            self._logger.info(
                "password_reset_requested", email_fingerprint=fingerprint, issued=False
            )
            return Success(value=PasswordResetRequested())

        raw_token = self._reset_token_service.generate_token()
        await self._reset_repo.create(
            user_id=user.id,
            token_hash=self._reset_token_service.hash_token(raw_token),
            expires_at=self._reset_token_service.calculate_expiration(),
        )
        await self._notifier.send_password_reset(
            to_email=user.email,
            reset_url=f"{self._reset_url_base}?token={raw_token}",
        )

        self._logger.info(
            "password_reset_requested", email_fingerprint=fingerprint, issued=True
        )

        # Step 3: Same response either way
        return Success(value=PasswordResetRequested())
