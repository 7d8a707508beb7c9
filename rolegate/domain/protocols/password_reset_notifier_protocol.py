"""Out-of-band delivery of password reset links."""

from typing import Protocol


class PasswordResetNotifierProtocol(Protocol):
    """Delivers a password reset link to the user.

    Implementations:
        - LoggingPasswordResetNotifier: logs the link (development)
    """

    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        """Send the reset link.

        Args:
            to_email: Recipient address.
            reset_url: Full URL containing the raw token.
        """
        ...
