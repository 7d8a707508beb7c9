"""Password reset notifier that logs instead of sending mail.

Development/testing adapter for PasswordResetNotifierProtocol. The reset
URL carries the raw token, so this adapter must not be wired in
production.
"""

from rolegate.domain.protocols.logger_protocol import LoggerProtocol


class LoggingPasswordResetNotifier:
    """Logs reset links to the structured logger.

    Args:
        logger: Structured logger.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def send_password_reset(self, to_email: str, reset_url: str) -> None:
        self._logger.info(
            "password_reset_link_generated",
            to_email=to_email,
            reset_url=reset_url,
        )
