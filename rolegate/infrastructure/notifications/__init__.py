"""Out-of-band notification adapters."""

from rolegate.infrastructure.notifications.logging_notifier import (
    LoggingPasswordResetNotifier,
)

__all__ = ["LoggingPasswordResetNotifier"]
