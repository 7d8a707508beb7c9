"""Internal reasons for an authorization denial.

These are logged, never returned to the caller. Every denial is
reported with the same generic error.
"""

from enum import Enum


class DenyReason(str, Enum):
    """Why the authorization gate denied a request."""

    UNAUTHENTICATED = "unauthenticated"
    USER_NOT_FOUND = "user_not_found"
    INSUFFICIENT_PERMISSION = "insufficient_permission"
