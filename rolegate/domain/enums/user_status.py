"""User account status.

Only ACTIVE users may log in or refresh tokens. INACTIVE and SUSPENDED
are distinguished for administrators; the authentication flow treats
them identically.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
