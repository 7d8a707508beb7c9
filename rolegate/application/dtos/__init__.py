"""Data transfer objects returned by handlers."""

from rolegate.application.dtos.auth_dtos import (
    CurrentUserView,
    LoginResult,
    PasswordResetRequested,
    RefreshResult,
    RegistrationResult,
    SafeUser,
)
from rolegate.application.dtos.user_dtos import PaginatedUsers

__all__ = [
    "CurrentUserView",
    "LoginResult",
    "PaginatedUsers",
    "PasswordResetRequested",
    "RefreshResult",
    "RegistrationResult",
    "SafeUser",
]
