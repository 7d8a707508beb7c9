"""Authentication DTOs (Data Transfer Objects).

Response dataclasses carrying data from handlers back to the
presentation layer.

DTOs:
    - SafeUser: User view without credentials or token version
    - LoginResult: Result from Login command
    - RefreshResult: Result from RefreshAccessToken command
    - RegistrationResult: Result from RegisterUser command
    - CurrentUserView: Result from GetCurrentUser query
    - PasswordResetRequested: Identical response for every reset request
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rolegate.domain.entities.user import User
from rolegate.domain.enums import UserStatus


@dataclass(frozen=True, kw_only=True)
class SafeUser:
    """User fields safe to return to clients.

    Never includes password_hash or token_version.
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> SafeUser:
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            status=user.status,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Response from successful login.

    Attributes:
        access_token: Short-lived JWT access token.
        refresh_token: Long-lived JWT refresh token.
        permissions: Effective permissions, sorted.
        user: Safe user view.
        token_type: Always "bearer".
        expires_in: Access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    permissions: list[str]
    user: SafeUser
    token_type: str = "bearer"
    expires_in: int = 900


@dataclass(frozen=True, kw_only=True)
class RefreshResult:
    """Response from a successful refresh (no refresh token rotation)."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = 900


@dataclass(frozen=True, kw_only=True)
class RegistrationResult:
    user: SafeUser
    permissions: list[str]
    access_token: str


@dataclass(frozen=True, kw_only=True)
class CurrentUserView:
    """Current user with a freshly issued access token."""

    user: SafeUser
    permissions: list[str]
    access_token: str


@dataclass(frozen=True)
class PasswordResetRequested:
    """Returned for every reset request, whether or not the email exists."""

    message: str = "If an account exists for that email, a reset link has been sent."
