"""Authentication commands (CQRS write side).

Commands are immutable requests carrying validated input. Each has a
matching handler in rolegate.application.commands.handlers.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class Login:
    """Authenticate with email and password.

    Attributes:
        email: Account email (case-insensitive).
        password: Plaintext password.
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Exchange a refresh token for a new access token."""

    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class Logout:
    """Revoke all refresh tokens of a user."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Self-service account registration.

    Attributes:
        email: Account email (must be unique).
        password: Plaintext password.
        first_name: Given name.
        last_name: Family name.
    """

    email: str
    password: str
    first_name: str
    last_name: str


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Start the forgot-password flow."""

    email: str


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Complete a reset with the raw token from the reset link.

    Attributes:
        token: Raw token (hex).
        new_password: New plaintext password.
    """

    token: str
    new_password: str


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Authenticated password change."""

    user_id: UUID
    current_password: str
    new_password: str
