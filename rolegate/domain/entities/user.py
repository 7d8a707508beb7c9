"""User domain entity.

Pure business logic, no framework dependencies.

Token Versioning:
    - token_version: Monotonic counter embedded in refresh tokens
    - Bumped on logout, password change and password reset, which
      revokes every outstanding refresh token for the user
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from rolegate.domain.enums import UserStatus


@dataclass
class User:
    """User domain entity.

    Attributes:
        id: Unique user identifier.
        email: Email address (unique, lowercase).
        password_hash: Bcrypt hash (never plaintext).
        first_name: Given name.
        last_name: Family name.
        status: Account status (only ACTIVE users may authenticate).
        token_version: Refresh token revocation counter (starts at 0).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    Example:
        >>> user = User(
        ...     id=uuid4(),
        ...     email="user@example.com",
        ...     password_hash="$2b$12$...",
        ...     first_name="Ada",
        ...     last_name="Lovelace",
        ... )
        >>> user.is_active
        True
        >>> user.full_name
        'Ada Lovelace'
    """

    id: UUID
    email: str
    password_hash: str
    first_name: str
    last_name: str
    status: UserStatus = UserStatus.ACTIVE
    token_version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_active(self) -> bool:
        """Check whether the account may authenticate.

        Returns:
            bool: True only when status is ACTIVE.
        """
        return self.status == UserStatus.ACTIVE

    @property
    def full_name(self) -> str:
        """Display name built from first and last name."""
        return f"{self.first_name} {self.last_name}".strip()

    def change_status(self, status: UserStatus) -> None:
        """Set a new account status.

        Args:
            status: New status.

        Example:
            >>> user.change_status(UserStatus.SUSPENDED)
            >>> user.is_active
            False
        """
        self.status = status
        self.updated_at = datetime.now(UTC)
