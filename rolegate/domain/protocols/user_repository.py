"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities.role import Role
from rolegate.domain.entities.user import User
from rolegate.domain.enums import UserStatus


class UserRepository(Protocol):
    """User repository protocol (port).

    Methods:
        find_by_id / find_by_email: Lookups
        list_users: Paginated, filtered listing
        save / update / delete / bulk_delete: Mutations
        find_roles_with_permissions: Assignment graph for the resolver
        get_token_version / increment_token_version: Revocation counter
        update_password: Password change (bumps token version)
        set_roles / get_role_ids: Role assignments
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive)."""
        ...

    async def list_users(
        self,
        *,
        page: int,
        limit: int,
        search: str | None = None,
        status: UserStatus | None = None,
    ) -> tuple[list[User], int]:
        """List users.

        Returns:
            Tuple of (users on the requested page, total matching count).
        """
        ...

    async def save(
        self,
        user: User,
        role_ids: Sequence[UUID] = (),
        assigned_by: UUID | None = None,
    ) -> None:
        """Create new user and its initial role assignments in one transaction.

        Raises:
            IntegrityError: If email already exists.
        """
        ...

    async def update(
        self,
        user: User,
        role_ids: Sequence[UUID] | None = None,
        assigned_by: UUID | None = None,
    ) -> None:
        """Persist profile and status fields of an existing user.

        When role_ids is given the role assignments are replaced in the
        same transaction.
        """
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Hard-delete a user and its role assignments.

        Returns:
            True if a user was deleted.
        """
        ...

    async def bulk_delete(self, user_ids: Sequence[UUID]) -> int:
        """Hard-delete several users.

        Returns:
            Number of users deleted.
        """
        ...

    async def find_roles_with_permissions(self, user_id: UUID) -> list[Role] | None:
        """Load the user's roles with their granted permissions.

        Returns:
            List of roles (empty if none assigned), or None if the user
            does not exist.
        """
        ...

    async def get_token_version(self, user_id: UUID) -> int | None:
        """Current token version, or None if the user does not exist."""
        ...

    async def increment_token_version(self, user_id: UUID) -> int | None:
        """Atomically increment the token version.

        Returns:
            New version, or None if the user does not exist.
        """
        ...

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace password hash and atomically bump token version.

        Returns:
            True if the user exists.
        """
        ...

    async def set_roles(
        self,
        user_id: UUID,
        role_ids: Sequence[UUID],
        assigned_by: UUID | None = None,
    ) -> None:
        """Replace all role assignments of a user."""
        ...

    async def get_role_ids(self, user_id: UUID) -> list[UUID]:
        """IDs of roles currently assigned to a user."""
        ...
