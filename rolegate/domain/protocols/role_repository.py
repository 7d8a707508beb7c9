"""RoleRepository protocol for role persistence."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities.role import Role


class RoleRepository(Protocol):
    """Role repository protocol (port)."""

    async def find_by_id(self, role_id: UUID) -> Role | None:
        """Find role (with permissions) by ID."""
        ...

    async def find_by_name(self, name: str) -> Role | None:
        """Find role by unique name."""
        ...

    async def find_by_ids(self, role_ids: Sequence[UUID]) -> list[Role]:
        """Find every role whose ID is in role_ids."""
        ...

    async def list_all(self) -> list[Role]:
        """All roles ordered by name."""
        ...

    async def save(self, role: Role) -> None:
        """Create new role (permission grants included)."""
        ...

    async def update(
        self, role: Role, permission_ids: Sequence[UUID] | None = None
    ) -> None:
        """Persist name and description of an existing role.

        When permission_ids is given the grants are replaced in the same
        transaction.
        """
        ...

    async def set_permissions(
        self, role_id: UUID, permission_ids: Sequence[UUID]
    ) -> None:
        """Replace every permission granted to a role."""
        ...

    async def delete(self, role_id: UUID) -> bool:
        """Delete a role.

        Returns:
            True if a role was deleted.
        """
        ...

    async def count_users(self, role_id: UUID) -> int:
        """Number of users assigned to a role."""
        ...
