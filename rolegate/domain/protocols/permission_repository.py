"""PermissionRepository protocol for permission persistence."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from rolegate.domain.entities.permission import Permission


class PermissionRepository(Protocol):
    """Permission repository protocol (port)."""

    async def find_by_id(self, permission_id: UUID) -> Permission | None:
        """Find permission by ID."""
        ...

    async def find_by_resource_action(
        self, resource: str, action: str
    ) -> Permission | None:
        """Find permission by its unique (resource, action) pair."""
        ...

    async def find_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]:
        """Find every permission whose ID is in permission_ids."""
        ...

    async def list_all(self) -> list[Permission]:
        """All permissions ordered by resource, then action."""
        ...

    async def save(self, permission: Permission) -> None:
        """Create new permission."""
        ...

    async def update(self, permission: Permission) -> None:
        """Persist resource, action and description."""
        ...

    async def delete(self, permission_id: UUID) -> bool:
        """Delete a permission.

        Returns:
            True if a permission was deleted.
        """
        ...

    async def count_roles(self, permission_id: UUID) -> int:
        """Number of roles granting a permission."""
        ...
