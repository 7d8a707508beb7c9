"""Permission domain entity."""

from dataclasses import dataclass
from uuid import UUID

from rolegate.domain.value_objects.permission_string import format_permission


@dataclass
class Permission:
    """A (resource, action) pair that can be granted through roles.

    The (resource, action) pair is unique system-wide. Checks are made
    against the string form returned by ``code``, never against ``id``.

    Attributes:
        id: Unique identifier.
        resource: Resource name (e.g. "users").
        action: Action name (e.g. "edit").
        description: Optional human-readable description.

    Example:
        >>> Permission(id=uuid4(), resource="users", action="edit").code
        'users.edit'
    """

    id: UUID
    resource: str
    action: str
    description: str | None = None

    @property
    def code(self) -> str:
        """Canonical permission string ``resource.action``."""
        return format_permission(self.resource, self.action)
