"""Role domain entity."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from uuid import UUID

from rolegate.domain.entities.permission import Permission


@dataclass
class Role:
    """Named group of permissions assigned to users.

    Business Rules:
        - Name is unique
        - System roles (is_system=True) cannot be renamed or deleted
        - A role still assigned to users cannot be deleted

    Attributes:
        id: Unique identifier.
        name: Unique display name.
        description: Optional description.
        is_system: Whether the role is protected from rename/delete.
        permissions: Granted permissions, ordered by resource then action.
    """

    id: UUID
    name: str
    description: str | None = None
    is_system: bool = False
    permissions: list[Permission] = field(default_factory=list)

    def permission_codes(self) -> Iterator[str]:
        """Yield the ``resource.action`` string of each granted permission."""
        for permission in self.permissions:
            yield permission.code
