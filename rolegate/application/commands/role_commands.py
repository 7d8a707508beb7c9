"""Role administration commands."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CreateRole:
    name: str
    description: str | None = None
    permission_ids: list[UUID] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class UpdateRole:
    """Update a role. None leaves a field unchanged.

    Attributes:
        permission_ids: Full replacement grant list when given.
    """

    role_id: UUID
    name: str | None = None
    description: str | None = None
    permission_ids: list[UUID] | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteRole:
    role_id: UUID
