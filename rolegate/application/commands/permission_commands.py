"""Permission administration commands."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class CreatePermission:
    resource: str
    action: str
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdatePermission:
    """Update a permission. None leaves a field unchanged."""

    permission_id: UUID
    resource: str | None = None
    action: str | None = None
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class DeletePermission:
    permission_id: UUID
