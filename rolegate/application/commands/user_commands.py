"""User administration commands.

For updates, None means "leave unchanged".
"""

from dataclasses import dataclass, field
from uuid import UUID

from rolegate.domain.enums import UserStatus


@dataclass(frozen=True, kw_only=True)
class CreateUser:
    """Create a user with an initial set of roles.

    Attributes:
        assigned_by: Administrator performing the assignment.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    role_ids: list[UUID] = field(default_factory=list)
    assigned_by: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateUser:
    """Update profile, status and/or role assignments."""

    user_id: UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    status: UserStatus | None = None
    role_ids: list[UUID] | None = None
    assigned_by: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteUser:
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class BulkDeleteUsers:
    user_ids: list[UUID]
