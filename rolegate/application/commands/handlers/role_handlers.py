"""Role administration handlers.

Business rules:
    - Role names are unique
    - System roles cannot be renamed or deleted
    - Roles assigned to users cannot be deleted

Cache invalidation:
    Changing a role's permission set invalidates EVERY cached permission
    set (invalidate_all). There is no reverse index from role to users,
    so per-user invalidation is not possible here.
"""

from collections.abc import Sequence
from uuid import UUID

from uuid_extensions import uuid7

from rolegate.application.commands.role_commands import (
    CreateRole,
    DeleteRole,
    UpdateRole,
)
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ConflictError, NotFoundError, ValidationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.role import Role
from rolegate.domain.protocols import (
    LoggerProtocol,
    PermissionRepository,
    RoleRepository,
)

type RoleError = ConflictError | NotFoundError | ValidationError


def role_not_found(role_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.ROLE_NOT_FOUND,
        message="Role not found",
        resource_type="Role",
        resource_id=str(role_id),
    )


def role_name_taken(name: str) -> ConflictError:
    return ConflictError(
        code=ErrorCode.ROLE_NAME_ALREADY_EXISTS,
        message="Role name already exists",
        resource_type="Role",
        conflicting_field="name",
        details={"name": name},
    )


def system_role_protected(action: str) -> ValidationError:
    return ValidationError(
        code=ErrorCode.SYSTEM_ROLE_PROTECTED,
        message=f"System roles cannot be {action}",
        field="name",
    )


async def load_permissions(
    permission_repo: PermissionRepository, permission_ids: Sequence[UUID]
) -> Result[list[Permission], NotFoundError]:
    """Fetch permissions by id, failing on the first unknown id."""
    wanted = list(dict.fromkeys(permission_ids))
    found = await permission_repo.find_by_ids(wanted)
    known = {p.id for p in found}
    for permission_id in wanted:
        if permission_id not in known:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.PERMISSION_NOT_FOUND,
                    message="Permission not found",
                    resource_type="Permission",
                    resource_id=str(permission_id),
                )
            )
    return Success(value=found)


class CreateRoleHandler:
    """Handler for CreateRole command."""

    def __init__(
        self,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._logger = logger

    async def handle(self, cmd: CreateRole) -> Result[Role, RoleError]:
        name = cmd.name.strip()
        if await self._role_repo.find_by_name(name) is not None:
            return Failure(error=role_name_taken(name))

        permissions_result = await load_permissions(
            self._permission_repo, cmd.permission_ids
        )
        if isinstance(permissions_result, Failure):
            return Failure(error=permissions_result.error)
        permissions = permissions_result.value

        role = Role(
            id=uuid7(),
            name=name,
            description=cmd.description,
            permissions=permissions,
        )
        await self._role_repo.save(role)

        self._logger.info(
            "role_created", role_id=str(role.id), permission_count=len(permissions)
        )
        return Success(value=role)


class UpdateRoleHandler:
    """Handler for UpdateRole command."""

    def __init__(
        self,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(self, cmd: UpdateRole) -> Result[Role, RoleError]:
        role = await self._role_repo.find_by_id(cmd.role_id)
        if role is None:
            return Failure(error=role_not_found(cmd.role_id))

        if cmd.name is not None and cmd.name.strip() != role.name:
            name = cmd.name.strip()
            if role.is_system:
                return Failure(error=system_role_protected("renamed"))
            if await self._role_repo.find_by_name(name) is not None:
                return Failure(error=role_name_taken(name))
            role.name = name

        if cmd.description is not None:
            role.description = cmd.description

        if cmd.permission_ids is not None:
            permissions_result = await load_permissions(
                self._permission_repo, cmd.permission_ids
            )
            if isinstance(permissions_result, Failure):
                return Failure(error=permissions_result.error)

        await self._role_repo.update(role, permission_ids=cmd.permission_ids)

        if cmd.permission_ids is not None:
            await self._permission_cache.invalidate_all()

        updated = await self._role_repo.find_by_id(role.id)
        if updated is None:
            return Failure(error=role_not_found(role.id))

        self._logger.info(
            "role_updated",
            role_id=str(role.id),
            permissions_replaced=cmd.permission_ids is not None,
        )
        return Success(value=updated)


class DeleteRoleHandler:
    """Handler for DeleteRole command."""

    def __init__(self, role_repo: RoleRepository, logger: LoggerProtocol) -> None:
        self._role_repo = role_repo
        self._logger = logger

    async def handle(self, cmd: DeleteRole) -> Result[None, RoleError]:
        role = await self._role_repo.find_by_id(cmd.role_id)
        if role is None:
            return Failure(error=role_not_found(cmd.role_id))

        if role.is_system:
            return Failure(error=system_role_protected("deleted"))

        assigned = await self._role_repo.count_users(role.id)
        if assigned > 0:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.ROLE_IN_USE,
                    message="Cannot delete role with assigned users",
                    resource_type="Role",
                    details={"user_count": str(assigned)},
                )
            )

        await self._role_repo.delete(role.id)
        self._logger.info("role_deleted", role_id=str(role.id))
        return Success(value=None)
