"""Permission administration handlers.

Business rules:
    - resource and action are lowercase, dot-free names
    - (resource, action) is unique
    - A permission granted by any role cannot be deleted

Cache invalidation:
    Renaming a permission changes the strings inside cached sets, so it
    invalidates every cached entry.
"""

from uuid import UUID

from uuid_extensions import uuid7

from rolegate.application.commands.permission_commands import (
    CreatePermission,
    DeletePermission,
    UpdatePermission,
)
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ConflictError, NotFoundError, ValidationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.entities.permission import Permission
from rolegate.domain.protocols import LoggerProtocol, PermissionRepository
from rolegate.domain.value_objects.permission_string import is_valid_segment

type PermissionAdminError = ConflictError | NotFoundError | ValidationError


def permission_not_found(permission_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.PERMISSION_NOT_FOUND,
        message="Permission not found",
        resource_type="Permission",
        resource_id=str(permission_id),
    )


def permission_taken(resource: str, action: str) -> ConflictError:
    return ConflictError(
        code=ErrorCode.PERMISSION_ALREADY_EXISTS,
        message="Permission with this resource and action already exists",
        resource_type="Permission",
        conflicting_field="resource,action",
        details={"permission": f"{resource}.{action}"},
    )


def validate_names(resource: str, action: str) -> ValidationError | None:
    for field, value in (("resource", resource), ("action", action)):
        if not is_valid_segment(value):
            return ValidationError(
                code=ErrorCode.INVALID_PERMISSION_FORMAT,
                message=f"Invalid {field}: use lowercase letters, digits, '_' or '-'",
                field=field,
            )
    return None


class CreatePermissionHandler:
    """Handler for CreatePermission command."""

    def __init__(
        self, permission_repo: PermissionRepository, logger: LoggerProtocol
    ) -> None:
        self._permission_repo = permission_repo
        self._logger = logger

    async def handle(
        self, cmd: CreatePermission
    ) -> Result[Permission, PermissionAdminError]:
        resource = cmd.resource.strip().lower()
        action = cmd.action.strip().lower()

        invalid = validate_names(resource, action)
        if invalid is not None:
            return Failure(error=invalid)

        existing = await self._permission_repo.find_by_resource_action(resource, action)
        if existing is not None:
            return Failure(error=permission_taken(resource, action))

        permission = Permission(
            id=uuid7(),
            resource=resource,
            action=action,
            description=cmd.description,
        )
        await self._permission_repo.save(permission)

        self._logger.info(
            "permission_created",
            permission_id=str(permission.id),
            permission=permission.code,
        )
        return Success(value=permission)


class UpdatePermissionHandler:
    """Handler for UpdatePermission command."""

    def __init__(
        self,
        permission_repo: PermissionRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._permission_repo = permission_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(
        self, cmd: UpdatePermission
    ) -> Result[Permission, PermissionAdminError]:
        permission = await self._permission_repo.find_by_id(cmd.permission_id)
        if permission is None:
            return Failure(error=permission_not_found(cmd.permission_id))

        resource = (
            cmd.resource.strip().lower() if cmd.resource is not None else permission.resource
        )
        action = cmd.action.strip().lower() if cmd.action is not None else permission.action

        invalid = validate_names(resource, action)
        if invalid is not None:
            return Failure(error=invalid)

        code_changed = (resource, action) != (permission.resource, permission.action)
        if code_changed:
            existing = await self._permission_repo.find_by_resource_action(
                resource, action
            )
            if existing is not None and existing.id != permission.id:
                return Failure(error=permission_taken(resource, action))

        old_code = permission.code
        permission.resource = resource
        permission.action = action
        if cmd.description is not None:
            permission.description = cmd.description

        await self._permission_repo.update(permission)

        if code_changed:
            await self._permission_cache.invalidate_all()

        self._logger.info(
            "permission_updated",
            permission_id=str(permission.id),
            old_permission=old_code,
            permission=permission.code,
        )
        return Success(value=permission)


class DeletePermissionHandler:
    """Handler for DeletePermission command."""

    def __init__(
        self, permission_repo: PermissionRepository, logger: LoggerProtocol
    ) -> None:
        self._permission_repo = permission_repo
        self._logger = logger

    async def handle(
        self, cmd: DeletePermission
    ) -> Result[None, PermissionAdminError]:
        permission = await self._permission_repo.find_by_id(cmd.permission_id)
        if permission is None:
            return Failure(error=permission_not_found(cmd.permission_id))

        role_count = await self._permission_repo.count_roles(permission.id)
        if role_count > 0:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.PERMISSION_IN_USE,
                    message="Cannot delete permission assigned to roles",
                    resource_type="Permission",
                    details={"role_count": str(role_count)},
                )
            )

        await self._permission_repo.delete(permission.id)
        self._logger.info("permission_deleted", permission=permission.code)
        return Success(value=None)
