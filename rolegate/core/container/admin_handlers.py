"""User, role and permission administration handler factories."""

from typing import TYPE_CHECKING

from fastapi import Depends

from rolegate.core.container.infrastructure import (
    get_logger,
    get_password_service,
    get_permission_cache,
)
from rolegate.core.container.repositories import (
    get_permission_repository,
    get_role_repository,
    get_user_repository,
)

if TYPE_CHECKING:
    from rolegate.application.commands.handlers.permission_handlers import (
        CreatePermissionHandler,
        DeletePermissionHandler,
        UpdatePermissionHandler,
    )
    from rolegate.application.commands.handlers.role_handlers import (
        CreateRoleHandler,
        DeleteRoleHandler,
        UpdateRoleHandler,
    )
    from rolegate.application.commands.handlers.user_admin_handlers import (
        BulkDeleteUsersHandler,
        CreateUserHandler,
        DeleteUserHandler,
        UpdateUserHandler,
    )
    from rolegate.application.queries.handlers.list_users_handler import (
        ListUsersHandler,
    )
    from rolegate.domain.protocols import (
        PermissionRepository,
        RoleRepository,
        UserRepository,
    )


# ============================================================================
# Users
# ============================================================================


async def get_list_users_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "ListUsersHandler":
    from rolegate.application.queries.handlers.list_users_handler import (
        ListUsersHandler,
    )

    return ListUsersHandler(user_repo=user_repo)


async def get_create_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    role_repo: "RoleRepository" = Depends(get_role_repository),
) -> "CreateUserHandler":
    from rolegate.application.commands.handlers.user_admin_handlers import (
        CreateUserHandler,
    )

    return CreateUserHandler(
        user_repo=user_repo,
        role_repo=role_repo,
        password_service=get_password_service(),
        logger=get_logger(),
    )


async def get_update_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    role_repo: "RoleRepository" = Depends(get_role_repository),
) -> "UpdateUserHandler":
    from rolegate.application.commands.handlers.user_admin_handlers import (
        UpdateUserHandler,
    )

    return UpdateUserHandler(
        user_repo=user_repo,
        role_repo=role_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_delete_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "DeleteUserHandler":
    from rolegate.application.commands.handlers.user_admin_handlers import (
        DeleteUserHandler,
    )

    return DeleteUserHandler(
        user_repo=user_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_bulk_delete_users_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "BulkDeleteUsersHandler":
    from rolegate.application.commands.handlers.user_admin_handlers import (
        BulkDeleteUsersHandler,
    )

    return BulkDeleteUsersHandler(
        user_repo=user_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


# ============================================================================
# Roles
# ============================================================================


async def get_create_role_handler(
    role_repo: "RoleRepository" = Depends(get_role_repository),
    permission_repo: "PermissionRepository" = Depends(get_permission_repository),
) -> "CreateRoleHandler":
    from rolegate.application.commands.handlers.role_handlers import CreateRoleHandler

    return CreateRoleHandler(
        role_repo=role_repo, permission_repo=permission_repo, logger=get_logger()
    )


async def get_update_role_handler(
    role_repo: "RoleRepository" = Depends(get_role_repository),
    permission_repo: "PermissionRepository" = Depends(get_permission_repository),
) -> "UpdateRoleHandler":
    from rolegate.application.commands.handlers.role_handlers import UpdateRoleHandler

    return UpdateRoleHandler(
        role_repo=role_repo,
        permission_repo=permission_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_delete_role_handler(
    role_repo: "RoleRepository" = Depends(get_role_repository),
) -> "DeleteRoleHandler":
    from rolegate.application.commands.handlers.role_handlers import DeleteRoleHandler

    return DeleteRoleHandler(role_repo=role_repo, logger=get_logger())


# ============================================================================
# Permissions
# ============================================================================


async def get_create_permission_handler(
    permission_repo: "PermissionRepository" = Depends(get_permission_repository),
) -> "CreatePermissionHandler":
    from rolegate.application.commands.handlers.permission_handlers import (
        CreatePermissionHandler,
    )

    return CreatePermissionHandler(permission_repo=permission_repo, logger=get_logger())


async def get_update_permission_handler(
    permission_repo: "PermissionRepository" = Depends(get_permission_repository),
) -> "UpdatePermissionHandler":
    from rolegate.application.commands.handlers.permission_handlers import (
        UpdatePermissionHandler,
    )

    return UpdatePermissionHandler(
        permission_repo=permission_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_delete_permission_handler(
    permission_repo: "PermissionRepository" = Depends(get_permission_repository),
) -> "DeletePermissionHandler":
    from rolegate.application.commands.handlers.permission_handlers import (
        DeletePermissionHandler,
    )

    return DeletePermissionHandler(permission_repo=permission_repo, logger=get_logger())
