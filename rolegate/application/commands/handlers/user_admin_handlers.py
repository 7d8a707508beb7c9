"""User administration handlers.

Handlers:
    - CreateUserHandler: create user with initial roles
    - UpdateUserHandler: profile, status and role assignment changes
    - DeleteUserHandler / BulkDeleteUsersHandler: hard delete

Cache invalidation:
    Any change to a user's role assignments (or status) invalidates that
    user's cached permission set after the write commits and before the
    handler returns.
"""

from collections.abc import Sequence
from uuid import UUID

from uuid_extensions import uuid7

from rolegate.application.commands.handlers.register_user_handler import email_taken
from rolegate.application.commands.user_commands import (
    BulkDeleteUsers,
    CreateUser,
    DeleteUser,
    UpdateUser,
)
from rolegate.application.dtos import SafeUser
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ConflictError, NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.entities.user import User
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    RoleRepository,
    UserRepository,
)


def user_not_found(user_id: UUID) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message="User not found",
        resource_type="User",
        resource_id=str(user_id),
    )


async def find_missing_roles(
    role_repo: RoleRepository, role_ids: Sequence[UUID]
) -> NotFoundError | None:
    """Return an error naming the first unknown role id, if any."""
    wanted = list(dict.fromkeys(role_ids))
    found = {role.id for role in await role_repo.find_by_ids(wanted)}
    for role_id in wanted:
        if role_id not in found:
            return NotFoundError(
                code=ErrorCode.ROLE_NOT_FOUND,
                message="Role not found",
                resource_type="Role",
                resource_id=str(role_id),
            )
    return None


class CreateUserHandler:
    """Handler for CreateUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._password_service = password_service
        self._logger = logger

    async def handle(
        self, cmd: CreateUser
    ) -> Result[SafeUser, ConflictError | NotFoundError]:
        email = cmd.email.strip().lower()
        if await self._user_repo.find_by_email(email) is not None:
            return Failure(error=email_taken(email))

        missing = await find_missing_roles(self._role_repo, cmd.role_ids)
        if missing is not None:
            return Failure(error=missing)

        user = User(
            id=uuid7(),
            email=email,
            password_hash=self._password_service.hash_password(cmd.password),
            first_name=cmd.first_name,
            last_name=cmd.last_name,
        )
        await self._user_repo.save(
            user, role_ids=cmd.role_ids, assigned_by=cmd.assigned_by
        )

        self._logger.info(
            "user_created",
            user_id=str(user.id),
            role_count=len(cmd.role_ids),
            assigned_by=str(cmd.assigned_by) if cmd.assigned_by else None,
        )
        return Success(value=SafeUser.from_entity(user))


class UpdateUserHandler:
    """Handler for UpdateUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(
        self, cmd: UpdateUser
    ) -> Result[SafeUser, ConflictError | NotFoundError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(error=user_not_found(cmd.user_id))

        if cmd.email is not None:
            email = cmd.email.strip().lower()
            if email != user.email:
                if await self._user_repo.find_by_email(email) is not None:
                    return Failure(error=email_taken(email))
                user.email = email

        if cmd.role_ids is not None:
            missing = await find_missing_roles(self._role_repo, cmd.role_ids)
            if missing is not None:
                return Failure(error=missing)

        if cmd.first_name is not None:
            user.first_name = cmd.first_name
        if cmd.last_name is not None:
            user.last_name = cmd.last_name

        status_changed = cmd.status is not None and cmd.status != user.status
        if cmd.status is not None and status_changed:
            user.change_status(cmd.status)

        # Profile, status and roles commit together
        await self._user_repo.update(
            user, role_ids=cmd.role_ids, assigned_by=cmd.assigned_by
        )

        if cmd.role_ids is not None or status_changed:
            await self._permission_cache.invalidate(user.id)

        self._logger.info(
            "user_updated",
            user_id=str(user.id),
            roles_replaced=cmd.role_ids is not None,
            status_changed=status_changed,
        )
        return Success(value=SafeUser.from_entity(user))


class DeleteUserHandler:
    """Handler for DeleteUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(self, cmd: DeleteUser) -> Result[None, NotFoundError]:
        if not await self._user_repo.delete(cmd.user_id):
            return Failure(error=user_not_found(cmd.user_id))

        await self._permission_cache.invalidate(cmd.user_id)
        self._logger.info("user_deleted", user_id=str(cmd.user_id))
        return Success(value=None)


class BulkDeleteUsersHandler:
    """Handler for BulkDeleteUsers command.

    Returns the number of users actually deleted; unknown ids are ignored.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(self, cmd: BulkDeleteUsers) -> Result[int, None]:
        user_ids = list(dict.fromkeys(cmd.user_ids))
        deleted = await self._user_repo.bulk_delete(user_ids)
        await self._permission_cache.invalidate_many(user_ids)

        self._logger.info(
            "users_bulk_deleted", requested=len(user_ids), deleted=deleted
        )
        return Success(value=deleted)
