"""Change password handler.

Flow:
1. Load user
2. Verify current password
3. Store new hash and bump token_version (revokes refresh tokens)
4. Invalidate the user's cached permission set
"""

from rolegate.application.commands.auth_commands import ChangePassword
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError, NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class ChangePasswordHandler:
    """Handler for ChangePassword command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(
        self, cmd: ChangePassword
    ) -> Result[None, AuthenticationError | NotFoundError]:
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        if not self._password_service.verify_password(
            cmd.current_password, user.password_hash
        ):
            self._logger.info(
                "password_change_failed",
                reason="invalid_password",
                user_id=str(user.id),
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message="Current password is incorrect",
                )
            )

        await self._user_repo.update_password(
            user.id, self._password_service.hash_password(cmd.new_password)
        )
        await self._permission_cache.invalidate(user.id)

        self._logger.info("password_changed", user_id=str(user.id))
        return Success(value=None)
