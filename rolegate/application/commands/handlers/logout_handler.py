"""Logout handler.

Flow:
1. Atomically increment the user's token version (revokes every
   outstanding refresh token)
2. Invalidate the user's cached permission set
3. Return Success

Note: JWT access tokens cannot be revoked; they expire on their own
(short TTL).
"""

from rolegate.application.commands.auth_commands import Logout
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import LoggerProtocol, UserRepository


class LogoutHandler:
    """Handler for Logout command."""

    def __init__(
        self,
        user_repo: UserRepository,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._permission_cache = permission_cache
        self._logger = logger

    async def handle(self, cmd: Logout) -> Result[None, NotFoundError]:
        """Handle logout command.

        Returns:
            Success(None), or Failure(NotFoundError) if the user is gone.
        """
        # Step 1: Atomic version bump
        new_version = await self._user_repo.increment_token_version(cmd.user_id)
        if new_version is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        # Step 2: Invalidate cache before reporting success
        await self._permission_cache.invalidate(cmd.user_id)

        self._logger.info(
            "user_logged_out", user_id=str(cmd.user_id), token_version=new_version
        )
        return Success(value=None)
