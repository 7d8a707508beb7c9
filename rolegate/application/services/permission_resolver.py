"""Permission resolver.

Computes a user's effective permission set from current role
assignments. Owns no caching; AuthorizationGate puts PermissionCache in
front of it.
"""

from uuid import UUID

from rolegate.core.enums import ErrorCode
from rolegate.core.errors import NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols.user_repository import UserRepository


class PermissionResolver:
    """Resolves effective permissions from role assignments."""

    def __init__(self, user_repo: UserRepository) -> None:
        """Initialize resolver.

        Args:
            user_repo: Source of the user -> roles -> permissions graph.
        """
        self._user_repo = user_repo

    async def resolve_effective_permissions(
        self, user_id: UUID
    ) -> Result[frozenset[str], NotFoundError]:
        """Union of ``resource.action`` strings over every assigned role.

        Args:
            user_id: User to resolve.

        Returns:
            Success(frozenset) (empty when the user holds no roles), or
            Failure(NotFoundError) with USER_NOT_FOUND when the user is missing.

        Example:
            >>> result = await resolver.resolve_effective_permissions(user_id)
            >>> result.value
            frozenset({'users.view', 'users.edit'})
        """
        roles = await self._user_repo.find_roles_with_permissions(user_id)
        if roles is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(user_id),
                )
            )

        return Success(
            value=frozenset(code for role in roles for code in role.permission_codes())
        )
