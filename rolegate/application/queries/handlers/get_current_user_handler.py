"""Get current user handler.

Returns the caller's profile, effective permissions and a freshly
issued access token.
"""

from rolegate.application.dtos import CurrentUserView, SafeUser
from rolegate.application.queries.auth_queries import GetCurrentUser
from rolegate.application.services.authorization_gate import AuthorizationGate
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import TokenServiceProtocol, UserRepository


class GetCurrentUserHandler:
    """Handler for GetCurrentUser query."""

    def __init__(
        self,
        user_repo: UserRepository,
        gate: AuthorizationGate,
        token_service: TokenServiceProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._gate = gate
        self._token_service = token_service

    async def handle(
        self, query: GetCurrentUser
    ) -> Result[CurrentUserView, NotFoundError]:
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(query.user_id),
                )
            )

        permissions_result = await self._gate.effective_permissions(user.id)
        if isinstance(permissions_result, Failure):
            return Failure(error=permissions_result.error)

        return Success(
            value=CurrentUserView(
                user=SafeUser.from_entity(user),
                permissions=sorted(permissions_result.value),
                access_token=self._token_service.issue_access_token(
                    user.id, user.email
                ),
            )
        )
