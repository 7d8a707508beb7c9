"""Authorization dependency factories.

The gate is request-scoped because its resolver reads through the
request's user repository. The permission cache it consults is the
application-scoped singleton, so cached sets are shared across requests.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from rolegate.core.container.infrastructure import (
    get_logger,
    get_permission_cache,
    get_token_service,
)
from rolegate.core.container.repositories import get_user_repository

if TYPE_CHECKING:
    from rolegate.application.queries.handlers.authorize_request_handler import (
        AuthorizeRequestHandler,
    )
    from rolegate.application.services import AuthorizationGate
    from rolegate.domain.protocols import UserRepository


async def get_authorization_gate(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "AuthorizationGate":
    """Get authorization gate (request-scoped).

    Usage:
        gate: AuthorizationGate = Depends(get_authorization_gate)
        result = await gate.authorize(user_id, "users.read")
    """
    from rolegate.application.services import AuthorizationGate, PermissionResolver

    return AuthorizationGate(
        resolver=PermissionResolver(user_repo=user_repo),
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_authorize_request_handler(
    gate: "AuthorizationGate" = Depends(get_authorization_gate),
) -> "AuthorizeRequestHandler":
    from rolegate.application.queries.handlers.authorize_request_handler import (
        AuthorizeRequestHandler,
    )

    return AuthorizeRequestHandler(token_service=get_token_service(), gate=gate)
