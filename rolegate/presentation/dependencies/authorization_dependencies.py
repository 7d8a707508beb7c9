"""Permission-checking dependencies.

Route-level guards built on the authorization gate. A guard
authenticates the bearer token, then checks the caller's effective
permissions, and hands the route an AuthorizedContext.

Usage:
    @router.delete("/users/{user_id}")
    async def delete_user(
        ctx: AuthorizedContext = Depends(require_permission("users.delete")),
    ):
        ...

    @router.get("/reports")
    async def reports(
        ctx: AuthorizedContext = Depends(
            require_any_permission("reports.read", "reports.admin")
        ),
    ):
        ...

Every denial is a 403 with the same "Access denied" detail; the missing
permission is never revealed to the caller.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from rolegate.application.queries.auth_queries import AuthorizeRequest
from rolegate.application.queries.handlers.authorize_request_handler import (
    AuthorizeRequestHandler,
)
from rolegate.core.container import get_authorize_request_handler
from rolegate.core.errors import AuthenticationError
from rolegate.core.result import Failure, Success
from rolegate.domain.enums import PermissionMode
from rolegate.domain.value_objects import AuthorizedContext, normalize_requirements
from rolegate.presentation.dependencies.auth_dependencies import (
    bearer_scheme,
    raise_unauthorized,
)

ACCESS_DENIED_DETAIL = "Access denied"


def require_permission(
    *permissions: str,
    mode: PermissionMode = PermissionMode.ALL,
) -> Callable[..., Awaitable[AuthorizedContext]]:
    """Create a dependency that requires the given permission(s).

    Args:
        *permissions: Permission strings ("resource.action").
        mode: ALL (default) or ANY when several are given.

    Returns:
        Dependency returning the caller's AuthorizedContext.

    Raises:
        ValueError: At declaration time, if no permission is given or one
            is malformed.
        HTTPException 401: Missing, invalid or expired token (at request time).
        HTTPException 403: Permission denied (at request time).
    """
    required = normalize_requirements(permissions)

    async def permission_checker(
        credentials: Annotated[
            HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
        ],
        handler: Annotated[
            AuthorizeRequestHandler, Depends(get_authorize_request_handler)
        ],
    ) -> AuthorizedContext:
        result = await handler.handle(
            AuthorizeRequest(
                bearer_token=credentials.credentials if credentials else None,
                required=required,
                mode=mode,
            )
        )

        match result:
            case Success(value=context):
                return context
            case Failure(error=AuthenticationError() as error):
                raise_unauthorized(error.message)
            case _:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=ACCESS_DENIED_DETAIL,
                )

    return permission_checker


def require_any_permission(
    *permissions: str,
) -> Callable[..., Awaitable[AuthorizedContext]]:
    """Shorthand for require_permission(..., mode=PermissionMode.ANY)."""
    return require_permission(*permissions, mode=PermissionMode.ANY)
