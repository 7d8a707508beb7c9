"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating access tokens.

Usage:
    @router.get("/me")
    async def me(
        current_user: CurrentUser = Depends(get_current_user),
    ):
        return {"user_id": str(current_user.user_id)}
"""

from dataclasses import dataclass
from typing import Annotated, NoReturn
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from rolegate.core.container import get_token_service
from rolegate.core.result import Failure, Success
from rolegate.domain.protocols import TokenServiceProtocol

# auto_error=False so a missing header yields our own 401 (not FastAPI's 403)
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated user identity from the access token.

    Attributes:
        user_id: User's unique identifier (from 'sub' claim).
        email: User's email address (from 'email' claim).
    """

    user_id: UUID
    email: str


def raise_unauthorized(detail: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[TokenServiceProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from the bearer access token.

    Raises:
        HTTPException 401: If the token is missing, invalid or expired.
    """
    if credentials is None:
        raise_unauthorized("Authentication required")

    match token_service.verify_access_token(credentials.credentials):
        case Success(value=payload):
            return CurrentUser(user_id=payload.user_id, email=payload.email)
        case Failure(error=error):
            raise_unauthorized(error.message)
        case _:
            # Unreachable but needed for type checker
            raise_unauthorized("Authentication required")
