"""Authorize a request from its bearer token.

Flow:
1. No token -> Failure(AuthenticationError UNAUTHENTICATED)
2. Verify access token -> Failure(AuthenticationError TOKEN_INVALID)
3. Delegate to AuthorizationGate with the token's subject

Access tokens are not checked against the stored token version; they
stay valid until they expire. Revocation applies to refresh tokens.
"""

from rolegate.application.queries.auth_queries import AuthorizeRequest
from rolegate.application.services.authorization_gate import (
    AuthorizationGate,
    unauthenticated,
)
from rolegate.core.errors import AuthenticationError, AuthorizationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import TokenServiceProtocol
from rolegate.domain.value_objects import AuthorizedContext


class AuthorizeRequestHandler:
    """Handler for AuthorizeRequest query."""

    def __init__(
        self, token_service: TokenServiceProtocol, gate: AuthorizationGate
    ) -> None:
        self._token_service = token_service
        self._gate = gate

    async def handle(
        self, query: AuthorizeRequest
    ) -> Result[AuthorizedContext, AuthenticationError | AuthorizationError]:
        """Authenticate the bearer token, then authorize.

        Raises:
            ValueError: If query.required is empty or malformed.
        """
        token = (query.bearer_token or "").strip()
        if not token:
            return await self._gate.authorize(None, query.required, query.mode)

        match self._token_service.verify_access_token(token):
            case Failure(error=err):
                return Failure(error=err)
            case Success(value=payload):
                return await self._gate.authorize(
                    payload.user_id, query.required, query.mode
                )
            case _:
                # Unreachable but needed for type checker
                return Failure(error=unauthenticated())
