"""Refresh access token handler.

Flow:
1. Verify refresh token signature/expiry/type (TOKEN_INVALID)
2. Load the user's current token version (USER_INACTIVE if missing)
3. Compare versions (TOKEN_REVOKED on mismatch)
4. Check user still exists and is ACTIVE (USER_INACTIVE)
5. Issue new access token (refresh token is not rotated)

A version mismatch is reported as TOKEN_REVOKED, distinct from a
malformed token, so clients can explain "signed out" vs "invalid".
"""

from rolegate.application.commands.auth_commands import RefreshAccessToken
from rolegate.application.dtos import RefreshResult
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import (
    LoggerProtocol,
    TokenServiceProtocol,
    UserRepository,
)


def user_inactive() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.USER_INACTIVE,
        message="User not found or inactive",
    )


class RefreshAccessTokenHandler:
    """Handler for RefreshAccessToken command."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: TokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._logger = logger

    async def handle(
        self, cmd: RefreshAccessToken
    ) -> Result[RefreshResult, AuthenticationError]:
        """Handle refresh command.

        Returns:
            Success(RefreshResult) with a new access token.
            Failure(AuthenticationError) with TOKEN_INVALID, TOKEN_REVOKED
            or USER_INACTIVE.
        """
        # Step 1: Verify token
        match self._token_service.verify_refresh_token(cmd.refresh_token):
            case Failure(error=err):
                self._logger.info("token_refresh_failed", reason="invalid_token")
                return Failure(error=err)
            case Success(value=payload):
                pass
            case _:
                # Unreachable but needed for type checker
                return Failure(error=user_inactive())

        user_id = str(payload.user_id)

        # Step 2: Current version
        current_version = await self._user_repo.get_token_version(payload.user_id)
        if current_version is None:
            self._logger.info(
                "token_refresh_failed", reason="user_not_found", user_id=user_id
            )
            return Failure(error=user_inactive())

        # Step 3: Revocation check
        if not self._token_service.is_refresh_token_current(payload, current_version):
            self._logger.info(
                "token_refresh_failed",
                reason="token_revoked",
                user_id=user_id,
                token_version=payload.token_version,
                current_version=current_version,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_REVOKED,
                    message="Token has been revoked",
                )
            )

        # Step 4: User status
        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None or not user.is_active:
            self._logger.info(
                "token_refresh_failed", reason="user_inactive", user_id=user_id
            )
            return Failure(error=user_inactive())

        # Step 5: New access token
        access_token = self._token_service.issue_access_token(user.id, user.email)
        self._logger.debug("access_token_refreshed", user_id=user_id)
        return Success(
            value=RefreshResult(
                access_token=access_token,
                expires_in=self._token_service.access_token_ttl_seconds,
            )
        )
