"""Login handler.

Flow:
1. Find user by email
2. Check account exists (generic invalid-credentials failure)
3. Check account is ACTIVE
4. Verify password
5. Load effective permissions (cache-first)
6. Issue access and refresh tokens
7. Return Success(LoginResult)

Architecture:
- Application layer ONLY imports from domain/core (protocols, entities)
- Infrastructure is injected via protocols
"""

from rolegate.application.commands.auth_commands import Login
from rolegate.application.dtos import LoginResult, SafeUser
from rolegate.application.services.authorization_gate import AuthorizationGate
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    TokenServiceProtocol,
    UserRepository,
)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def invalid_credentials() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=INVALID_CREDENTIALS_MESSAGE,
    )


class LoginHandler:
    """Handler for Login command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        gate: AuthorizationGate,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User repository.
            password_service: Password verification.
            token_service: Access/refresh token issuing.
            gate: Source of effective permissions (cache-first).
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._gate = gate
        self._logger = logger

    async def handle(self, cmd: Login) -> Result[LoginResult, AuthenticationError]:
        """Handle login command.

        Returns:
            Success(LoginResult) on valid credentials.
            Failure(AuthenticationError) with INVALID_CREDENTIALS or
            ACCOUNT_NOT_ACTIVE.
        """
        # Step 1: Find user by email
        user = await self._user_repo.find_by_email(cmd.email.strip().lower())

        # Step 2: Unknown email looks the same as a wrong password
        if user is None:
            self._logger.info("login_failed", reason="unknown_email")
            return Failure(error=invalid_credentials())

        # Step 3: Check account status
        if not user.is_active:
            self._logger.info(
                "login_failed",
                reason="account_not_active",
                user_id=str(user.id),
                status=user.status.value,
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.ACCOUNT_NOT_ACTIVE,
                    message="Account is not active",
                )
            )

        # Step 4: Verify password
        if not self._password_service.verify_password(cmd.password, user.password_hash):
            self._logger.info(
                "login_failed", reason="invalid_password", user_id=str(user.id)
            )
            return Failure(error=invalid_credentials())

        # Step 5: Effective permissions
        permissions_result = await self._gate.effective_permissions(user.id)
        if isinstance(permissions_result, Failure):
            # Deleted between lookup and resolution
            return Failure(error=invalid_credentials())

        # Step 6: Issue tokens
        access_token = self._token_service.issue_access_token(user.id, user.email)
        refresh_token = self._token_service.issue_refresh_token(
            user.id, user.token_version
        )

        self._logger.info("user_logged_in", user_id=str(user.id))

        # Step 7: Return Success
        return Success(
            value=LoginResult(
                access_token=access_token,
                refresh_token=refresh_token,
                permissions=sorted(permissions_result.value),
                user=SafeUser.from_entity(user),
                expires_in=self._token_service.access_token_ttl_seconds,
            )
        )
