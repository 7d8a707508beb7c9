"""Register user handler.

Flow:
1. Check email is not registered
2. Hash password and create ACTIVE user
3. Assign the default role (if it exists)
4. Resolve permissions and issue an access token
5. Return Success(RegistrationResult)
"""

from uuid_extensions import uuid7

from rolegate.application.commands.auth_commands import RegisterUser
from rolegate.application.dtos import RegistrationResult, SafeUser
from rolegate.application.services.authorization_gate import AuthorizationGate
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ConflictError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.entities.user import User
from rolegate.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    RoleRepository,
    TokenServiceProtocol,
    UserRepository,
)


def email_taken(email: str) -> ConflictError:
    return ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
        resource_type="User",
        conflicting_field="email",
        details={"email": email},
    )


class RegisterUserHandler:
    """Handler for RegisterUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        gate: AuthorizationGate,
        logger: LoggerProtocol,
        default_role_name: str = "User",
    ) -> None:
        """Initialize registration handler.

        Args:
            default_role_name: Role granted to every self-registered user.
        """
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._password_service = password_service
        self._token_service = token_service
        self._gate = gate
        self._logger = logger
        self._default_role_name = default_role_name

    async def handle(
        self, cmd: RegisterUser
    ) -> Result[RegistrationResult, ConflictError]:
        email = cmd.email.strip().lower()

        # Step 1: Uniqueness
        if await self._user_repo.find_by_email(email) is not None:
            return Failure(error=email_taken(email))

        # Step 2: Default role
        default_role = await self._role_repo.find_by_name(self._default_role_name)
        if default_role is None:
            self._logger.warning(
                "default_role_missing", role_name=self._default_role_name
            )

        # Step 3: Create user with its role
        user = User(
            id=uuid7(),
            email=email,
            password_hash=self._password_service.hash_password(cmd.password),
            first_name=cmd.first_name,
            last_name=cmd.last_name,
        )
        await self._user_repo.save(
            user, role_ids=[default_role.id] if default_role is not None else ()
        )

        # Step 4: Permissions and token
        permissions_result = await self._gate.effective_permissions(user.id)
        permissions = (
            sorted(permissions_result.value)
            if isinstance(permissions_result, Success)
            else []
        )
        access_token = self._token_service.issue_access_token(user.id, user.email)

        self._logger.info("user_registered", user_id=str(user.id))

        # Step 5: Return Success
        return Success(
            value=RegistrationResult(
                user=SafeUser.from_entity(user),
                permissions=permissions,
                access_token=access_token,
            )
        )
