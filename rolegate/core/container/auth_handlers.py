"""Authentication handler factories (request-scoped).

Handlers receive request-scoped repositories and application-scoped
infrastructure services.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from rolegate.core.config import settings
from rolegate.core.container.authorization import get_authorization_gate
from rolegate.core.container.infrastructure import (
    get_logger,
    get_password_service,
    get_permission_cache,
    get_reset_notifier,
    get_reset_token_service,
    get_token_service,
)
from rolegate.core.container.repositories import (
    get_password_reset_repository,
    get_role_repository,
    get_user_repository,
)

if TYPE_CHECKING:
    from rolegate.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )
    from rolegate.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )
    from rolegate.application.commands.handlers.login_handler import LoginHandler
    from rolegate.application.commands.handlers.logout_handler import LogoutHandler
    from rolegate.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from rolegate.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from rolegate.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )
    from rolegate.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )
    from rolegate.application.services import AuthorizationGate
    from rolegate.domain.protocols import (
        PasswordResetRepository,
        RoleRepository,
        UserRepository,
    )


async def get_login_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    gate: "AuthorizationGate" = Depends(get_authorization_gate),
) -> "LoginHandler":
    """Get Login command handler (request-scoped)."""
    from rolegate.application.commands.handlers.login_handler import LoginHandler

    return LoginHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        token_service=get_token_service(),
        gate=gate,
        logger=get_logger(),
    )


async def get_refresh_token_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "RefreshAccessTokenHandler":
    from rolegate.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )

    return RefreshAccessTokenHandler(
        user_repo=user_repo,
        token_service=get_token_service(),
        logger=get_logger(),
    )


async def get_logout_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "LogoutHandler":
    from rolegate.application.commands.handlers.logout_handler import LogoutHandler

    return LogoutHandler(
        user_repo=user_repo,
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_register_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    role_repo: "RoleRepository" = Depends(get_role_repository),
    gate: "AuthorizationGate" = Depends(get_authorization_gate),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped).

    New accounts receive the role named by DEFAULT_ROLE_NAME.
    """
    from rolegate.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )

    return RegisterUserHandler(
        user_repo=user_repo,
        role_repo=role_repo,
        password_service=get_password_service(),
        token_service=get_token_service(),
        gate=gate,
        logger=get_logger(),
        default_role_name=settings.default_role_name,
    )


async def get_request_password_reset_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    reset_repo: "PasswordResetRepository" = Depends(get_password_reset_repository),
) -> "RequestPasswordResetHandler":
    from rolegate.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )

    return RequestPasswordResetHandler(
        user_repo=user_repo,
        reset_repo=reset_repo,
        reset_token_service=get_reset_token_service(),
        notifier=get_reset_notifier(),
        logger=get_logger(),
        reset_url_base=settings.password_reset_url_base,
    )


async def get_confirm_password_reset_handler(
    reset_repo: "PasswordResetRepository" = Depends(get_password_reset_repository),
) -> "ConfirmPasswordResetHandler":
    from rolegate.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )

    return ConfirmPasswordResetHandler(
        reset_repo=reset_repo,
        reset_token_service=get_reset_token_service(),
        password_service=get_password_service(),
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_change_password_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "ChangePasswordHandler":
    from rolegate.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )

    return ChangePasswordHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        permission_cache=get_permission_cache(),
        logger=get_logger(),
    )


async def get_current_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    gate: "AuthorizationGate" = Depends(get_authorization_gate),
) -> "GetCurrentUserHandler":
    from rolegate.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )

    return GetCurrentUserHandler(
        user_repo=user_repo, gate=gate, token_service=get_token_service()
    )
