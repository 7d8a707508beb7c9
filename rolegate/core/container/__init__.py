"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from rolegate.core.container import get_logger, get_authorization_gate, ...

The container is organized into modules:
- infrastructure: Core services (logging, cache, db, security)
- repositories: Repository factories
- authorization: Authorization gate and request authorization
- auth_handlers: Authentication handler factories
- admin_handlers: User, role and permission administration
"""

from rolegate.core.container.admin_handlers import (
    get_bulk_delete_users_handler,
    get_create_permission_handler,
    get_create_role_handler,
    get_create_user_handler,
    get_delete_permission_handler,
    get_delete_role_handler,
    get_delete_user_handler,
    get_list_users_handler,
    get_update_permission_handler,
    get_update_role_handler,
    get_update_user_handler,
)
from rolegate.core.container.auth_handlers import (
    get_change_password_handler,
    get_confirm_password_reset_handler,
    get_current_user_handler,
    get_login_handler,
    get_logout_handler,
    get_refresh_token_handler,
    get_register_user_handler,
    get_request_password_reset_handler,
)
from rolegate.core.container.authorization import (
    get_authorization_gate,
    get_authorize_request_handler,
)
from rolegate.core.container.infrastructure import (
    get_cache_store,
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_permission_cache,
    get_reset_notifier,
    get_reset_token_service,
    get_token_service,
)
from rolegate.core.container.repositories import (
    get_password_reset_repository,
    get_permission_repository,
    get_role_repository,
    get_user_repository,
)

__all__ = [
    # Infrastructure
    "get_cache_store",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_permission_cache",
    "get_reset_notifier",
    "get_reset_token_service",
    "get_token_service",
    # Repositories
    "get_password_reset_repository",
    "get_permission_repository",
    "get_role_repository",
    "get_user_repository",
    # Authorization
    "get_authorization_gate",
    "get_authorize_request_handler",
    # Auth handlers
    "get_change_password_handler",
    "get_confirm_password_reset_handler",
    "get_current_user_handler",
    "get_login_handler",
    "get_logout_handler",
    "get_refresh_token_handler",
    "get_register_user_handler",
    "get_request_password_reset_handler",
    # Admin handlers
    "get_bulk_delete_users_handler",
    "get_create_permission_handler",
    "get_create_role_handler",
    "get_create_user_handler",
    "get_delete_permission_handler",
    "get_delete_role_handler",
    "get_delete_user_handler",
    "get_list_users_handler",
    "get_update_permission_handler",
    "get_update_role_handler",
    "get_update_user_handler",
]
