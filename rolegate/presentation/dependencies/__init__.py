"""FastAPI dependencies for authentication and permission checks."""

from rolegate.presentation.dependencies.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from rolegate.presentation.dependencies.authorization_dependencies import (
    require_any_permission,
    require_permission,
)

__all__ = [
    "CurrentUser",
    "get_current_user",
    "require_any_permission",
    "require_permission",
]
