"""SQLAlchemy repository adapters."""

from rolegate.infrastructure.persistence.repositories.password_reset_repository import (
    PasswordResetRepository,
)
from rolegate.infrastructure.persistence.repositories.permission_repository import (
    PermissionRepository,
)
from rolegate.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from rolegate.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "PasswordResetRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
