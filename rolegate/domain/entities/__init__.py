"""Domain entities."""

from rolegate.domain.entities.password_reset_token import PasswordResetToken
from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.role import Role
from rolegate.domain.entities.user import User

__all__ = ["PasswordResetToken", "Permission", "Role", "User"]
