"""Database models.

Importing this package registers every table on BaseModel.metadata
(used by Alembic autogenerate and Database.create_all).
"""

from rolegate.infrastructure.persistence.base import BaseModel
from rolegate.infrastructure.persistence.models.assignments import (
    RolePermissionModel,
    UserRoleModel,
)
from rolegate.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)
from rolegate.infrastructure.persistence.models.permission import PermissionModel
from rolegate.infrastructure.persistence.models.role import RoleModel
from rolegate.infrastructure.persistence.models.user import UserModel

__all__ = [
    "BaseModel",
    "PasswordResetTokenModel",
    "PermissionModel",
    "RoleModel",
    "RolePermissionModel",
    "UserModel",
    "UserRoleModel",
]
