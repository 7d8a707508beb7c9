"""Domain protocols (ports).

Infrastructure adapters implement these via structural typing.
"""

from rolegate.domain.protocols.cache_protocol import CacheProtocol
from rolegate.domain.protocols.logger_protocol import LoggerProtocol
from rolegate.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from rolegate.domain.protocols.password_reset_notifier_protocol import (
    PasswordResetNotifierProtocol,
)
from rolegate.domain.protocols.password_reset_repository import (
    PasswordResetRepository,
)
from rolegate.domain.protocols.password_reset_token_protocol import (
    PasswordResetTokenServiceProtocol,
)
from rolegate.domain.protocols.permission_repository import PermissionRepository
from rolegate.domain.protocols.role_repository import RoleRepository
from rolegate.domain.protocols.token_service_protocol import TokenServiceProtocol
from rolegate.domain.protocols.user_repository import UserRepository

__all__ = [
    "CacheProtocol",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "PasswordResetNotifierProtocol",
    "PasswordResetRepository",
    "PasswordResetTokenServiceProtocol",
    "PermissionRepository",
    "RoleRepository",
    "TokenServiceProtocol",
    "UserRepository",
]
