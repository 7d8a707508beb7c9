"""Security adapters: tokens and password hashing."""

from rolegate.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from rolegate.infrastructure.security.jwt_service import JWTService
from rolegate.infrastructure.security.password_reset_token_service import (
    PasswordResetTokenService,
)

__all__ = ["BcryptPasswordService", "JWTService", "PasswordResetTokenService"]
