"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol.

Security:
    - Cost factor 12 by default (configurable 4-31; tests use 4)
    - Salt generated per hash
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt implementation of PasswordHashingProtocol."""

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt service.

        Args:
            cost_factor: Bcrypt rounds (4-31).

        Raises:
            ValueError: If cost_factor is out of range.
        """
        if not 4 <= cost_factor <= 31:
            raise ValueError("Bcrypt cost factor must be between 4 and 31")
        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Example:
            >>> hashed = service.hash_password("SecurePass123!")
            >>> hashed.startswith("$2b$")
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a password against a bcrypt hash.

        Returns False for malformed hashes instead of raising.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            return False
