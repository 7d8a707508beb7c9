"""Password hashing protocol for domain layer.

The hashing algorithm is a black box to the rest of the system.
Infrastructure provides BcryptPasswordService.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface."""

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password to hash.

        Returns:
            Opaque hash string.
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Returns:
            True if the password matches, False otherwise.
        """
        ...
