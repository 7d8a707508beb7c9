"""Cache protocol for domain layer.

Key-value store interface used by the permission cache. Infrastructure
adapters (Redis, in-memory) implement it without inheritance.

Architecture:
- Protocol-based - uses structural typing
- All operations return Result types
- Fail-open strategy: callers treat failures as a cache miss
"""

from typing import Protocol

from rolegate.core.errors import DomainError
from rolegate.core.result import Result


class CacheProtocol(Protocol):
    """Cache protocol - what the application needs from a key-value store."""

    async def get(self, key: str) -> Result[str | None, DomainError]:
        """Get value from cache.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        ...

    async def set(
        self, key: str, value: str, ttl: int | None = None
    ) -> Result[None, DomainError]:
        """Set value in cache.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete a key.

        Returns:
            Result with True if the key existed, or CacheError.
        """
        ...

    async def delete_pattern(self, pattern: str) -> Result[int, DomainError]:
        """Delete every key matching a glob pattern (e.g. ``permissions:set:*``).

        Returns:
            Result with number of keys deleted, or CacheError.
        """
        ...

    async def incr(self, key: str) -> Result[int, DomainError]:
        """Atomically increment an integer counter (missing key counts as 0).

        Returns:
            Result with the new counter value, or CacheError.
        """
        ...

    async def ping(self) -> Result[bool, DomainError]:
        """Check the store is reachable."""
        ...
