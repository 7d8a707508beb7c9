"""In-process cache adapter implementing CacheProtocol.

Used in tests and single-process development setups without Redis.
Entries expire on a monotonic clock; expiry is checked on read.
"""

import fnmatch
import threading
import time
from collections.abc import Callable

from rolegate.core.enums import ErrorCode
from rolegate.core.result import Failure, Result, Success
from rolegate.infrastructure.enums import InfrastructureErrorCode
from rolegate.infrastructure.errors import CacheError


class InMemoryCacheAdapter:
    """Dict-backed CacheProtocol implementation.

    Every access holds a lock, so concurrent readers never observe a
    partially written entry.

    Args:
        clock: Monotonic time source in seconds (injectable for tests).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def _is_expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    async def get(self, key: str) -> Result[str | None, CacheError]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return Success(value=None)
            value, expires_at = entry
            if self._is_expired(expires_at):
                del self._entries[key]
                return Success(value=None)
            return Success(value=value)

    async def set(
        self, key: str, value: str, ttl: int | None = None
    ) -> Result[None, CacheError]:
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._entries[key] = (value, expires_at)
        return Success(value=None)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        with self._lock:
            return Success(value=self._entries.pop(key, None) is not None)

    async def delete_pattern(self, pattern: str) -> Result[int, CacheError]:
        with self._lock:
            matched = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
            for key in matched:
                del self._entries[key]
        return Success(value=len(matched))

    async def incr(self, key: str) -> Result[int, CacheError]:
        """Increment an integer counter, keeping any existing expiry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._is_expired(entry[1]):
                current, expires_at = 0, None
            else:
                raw, expires_at = entry
                try:
                    current = int(raw)
                except ValueError:
                    return Failure(
                        error=CacheError(
                            code=ErrorCode.CACHE_UNAVAILABLE,
                            infrastructure_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                            message=f"Value for key '{key}' is not an integer",
                            details={"key": key},
                        )
                    )
            self._entries[key] = (str(current + 1), expires_at)
            return Success(value=current + 1)

    async def ping(self) -> Result[bool, CacheError]:
        return Success(value=True)

    def __len__(self) -> int:
        with self._lock:
            return sum(
                1 for _, expires_at in self._entries.values()
                if not self._is_expired(expires_at)
            )
