"""Redis adapter implementing CacheProtocol.

Wraps an async Redis client and maps Redis exceptions to CacheError.

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError with InfrastructureErrorCode
- Returns Result types for all operations
- Fail-open strategy: callers decide how to degrade
"""

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

from rolegate.core.enums import ErrorCode
from rolegate.core.result import Failure, Result, Success
from rolegate.infrastructure.enums import InfrastructureErrorCode
from rolegate.infrastructure.errors import CacheError

# Keys deleted per DEL round trip during pattern deletes
DELETE_BATCH_SIZE = 500


def _cache_error(
    infrastructure_code: InfrastructureErrorCode,
    message: str,
    exc: Exception,
    **details: str,
) -> CacheError:
    if isinstance(exc, RedisConnectionError):
        infrastructure_code = InfrastructureErrorCode.CACHE_CONNECTION_ERROR
    return CacheError(
        code=ErrorCode.CACHE_UNAVAILABLE,
        infrastructure_code=infrastructure_code,
        message=message,
        details={**details, "error": str(exc), "type": type(exc).__name__},
    )


class RedisAdapter:
    """Redis implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from Redis.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
            A stored value that is not valid UTF-8 is a CacheError.
        """
        try:
            value = await self._redis.get(key)
            if value is None:
                return Success(value=None)
            # Redis returns bytes unless decode_responses=True
            if isinstance(value, bytes):
                value = value.decode("utf-8")
            return Success(value=value)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_GET_ERROR,
                    f"Failed to get key '{key}' from cache",
                    e,
                    key=key,
                )
            )
        except UnicodeDecodeError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_GET_ERROR,
                    f"Value for key '{key}' is not valid UTF-8",
                    e,
                    key=key,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_GET_ERROR,
                    f"Unexpected error getting key '{key}'",
                    e,
                    key=key,
                )
            )

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set value in Redis.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        try:
            if ttl is not None:
                await self._redis.setex(key, ttl, value)
            else:
                await self._redis.set(key, value)
            return Success(value=None)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    f"Failed to set key '{key}' in cache",
                    e,
                    key=key,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    f"Unexpected error setting key '{key}'",
                    e,
                    key=key,
                )
            )

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key from Redis.

        Returns:
            Result with True if the key existed, or CacheError.
        """
        try:
            deleted = await self._redis.delete(key)
            return Success(value=deleted > 0)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    f"Failed to delete key '{key}' from cache",
                    e,
                    key=key,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    f"Unexpected error deleting key '{key}'",
                    e,
                    key=key,
                )
            )

    async def delete_pattern(self, pattern: str) -> Result[int, CacheError]:
        """Delete all keys matching a glob pattern.

        Uses SCAN (non-blocking) rather than KEYS. Keys are removed in
        batches of DELETE_BATCH_SIZE.

        Args:
            pattern: Redis glob pattern (e.g. ``permissions:set:*``).

        Returns:
            Result with number of keys deleted, or CacheError.
        """
        deleted = 0
        batch: list[bytes | str] = []
        try:
            async for key in self._redis.scan_iter(match=pattern, count=DELETE_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= DELETE_BATCH_SIZE:
                    deleted += await self._redis.delete(*batch)
                    batch.clear()
            if batch:
                deleted += await self._redis.delete(*batch)
            return Success(value=deleted)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    f"Failed to delete keys matching '{pattern}'",
                    e,
                    pattern=pattern,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    f"Unexpected error deleting keys matching '{pattern}'",
                    e,
                    pattern=pattern,
                )
            )

    async def incr(self, key: str) -> Result[int, CacheError]:
        """Atomically increment an integer counter.

        A missing key starts at 0, so the first increment returns 1.

        Args:
            key: Counter key.

        Returns:
            Result with the new counter value, or CacheError.
        """
        try:
            value = await self._redis.incr(key)
            return Success(value=int(value))
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    f"Failed to increment key '{key}'",
                    e,
                    key=key,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_SET_ERROR,
                    f"Unexpected error incrementing key '{key}'",
                    e,
                    key=key,
                )
            )

    async def ping(self) -> Result[bool, CacheError]:
        """Check Redis connectivity.

        Returns:
            Result with True if reachable, or CacheError.
        """
        try:
            await self._redis.ping()
            return Success(value=True)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                    "Redis ping failed",
                    e,
                )
            )
        except Exception as e:
            return Failure(
                error=_cache_error(
                    InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                    "Unexpected error during Redis ping",
                    e,
                )
            )
