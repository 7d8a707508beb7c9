"""Authorization cache: memoized effective permission sets per user.

Keys:
    permissions:gen:{user_id}   -> per-user generation counter (no TTL)
    permissions:gen:global      -> global generation counter (no TTL)
    permissions:set:{user_id}:{user_gen}:{global_gen}
                                -> JSON list of "resource.action" strings (sorted)

Invalidation bumps a generation counter instead of deleting the entry.
A reader captures the generation before resolving and writes under that
generation, so a set resolved before a revocation lands on a key no later
reader looks up.

Contract:
    - The cache is an optimization only. Any store failure is logged and
      treated as a miss (reads) or ignored (writes, invalidations).
    - With no store configured every read is a miss.
    - Expiry is enforced by the store's TTL; callers never re-check it.
    - invalidate()/invalidate_all() are awaited by mutation handlers
      before they report success.
    - Generation counters are never deleted.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from rolegate.core.result import Failure, Success
from rolegate.domain.protocols.cache_protocol import CacheProtocol
from rolegate.domain.protocols.logger_protocol import LoggerProtocol

PERMISSION_KEY_PREFIX = "permissions"
GLOBAL_GENERATION_KEY = f"{PERMISSION_KEY_PREFIX}:gen:global"
PERMISSION_SET_PATTERN = f"{PERMISSION_KEY_PREFIX}:set:*"
DEFAULT_PERMISSION_TTL_SECONDS = 900


@dataclass(frozen=True, slots=True)
class CacheGeneration:
    """Generation counters a cache entry was written under."""

    user_generation: int = 0
    global_generation: int = 0


@dataclass(frozen=True, slots=True)
class CacheLookup:
    """Outcome of a cache read.

    Attributes:
        permissions: Cached set, or None on miss.
        generation: Generation the read was made under, or None when it
            could not be determined (the caller must not write back).
    """

    permissions: frozenset[str] | None = None
    generation: CacheGeneration | None = None


def user_generation_key(user_id: UUID | str) -> str:
    """Counter key bumped when one user's grants change."""
    return f"{PERMISSION_KEY_PREFIX}:gen:{user_id}"


def permission_cache_key(user_id: UUID | str, generation: CacheGeneration) -> str:
    """Cache key holding a user's effective permission set."""
    return (
        f"{PERMISSION_KEY_PREFIX}:set:{user_id}:"
        f"{generation.user_generation}:{generation.global_generation}"
    )


class PermissionCache:
    """Cache of resolved permission sets keyed by user and generation.

    Args:
        store: Key-value store, or None to disable caching.
        logger: Structured logger.
        ttl_seconds: Lifetime of a cached set.
    """

    def __init__(
        self,
        store: CacheProtocol | None,
        logger: LoggerProtocol,
        ttl_seconds: int = DEFAULT_PERMISSION_TTL_SECONDS,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._store = store
        self._logger = logger
        self._ttl = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    async def _read_counter(self, key: str) -> int | None:
        match await self._store.get(key):
            case Success(value=None):
                return 0
            case Success(value=raw):
                try:
                    return int(raw)
                except (TypeError, ValueError) as e:
                    self._logger.warning(
                        "permission_cache_decode_failed",
                        key=key,
                        error_type=type(e).__name__,
                    )
                    return None
            case Failure(error=err):
                self._logger.warning(
                    "permission_cache_get_failed",
                    key=key,
                    error_code=err.code.value,
                    error_message=err.message,
                )
                return None
            case _:
                # Unreachable but needed for type checker
                return None

    async def current_generation(self, user_id: UUID) -> CacheGeneration | None:
        """Read the generation a new entry for this user would use.

        Returns:
            The generation, or None if the store is disabled or failing.
        """
        if self._store is None:
            return None

        user_generation = await self._read_counter(user_generation_key(user_id))
        if user_generation is None:
            return None
        global_generation = await self._read_counter(GLOBAL_GENERATION_KEY)
        if global_generation is None:
            return None
        return CacheGeneration(
            user_generation=user_generation, global_generation=global_generation
        )

    async def lookup(self, user_id: UUID) -> CacheLookup:
        """Read a user's cached set along with the generation it was read at.

        Pass the returned generation to put() after resolving on a miss.
        """
        generation = await self.current_generation(user_id)
        if generation is None:
            return CacheLookup()

        match await self._store.get(permission_cache_key(user_id, generation)):
            case Success(value=None):
                return CacheLookup(generation=generation)
            case Success(value=raw):
                try:
                    codes = json.loads(raw)
                except (TypeError, ValueError) as e:
                    self._logger.warning(
                        "permission_cache_decode_failed",
                        user_id=str(user_id),
                        error_type=type(e).__name__,
                    )
                    return CacheLookup(generation=generation)
                if not isinstance(codes, list):
                    return CacheLookup(generation=generation)
                return CacheLookup(
                    permissions=frozenset(str(code) for code in codes),
                    generation=generation,
                )
            case Failure(error=err):
                self._logger.warning(
                    "permission_cache_get_failed",
                    user_id=str(user_id),
                    error_code=err.code.value,
                    error_message=err.message,
                )
                return CacheLookup(generation=generation)
            case _:
                # Unreachable but needed for type checker
                return CacheLookup()

    async def get(self, user_id: UUID) -> frozenset[str] | None:
        """Return the cached permission set, or None on miss or failure."""
        return (await self.lookup(user_id)).permissions

    async def put(
        self,
        user_id: UUID,
        permissions: Iterable[str],
        generation: CacheGeneration | None = None,
    ) -> None:
        """Store a user's permission set with the configured TTL.

        Args:
            user_id: Owner of the set.
            permissions: Resolved permission codes.
            generation: Generation captured before resolving. When omitted
                the current generation is read, which is only safe if the
                set was resolved after that read.
        """
        if self._store is None:
            return

        if generation is None:
            generation = await self.current_generation(user_id)
            if generation is None:
                self._logger.warning(
                    "permission_cache_put_failed",
                    user_id=str(user_id),
                    reason="generation_unavailable",
                )
                return

        payload = json.dumps(sorted(permissions))
        result = await self._store.set(
            permission_cache_key(user_id, generation), payload, ttl=self._ttl
        )
        if isinstance(result, Failure):
            self._logger.warning(
                "permission_cache_put_failed",
                user_id=str(user_id),
                error_code=result.error.code.value,
                error_message=result.error.message,
            )

    async def invalidate(self, user_id: UUID) -> None:
        """Retire a single user's cached set by bumping their generation."""
        if self._store is None:
            return

        match await self._store.incr(user_generation_key(user_id)):
            case Success(value=generation):
                self._logger.debug(
                    "permission_cache_invalidated",
                    user_id=str(user_id),
                    user_generation=generation,
                )
            case Failure(error=err):
                # Stale entries expire with the TTL
                self._logger.error(
                    "permission_cache_invalidate_failed",
                    user_id=str(user_id),
                    error_code=err.code.value,
                    error_message=err.message,
                    ttl_seconds=self._ttl,
                )

    async def invalidate_many(self, user_ids: Iterable[UUID]) -> None:
        """Retire the cached sets of several users."""
        for user_id in user_ids:
            await self.invalidate(user_id)

    async def invalidate_all(self) -> None:
        """Retire every cached permission set.

        Used when a role or permission changes, since there is no reverse
        index from role to the users holding it. Bumps the global
        generation, then sweeps the now unreachable entries.
        """
        if self._store is None:
            return

        match await self._store.incr(GLOBAL_GENERATION_KEY):
            case Success(value=generation):
                self._logger.info(
                    "permission_cache_flushed", global_generation=generation
                )
            case Failure(error=err):
                self._logger.error(
                    "permission_cache_flush_failed",
                    error_code=err.code.value,
                    error_message=err.message,
                    ttl_seconds=self._ttl,
                )

        match await self._store.delete_pattern(PERMISSION_SET_PATTERN):
            case Success(value=count):
                self._logger.debug("permission_cache_swept", keys_deleted=count)
            case Failure(error=err):
                self._logger.warning(
                    "permission_cache_sweep_failed",
                    error_code=err.code.value,
                    error_message=err.message,
                )
