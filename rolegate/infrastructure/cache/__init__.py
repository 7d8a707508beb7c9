"""Key-value store adapters implementing CacheProtocol."""

from rolegate.infrastructure.cache.memory_adapter import InMemoryCacheAdapter
from rolegate.infrastructure.cache.redis_adapter import RedisAdapter

__all__ = ["InMemoryCacheAdapter", "RedisAdapter"]
