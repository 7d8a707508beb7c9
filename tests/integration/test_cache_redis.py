"""Integration tests for RedisAdapter over fakeredis.

Tests cover:
- Basic get/set/delete with and without TTL
- Pattern deletion across batches
- Error mapping when Redis is unreachable or returns undecodable bytes
- Counter increments
- PermissionCache and AuthorizationGate end to end on Redis
"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from uuid_extensions import uuid7

from rolegate.application.services import (
    AuthorizationGate,
    PermissionCache,
    PermissionResolver,
)
from rolegate.application.services.permission_cache import (
    CacheGeneration,
    permission_cache_key,
)
from rolegate.core.enums import ErrorCode
from rolegate.core.result import Failure, Success
from rolegate.infrastructure.cache import RedisAdapter
from rolegate.infrastructure.cache.redis_adapter import DELETE_BATCH_SIZE
from rolegate.infrastructure.enums import InfrastructureErrorCode
from tests.utils.fakes import logged_events


@pytest.mark.integration
class TestRedisAdapter:
    @pytest.mark.asyncio
    async def test_set_get_delete(self, cache_adapter):
        assert isinstance(await cache_adapter.set("k", "v"), Success)
        assert (await cache_adapter.get("k")).value == "v"
        assert (await cache_adapter.delete("k")).value is True
        assert (await cache_adapter.get("k")).value is None
        assert (await cache_adapter.delete("k")).value is False

    @pytest.mark.asyncio
    async def test_set_with_ttl(self, cache_adapter, redis_test_client):
        await cache_adapter.set("k", "v", ttl=900)

        ttl = await redis_test_client.ttl("k")
        assert 0 < ttl <= 900

    @pytest.mark.asyncio
    async def test_delete_pattern_spans_batches(self, cache_adapter, redis_test_client):
        count = DELETE_BATCH_SIZE + 20
        for i in range(count):
            await redis_test_client.set(f"permissions:{i}", "[]")
        await redis_test_client.set("session:1", "keep")

        result = await cache_adapter.delete_pattern("permissions:*")

        assert result.value == count
        assert await redis_test_client.get("session:1") == b"keep"

    @pytest.mark.asyncio
    async def test_ping(self, cache_adapter):
        assert (await cache_adapter.ping()).value is True

    @pytest.mark.asyncio
    async def test_connection_failure_maps_to_cache_error(self):
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("refused")
        adapter = RedisAdapter(redis_client=client)

        result = await adapter.get("k")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.CACHE_UNAVAILABLE
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.CACHE_CONNECTION_ERROR
        )
        assert result.error.details["key"] == "k"

    @pytest.mark.asyncio
    async def test_non_utf8_value_is_a_get_error(self, cache_adapter, redis_test_client):
        await redis_test_client.set("k", b"\xff\xfe")

        result = await cache_adapter.get("k")

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_GET_ERROR
        assert result.error.details["type"] == "UnicodeDecodeError"

    @pytest.mark.asyncio
    async def test_unexpected_client_errors_become_failures(self):
        client = AsyncMock()
        client.get.side_effect = RuntimeError("boom")
        client.setex.side_effect = RuntimeError("boom")
        client.incr.side_effect = RuntimeError("boom")
        adapter = RedisAdapter(redis_client=client)

        get_result = await adapter.get("k")
        set_result = await adapter.set("k", "v", ttl=60)
        incr_result = await adapter.incr("k")

        assert get_result.error.infrastructure_code == InfrastructureErrorCode.CACHE_GET_ERROR
        assert set_result.error.infrastructure_code == InfrastructureErrorCode.CACHE_SET_ERROR
        assert incr_result.error.infrastructure_code == InfrastructureErrorCode.CACHE_SET_ERROR
        for result in (get_result, set_result, incr_result):
            assert isinstance(result, Failure)
            assert result.error.details["type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_incr_counts_from_zero(self, cache_adapter):
        assert (await cache_adapter.incr("counter")).value == 1
        assert (await cache_adapter.incr("counter")).value == 2
        assert (await cache_adapter.get("counter")).value == "2"


@pytest.mark.integration
class TestPermissionCacheOnRedis:
    @pytest.mark.asyncio
    async def test_round_trip_and_invalidation(self, cache_adapter, mock_logger):
        cache = PermissionCache(store=cache_adapter, logger=mock_logger, ttl_seconds=900)
        alice, bob = uuid7(), uuid7()

        await cache.put(alice, {"users.view", "users.edit"})
        await cache.put(bob, set())

        assert await cache.get(alice) == frozenset({"users.view", "users.edit"})
        assert await cache.get(bob) == frozenset()

        await cache.invalidate(alice)
        assert await cache.get(alice) is None
        assert await cache.get(bob) == frozenset()

        await cache.invalidate_all()
        assert await cache.get(bob) is None

    @pytest.mark.asyncio
    async def test_put_under_retired_generation_is_never_read(
        self, cache_adapter, mock_logger
    ):
        cache = PermissionCache(store=cache_adapter, logger=mock_logger, ttl_seconds=900)
        user_id = uuid7()
        lookup = await cache.lookup(user_id)

        await cache.invalidate(user_id)
        await cache.put(user_id, {"users.delete"}, generation=lookup.generation)

        assert await cache.get(user_id) is None
        assert await cache.current_generation(user_id) == CacheGeneration(1, 0)


@pytest.mark.integration
class TestAuthorizationGateOnRedis:
    @pytest.mark.asyncio
    async def test_undecodable_entry_falls_back_to_resolver(
        self, directory, user_repo, cache_adapter, redis_test_client, mock_logger
    ):
        # Arrange: garbage bytes under the key the next check will read
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))
        await redis_test_client.set(
            permission_cache_key(user.id, CacheGeneration()), b"\xff\xfe"
        )
        gate = AuthorizationGate(
            resolver=PermissionResolver(user_repo=user_repo),
            permission_cache=PermissionCache(store=cache_adapter, logger=mock_logger),
            logger=mock_logger,
        )

        # Act
        result = await gate.authorize(user.id, "users.view")

        # Assert
        assert isinstance(result, Success)
        assert user_repo.find_roles_calls == 1
        assert "permission_cache_get_failed" in logged_events(mock_logger.warning)
