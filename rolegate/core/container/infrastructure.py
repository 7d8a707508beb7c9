"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console)
- Cache store (Redis, or in-process when no Redis URL is configured)
- Permission cache
- Database (SQLAlchemy async)
- Password hashing (bcrypt)
- Token services (JWT, password reset)
- Password reset notifier
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.core.config import settings
from rolegate.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from rolegate.application.services.permission_cache import PermissionCache
    from rolegate.domain.protocols import (
        CacheProtocol,
        LoggerProtocol,
        PasswordHashingProtocol,
        PasswordResetNotifierProtocol,
        PasswordResetTokenServiceProtocol,
        TokenServiceProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    JSON output in testing and production (or when LOG_JSON is set),
    human-readable console output otherwise.
    """
    from rolegate.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.log_json or not settings.is_development
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_cache_store() -> "CacheProtocol":
    """Get cache store singleton (app-scoped).

    Returns RedisAdapter with connection pooling when REDIS_URL is set,
    otherwise a per-process InMemoryCacheAdapter.
    """
    if settings.redis_url is None:
        from rolegate.infrastructure.cache.memory_adapter import InMemoryCacheAdapter

        return InMemoryCacheAdapter()

    from redis.asyncio import ConnectionPool, Redis

    from rolegate.infrastructure.cache.redis_adapter import RedisAdapter

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return RedisAdapter(redis_client=Redis(connection_pool=pool))


@lru_cache()
def get_permission_cache() -> "PermissionCache":
    """Get permission cache singleton (app-scoped)."""
    from rolegate.application.services.permission_cache import PermissionCache

    return PermissionCache(
        store=get_cache_store(),
        logger=get_logger(),
        ttl_seconds=settings.permission_cache_ttl_seconds,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get bcrypt password service singleton (app-scoped)."""
    from rolegate.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenServiceProtocol":
    """Get JWT token service singleton (app-scoped).

    Access and refresh tokens are signed with separate secrets.
    """
    from rolegate.infrastructure.security import JWTService

    return JWTService(
        access_secret=settings.jwt_access_secret,
        refresh_secret=settings.jwt_refresh_secret,
        access_expire_minutes=settings.access_token_expire_minutes,
        refresh_expire_days=settings.refresh_token_expire_days,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache()
def get_reset_token_service() -> "PasswordResetTokenServiceProtocol":
    from rolegate.infrastructure.security import PasswordResetTokenService

    return PasswordResetTokenService(
        expire_minutes=settings.password_reset_expire_minutes
    )


@lru_cache()
def get_reset_notifier() -> "PasswordResetNotifierProtocol":
    """Get password reset notifier singleton (app-scoped).

    Reset links are written to the structured log; mail delivery is
    wired in by replacing this factory.
    """
    from rolegate.infrastructure.notifications.logging_notifier import (
        LoggingPasswordResetNotifier,
    )

    return LoggingPasswordResetNotifier(logger=get_logger())


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
