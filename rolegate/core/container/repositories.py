"""Repository factories (request-scoped).

Each request gets new repository instances bound to its database session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from rolegate.infrastructure.persistence.repositories import (
        PasswordResetRepository,
        PermissionRepository,
        RoleRepository,
        UserRepository,
    )


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped).

    Usage:
        @router.get("/users")
        async def list_users(
            user_repo: UserRepository = Depends(get_user_repository),
        ):
            ...
    """
    from rolegate.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_role_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "RoleRepository":
    from rolegate.infrastructure.persistence.repositories import RoleRepository

    return RoleRepository(session=session)


async def get_permission_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "PermissionRepository":
    from rolegate.infrastructure.persistence.repositories import PermissionRepository

    return PermissionRepository(session=session)


async def get_password_reset_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "PasswordResetRepository":
    from rolegate.infrastructure.persistence.repositories import (
        PasswordResetRepository,
    )

    return PasswordResetRepository(session=session)
