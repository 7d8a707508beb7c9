"""PermissionRepository - SQLAlchemy implementation of PermissionRepository protocol."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities.permission import Permission
from rolegate.infrastructure.persistence.models.assignments import (
    RolePermissionModel,
)
from rolegate.infrastructure.persistence.models.permission import PermissionModel
from rolegate.infrastructure.persistence.repositories.mappers import (
    permission_to_domain,
)


class PermissionRepository:
    """SQLAlchemy implementation of PermissionRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, permission_id: UUID) -> Permission | None:
        stmt = select(PermissionModel).where(PermissionModel.id == permission_id)
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return permission_to_domain(model) if model is not None else None

    async def find_by_resource_action(
        self, resource: str, action: str
    ) -> Permission | None:
        stmt = select(PermissionModel).where(
            PermissionModel.resource == resource,
            PermissionModel.action == action,
        )
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return permission_to_domain(model) if model is not None else None

    async def find_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]:
        if not permission_ids:
            return []
        stmt = (
            select(PermissionModel)
            .where(PermissionModel.id.in_(list(permission_ids)))
            .order_by(PermissionModel.resource, PermissionModel.action)
        )
        result = await self.session.execute(stmt)
        return [permission_to_domain(m) for m in result.scalars().all()]

    async def list_all(self) -> list[Permission]:
        stmt = select(PermissionModel).order_by(
            PermissionModel.resource, PermissionModel.action
        )
        result = await self.session.execute(stmt)
        return [permission_to_domain(m) for m in result.scalars().all()]

    async def save(self, permission: Permission) -> None:
        """Create a permission.

        Raises:
            IntegrityError: If (resource, action) already exists.
        """
        self.session.add(
            PermissionModel(
                id=permission.id,
                resource=permission.resource,
                action=permission.action,
                description=permission.description,
            )
        )
        await self.session.commit()

    async def update(self, permission: Permission) -> None:
        """Persist resource, action and description.

        Raises:
            NoResultFound: If permission doesn't exist.
        """
        stmt = select(PermissionModel).where(PermissionModel.id == permission.id)
        model = (await self.session.execute(stmt)).scalar_one()
        model.resource = permission.resource
        model.action = permission.action
        model.description = permission.description
        await self.session.commit()

    async def delete(self, permission_id: UUID) -> bool:
        result = await self.session.execute(
            delete(PermissionModel).where(PermissionModel.id == permission_id)
        )
        await self.session.commit()
        return (result.rowcount or 0) == 1

    async def count_roles(self, permission_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(RolePermissionModel)
            .where(RolePermissionModel.permission_id == permission_id)
        )
        return (await self.session.execute(stmt)).scalar_one()
