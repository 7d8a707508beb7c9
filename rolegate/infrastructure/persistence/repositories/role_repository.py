"""RoleRepository - SQLAlchemy implementation of RoleRepository protocol."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities.role import Role
from rolegate.infrastructure.persistence.models.assignments import (
    RolePermissionModel,
    UserRoleModel,
)
from rolegate.infrastructure.persistence.models.role import RoleModel
from rolegate.infrastructure.persistence.repositories.mappers import role_to_domain


class RoleRepository:
    """SQLAlchemy implementation of RoleRepository protocol.

    Reads use populate_existing so a role fetched after
    set_permissions() in the same session reflects the new grants.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, role_id: UUID) -> Role | None:
        stmt = (
            select(RoleModel)
            .where(RoleModel.id == role_id)
            .execution_options(populate_existing=True)
        )
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return role_to_domain(model) if model is not None else None

    async def find_by_name(self, name: str) -> Role | None:
        stmt = (
            select(RoleModel)
            .where(RoleModel.name == name)
            .execution_options(populate_existing=True)
        )
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return role_to_domain(model) if model is not None else None

    async def find_by_ids(self, role_ids: Sequence[UUID]) -> list[Role]:
        if not role_ids:
            return []
        stmt = (
            select(RoleModel)
            .where(RoleModel.id.in_(list(role_ids)))
            .order_by(RoleModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [role_to_domain(m) for m in result.scalars().all()]

    async def list_all(self) -> list[Role]:
        stmt = (
            select(RoleModel)
            .order_by(RoleModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [role_to_domain(m) for m in result.scalars().all()]

    async def save(self, role: Role) -> None:
        """Create a role together with its permission grants.

        Raises:
            IntegrityError: If the name already exists.
        """
        self.session.add(
            RoleModel(
                id=role.id,
                name=role.name,
                description=role.description,
                is_system=role.is_system,
            )
        )
        await self.session.flush()
        for permission in role.permissions:
            self.session.add(
                RolePermissionModel(role_id=role.id, permission_id=permission.id)
            )
        await self.session.commit()

    async def update(
        self, role: Role, permission_ids: Sequence[UUID] | None = None
    ) -> None:
        """Persist name and description.

        When permission_ids is given the grants are replaced and everything
        commits together.

        Raises:
            NoResultFound: If role doesn't exist.
        """
        stmt = select(RoleModel).where(RoleModel.id == role.id)
        model = (await self.session.execute(stmt)).scalar_one()
        model.name = role.name
        model.description = role.description
        if permission_ids is not None:
            await self._replace_permissions(role.id, permission_ids)
        await self.session.commit()

    async def set_permissions(
        self, role_id: UUID, permission_ids: Sequence[UUID]
    ) -> None:
        """Replace the role's grants in one transaction."""
        await self._replace_permissions(role_id, permission_ids)
        await self.session.commit()

    async def _replace_permissions(
        self, role_id: UUID, permission_ids: Sequence[UUID]
    ) -> None:
        await self.session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        for permission_id in dict.fromkeys(permission_ids):
            self.session.add(
                RolePermissionModel(role_id=role_id, permission_id=permission_id)
            )

    async def delete(self, role_id: UUID) -> bool:
        await self.session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        await self.session.execute(
            delete(UserRoleModel).where(UserRoleModel.role_id == role_id)
        )
        result = await self.session.execute(
            delete(RoleModel).where(RoleModel.id == role_id)
        )
        await self.session.commit()
        return (result.rowcount or 0) == 1

    async def count_users(self, role_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(UserRoleModel)
            .where(UserRoleModel.role_id == role_id)
        )
        return (await self.session.execute(stmt)).scalar_one()
