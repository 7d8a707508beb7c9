"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.

Concurrency:
    token_version is only ever changed with a single
    ``UPDATE ... SET token_version = token_version + 1`` statement, so
    concurrent logouts/password changes never lose an increment.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities.role import Role
from rolegate.domain.entities.user import User
from rolegate.domain.enums import UserStatus
from rolegate.infrastructure.persistence.base import ensure_utc
from rolegate.infrastructure.persistence.models.assignments import UserRoleModel
from rolegate.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)
from rolegate.infrastructure.persistence.models.role import RoleModel
from rolegate.infrastructure.persistence.models.user import UserModel
from rolegate.infrastructure.persistence.repositories.mappers import role_to_domain


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from the UserRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: User's email address.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(func.lower(UserModel.email) == email.lower())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    async def list_users(
        self,
        *,
        page: int,
        limit: int,
        search: str | None = None,
        status: UserStatus | None = None,
    ) -> tuple[list[User], int]:
        """List users newest first, filtered by search text and status.

        Args:
            page: 1-based page number.
            limit: Page size.
            search: Case-insensitive substring of email, first or last name.
            status: Exact status filter.

        Returns:
            Tuple of (users on this page, total matching count).
        """
        conditions = []
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(UserModel.email).like(pattern),
                    func.lower(UserModel.first_name).like(pattern),
                    func.lower(UserModel.last_name).like(pattern),
                )
            )
        if status is not None:
            conditions.append(UserModel.status == status.value)

        count_stmt = select(func.count()).select_from(UserModel).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(UserModel)
            .where(*conditions)
            .order_by(UserModel.created_at.desc(), UserModel.email)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        users = [self._to_domain(m) for m in result.scalars().all()]
        return users, total

    async def save(
        self,
        user: User,
        role_ids: Sequence[UUID] = (),
        assigned_by: UUID | None = None,
    ) -> None:
        """Create new user in database.

        Args:
            user: Domain User entity to persist.
            role_ids: Roles assigned in the same transaction.
            assigned_by: Admin making the assignment, if any.

        Raises:
            IntegrityError: If email already exists.
        """
        user_model = self._to_model(user)
        self.session.add(user_model)
        if role_ids:
            await self.session.flush()
            self._add_roles(user.id, role_ids, assigned_by)
        await self.session.commit()
        await self.session.refresh(user_model)

    async def update(
        self,
        user: User,
        role_ids: Sequence[UUID] | None = None,
        assigned_by: UUID | None = None,
    ) -> None:
        """Update profile and status of an existing user.

        token_version and password_hash are not written here; they change
        only through increment_token_version() and update_password().
        When role_ids is given the assignments are replaced and everything
        commits together.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.email = user.email
        user_model.first_name = user.first_name
        user_model.last_name = user.last_name
        user_model.status = user.status.value
        if role_ids is not None:
            await self._replace_roles(user.id, role_ids, assigned_by)

        await self.session.commit()
        await self.session.refresh(user_model)

    async def delete(self, user_id: UUID) -> bool:
        """Hard-delete a user with its role assignments and reset tokens.

        Returns:
            True if a user was deleted.
        """
        return await self.bulk_delete([user_id]) == 1

    async def bulk_delete(self, user_ids: Sequence[UUID]) -> int:
        """Hard-delete several users.

        Returns:
            Number of users deleted.
        """
        if not user_ids:
            return 0
        ids = list(user_ids)
        await self.session.execute(
            delete(UserRoleModel).where(UserRoleModel.user_id.in_(ids))
        )
        await self.session.execute(
            update(UserRoleModel)
            .where(UserRoleModel.assigned_by.in_(ids))
            .values(assigned_by=None)
        )
        await self.session.execute(
            delete(PasswordResetTokenModel).where(
                PasswordResetTokenModel.user_id.in_(ids)
            )
        )
        result = await self.session.execute(
            delete(UserModel).where(UserModel.id.in_(ids))
        )
        await self.session.commit()
        return result.rowcount or 0

    async def find_roles_with_permissions(self, user_id: UUID) -> list[Role] | None:
        """Load the user's roles with their permissions.

        Returns:
            Roles ordered by name (empty list when none assigned), or None
            when the user does not exist.
        """
        exists_stmt = select(UserModel.id).where(UserModel.id == user_id)
        if (await self.session.execute(exists_stmt)).scalar_one_or_none() is None:
            return None

        stmt = (
            select(RoleModel)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user_id)
            .order_by(RoleModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [role_to_domain(m) for m in result.scalars().unique().all()]

    async def get_token_version(self, user_id: UUID) -> int | None:
        """Current token version, or None if the user does not exist."""
        stmt = select(UserModel.token_version).where(UserModel.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_token_version(self, user_id: UUID) -> int | None:
        """Atomically increment token_version in SQL.

        Returns:
            New version, or None if the user does not exist.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(token_version=UserModel.token_version + 1)
            .returning(UserModel.token_version)
        )
        result = await self.session.execute(stmt)
        new_version = result.scalar_one_or_none()
        await self.session.commit()
        return new_version

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        """Replace the password hash and bump token_version in one statement.

        Returns:
            True if the user exists.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                password_hash=password_hash,
                token_version=UserModel.token_version + 1,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return (result.rowcount or 0) == 1

    async def set_roles(
        self,
        user_id: UUID,
        role_ids: Sequence[UUID],
        assigned_by: UUID | None = None,
    ) -> None:
        """Replace all role assignments of a user in one transaction."""
        await self._replace_roles(user_id, role_ids, assigned_by)
        await self.session.commit()

    async def _replace_roles(
        self,
        user_id: UUID,
        role_ids: Sequence[UUID],
        assigned_by: UUID | None,
    ) -> None:
        await self.session.execute(
            delete(UserRoleModel).where(UserRoleModel.user_id == user_id)
        )
        self._add_roles(user_id, role_ids, assigned_by)

    def _add_roles(
        self,
        user_id: UUID,
        role_ids: Sequence[UUID],
        assigned_by: UUID | None,
    ) -> None:
        for role_id in dict.fromkeys(role_ids):
            self.session.add(
                UserRoleModel(user_id=user_id, role_id=role_id, assigned_by=assigned_by)
            )

    async def get_role_ids(self, user_id: UUID) -> list[UUID]:
        """IDs of roles currently assigned to a user."""
        stmt = select(UserRoleModel.role_id).where(UserRoleModel.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            status=UserStatus(user_model.status),
            token_version=user_model.token_version,
            created_at=ensure_utc(user_model.created_at),
            updated_at=ensure_utc(user_model.updated_at),
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            status=user.status.value,
            token_version=user.token_version,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
