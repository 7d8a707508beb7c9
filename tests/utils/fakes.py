"""In-memory fakes for repository and cache protocols.

The fakes share one Directory so user, role and permission repositories
see each other's writes, like the SQL repositories sharing a session.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from rolegate.core.enums import ErrorCode
from rolegate.core.result import Failure, Result
from rolegate.domain.entities.password_reset_token import PasswordResetToken
from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.role import Role
from rolegate.domain.entities.user import User
from rolegate.domain.enums import UserStatus
from rolegate.infrastructure.enums import InfrastructureErrorCode
from rolegate.infrastructure.errors import CacheError


def make_user(
    email: str = "ada@example.com",
    status: UserStatus = UserStatus.ACTIVE,
    token_version: int = 0,
    password_hash: str = "hashed_password",
    user_id: UUID | None = None,
) -> User:
    return User(
        id=user_id or uuid4(),
        email=email,
        password_hash=password_hash,
        first_name="Ada",
        last_name="Lovelace",
        status=status,
        token_version=token_version,
    )


def make_permission(code: str) -> Permission:
    resource, action = code.split(".")
    return Permission(id=uuid4(), resource=resource, action=action)


def logged_events(mock_method) -> list[str]:
    """Event names passed to a mocked logger method."""
    return [c.args[0] for c in mock_method.call_args_list]


@dataclass
class Directory:
    """Shared in-memory state for the fake repositories."""

    users: dict[UUID, User] = field(default_factory=dict)
    roles: dict[UUID, Role] = field(default_factory=dict)
    permissions: dict[UUID, Permission] = field(default_factory=dict)
    user_roles: dict[UUID, list[UUID]] = field(default_factory=dict)

    def add_permission(self, code: str) -> Permission:
        permission = make_permission(code)
        self.permissions[permission.id] = permission
        return permission

    def add_role(
        self, name: str, codes: Sequence[str] = (), is_system: bool = False
    ) -> Role:
        by_code = {p.code: p for p in self.permissions.values()}
        granted = [by_code.get(code) or self.add_permission(code) for code in codes]
        role = Role(id=uuid4(), name=name, is_system=is_system, permissions=granted)
        self.roles[role.id] = role
        return role

    def add_user(self, *roles: Role, **kwargs) -> User:
        user = make_user(**kwargs)
        self.users[user.id] = user
        self.user_roles[user.id] = [role.id for role in roles]
        return user


class InMemoryUserRepository:
    def __init__(self, directory: Directory) -> None:
        self.directory = directory
        self.find_roles_calls = 0

    async def find_by_id(self, user_id: UUID) -> User | None:
        user = self.directory.users.get(user_id)
        return replace(user) if user else None

    async def find_by_email(self, email: str) -> User | None:
        for user in self.directory.users.values():
            if user.email.lower() == email.lower():
                return replace(user)
        return None

    async def list_users(self, *, page, limit, search=None, status=None):
        users = list(self.directory.users.values())
        if search:
            users = [u for u in users if search.lower() in u.email.lower()]
        if status is not None:
            users = [u for u in users if u.status == status]
        start = (page - 1) * limit
        return users[start : start + limit], len(users)

    async def save(
        self,
        user: User,
        role_ids: Sequence[UUID] = (),
        assigned_by: UUID | None = None,
    ) -> None:
        self.directory.users[user.id] = replace(user)
        self.directory.user_roles[user.id] = list(dict.fromkeys(role_ids))

    async def update(
        self,
        user: User,
        role_ids: Sequence[UUID] | None = None,
        assigned_by: UUID | None = None,
    ) -> None:
        stored = self.directory.users[user.id]
        self.directory.users[user.id] = replace(
            user,
            token_version=stored.token_version,
            password_hash=stored.password_hash,
        )
        if role_ids is not None:
            self.directory.user_roles[user.id] = list(dict.fromkeys(role_ids))

    async def delete(self, user_id: UUID) -> bool:
        return await self.bulk_delete([user_id]) == 1

    async def bulk_delete(self, user_ids: Sequence[UUID]) -> int:
        deleted = 0
        for user_id in user_ids:
            if self.directory.users.pop(user_id, None) is not None:
                self.directory.user_roles.pop(user_id, None)
                deleted += 1
        return deleted

    async def find_roles_with_permissions(self, user_id: UUID) -> list[Role] | None:
        self.find_roles_calls += 1
        if user_id not in self.directory.users:
            return None
        return [
            self.directory.roles[role_id]
            for role_id in self.directory.user_roles.get(user_id, [])
            if role_id in self.directory.roles
        ]

    async def get_token_version(self, user_id: UUID) -> int | None:
        user = self.directory.users.get(user_id)
        return user.token_version if user else None

    async def increment_token_version(self, user_id: UUID) -> int | None:
        user = self.directory.users.get(user_id)
        if user is None:
            return None
        user.token_version += 1
        return user.token_version

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        user = self.directory.users.get(user_id)
        if user is None:
            return False
        user.password_hash = password_hash
        user.token_version += 1
        return True

    async def set_roles(
        self,
        user_id: UUID,
        role_ids: Sequence[UUID],
        assigned_by: UUID | None = None,
    ) -> None:
        self.directory.user_roles[user_id] = list(dict.fromkeys(role_ids))

    async def get_role_ids(self, user_id: UUID) -> list[UUID]:
        return list(self.directory.user_roles.get(user_id, []))


class InMemoryRoleRepository:
    def __init__(self, directory: Directory) -> None:
        self.directory = directory

    async def find_by_id(self, role_id: UUID) -> Role | None:
        role = self.directory.roles.get(role_id)
        return replace(role, permissions=list(role.permissions)) if role else None

    async def find_by_name(self, name: str) -> Role | None:
        for role in self.directory.roles.values():
            if role.name == name:
                return replace(role, permissions=list(role.permissions))
        return None

    async def find_by_ids(self, role_ids: Sequence[UUID]) -> list[Role]:
        return [self.directory.roles[r] for r in role_ids if r in self.directory.roles]

    async def list_all(self) -> list[Role]:
        return sorted(self.directory.roles.values(), key=lambda r: r.name)

    async def save(self, role: Role) -> None:
        self.directory.roles[role.id] = role

    async def update(
        self, role: Role, permission_ids: Sequence[UUID] | None = None
    ) -> None:
        stored = self.directory.roles[role.id]
        stored.name = role.name
        stored.description = role.description
        if permission_ids is not None:
            await self.set_permissions(role.id, permission_ids)

    async def set_permissions(
        self, role_id: UUID, permission_ids: Sequence[UUID]
    ) -> None:
        self.directory.roles[role_id].permissions = [
            self.directory.permissions[p] for p in dict.fromkeys(permission_ids)
        ]

    async def delete(self, role_id: UUID) -> bool:
        return self.directory.roles.pop(role_id, None) is not None

    async def count_users(self, role_id: UUID) -> int:
        return sum(role_id in ids for ids in self.directory.user_roles.values())


class InMemoryPermissionRepository:
    def __init__(self, directory: Directory) -> None:
        self.directory = directory

    async def find_by_id(self, permission_id: UUID) -> Permission | None:
        permission = self.directory.permissions.get(permission_id)
        return replace(permission) if permission else None

    async def find_by_resource_action(
        self, resource: str, action: str
    ) -> Permission | None:
        for permission in self.directory.permissions.values():
            if (permission.resource, permission.action) == (resource, action):
                return replace(permission)
        return None

    async def find_by_ids(self, permission_ids: Sequence[UUID]) -> list[Permission]:
        return [
            self.directory.permissions[p]
            for p in permission_ids
            if p in self.directory.permissions
        ]

    async def list_all(self) -> list[Permission]:
        return list(self.directory.permissions.values())

    async def save(self, permission: Permission) -> None:
        self.directory.permissions[permission.id] = permission

    async def update(self, permission: Permission) -> None:
        # Mutate in place so roles holding the permission see the new name
        stored = self.directory.permissions[permission.id]
        stored.resource = permission.resource
        stored.action = permission.action
        stored.description = permission.description

    async def delete(self, permission_id: UUID) -> bool:
        return self.directory.permissions.pop(permission_id, None) is not None

    async def count_roles(self, permission_id: UUID) -> int:
        return sum(
            any(p.id == permission_id for p in role.permissions)
            for role in self.directory.roles.values()
        )


class InMemoryPasswordResetRepository:
    def __init__(self, users: InMemoryUserRepository) -> None:
        self.users = users
        self.tokens: dict[UUID, PasswordResetToken] = {}

    async def create(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> PasswordResetToken:
        self.tokens = {k: t for k, t in self.tokens.items() if t.user_id != user_id}
        token = PasswordResetToken(
            id=uuid4(), user_id=user_id, token_hash=token_hash, expires_at=expires_at
        )
        self.tokens[token.id] = token
        return token

    async def find_valid_by_hash(
        self, token_hash: str, now: datetime
    ) -> PasswordResetToken | None:
        for token in self.tokens.values():
            if token.token_hash == token_hash and token.is_valid(now):
                return replace(token)
        return None

    async def consume(
        self, reset_id: UUID, *, user_id: UUID, password_hash: str, now: datetime
    ) -> bool:
        token = self.tokens.get(reset_id)
        if token is None or not token.is_valid(now):
            return False
        token.used_at = now
        return await self.users.update_password(user_id, password_hash)


class FailingCacheStore:
    """CacheProtocol implementation whose every call fails."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _error(self, op: str) -> Failure[CacheError]:
        self.calls.append(op)
        return Failure(
            error=CacheError(
                code=ErrorCode.CACHE_UNAVAILABLE,
                message="Cache unavailable",
                infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
            )
        )

    async def get(self, key: str) -> Result[str | None, CacheError]:
        return self._error("get")

    async def set(
        self, key: str, value: str, ttl: int | None = None
    ) -> Result[None, CacheError]:
        return self._error("set")

    async def delete(self, key: str) -> Result[bool, CacheError]:
        return self._error("delete")

    async def delete_pattern(self, pattern: str) -> Result[int, CacheError]:
        return self._error("delete_pattern")

    async def incr(self, key: str) -> Result[int, CacheError]:
        return self._error("incr")

    async def ping(self) -> Result[bool, CacheError]:
        return self._error("ping")


__all__ = [
    "Directory",
    "logged_events",
    "FailingCacheStore",
    "InMemoryPasswordResetRepository",
    "InMemoryPermissionRepository",
    "InMemoryRoleRepository",
    "InMemoryUserRepository",
    "make_permission",
    "make_user",
]
