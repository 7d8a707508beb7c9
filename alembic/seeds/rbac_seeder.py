"""RBAC seeder: default permissions, system roles and a bootstrap admin.

Idempotent via existence checks - safe to run on every migration.
Existing rows are never modified, so role grants changed through the
admin handlers survive re-seeding.

After initial seeding, all role/permission changes should be managed
via the administration handlers.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from rolegate.core.config import settings
from rolegate.domain.enums import UserStatus
from rolegate.infrastructure.persistence.models import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
    UserModel,
    UserRoleModel,
)
from rolegate.infrastructure.security import BcryptPasswordService

logger = structlog.get_logger(__name__)

# (resource, action, description)
PERMISSIONS: list[tuple[str, str, str]] = [
    ("dashboard", "view", "View the dashboard"),
    ("users", "view", "List and view users"),
    ("users", "create", "Create users"),
    ("users", "edit", "Edit users and their roles"),
    ("users", "delete", "Delete users"),
    ("roles", "view", "List and view roles"),
    ("roles", "manage", "Create, edit and delete roles and permissions"),
]

SUPER_ADMIN_ROLE = "Super Admin"

# role name -> (description, permission strings); None grants everything
ROLES: dict[str, tuple[str, list[str] | None]] = {
    SUPER_ADMIN_ROLE: ("Full access", None),
    "Admin": (
        "User administration",
        [
            "dashboard.view",
            "users.view",
            "users.create",
            "users.edit",
            "roles.view",
        ],
    ),
    "User": ("Default role for new accounts", ["dashboard.view"]),
}


async def seed_permissions(session: AsyncSession) -> dict[str, PermissionModel]:
    """Insert missing permissions. Returns every seeded permission by string."""
    by_code: dict[str, PermissionModel] = {}
    created = 0

    for resource, action, description in PERMISSIONS:
        result = await session.execute(
            select(PermissionModel).where(
                PermissionModel.resource == resource,
                PermissionModel.action == action,
            )
        )
        model = result.scalar_one_or_none()
        if model is None:
            model = PermissionModel(
                id=uuid7(), resource=resource, action=action, description=description
            )
            session.add(model)
            created += 1
        by_code[f"{resource}.{action}"] = model

    await session.flush()
    logger.info("permissions_seeded", created=created, total=len(PERMISSIONS))
    return by_code


async def seed_roles(
    session: AsyncSession, permissions: dict[str, PermissionModel]
) -> dict[str, RoleModel]:
    """Insert missing system roles with their default grants."""
    by_name: dict[str, RoleModel] = {}
    created = 0

    for name, (description, codes) in ROLES.items():
        result = await session.execute(select(RoleModel).where(RoleModel.name == name))
        role = result.scalar_one_or_none()
        if role is None:
            role = RoleModel(
                id=uuid7(), name=name, description=description, is_system=True
            )
            session.add(role)
            await session.flush()
            granted = list(permissions) if codes is None else codes
            for code in granted:
                session.add(
                    RolePermissionModel(
                        id=uuid7(), role_id=role.id, permission_id=permissions[code].id
                    )
                )
            created += 1
        by_name[name] = role

    await session.flush()
    logger.info("roles_seeded", created=created, total=len(ROLES))
    return by_name


async def seed_admin_user(session: AsyncSession, super_admin: RoleModel) -> None:
    """Create the bootstrap administrator if the email is not taken."""
    email = settings.seed_admin_email.strip().lower()
    result = await session.execute(select(UserModel).where(UserModel.email == email))
    if result.scalar_one_or_none() is not None:
        logger.info("admin_user_seed_skipped", reason="exists")
        return

    password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
    password_hash = password_service.hash_password(settings.seed_admin_password)
    admin = UserModel(
        id=uuid7(),
        email=email,
        password_hash=password_hash,
        first_name="System",
        last_name="Administrator",
        status=UserStatus.ACTIVE.value,
        token_version=0,
    )
    session.add(admin)
    await session.flush()
    session.add(UserRoleModel(id=uuid7(), user_id=admin.id, role_id=super_admin.id))
    await session.flush()

    logger.info("admin_user_seeded", user_id=str(admin.id))


async def seed_rbac(session: AsyncSession) -> None:
    """Seed default RBAC data. Idempotent via existence checks.

    Seeds:
        - Permissions (dashboard, users, roles)
        - System roles (Super Admin, Admin, User)
        - Bootstrap admin holding Super Admin

    Args:
        session: Async database session (committed by the caller).
    """
    permissions = await seed_permissions(session)
    roles = await seed_roles(session, permissions)
    await seed_admin_user(session, roles[SUPER_ADMIN_ROLE])
