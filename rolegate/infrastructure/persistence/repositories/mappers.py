"""Model-to-entity mapping shared by repositories."""

from rolegate.domain.entities.permission import Permission
from rolegate.domain.entities.role import Role
from rolegate.infrastructure.persistence.models.permission import PermissionModel
from rolegate.infrastructure.persistence.models.role import RoleModel


def permission_to_domain(model: PermissionModel) -> Permission:
    return Permission(
        id=model.id,
        resource=model.resource,
        action=model.action,
        description=model.description,
    )


def role_to_domain(model: RoleModel) -> Role:
    return Role(
        id=model.id,
        name=model.name,
        description=model.description,
        is_system=model.is_system,
        permissions=[permission_to_domain(p) for p in model.permissions],
    )
