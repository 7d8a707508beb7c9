"""Role database model."""

from sqlalchemy import Boolean, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rolegate.infrastructure.persistence.base import BaseMutableModel
from rolegate.infrastructure.persistence.models.assignments import (
    RolePermissionModel,
)
from rolegate.infrastructure.persistence.models.permission import PermissionModel


class RoleModel(BaseMutableModel):
    """Named permission group.

    Relationships:
        - permissions: Read-only view over role_permissions, loaded with
          SELECT IN and ordered by resource, action. Writes go through
          RolePermissionModel rows.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    permissions: Mapped[list[PermissionModel]] = relationship(
        PermissionModel,
        secondary=RolePermissionModel.__table__,
        lazy="selectin",
        viewonly=True,
        order_by=(PermissionModel.resource, PermissionModel.action),
    )
