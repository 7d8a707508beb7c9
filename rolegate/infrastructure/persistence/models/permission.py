"""Permission database model."""

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rolegate.infrastructure.persistence.base import BaseMutableModel


class PermissionModel(BaseMutableModel):
    """A (resource, action) pair.

    Constraints:
        - uq_permissions_resource_action: (resource, action) is unique
    """

    __tablename__ = "permissions"
    __table_args__ = (
        UniqueConstraint("resource", "action", name="uq_permissions_resource_action"),
    )

    resource: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
