"""Password reset token database model.

Security:
    - token_hash: sha256 of the raw token; the raw token is never stored
    - used_at: Set exactly once by a conditional UPDATE
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rolegate.infrastructure.persistence.base import BaseModel


class PasswordResetTokenModel(BaseModel):
    """Single-use password reset token."""

    __tablename__ = "password_resets"

    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token_hash: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
