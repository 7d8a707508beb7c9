"""PasswordResetRepository - SQLAlchemy implementation.

Single-use guarantee:
    consume() marks the token used with
    ``UPDATE ... WHERE used_at IS NULL AND expires_at > :now`` and only
    proceeds when exactly one row changed. The password update and the
    token_version bump run in the same transaction, so two concurrent
    resets with the same token apply at most one password.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.domain.entities.password_reset_token import PasswordResetToken
from rolegate.infrastructure.persistence.base import ensure_utc
from rolegate.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)
from rolegate.infrastructure.persistence.models.user import UserModel


class PasswordResetRepository:
    """SQLAlchemy implementation of PasswordResetRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> PasswordResetToken:
        """Delete the user's previous tokens and store a new one.

        Args:
            user_id: Token owner.
            token_hash: sha256 of the raw token.
            expires_at: Expiry timestamp (UTC).

        Returns:
            The stored token entity.
        """
        await self.session.execute(
            delete(PasswordResetTokenModel).where(
                PasswordResetTokenModel.user_id == user_id
            )
        )
        model = PasswordResetTokenModel(
            user_id=user_id, token_hash=token_hash, expires_at=expires_at
        )
        self.session.add(model)
        await self.session.commit()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def find_valid_by_hash(
        self, token_hash: str, now: datetime
    ) -> PasswordResetToken | None:
        """Find an unused, unexpired token by exact hash match."""
        stmt = select(PasswordResetTokenModel).where(
            PasswordResetTokenModel.token_hash == token_hash,
            PasswordResetTokenModel.used_at.is_(None),
            PasswordResetTokenModel.expires_at > now,
        )
        model = (await self.session.execute(stmt)).scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def consume(
        self,
        reset_id: UUID,
        *,
        user_id: UUID,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Mark the token used and change the password atomically.

        Returns:
            True if this call consumed the token.
        """
        mark_used = (
            update(PasswordResetTokenModel)
            .where(
                PasswordResetTokenModel.id == reset_id,
                PasswordResetTokenModel.user_id == user_id,
                PasswordResetTokenModel.used_at.is_(None),
                PasswordResetTokenModel.expires_at > now,
            )
            .values(used_at=now)
        )
        result = await self.session.execute(mark_used)
        if (result.rowcount or 0) != 1:
            await self.session.rollback()
            return False

        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                password_hash=password_hash,
                token_version=UserModel.token_version + 1,
            )
        )
        await self.session.commit()
        return True

    def _to_domain(self, model: PasswordResetTokenModel) -> PasswordResetToken:
        return PasswordResetToken(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=ensure_utc(model.expires_at),
            used_at=ensure_utc(model.used_at) if model.used_at else None,
            created_at=ensure_utc(model.created_at),
        )
