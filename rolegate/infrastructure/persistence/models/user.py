"""User database model.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - token_version: Incremented atomically in SQL to revoke refresh tokens
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rolegate.domain.enums import UserStatus
from rolegate.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User account.

    Fields:
        email: Unique email address (lowercase, indexed)
        password_hash: Bcrypt hash
        first_name / last_name: Profile
        status: ACTIVE, INACTIVE or SUSPENDED
        token_version: Refresh token revocation counter

    Indexes:
        - ix_users_email: (email) for login queries
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, lowercase)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserStatus.ACTIVE.value,
        server_default=UserStatus.ACTIVE.value,
    )
    token_version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Incremented to revoke all refresh tokens",
    )
