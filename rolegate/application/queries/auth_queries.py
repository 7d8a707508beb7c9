"""Authentication/authorization queries (CQRS read side)."""

from dataclasses import dataclass
from uuid import UUID

from rolegate.domain.enums import PermissionMode


@dataclass(frozen=True, kw_only=True)
class AuthorizeRequest:
    """Authorize a request from its bearer token.

    Attributes:
        bearer_token: Raw access token (without "Bearer "), or None.
        required: One permission string or a collection of them.
        mode: ANY or ALL for multiple requirements.
    """

    bearer_token: str | None
    required: str | frozenset[str] | tuple[str, ...]
    mode: PermissionMode = PermissionMode.ANY


@dataclass(frozen=True, kw_only=True)
class GetCurrentUser:
    user_id: UUID
