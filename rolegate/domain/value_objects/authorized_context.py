"""Explicit identity passed down the call chain after authorization."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizedContext:
    """Result of a successful authorization check.

    Attributes:
        user_id: Authenticated user.
        permissions: Effective permission set used for the decision.
    """

    user_id: UUID
    permissions: frozenset[str] = field(default_factory=frozenset)

    def has_permission(self, permission: str) -> bool:
        """Check membership in the effective permission set."""
        return permission in self.permissions
