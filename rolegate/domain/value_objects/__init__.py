"""Domain value objects."""

from rolegate.domain.value_objects.authorized_context import AuthorizedContext
from rolegate.domain.value_objects.permission_string import (
    format_permission,
    is_valid_permission,
    normalize_requirements,
    parse_permission,
)
from rolegate.domain.value_objects.token_payloads import (
    AccessTokenPayload,
    RefreshTokenPayload,
)

__all__ = [
    "AccessTokenPayload",
    "AuthorizedContext",
    "RefreshTokenPayload",
    "format_permission",
    "is_valid_permission",
    "normalize_requirements",
    "parse_permission",
]
