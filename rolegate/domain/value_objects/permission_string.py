"""Permission string format: ``resource.action``.

The string form is part of the wire contract. It is compared
byte-for-byte against route requirements, so both parts are lowercase
and neither contains a dot.

Usage:
    >>> format_permission("users", "edit")
    'users.edit'
    >>> parse_permission("users.edit")
    ('users', 'edit')
    >>> is_valid_permission("Users.Edit")
    False
"""

import re
from collections.abc import Iterable

PERMISSION_SEPARATOR = "."
_SEGMENT = r"[a-z0-9_-]+"
_SEGMENT_PATTERN = re.compile(_SEGMENT)
_PERMISSION_PATTERN = re.compile(rf"{_SEGMENT}\.{_SEGMENT}")


def is_valid_segment(value: str) -> bool:
    """Check a resource or action name is lowercase with no dots."""
    return bool(_SEGMENT_PATTERN.fullmatch(value))


def is_valid_permission(code: str) -> bool:
    """Check a string is a well-formed ``resource.action`` permission."""
    return bool(_PERMISSION_PATTERN.fullmatch(code))


def format_permission(resource: str, action: str) -> str:
    """Build the canonical permission string.

    Args:
        resource: Resource name.
        action: Action name.

    Returns:
        str: ``resource.action``.

    Raises:
        ValueError: If either part is empty, uppercase or dotted.
    """
    if not is_valid_segment(resource):
        raise ValueError(f"Invalid permission resource: {resource!r}")
    if not is_valid_segment(action):
        raise ValueError(f"Invalid permission action: {action!r}")
    return f"{resource}{PERMISSION_SEPARATOR}{action}"


def parse_permission(code: str) -> tuple[str, str]:
    """Split a permission string into (resource, action).

    Raises:
        ValueError: If the string is malformed.
    """
    if not is_valid_permission(code):
        raise ValueError(f"Invalid permission string: {code!r}")
    resource, action = code.split(PERMISSION_SEPARATOR)
    return resource, action


def normalize_requirements(required: str | Iterable[str]) -> frozenset[str]:
    """Normalize a single permission or a collection into a frozenset.

    Args:
        required: One permission string or an iterable of them.

    Returns:
        frozenset[str]: Validated, deduplicated permission strings.

    Raises:
        ValueError: If the requirement is empty or any entry is malformed.
    """
    codes = frozenset([required]) if isinstance(required, str) else frozenset(required)
    if not codes:
        raise ValueError("At least one required permission must be given")
    for code in codes:
        if not is_valid_permission(code):
            raise ValueError(f"Invalid permission string: {code!r}")
    return codes
