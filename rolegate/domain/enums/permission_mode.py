"""Combination mode for multi-permission requirements.

Usage:
    gate.authorize(user_id, {"users.view", "users.edit"}, mode=PermissionMode.ALL)
"""

from enum import Enum


class PermissionMode(str, Enum):
    """How a set of required permissions is evaluated.

    ANY: at least one required permission must be held.
    ALL: every required permission must be held.
    """

    ANY = "any"
    ALL = "all"
