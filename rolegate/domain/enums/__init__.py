"""Domain enums for business logic.

Available Enums:
    - UserStatus: Account lifecycle state
    - PermissionMode: How multiple required permissions combine
    - DenyReason: Internal reason an authorization check denied
"""

from rolegate.domain.enums.deny_reason import DenyReason
from rolegate.domain.enums.permission_mode import PermissionMode
from rolegate.domain.enums.user_status import UserStatus

__all__ = ["DenyReason", "PermissionMode", "UserStatus"]
