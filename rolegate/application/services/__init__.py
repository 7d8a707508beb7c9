"""Application services: permission resolution, caching and the gate."""

from rolegate.application.services.authorization_gate import AuthorizationGate
from rolegate.application.services.permission_cache import PermissionCache
from rolegate.application.services.permission_resolver import PermissionResolver

__all__ = ["AuthorizationGate", "PermissionCache", "PermissionResolver"]
