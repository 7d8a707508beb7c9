"""Infrastructure error types."""

from rolegate.infrastructure.errors.infrastructure_error import (
    CacheError,
    InfrastructureError,
)

__all__ = ["CacheError", "InfrastructureError"]
