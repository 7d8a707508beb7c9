"""Core enums shared across all layers."""

from rolegate.core.enums.environment import Environment
from rolegate.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
