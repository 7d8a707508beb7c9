"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Uniqueness and in-use conflicts
- AuthenticationError: Credential and token failures
- AuthorizationError: Access denied

Usage:
    return Failure(error=ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
        resource_type="User",
        conflicting_field="email",
    ))
"""

from dataclasses import dataclass

from rolegate.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Role, Permission).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, still referenced).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email, name, etc.).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, invalid or revoked token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (access denied).

    The message is always generic. required_permission is kept for
    internal logging and never rendered to the caller.

    Attributes:
        required_permission: Permission(s) that were required.
    """

    required_permission: str | None = None
