"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, *_IN_USE)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, UNAUTHENTICATED)
- Authorization errors (PERMISSION_DENIED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_PERMISSION_FORMAT = "invalid_permission_format"
    RESET_TOKEN_INVALID = "reset_token_invalid"
    SYSTEM_ROLE_PROTECTED = "system_role_protected"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    ROLE_NOT_FOUND = "role_not_found"
    PERMISSION_NOT_FOUND = "permission_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    ROLE_NAME_ALREADY_EXISTS = "role_name_already_exists"
    PERMISSION_ALREADY_EXISTS = "permission_already_exists"
    ROLE_IN_USE = "role_in_use"
    PERMISSION_IN_USE = "permission_in_use"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_NOT_ACTIVE = "account_not_active"
    TOKEN_INVALID = "token_invalid"
    TOKEN_REVOKED = "token_revoked"
    USER_INACTIVE = "user_inactive"
    UNAUTHENTICATED = "unauthenticated"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Infrastructure (surfaced through CacheError)
    CACHE_UNAVAILABLE = "cache_unavailable"
