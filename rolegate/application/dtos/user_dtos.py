"""User administration DTOs."""

from dataclasses import dataclass

from rolegate.application.dtos.auth_dtos import SafeUser


@dataclass(frozen=True, kw_only=True)
class PaginatedUsers:
    """One page of users.

    Attributes:
        users: Users on this page.
        total: Total matching users.
        page: 1-based page number.
        limit: Page size.
        total_pages: ceil(total / limit).
    """

    users: list[SafeUser]
    total: int
    page: int
    limit: int
    total_pages: int
