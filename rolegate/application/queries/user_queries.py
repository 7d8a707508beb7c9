"""User listing queries."""

from dataclasses import dataclass

from rolegate.domain.enums import UserStatus


@dataclass(frozen=True, kw_only=True)
class ListUsers:
    """Paginated user listing.

    Attributes:
        page: 1-based page number.
        limit: Page size (1-100).
        search: Substring of email, first or last name.
        status: Exact status filter.
    """

    page: int = 1
    limit: int = 20
    search: str | None = None
    status: UserStatus | None = None
