"""List users handler (paginated, searchable)."""

import math

from rolegate.application.dtos import PaginatedUsers, SafeUser
from rolegate.application.queries.user_queries import ListUsers
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import ValidationError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.protocols import UserRepository

MAX_PAGE_SIZE = 100


class ListUsersHandler:
    """Handler for ListUsers query."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: ListUsers) -> Result[PaginatedUsers, ValidationError]:
        if query.page < 1:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="page must be at least 1",
                    field="page",
                )
            )
        if not 1 <= query.limit <= MAX_PAGE_SIZE:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"limit must be between 1 and {MAX_PAGE_SIZE}",
                    field="limit",
                )
            )

        search = query.search.strip() if query.search else None
        users, total = await self._user_repo.list_users(
            page=query.page,
            limit=query.limit,
            search=search or None,
            status=query.status,
        )
        return Success(
            value=PaginatedUsers(
                users=[SafeUser.from_entity(u) for u in users],
                total=total,
                page=query.page,
                limit=query.limit,
                total_pages=math.ceil(total / query.limit),
            )
        )
