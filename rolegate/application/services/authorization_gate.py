"""Authorization gate: the request-time allow/deny decision.

Flow:
1. No identity -> Failure(AuthenticationError UNAUTHENTICATED)
2. Effective permissions: cache hit, else resolve and populate the cache
3. User missing -> deny
4. Single permission -> membership; ALL -> subset; ANY -> intersection
5. Success(AuthorizedContext) or deny

Every deny returns the same AuthorizationError (PERMISSION_DENIED,
"Access denied"). The internal DenyReason is only logged, so callers
cannot tell a missing user from a missing permission, nor a permission
that does not exist from one the user lacks.
"""

from collections.abc import Iterable
from uuid import UUID

from rolegate.application.services.permission_cache import PermissionCache
from rolegate.application.services.permission_resolver import PermissionResolver
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError, AuthorizationError, NotFoundError
from rolegate.core.result import Failure, Result, Success
from rolegate.domain.enums import DenyReason, PermissionMode
from rolegate.domain.protocols.logger_protocol import LoggerProtocol
from rolegate.domain.value_objects import AuthorizedContext, normalize_requirements

ACCESS_DENIED_MESSAGE = "Access denied"


def access_denied(required: Iterable[str] = ()) -> AuthorizationError:
    """The single denial error returned for every deny path."""
    codes = sorted(required)
    return AuthorizationError(
        code=ErrorCode.PERMISSION_DENIED,
        message=ACCESS_DENIED_MESSAGE,
        required_permission=",".join(codes) if codes else None,
    )


def unauthenticated() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.UNAUTHENTICATED,
        message="Authentication required",
    )


def is_satisfied(
    held: frozenset[str], required: frozenset[str], mode: PermissionMode
) -> bool:
    """Evaluate a requirement set against held permissions.

    A single requirement is a membership test whatever the mode.
    """
    if mode is PermissionMode.ALL:
        return required <= held
    return not required.isdisjoint(held)


class AuthorizationGate:
    """Cache-first permission checks.

    Holds no per-request state; a single instance is safe to share
    across concurrent requests.
    """

    def __init__(
        self,
        resolver: PermissionResolver,
        permission_cache: PermissionCache,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize gate.

        Args:
            resolver: Computes permissions from the backing store.
            permission_cache: Memoizes resolved sets (fail-open).
            logger: Structured logger.
        """
        self._resolver = resolver
        self._cache = permission_cache
        self._logger = logger

    async def effective_permissions(
        self, user_id: UUID
    ) -> Result[frozenset[str], NotFoundError]:
        """Cached permission set, resolving and caching on a miss.

        The set is written back under the generation observed before
        resolving, so an invalidation that lands mid-resolve retires it.
        """
        lookup = await self._cache.lookup(user_id)
        if lookup.permissions is not None:
            return Success(value=lookup.permissions)

        result = await self._resolver.resolve_effective_permissions(user_id)
        if isinstance(result, Success) and lookup.generation is not None:
            await self._cache.put(user_id, result.value, generation=lookup.generation)
        return result

    async def authorize(
        self,
        user_id: UUID | None,
        required: str | Iterable[str],
        mode: PermissionMode = PermissionMode.ANY,
    ) -> Result[AuthorizedContext, AuthenticationError | AuthorizationError]:
        """Decide whether a user may perform an operation.

        Args:
            user_id: Verified identity, or None when the request carried none.
            required: One permission string or a collection of them.
            mode: How several requirements combine (ignored for one).

        Returns:
            Success(AuthorizedContext) when allowed.
            Failure(AuthenticationError) when no identity is available.
            Failure(AuthorizationError) for every deny.

        Raises:
            ValueError: If required is empty or contains a malformed string.
        """
        codes = normalize_requirements(required)

        if user_id is None:
            self._logger.info(
                "authorization_denied",
                reason=DenyReason.UNAUTHENTICATED.value,
                required=sorted(codes),
            )
            return Failure(error=unauthenticated())

        match await self.effective_permissions(user_id):
            case Failure():
                self._logger.warning(
                    "authorization_denied",
                    user_id=str(user_id),
                    reason=DenyReason.USER_NOT_FOUND.value,
                    required=sorted(codes),
                )
                return Failure(error=access_denied(codes))
            case Success(value=held):
                if not is_satisfied(held, codes, mode):
                    self._logger.info(
                        "authorization_denied",
                        user_id=str(user_id),
                        reason=DenyReason.INSUFFICIENT_PERMISSION.value,
                        required=sorted(codes),
                        mode=mode.value,
                    )
                    return Failure(error=access_denied(codes))

                self._logger.debug(
                    "authorization_granted",
                    user_id=str(user_id),
                    required=sorted(codes),
                    mode=mode.value,
                )
                return Success(value=AuthorizedContext(user_id=user_id, permissions=held))
            case _:
                # Unreachable but needed for type checker
                return Failure(error=access_denied(codes))
