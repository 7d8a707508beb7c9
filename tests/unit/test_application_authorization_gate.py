"""Unit tests for AuthorizationGate.

Tests cover:
- ANY / ALL / single requirement evaluation
- Unauthenticated requests
- Uniform denial for missing users and missing permissions
- Cache-first lookups and population on miss
- Invalidation makes role changes visible immediately
- Invalidation that lands while a set is being resolved
- Fail-open when the cache store errors
- Programming errors (empty / malformed requirements)
"""

from uuid import uuid4

import pytest

from rolegate.application.services import (
    AuthorizationGate,
    PermissionCache,
    PermissionResolver,
)
from rolegate.application.services.authorization_gate import is_satisfied
from rolegate.core.enums import ErrorCode
from rolegate.core.errors import AuthenticationError, AuthorizationError
from rolegate.core.result import Failure, Success
from rolegate.domain.enums import PermissionMode
from rolegate.domain.value_objects import AuthorizedContext
from tests.utils.fakes import FailingCacheStore, logged_events


@pytest.mark.unit
class TestIsSatisfied:
    held = frozenset({"users.view", "users.edit"})

    def test_any_needs_one(self):
        assert is_satisfied(self.held, frozenset({"users.edit", "users.delete"}), PermissionMode.ANY)
        assert not is_satisfied(self.held, frozenset({"users.delete"}), PermissionMode.ANY)

    def test_all_needs_every(self):
        assert is_satisfied(self.held, frozenset({"users.view", "users.edit"}), PermissionMode.ALL)
        assert not is_satisfied(
            self.held, frozenset({"users.edit", "users.delete"}), PermissionMode.ALL
        )

    def test_single_requirement_ignores_mode(self):
        for mode in PermissionMode:
            assert is_satisfied(self.held, frozenset({"users.view"}), mode)
            assert not is_satisfied(self.held, frozenset({"roles.manage"}), mode)


@pytest.mark.unit
class TestAuthorizeScenario:
    """User holding Admin = [users.view, users.edit]."""

    @pytest.mark.asyncio
    async def test_admin_can_edit_but_not_delete_until_granted(
        self, directory, user_repo, gate, permission_cache
    ):
        # Arrange
        admin = directory.add_role("Admin", ["users.view", "users.edit"])
        user = directory.add_user(admin)

        # Act / Assert: edit allowed
        result = await gate.authorize(user.id, "users.edit", PermissionMode.ANY)
        assert isinstance(result, Success)
        assert isinstance(result.value, AuthorizedContext)
        assert result.value.user_id == user.id

        # Act / Assert: delete denied
        result = await gate.authorize(user.id, "users.delete", PermissionMode.ANY)
        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)

        # Grant a role with users.delete and invalidate
        deleter = directory.add_role("Deleter", ["users.delete"])
        await user_repo.set_roles(user.id, [admin.id, deleter.id])
        await permission_cache.invalidate(user.id)

        result = await gate.authorize(user.id, "users.delete", PermissionMode.ANY)
        assert isinstance(result, Success)

    @pytest.mark.asyncio
    async def test_without_invalidation_cached_set_is_used(
        self, directory, user_repo, gate
    ):
        admin = directory.add_role("Admin", ["users.view"])
        user = directory.add_user(admin)
        await gate.authorize(user.id, "users.view")

        deleter = directory.add_role("Deleter", ["users.delete"])
        await user_repo.set_roles(user.id, [admin.id, deleter.id])

        result = await gate.authorize(user.id, "users.delete")
        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_revoking_all_roles_denies_everything(
        self, directory, user_repo, gate, permission_cache
    ):
        admin = directory.add_role("Admin", ["users.view", "users.edit"])
        user = directory.add_user(admin)
        assert isinstance(await gate.authorize(user.id, "users.view"), Success)

        await user_repo.set_roles(user.id, [])
        await permission_cache.invalidate(user.id)

        for code in ("users.view", "users.edit"):
            assert isinstance(await gate.authorize(user.id, code), Failure)
        effective = await gate.effective_permissions(user.id)
        assert effective.value == frozenset()


@pytest.mark.unit
class TestAuthorizeModes:
    @pytest.mark.asyncio
    async def test_all_mode_denies_partial_match(self, directory, gate):
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))

        result = await gate.authorize(
            user.id, ["users.view", "users.edit"], PermissionMode.ALL
        )

        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_any_mode_allows_partial_match(self, directory, gate):
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))

        result = await gate.authorize(
            user.id, ["users.view", "users.edit"], PermissionMode.ANY
        )

        assert isinstance(result, Success)
        assert result.value.permissions == frozenset({"users.view"})


@pytest.mark.unit
class TestAuthorizeDenials:
    @pytest.mark.asyncio
    async def test_no_identity_is_unauthenticated(self, gate):
        result = await gate.authorize(None, "users.view")

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_missing_user_and_missing_permission_look_identical(
        self, directory, gate
    ):
        user = directory.add_user()

        missing_user = await gate.authorize(uuid4(), "users.view")
        missing_permission = await gate.authorize(user.id, "users.view")
        unknown_permission = await gate.authorize(user.id, "nosuch.thing")

        errors = [r.error for r in (missing_user, missing_permission, unknown_permission)]
        assert all(isinstance(e, AuthorizationError) for e in errors)
        assert {(e.code, e.message) for e in errors} == {
            (ErrorCode.PERMISSION_DENIED, "Access denied")
        }

    @pytest.mark.asyncio
    async def test_denial_is_logged_with_reason(self, directory, gate, mock_logger):
        user = directory.add_user()

        await gate.authorize(user.id, "users.view")

        assert "authorization_denied" in logged_events(mock_logger.info)
        kwargs = mock_logger.info.call_args.kwargs
        assert kwargs["reason"] == "insufficient_permission"

    @pytest.mark.asyncio
    async def test_empty_requirement_raises(self, gate):
        with pytest.raises(ValueError):
            await gate.authorize(uuid4(), [])

    @pytest.mark.asyncio
    async def test_malformed_requirement_raises(self, gate):
        with pytest.raises(ValueError):
            await gate.authorize(uuid4(), "Users.View")


@pytest.mark.unit
class TestGateCaching:
    @pytest.mark.asyncio
    async def test_second_call_is_served_from_cache(self, directory, user_repo, gate):
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))

        await gate.authorize(user.id, "users.view")
        await gate.authorize(user.id, "users.view")

        assert user_repo.find_roles_calls == 1

    @pytest.mark.asyncio
    async def test_missing_user_is_not_cached(self, user_repo, gate, permission_cache):
        user_id = uuid4()

        await gate.authorize(user_id, "users.view")

        assert await permission_cache.get(user_id) is None

    @pytest.mark.asyncio
    async def test_cache_failure_falls_back_to_resolver(
        self, directory, user_repo, mock_logger
    ):
        store = FailingCacheStore()
        gate = AuthorizationGate(
            resolver=PermissionResolver(user_repo=user_repo),
            permission_cache=PermissionCache(store=store, logger=mock_logger),
            logger=mock_logger,
        )
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))

        allowed = await gate.authorize(user.id, "users.view")
        denied = await gate.authorize(user.id, "users.delete")

        assert isinstance(allowed, Success)
        assert isinstance(denied, Failure)
        assert user_repo.find_roles_calls == 2
        assert "get" in store.calls
        assert "set" not in store.calls


class RevokingResolver(PermissionResolver):
    """Resolver that runs a hook after the first lookup it performs."""

    def __init__(self, user_repo, after_resolve) -> None:
        super().__init__(user_repo=user_repo)
        self._after_resolve = after_resolve

    async def resolve_effective_permissions(self, user_id):
        result = await super().resolve_effective_permissions(user_id)
        if self._after_resolve is not None:
            hook, self._after_resolve = self._after_resolve, None
            await hook()
        return result


@pytest.mark.unit
class TestInvalidationDuringResolve:
    @pytest.mark.asyncio
    async def test_revocation_mid_resolve_is_not_cached_as_allow(
        self, directory, user_repo, permission_cache, mock_logger
    ):
        # Arrange
        admin = directory.add_role("Admin", ["users.delete"])
        user = directory.add_user(admin)

        async def revoke():
            await user_repo.set_roles(user.id, [])
            await permission_cache.invalidate(user.id)

        gate = AuthorizationGate(
            resolver=RevokingResolver(user_repo, revoke),
            permission_cache=permission_cache,
            logger=mock_logger,
        )

        # Act: the in-flight check still sees the old grant
        first = await gate.authorize(user.id, "users.delete")
        second = await gate.authorize(user.id, "users.delete")

        # Assert
        assert isinstance(first, Success)
        assert isinstance(second, Failure)
        assert isinstance(second.error, AuthorizationError)

    @pytest.mark.asyncio
    async def test_flush_mid_resolve_is_not_cached_as_allow(
        self, directory, user_repo, permission_cache, mock_logger
    ):
        admin = directory.add_role("Admin", ["users.delete"])
        user = directory.add_user(admin)

        async def strip_role_permissions():
            directory.roles[admin.id].permissions = []
            await permission_cache.invalidate_all()

        gate = AuthorizationGate(
            resolver=RevokingResolver(user_repo, strip_role_permissions),
            permission_cache=permission_cache,
            logger=mock_logger,
        )

        assert isinstance(await gate.authorize(user.id, "users.delete"), Success)
        assert isinstance(await gate.authorize(user.id, "users.delete"), Failure)

    @pytest.mark.asyncio
    async def test_unrelated_user_entry_survives_invalidation(
        self, directory, gate, user_repo, permission_cache
    ):
        role = directory.add_role("Viewer", ["users.view"])
        alice = directory.add_user(role)
        bob = directory.add_user(role)
        await gate.authorize(alice.id, "users.view")
        await gate.authorize(bob.id, "users.view")

        await permission_cache.invalidate(alice.id)
        await gate.authorize(bob.id, "users.view")

        assert user_repo.find_roles_calls == 2
