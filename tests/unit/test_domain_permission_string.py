"""Unit tests for the ``resource.action`` permission string format."""

import pytest

from rolegate.domain.value_objects import (
    format_permission,
    is_valid_permission,
    normalize_requirements,
    parse_permission,
)
from rolegate.domain.value_objects.permission_string import is_valid_segment


@pytest.mark.unit
class TestPermissionFormat:
    def test_format_and_parse(self):
        assert format_permission("users", "edit") == "users.edit"
        assert parse_permission("users.edit") == ("users", "edit")

    @pytest.mark.parametrize(
        "code",
        ["users.view", "audit_log.read", "api-keys.rotate", "v2.list"],
    )
    def test_valid_permissions(self, code):
        assert is_valid_permission(code) is True

    @pytest.mark.parametrize(
        "code",
        ["", "users", "users.", ".edit", "Users.Edit", "a.b.c", "users edit", "users.*"],
    )
    def test_invalid_permissions(self, code):
        assert is_valid_permission(code) is False

    def test_segment_rejects_dots_and_uppercase(self):
        assert is_valid_segment("users") is True
        assert is_valid_segment("users.x") is False
        assert is_valid_segment("Users") is False
        assert is_valid_segment("") is False

    def test_format_rejects_bad_parts(self):
        with pytest.raises(ValueError):
            format_permission("Users", "edit")
        with pytest.raises(ValueError):
            format_permission("users", "")

    def test_parse_rejects_malformed(self):
        with pytest.raises(ValueError):
            parse_permission("users")


@pytest.mark.unit
class TestNormalizeRequirements:
    def test_single_string(self):
        assert normalize_requirements("users.view") == frozenset({"users.view"})

    def test_collection_is_deduplicated(self):
        result = normalize_requirements(["users.view", "users.edit", "users.view"])

        assert result == frozenset({"users.view", "users.edit"})

    def test_empty_requirement_raises(self):
        with pytest.raises(ValueError):
            normalize_requirements([])

    def test_malformed_entry_raises(self):
        with pytest.raises(ValueError):
            normalize_requirements(["users.view", "not-a-permission"])
