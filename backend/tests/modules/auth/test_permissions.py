"""Tests for role permissions and wildcard matching."""

import pytest

from modules.auth.permissions import has_permission, permission_matches
from shared.models import UserRole


class TestPermissionMatches:
    @pytest.mark.parametrize(
        "granted,required,expected",
        [
            ("*", "anything:at_all", True),
            ("files:read", "files:read", True),
            ("files:read", "files:write", False),
            ("files:*", "files:delete", True),
            ("files:*", "filesystem:read", False),
            ("files:*", "collections:read", False),
            ("*:read", "files:read", False),
        ],
    )
    def test_matching(self, granted, required, expected):
        assert permission_matches(granted, required) is expected


class TestHasPermission:
    def test_admin_has_everything(self):
        assert has_permission(UserRole.ADMIN, "users:delete")
        assert has_permission(UserRole.ADMIN, "billing:write")

    def test_manager_wildcards(self):
        assert has_permission(UserRole.MANAGER, "collections:delete")
        assert has_permission(UserRole.MANAGER, "users:invite")
        assert not has_permission(UserRole.MANAGER, "users:delete")

    def test_user_is_limited(self):
        assert has_permission(UserRole.USER, "files:create")
        assert not has_permission(UserRole.USER, "files:delete")
        assert not has_permission(UserRole.USER, "users:read")
