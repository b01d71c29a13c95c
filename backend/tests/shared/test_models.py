"""Tests for shared/models.py."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from shared.models import AuthUser, PaginatedResult, PaginationOptions, RequestContext, User, UserRole


def make_user(**overrides) -> User:
    data = {
        "id": "user_x",
        "email": "someone@example.com",
        "name": "Someone",
        "password": "secret",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return User(**data)


class TestUser:
    def test_to_auth_user_strips_password(self):
        auth_user = make_user().to_auth_user()
        assert type(auth_user) is AuthUser
        assert "password" not in auth_user.model_dump()

    def test_defaults(self):
        user = make_user()
        assert user.role is UserRole.USER
        assert user.active

    def test_serializes_camel_case(self):
        dumped = make_user(last_login=datetime(2024, 2, 1, tzinfo=timezone.utc)).to_auth_user().model_dump(
            by_alias=True
        )
        assert "lastLogin" in dumped
        assert "createdAt" in dumped

    def test_accepts_camel_case_input(self):
        user = AuthUser.model_validate(
            {"id": "u", "email": "u@example.com", "name": "U", "createdAt": "2024-01-01T00:00:00Z"}
        )
        assert user.created_at.year == 2024

    def test_frozen(self):
        user = make_user().to_auth_user()
        with pytest.raises(PydanticValidationError):
            user.name = "Changed"


class TestPaginationOptions:
    def test_defaults(self):
        options = PaginationOptions()
        assert options.page == 1
        assert options.limit == 20
        assert options.offset == 0

    def test_offset(self):
        assert PaginationOptions(page=3, limit=10).offset == 20

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (1, 101)])
    def test_out_of_bounds_rejected(self, page, limit):
        with pytest.raises(PydanticValidationError):
            PaginationOptions(page=page, limit=limit)


class TestPaginatedResult:
    def test_generic(self):
        result = PaginatedResult[int](items=[1, 2], total=5, page=1, limit=2)
        assert result.items == [1, 2]
        assert result.total == 5


class TestRequestContext:
    def test_starts_anonymous(self):
        context = RequestContext("req-1", 0.0, "127.0.0.1")
        assert context.user is None
        assert "req-1" in repr(context)
