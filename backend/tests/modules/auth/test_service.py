"""Tests for the auth service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.auth.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    RefreshTokenRequiredError,
)
from modules.auth.models import RegisterRequest
from modules.auth.service import AuthService
from modules.users.repository import UserRepository
from shared.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", jwt_secret="unit-test-secret")


@pytest.fixture
def users() -> UserRepository:
    return UserRepository()


@pytest.fixture
def service(users, settings) -> AuthService:
    return AuthService(users, settings=settings)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, service):
        result = await service.login_user("admin@banedonv.com", "admin123")
        assert result.user.id == "user_1"
        assert result.token
        assert result.refresh_token
        assert result.expires_in == "1h"
        assert "password" not in result.user.model_dump()

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, service):
        result = await service.login_user("ADMIN@banedonv.com", "admin123")
        assert result.user.id == "user_1"

    @pytest.mark.asyncio
    async def test_login_updates_last_login(self, service, users):
        assert users.find_by_id("user_1").last_login is None
        await service.login_user("admin@banedonv.com", "admin123")
        assert users.find_by_id("user_1").last_login is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.login_user("admin@banedonv.com", "wrong")
        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "AUTH_INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        with pytest.raises(InvalidCredentialsError):
            await service.login_user("nobody@banedonv.com", "admin123")

    @pytest.mark.asyncio
    async def test_inactive_user_rejected_even_with_right_password(self, service):
        with pytest.raises(InvalidCredentialsError):
            await service.login_user("former.employee@banedonv.com", "password")


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_then_login(self, service):
        request = RegisterRequest(email="new.person@example.com", password="secret1", name="New Person")
        registered = await service.register_user(request)
        assert registered.user.email == "new.person@example.com"
        assert registered.user.role.value == "user"

        logged_in = await service.login_user("new.person@example.com", "secret1")
        assert logged_in.user.id == registered.user.id

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        request = RegisterRequest(email="admin@banedonv.com", password="secret1", name="Dup")
        with pytest.raises(EmailAlreadyExistsError) as exc_info:
            await service.register_user(request)
        assert exc_info.value.status_code == 409
        assert exc_info.value.code == "AUTH_EMAIL_ALREADY_EXISTS"


class TestTokens:
    @pytest.mark.asyncio
    async def test_verify_round_trip(self, service):
        result = await service.login_user("user@banedonv.com", "user123")
        user = await service.verify_token(result.token)
        assert user.id == "user_5"
        assert user.role.value == "user"

    def test_access_token_claims(self, service, users, settings):
        token = service.generate_token(users.find_by_id("user_2").to_auth_user())
        claims = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
        assert claims["sub"] == "user_2"
        assert claims["email"] == "sarah.johnson@banedonv.com"
        assert claims["role"] == "manager"
        assert claims["type"] == "access"
        assert claims["exp"] - claims["iat"] == 3600

    @pytest.mark.asyncio
    async def test_verify_rejects_garbage(self, service):
        assert await service.verify_token("not-a-jwt") is None

    @pytest.mark.asyncio
    async def test_verify_rejects_wrong_secret(self, service):
        token = jwt.encode(
            {"sub": "user_1", "type": "access", "iat": 0, "exp": 9999999999},
            "some-other-secret",
            algorithm="HS256",
        )
        assert await service.verify_token(token) is None

    @pytest.mark.asyncio
    async def test_verify_rejects_expired(self, service, settings):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "user_1", "type": "access", "iat": int(past.timestamp()), "exp": int(past.timestamp()) + 60},
            settings.jwt_secret,
            algorithm="HS256",
        )
        assert await service.verify_token(token) is None

    @pytest.mark.asyncio
    async def test_verify_rejects_refresh_token(self, service, users):
        refresh = service.generate_refresh_token(users.find_by_id("user_1").to_auth_user())
        assert await service.verify_token(refresh) is None

    @pytest.mark.asyncio
    async def test_verify_rejects_inactive_user(self, service, users):
        token = service.generate_token(users.find_by_id("user_6").to_auth_user())
        assert await service.verify_token(token) is None

    @pytest.mark.asyncio
    async def test_verify_rejects_deleted_user(self, service, users):
        token = service.generate_token(users.find_by_id("user_4").to_auth_user())
        users.delete("user_4")
        assert await service.verify_token(token) is None


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(self, service):
        result = await service.login_user("admin@banedonv.com", "admin123")
        refreshed = await service.refresh_token(result.refresh_token)
        assert (await service.verify_token(refreshed.token)).id == "user_1"

    @pytest.mark.asyncio
    async def test_missing_refresh_token(self, service):
        with pytest.raises(RefreshTokenRequiredError) as exc_info:
            await service.refresh_token(None)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_access_token_is_not_a_refresh_token(self, service):
        result = await service.login_user("admin@banedonv.com", "admin123")
        with pytest.raises(InvalidRefreshTokenError):
            await service.refresh_token(result.token)

    @pytest.mark.asyncio
    async def test_malformed_refresh_token(self, service):
        with pytest.raises(InvalidRefreshTokenError) as exc_info:
            await service.refresh_token("garbage")
        assert exc_info.value.status_code == 401


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_forgot_password_issues_reset_token(self, service):
        ticket = await service.forgot_password("admin@banedonv.com")
        assert ticket.reset_token.startswith("reset_")

    @pytest.mark.asyncio
    async def test_reset_with_issued_token(self, service):
        ticket = await service.forgot_password("admin@banedonv.com")
        assert await service.reset_password(ticket.reset_token, "newpass1") is None

    @pytest.mark.asyncio
    async def test_reset_with_unknown_token(self, service):
        with pytest.raises(InvalidResetTokenError) as exc_info:
            await service.reset_password("bogus", "newpass1")
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "AUTH_INVALID_TOKEN"


class TestProfile:
    @pytest.mark.asyncio
    async def test_get_profile_reflects_updates(self, service, users):
        user = users.find_by_id("user_5").to_auth_user()
        users.update("user_5", {"name": "Renamed"})
        profile = await service.get_profile(user)
        assert profile.name == "Renamed"
