"""
Tests for fixed-window rate limiting.
"""

from fastapi.testclient import TestClient

from api.app import create_app
from api.middleware.rate_limit import POLICIES, FixedWindowRateLimiter, RateLimitPolicy
from shared.config import Settings


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


POLICY = RateLimitPolicy("tiny", 3, 60, "Slow down")


class TestFixedWindowRateLimiter:

    def test_allows_up_to_limit(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        decisions = [limiter.hit(POLICY, "ip:1.2.3.4") for _ in range(4)]
        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert decisions[0].remaining == 2
        assert decisions[3].remaining == 0

    def test_keys_are_independent(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        for _ in range(4):
            limiter.hit(POLICY, "ip:1.1.1.1")
        assert limiter.hit(POLICY, "ip:2.2.2.2").allowed

    def test_policies_are_independent(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        for _ in range(4):
            limiter.hit(POLICY, "ip:1.1.1.1")
        assert limiter.hit(POLICIES["api"], "ip:1.1.1.1").allowed

    def test_window_resets(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)
        for _ in range(4):
            limiter.hit(POLICY, "k")
        clock.now += 59
        assert not limiter.hit(POLICY, "k").allowed
        clock.now += 1
        assert limiter.hit(POLICY, "k").allowed

    def test_reset_after_counts_down(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(clock=clock)
        limiter.hit(POLICY, "k")
        clock.now += 20
        assert limiter.hit(POLICY, "k").reset_after == 40

    def test_disabled_allows_everything(self):
        limiter = FixedWindowRateLimiter(enabled=False, clock=FakeClock())
        assert all(limiter.hit(POLICY, "k").allowed for _ in range(10))

    def test_reset_clears_counts(self):
        limiter = FixedWindowRateLimiter(clock=FakeClock())
        for _ in range(4):
            limiter.hit(POLICY, "k")
        limiter.reset()
        assert limiter.hit(POLICY, "k").allowed

    def test_configured_budgets(self):
        assert (POLICIES["auth"].max_requests, POLICIES["auth"].window_seconds) == (5, 900)
        assert (POLICIES["search"].max_requests, POLICIES["search"].window_seconds) == (30, 60)
        assert (POLICIES["upload"].max_requests, POLICIES["upload"].window_seconds) == (10, 3600)


class TestRateLimitedRoutes:

    def make_client(self) -> TestClient:
        settings = Settings(environment="development", delay_enabled=False, auth_mode="service")
        return TestClient(create_app(settings))

    def test_login_limit(self):
        client = self.make_client()
        body = {"email": "admin@banedonv.com", "password": "wrong"}
        statuses = [client.post("/api/v1/auth/login", json=body).status_code for _ in range(6)]
        assert statuses == [401] * 5 + [429]

    def test_429_envelope_and_headers(self):
        client = self.make_client()
        body = {"email": "admin@banedonv.com", "password": "wrong"}
        for _ in range(5):
            client.post("/api/v1/auth/login", json=body)
        response = client.post("/api/v1/auth/login", json=body)
        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert int(response.headers["Retry-After"]) > 0
        assert response.headers["RateLimit-Limit"] == "5"

    def test_limit_is_per_client_ip(self):
        client = self.make_client()
        body = {"email": "admin@banedonv.com", "password": "wrong"}
        for _ in range(6):
            client.post("/api/v1/auth/login", json=body, headers={"X-Forwarded-For": "10.0.0.1"})
        response = client.post("/api/v1/auth/login", json=body, headers={"X-Forwarded-For": "10.0.0.2"})
        assert response.status_code == 401

    def test_test_environment_never_limits(self, client):
        body = {"email": "admin@banedonv.com", "password": "wrong"}
        statuses = {client.post("/api/v1/auth/login", json=body).status_code for _ in range(10)}
        assert statuses == {401}


class TestPerAccountLimit:

    def make_app(self):
        return create_app(Settings(environment="development", delay_enabled=False, auth_mode="service"))

    @staticmethod
    def headers(app, user_id: str) -> dict[str, str]:
        container = app.state.container
        user = container.user_repository.find_by_id(user_id).to_auth_user()
        return {"Authorization": f"Bearer {container.auth.generate_token(user)}"}

    def test_users_routes_count_per_account(self):
        app = self.make_app()
        client = TestClient(app)
        policy = POLICIES["user"]
        for _ in range(policy.max_requests):
            app.state.container.rate_limiter.hit(policy, "user:user_5")

        blocked = client.get("/api/v1/users/user_5", headers=self.headers(app, "user_5"))
        assert blocked.status_code == 429
        assert blocked.json()["error"]["message"] == policy.message
        assert blocked.headers["RateLimit-Limit"] == str(policy.max_requests)

        other = client.get("/api/v1/users/user_4", headers=self.headers(app, "user_4"))
        assert other.status_code == 200

    def test_account_limit_follows_user_across_addresses(self):
        app = self.make_app()
        client = TestClient(app)
        policy = POLICIES["user"]
        for _ in range(policy.max_requests - 1):
            app.state.container.rate_limiter.hit(policy, "user:user_5")

        headers = self.headers(app, "user_5")
        first = client.get("/api/v1/users/user_5", headers={**headers, "X-Forwarded-For": "10.0.0.1"})
        second = client.get("/api/v1/users/user_5", headers={**headers, "X-Forwarded-For": "10.0.0.2"})
        assert first.status_code == 200
        assert second.status_code == 429

    def test_unauthenticated_rejected_before_counting(self):
        app = self.make_app()
        client = TestClient(app)
        response = client.get("/api/v1/users/user_5")
        assert response.status_code == 401
        assert app.state.container.rate_limiter.hit(POLICIES["user"], "user:user_5").remaining == (
            POLICIES["user"].max_requests - 1
        )
