"""
Tests for billing routes.
"""


class TestBillingRoutes:

    def test_plans(self, client, user_headers):
        data = client.get("/api/v1/billing/plans", headers=user_headers).json()["data"]
        assert [p["id"] for p in data] == ["free", "premium", "enterprise"]
        assert data[0]["limits"]["apiCalls"] == 1000

    def test_subscription_defaults_to_premium(self, client, user_headers):
        data = client.get("/api/v1/billing/subscription", headers=user_headers).json()["data"]
        assert data["planId"] == "premium"
        assert data["status"] == "active"

    def test_subscribe(self, client, user_headers):
        response = client.post("/api/v1/billing/subscribe", json={"planId": "free"}, headers=user_headers)
        assert response.status_code == 201
        assert response.json()["data"]["amount"] == 0.0

    def test_subscribe_invalid_plan(self, client, user_headers):
        response = client.post("/api/v1/billing/subscribe", json={"planId": "gold"}, headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid plan ID"

    def test_cancel(self, client, user_headers):
        client.post("/api/v1/billing/subscribe", json={"planId": "premium"}, headers=user_headers)
        assert client.post("/api/v1/billing/cancel", headers=user_headers).status_code == 200
        data = client.get("/api/v1/billing/subscription", headers=user_headers).json()["data"]
        assert data["status"] == "canceled"

    def test_cancel_without_subscription(self, client, user_headers):
        response = client.post("/api/v1/billing/cancel", headers=user_headers)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No active subscription found"

    def test_invoices(self, client, user_headers):
        body = client.get("/api/v1/billing/invoices?limit=6", headers=user_headers).json()
        assert body["pagination"] == {"page": 1, "limit": 6, "total": 12, "pages": 2}

    def test_payment_method(self, client, user_headers):
        client.get("/api/v1/billing/subscription", headers=user_headers)
        response = client.put(
            "/api/v1/billing/payment-method", json={"paymentMethodId": "pm_42"}, headers=user_headers
        )
        assert response.status_code == 200
        data = client.get("/api/v1/billing/subscription", headers=user_headers).json()["data"]
        assert data["paymentMethodId"] == "pm_42"

    def test_usage(self, client, user_headers):
        data = client.get("/api/v1/billing/usage", headers=user_headers).json()["data"]
        assert data["apiCalls"]["limit"] == 10000
        assert set(data["period"]) == {"start", "end"}

    def test_requires_token(self, client):
        assert client.get("/api/v1/billing/plans").status_code == 401
