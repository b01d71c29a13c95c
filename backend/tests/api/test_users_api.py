"""
Tests for user management routes.
"""


class TestUserRoutes:

    def test_admin_lists_users(self, client, admin_headers):
        response = client.get("/api/v1/users?page=1&limit=2", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 6, "pages": 3}
        assert all("password" not in user for user in body["data"])

    def test_non_admin_cannot_list(self, client, user_headers):
        assert client.get("/api/v1/users", headers=user_headers).status_code == 403

    def test_user_reads_self(self, client, user_headers):
        response = client.get("/api/v1/users/user_5", headers=user_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "user@banedonv.com"
        assert "collectionsCount" in data["statistics"]

    def test_user_cannot_read_others(self, client, user_headers):
        response = client.get("/api/v1/users/user_2", headers=user_headers)
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Access denied"

    def test_unknown_user(self, client, admin_headers):
        response = client.get("/api/v1/users/user_999", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    def test_update_self(self, client, user_headers):
        response = client.put("/api/v1/users/user_5", json={"name": "Renamed"}, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"

    def test_update_with_null_name_is_ignored(self, client, user_headers, admin_headers):
        response = client.put("/api/v1/users/user_5", json={"name": None}, headers=user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"]

        listing = client.get("/api/v1/users", headers=admin_headers)
        assert listing.status_code == 200
        assert listing.json()["pagination"]["total"] == 6

    def test_update_to_taken_email(self, client, user_headers):
        response = client.put(
            "/api/v1/users/user_5", json={"email": "admin@banedonv.com"}, headers=user_headers
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USER_EMAIL_ALREADY_EXISTS"

    def test_invite(self, client, admin_headers):
        response = client.post(
            "/api/v1/users/invite", json={"email": "colleague@example.com", "role": "manager"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["role"] == "manager"

    def test_admin_cannot_delete_self(self, client, admin_headers):
        response = client.delete("/api/v1/users/user_1", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_CANNOT_DELETE_SELF"

    def test_admin_deletes_user(self, client, admin_headers):
        assert client.delete("/api/v1/users/user_4", headers=admin_headers).status_code == 200
        assert client.get("/api/v1/users/user_4", headers=admin_headers).status_code == 404

    def test_admin_cannot_change_own_role(self, client, admin_headers):
        response = client.put("/api/v1/users/user_1/role", json={"role": "user"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_CANNOT_CHANGE_OWN_ROLE"

    def test_invalid_role(self, client, admin_headers):
        response = client.put("/api/v1/users/user_4/role", json={"role": "owner"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "USER_INVALID_ROLE"

    def test_change_role(self, client, admin_headers):
        response = client.put("/api/v1/users/user_4/role", json={"role": "manager"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "manager"

    def test_activity(self, client, member_headers):
        response = client.get("/api/v1/users/user_4/activity?limit=5", headers=member_headers)
        assert response.status_code == 200
        assert response.json()["pagination"]["total"] == 30
