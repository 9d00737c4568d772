"""
Test suite for the /users endpoints.

Tests cover:
- Admin-only listing and creation
- Self-or-admin access to a single user
- Password rehashing on update
"""

from jobly.core.security import verify_password
from jobly.models.user import User


class TestCreateUser:
    """Tests for POST /users"""

    new_user = {
        "username": "u-new",
        "firstName": "First-new",
        "lastName": "Last-new",
        "password": "password-new",
        "email": "new@example.com",
    }

    def test_admin_can_add_admin(self, client, admin_headers):
        response = client.post("/users", json={**self.new_user, "isAdmin": True}, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-new",
            "email": "new@example.com",
            "isAdmin": True,
        }
        assert isinstance(body["token"], str)

    def test_defaults_to_non_admin(self, client, admin_headers):
        response = client.post("/users", json=self.new_user, headers=admin_headers)

        assert response.json()["user"]["isAdmin"] is False

    def test_unauth_for_non_admin(self, client, u1_headers):
        response = client.post("/users", json=self.new_user, headers=u1_headers)

        assert response.status_code == 401

    def test_bad_email(self, client, admin_headers):
        response = client.post(
            "/users",
            json={**self.new_user, "email": "not-an-email"},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_duplicate(self, client, admin_headers):
        response = client.post("/users", json={**self.new_user, "username": "u1"}, headers=admin_headers)

        assert response.status_code == 400


class TestListUsers:
    """Tests for GET /users"""

    def test_works_for_admin(self, client, admin_headers):
        response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        assert [u["username"] for u in response.json()["users"]] == ["admin", "u1"]
        assert "password" not in response.json()["users"][0]

    def test_unauth_for_non_admin(self, client, u1_headers):
        response = client.get("/users", headers=u1_headers)

        assert response.status_code == 401

    def test_unauth_for_anon(self, client):
        response = client.get("/users")

        assert response.status_code == 401


class TestGetUser:
    """Tests for GET /users/{username}"""

    def test_works_for_same_user(self, client, u1_headers):
        response = client.get("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "username": "u1",
                "firstName": "U1F",
                "lastName": "U1L",
                "email": "user1@example.com",
                "isAdmin": False,
            }
        }

    def test_works_for_admin(self, client, admin_headers):
        response = client.get("/users/u1", headers=admin_headers)

        assert response.status_code == 200

    def test_unauth_for_other_user(self, client, u1_headers):
        response = client.get("/users/admin", headers=u1_headers)

        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        response = client.get("/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestUpdateUser:
    """Tests for PATCH /users/{username}"""

    def test_works_for_same_user(self, client, u1_headers):
        response = client.patch("/users/u1", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        assert response.json()["user"]["firstName"] == "New"
        assert response.json()["user"]["lastName"] == "U1L"

    def test_password_is_hashed(self, client, u1_headers, db_session):
        response = client.patch("/users/u1", json={"password": "new-password"}, headers=u1_headers)

        assert response.status_code == 200
        db_session.expire_all()
        stored = db_session.query(User).filter(User.username == "u1").one()
        assert stored.password != "new-password"
        assert verify_password(client.app.state.pwd_context, "new-password", stored.password)

    def test_cannot_make_self_admin(self, client, u1_headers):
        response = client.patch("/users/u1", json={"isAdmin": True}, headers=u1_headers)

        assert response.status_code == 400

    def test_unauth_for_other_user(self, client, u1_headers):
        response = client.patch("/users/admin", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        response = client.patch("/users/nope", json={"firstName": "New"}, headers=admin_headers)

        assert response.status_code == 404


class TestDeleteUser:
    """Tests for DELETE /users/{username}"""

    def test_works_for_same_user(self, client, u1_headers):
        response = client.delete("/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}

    def test_unauth_for_other_user(self, client, u1_headers):
        response = client.delete("/users/admin", headers=u1_headers)

        assert response.status_code == 401

    def test_not_found(self, client, admin_headers):
        response = client.delete("/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestUserRequiredFields:
    """Profile columns are NOT NULL and cannot be cleared through PATCH"""

    def test_null_first_name(self, client, u1_headers, db_session):
        response = client.patch("/users/u1", json={"firstName": None}, headers=u1_headers)

        assert response.status_code == 400
        assert db_session.query(User).filter(User.username == "u1").one().first_name == "U1F"

    def test_null_email(self, client, u1_headers):
        response = client.patch("/users/u1", json={"email": None}, headers=u1_headers)

        assert response.status_code == 400

    def test_null_password(self, client, u1_headers):
        response = client.patch("/users/u1", json={"password": None}, headers=u1_headers)

        assert response.status_code == 400
