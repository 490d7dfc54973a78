"""
Unit tests for authentication endpoints.

Tests:
- Token issuance
- Self-registration
- Token contents
"""

from datetime import timedelta

from app.core.security import create_token, decode_token, get_password_hash, verify_password


class TestToken:
    """Test POST /auth/token"""

    def test_login_success(self, client, seed):
        response = client.post("/api/v1/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False

    def test_login_admin_claim(self, client, seed):
        response = client.post("/api/v1/auth/token", json={"username": "a1", "password": "password1"})

        assert decode_token(response.json()["token"])["is_admin"] is True

    def test_login_wrong_password(self, client, seed):
        response = client.post("/api/v1/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401

    def test_login_unknown_user(self, client, seed):
        response = client.post("/api/v1/auth/token", json={"username": "nope", "password": "password"})

        assert response.status_code == 401

    def test_login_missing_password(self, client, seed):
        response = client.post("/api/v1/auth/token", json={"username": "u1"})

        assert response.status_code == 422


class TestRegistration:
    """Test POST /auth/register"""

    new_user = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_register_success(self, client, seed):
        response = client.post("/api/v1/auth/register", json=self.new_user)

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

    def test_register_cannot_become_admin(self, client, seed):
        response = client.post("/api/v1/auth/register", json={**self.new_user, "isAdmin": True})

        assert response.status_code == 201
        assert decode_token(response.json()["token"])["is_admin"] is False

    def test_register_duplicate_username(self, client, seed):
        response = client.post("/api/v1/auth/register", json={**self.new_user, "username": "u1"})

        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"].lower()

    def test_register_short_password(self, client, seed):
        response = client.post("/api/v1/auth/register", json={**self.new_user, "password": "abc"})

        assert response.status_code == 422


class TestSecurityHelpers:
    """Test app.core.security"""

    def test_password_round_trip(self):
        hashed = get_password_hash("secret-password")

        assert verify_password("secret-password", hashed)
        assert not verify_password("other-password", hashed)

    def test_expired_token_rejected_by_endpoints(self, client, seed):
        token = create_token("a1", True, expires_delta=timedelta(minutes=-5))
        response = client.get("/api/v1/users/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
