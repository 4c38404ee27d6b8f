"""
Tests for authentication endpoints and utilities.
"""

from shared.security.auth import sign_jwt, verify_jwt
from shared.security.password import hash_password, verify_password
from shared.security.rate_limit import limiter

TEST_PASSWORD = "testpass123"


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self):
        hashed = hash_password("mypassword", rounds=4)
        assert hashed.startswith("$2b$")

    def test_verify_password(self):
        hashed = hash_password("mypassword", rounds=4)
        assert verify_password("mypassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False


class TestJwt:

    def test_round_trip_keeps_claims(self):
        token = sign_jwt({"sub": "user-1", "role": "USER", "email": "a@b.c"})

        payload = verify_jwt(token)

        assert payload["sub"] == "user-1"
        assert payload["role"] == "USER"
        assert "jti" in payload


class TestAuthEndpoints:
    """Test authentication API endpoints."""

    def test_register_creates_customer(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Test.com", "password": "longenough", "name": "New Client"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["accessToken"]
        assert data["tokenType"] == "Bearer"
        assert data["user"]["email"] == "new@test.com"
        assert data["user"]["role"] == "USER"

    def test_register_duplicate_email_is_409(self, client, customer_user):
        response = client.post(
            "/api/auth/register",
            json={"email": "CLIENT@test.com", "password": "longenough", "name": "Again"},
        )

        assert response.status_code == 409

    def test_register_short_password_is_400(self, client):
        response = client.post(
            "/api/auth/register", json={"email": "x@test.com", "password": "short", "name": "X"}
        )

        assert response.status_code == 400

    def test_login_success(self, client, admin_user):
        response = client.post(
            "/api/auth/login", json={"email": "admin@test.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["role"] == "ADMIN"
        assert verify_jwt(data["accessToken"])["sub"] == admin_user.id

    def test_login_invalid_password(self, client, admin_user):
        response = client.post(
            "/api/auth/login", json={"email": "admin@test.com", "password": "wrongpassword"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_login_unknown_email(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "nobody@test.com", "password": "whatever"}
        )

        assert response.status_code == 401

    def test_me_authenticated(self, client, user_headers, customer_user):
        response = client.get("/api/auth/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["id"] == customer_user.id

    def test_me_without_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_me_with_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_login_is_rate_limited(self, client, admin_user):
        limiter.enabled = True
        limiter.reset()

        statuses = [
            client.post(
                "/api/auth/login", json={"email": "admin@test.com", "password": "wrongpassword"}
            ).status_code
            for _ in range(6)
        ]

        assert statuses[:5] == [401] * 5
        assert statuses[5] == 429
