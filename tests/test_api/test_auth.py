"""Tests for authentication endpoints."""

from fastapi.testclient import TestClient


class TestRegister:
    """Test account registration."""

    def test_register_success(self, client: TestClient):
        """Test registration returns the user, a token and sets the cookie."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Ada Lovelace", "email": "Ada@Example.com", "password": "secret123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["email"] == "ada@example.com"
        assert body["data"]["user"]["fitnessGoals"]["dailyWater"] == 8
        assert "passwordHash" not in body["data"]["user"]
        assert body["data"]["accessToken"]
        assert "token" in response.cookies

    def test_register_duplicate_email(self, client: TestClient, user):
        """Test registering an existing email (any case) is rejected."""
        response = client.post(
            "/api/auth/register",
            json={"name": "John Again", "email": "JOHN@example.com", "password": "secret123"},
        )
        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "User with this email already exists"

    def test_register_validation(self, client: TestClient):
        """Test short names and passwords are reported per field."""
        response = client.post(
            "/api/auth/register",
            json={"name": "A", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "VALIDATION_ERROR"
        fields = {e["field"] for e in data["error"]["details"]["errors"]}
        assert fields == {"name", "email", "password"}


class TestLogin:
    """Test login endpoints."""

    def test_login_success(self, client: TestClient, user):
        """Test JSON login with valid credentials."""
        response = client.post(
            "/api/auth/login",
            json={"email": "john@example.com", "password": "password123"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == user.id
        assert data["tokenType"] == "bearer"
        assert "token" in response.cookies

    def test_login_invalid_password(self, client: TestClient, user):
        """Test login with invalid password."""
        response = client.post(
            "/api/auth/login",
            json={"email": "john@example.com", "password": "wrong"},
        )
        assert response.status_code == 401
        data = response.json()
        assert data["error"]["code"] == "AUTHENTICATION_ERROR"
        assert data["message"] == "Invalid credentials"

    def test_login_unknown_email(self, client: TestClient):
        """Test unknown emails get the same error as wrong passwords."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_form(self, client: TestClient, user):
        """Test OAuth2 password flow login."""
        response = client.post(
            "/api/auth/login/form",
            data={"username": "john@example.com", "password": "password123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert data["token_type"] == "bearer"


class TestCurrentUser:
    """Test /me and logout."""

    def test_get_me_authenticated(self, client: TestClient, auth_headers: dict):
        """Test getting current user info when authenticated."""
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == "john@example.com"
        assert data["activityLevel"] == "moderately_active"

    def test_get_me_with_cookie(self, client: TestClient, auth_token: str):
        """Test the auth cookie is accepted in place of a bearer token."""
        client.cookies.set("token", auth_token)
        response = client.get("/api/auth/me")
        assert response.status_code == 200

    def test_get_me_unauthenticated(self, client: TestClient):
        """Test getting current user info without authentication."""
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        data = response.json()
        assert data["error"]["code"] == "AUTHENTICATION_ERROR"

    def test_get_me_invalid_token(self, client: TestClient):
        """Test a malformed token is rejected."""
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer invalid-token"})
        assert response.status_code == 401

    def test_logout(self, client: TestClient, auth_headers: dict):
        """Test logout succeeds and clears the cookie."""
        response = client.post("/api/auth/logout", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully"}


class TestRateLimit:
    """Test login throttling."""

    def test_login_throttled_after_ten_attempts(self, client: TestClient, user):
        limiter = client.app.state.limiter
        limiter.reset()
        limiter.enabled = True
        try:
            statuses = [
                client.post(
                    "/api/auth/login",
                    json={"email": "john@example.com", "password": "wrong"},
                ).status_code
                for _ in range(11)
            ]
        finally:
            limiter.enabled = False
            limiter.reset()

        assert statuses[:10] == [401] * 10
        assert statuses[10] == 429
