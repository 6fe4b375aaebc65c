# =============================================================================
# TESTS - Auth API
# =============================================================================
# Integration tests for /api/auth through the FastAPI TestClient
# =============================================================================

import jwt
import pytest

pytestmark = pytest.mark.integration


class TestRegister:
    def test_register_returns_token_and_user(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "password": "secret123", "name": "Ana"},
        )

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"token", "user"}
        assert data["user"]["email"] == "ana@example.com"
        assert data["user"]["name"] == "Ana"
        assert "password" not in data["user"]

    def test_token_is_bound_to_user_id(self, client):
        from config import get_config

        data = client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "password": "secret123"},
        ).json()

        claims = jwt.decode(data["token"], get_config().jwt_secret, algorithms=["HS256"])
        assert claims["userId"] == data["user"]["id"]

    def test_name_is_optional(self, client):
        response = client.post("/api/auth/register", json={"email": "bo@example.com", "password": "pw"})

        assert response.status_code == 201
        assert response.json()["user"]["name"] == ""

    def test_duplicate_email(self, client, register_user, mock_agentfs_with_data):
        register_user(email="ana@example.com")

        response = client.post(
            "/api/auth/register",
            json={"email": "ANA@example.com", "password": "other", "name": "Impostor"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Email already exists"}
        user_records = [
            key for key in mock_agentfs_with_data._storage if key.startswith("user:") and ":email:" not in key
        ]
        assert len(user_records) == 1

    def test_password_is_stored_hashed(self, client, mock_agentfs_with_data):
        data = client.post(
            "/api/auth/register",
            json={"email": "ana@example.com", "password": "secret123"},
        ).json()

        stored = mock_agentfs_with_data._storage[f"user:{data['user']['id']}"]
        assert stored["password"] != "secret123"
        assert stored["password"].startswith("$2")

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "password": "secret123"},
            {"email": "ana@example.com", "password": ""},
            {"email": "ana@example.com"},
            {},
        ],
    )
    def test_invalid_input(self, client, payload):
        response = client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()


class TestLogin:
    def test_login(self, client, register_user):
        _, user = register_user(email="ana@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == user
        assert data["token"]

    def test_login_email_case_insensitive(self, client, register_user):
        register_user(email="ana@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": "Ana@Example.com", "password": "secret123"})

        assert response.status_code == 200

    def test_wrong_password(self, client, register_user):
        register_user(email="ana@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    @pytest.mark.parametrize(
        "email,password",
        [
            ("ana@example.com", "secret123" + "x" * 70),
            ("ana@example.com", ""),
            ("ana@example.com", "   "),
            ("nobody", "secret123"),
            ("", "secret123"),
        ],
    )
    def test_malformed_credentials_are_unauthorized(self, client, register_user, email, password):
        register_user(email="ana@example.com", password="secret123")

        response = client.post("/api/auth/login", json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}


class TestAuthenticationGate:
    """Protected endpoints short-circuit with 401."""

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Token abc"},
            {"Authorization": "Bearer not-a-jwt"},
        ],
    )
    def test_rejected(self, client, headers):
        response = client.get("/api/quizzes/user/user-1", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_token_signed_with_other_secret(self, client, bearer):
        from core.auth import create_token

        token = create_token("user-1", secret="some-other-secret-with-32-bytes-long")

        response = client.get("/api/quizzes/user/user-1", headers=bearer(token))

        assert response.status_code == 401
