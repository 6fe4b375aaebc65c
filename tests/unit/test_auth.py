# =============================================================================
# TESTS - Auth Module
# =============================================================================
# Unit tests for password hashing, tokens and the bearer dependency
# =============================================================================

import jwt
import pytest


class TestPasswordHashing:
    """bcrypt hashing and verification."""

    def test_hash_is_salted(self):
        from core.auth import hash_password

        first = hash_password("secret123")
        second = hash_password("secret123")

        assert first != second
        assert first.startswith("$2")
        assert "secret123" not in first

    def test_verify_correct_password(self):
        from core.auth import hash_password, verify_password

        hashed = hash_password("secret123")

        assert verify_password("secret123", hashed) is True

    def test_verify_wrong_password(self):
        from core.auth import hash_password, verify_password

        hashed = hash_password("secret123")

        assert verify_password("Secret123", hashed) is False

    def test_verify_malformed_hash(self):
        from core.auth import verify_password

        assert verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_verify_rejects_oversized_password_sharing_prefix(self):
        from core.auth import hash_password, verify_password

        password = "p" * 72
        hashed = hash_password(password)

        assert verify_password(password + "extra", hashed) is False
        assert verify_password("", hashed) is False

    def test_uses_configured_rounds(self):
        from core.auth import hash_password

        # bcrypt encodes the cost as $2b$04$...
        assert hash_password("secret123").split("$")[2] == "04"


class TestTokens:
    """HS256 session tokens."""

    def test_token_only_has_user_id(self):
        from config import get_config
        from core.auth import create_token

        token = create_token("user-1")
        claims = jwt.decode(token, get_config().jwt_secret, algorithms=["HS256"])

        assert claims == {"userId": "user-1"}

    def test_decode_round_trip(self):
        from core.auth import create_token, decode_token

        assert decode_token(create_token("user-42")) == "user-42"

    def test_bad_signature(self):
        from core.auth import create_token, decode_token
        from core.exceptions import AuthError

        token = create_token("user-1", secret="another-secret-key-with-32-bytes-min")

        with pytest.raises(AuthError) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Authentication required"

    def test_missing_user_id_claim(self):
        from config import get_config
        from core.auth import decode_token
        from core.exceptions import AuthError

        token = jwt.encode({"sub": "user-1"}, get_config().jwt_secret, algorithm="HS256")

        with pytest.raises(AuthError):
            decode_token(token)

    def test_garbage_token(self):
        from core.auth import decode_token
        from core.exceptions import AuthError

        with pytest.raises(AuthError):
            decode_token("not.a.token")


class TestBearerExtraction:
    def test_valid_header(self):
        from core.auth import extract_bearer_token

        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        from core.auth import extract_bearer_token

        assert extract_bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer a b", "abc"])
    def test_invalid_headers(self, header):
        from core.auth import extract_bearer_token

        assert extract_bearer_token(header) is None


class TestAuthenticateDependency:
    @pytest.mark.asyncio
    async def test_returns_user_id(self):
        from core.auth import authenticate, create_token

        user_id = await authenticate(authorization=f"Bearer {create_token('user-7')}")

        assert user_id == "user-7"

    @pytest.mark.asyncio
    async def test_missing_header(self):
        from core.auth import authenticate
        from core.exceptions import AuthError

        with pytest.raises(AuthError):
            await authenticate(authorization=None)
