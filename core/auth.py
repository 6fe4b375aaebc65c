"""Authentication - password hashing and bearer session tokens.

Tokens are HS256 JWTs whose only claim is ``userId``. They carry no expiry:
a token stays valid for as long as its signature verifies.
"""

from typing import Optional

import bcrypt
import jwt
from fastapi import Header

from config import get_config
from utils.validators import MAX_PASSWORD_BYTES

from .exceptions import AuthError
from .logger import get_logger

logger = get_logger("auth")

TOKEN_ALGORITHM = "HS256"
USER_ID_CLAIM = "userId"


# =============================================================================
# PASSWORDS
# =============================================================================


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Returns a salted bcrypt hash of ``password``."""
    cost = rounds if rounds is not None else get_config().bcrypt_rounds
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Checks ``password`` against a stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if not encoded or len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


# =============================================================================
# TOKENS
# =============================================================================


def create_token(user_id: str, secret: Optional[str] = None) -> str:
    """Signs a session token bound to ``user_id``."""
    key = secret or get_config().jwt_secret
    return jwt.encode({USER_ID_CLAIM: user_id}, key, algorithm=TOKEN_ALGORITHM)


def decode_token(token: str, secret: Optional[str] = None) -> str:
    """Verifies a session token and returns the bound user id.

    Raises:
        AuthError: bad signature, malformed token or missing ``userId`` claim
    """
    key = secret or get_config().jwt_secret
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": [USER_ID_CLAIM]},
        )
    except jwt.PyJWTError as e:
        raise AuthError(details={"reason": type(e).__name__}) from e

    user_id = payload.get(USER_ID_CLAIM)
    if not isinstance(user_id, str) or not user_id:
        raise AuthError(details={"reason": "invalid userId claim"})
    return user_id


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extracts the token from an ``Authorization: Bearer <token>`` header.

    Returns None when the header is missing or uses another scheme.
    """
    if not authorization:
        return None

    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def authenticate(authorization: Optional[str] = Header(default=None)) -> str:
    """FastAPI dependency that resolves the token-bound user id.

    Short-circuits the handler with 401 when the header is missing, malformed
    or carries an invalid signature.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthError(details={"reason": "missing bearer token"})

    user_id = decode_token(token)
    logger.debug(f"Request authenticated for user {user_id}")
    return user_id
