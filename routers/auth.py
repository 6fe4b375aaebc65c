"""Auth endpoints - Registration and login."""

import asyncio

from fastapi import APIRouter, Depends

import app_state
from core.auth import create_token, hash_password, verify_password
from core.exceptions import AuthError
from core.logger import get_logger
from quiz.models.schemas import AuthResponse, LoginRequest, RegisterRequest
from quiz.storage.user_store import UserStore
from utils.validators import normalize_email, validate_email, validate_name, validate_password

logger = get_logger("auth")

router = APIRouter(prefix="/api/auth", tags=["Auth"])


async def get_user_store(agentfs=Depends(app_state.get_agentfs)) -> UserStore:
    """Dependency that binds a UserStore to the shared AgentFS."""
    return UserStore(agentfs)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest, store: UserStore = Depends(get_user_store)):
    """Creates a user and returns a session token.

    - 400 when the email or password is invalid
    - 409 when the email is already registered
    """
    email = validate_email(request.email)
    password = validate_password(request.password)
    name = validate_name(request.name)

    password_hash = await asyncio.to_thread(hash_password, password)
    user = await store.create_user(email=email, name=name, password_hash=password_hash)

    return AuthResponse(token=create_token(user.id), user=user.to_public())


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, store: UserStore = Depends(get_user_store)):
    """Exchanges credentials for a session token.

    Any credential miss produces the same 401, whatever the shape of the
    input: no registration rules are applied here.
    """
    user = await store.get_by_email(normalize_email(request.email))
    if user is None:
        raise AuthError(message="Invalid credentials", details={"reason": "unknown email"})

    if not await asyncio.to_thread(verify_password, request.password, user.password_hash):
        raise AuthError(message="Invalid credentials", details={"reason": "password mismatch"})

    logger.info(f"User logged in: {user.id}")
    return AuthResponse(token=create_token(user.id), user=user.to_public())
