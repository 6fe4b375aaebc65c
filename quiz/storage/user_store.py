"""User Store - User records on top of the AgentFS KV store."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

import app_state
from core.exceptions import ConflictError, StorageError
from core.logger import get_logger
from utils.validators import normalize_email

from ..models.records import UserRecord

logger = get_logger("user_store")

# Makes the email uniqueness check and the insert a single step
REGISTRATION_LOCK = "user_registration"


class UserStore:
    """Persistence of users in the AgentFS KV store.

    Key layout:
        - user:{user_id} -> user record
        - user:email:{email} -> user id (uniqueness index)
    """

    KEY_PREFIX = "user"

    def __init__(self, agentfs: AgentFS):
        self.agentfs = agentfs

    def _user_key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:{user_id}"

    def _email_key(self, email: str) -> str:
        return f"{self.KEY_PREFIX}:email:{normalize_email(email)}"

    async def _get(self, key: str) -> Any:
        try:
            return await self.agentfs.kv.get(key)
        except Exception as e:
            logger.error(f"KV read failed for {key}: {e}")
            raise StorageError(details={"key": key, "error": str(e)}) from e

    async def _set(self, key: str, value: Any) -> None:
        try:
            await self.agentfs.kv.set(key, value)
        except Exception as e:
            logger.error(f"KV write failed for {key}: {e}")
            raise StorageError(details={"key": key, "error": str(e)}) from e

    async def create_user(self, email: str, name: str, password_hash: str) -> UserRecord:
        """Creates a user with a fresh id.

        Args:
            email: Email address (normalized before storage)
            name: Display name
            password_hash: bcrypt hash of the password

        Returns:
            The stored record

        Raises:
            ConflictError: the email is already registered
        """
        email = normalize_email(email)

        async with app_state.get_lock(REGISTRATION_LOCK):
            if await self._get(self._email_key(email)):
                logger.info("Registration rejected: email already exists")
                raise ConflictError(message="Email already exists")

            user = UserRecord(
                id=str(uuid.uuid4()),
                email=email,
                name=name,
                password_hash=password_hash,
            )
            await self._set(self._user_key(user.id), user.to_dict())
            await self._set(self._email_key(email), user.id)

        logger.info(f"User created: {user.id}")
        return user

    async def get_by_email(self, email: str) -> UserRecord | None:
        user_id = await self._get(self._email_key(email))
        if not user_id:
            return None
        return await self.get_by_id(user_id)

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        data = await self._get(self._user_key(user_id))
        if not data:
            return None
        return UserRecord.from_dict(data)
