"""User Record - Stored user document."""

from dataclasses import dataclass
from typing import Any

from .schemas import UserPublic


@dataclass
class UserRecord:
    """User as persisted in the document store.

    Attributes:
        id: Unique user id (uuid4)
        email: Normalized (trimmed, lower-cased) email, unique
        name: Display name
        password_hash: bcrypt hash of the password
    """

    id: str
    email: str
    name: str
    password_hash: str

    def to_public(self) -> UserPublic:
        """Projection safe to return to clients."""
        return UserPublic(id=self.id, email=self.email, name=self.name)

    def to_dict(self) -> dict[str, Any]:
        """Converts to a dict (for persistence)."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "password": self.password_hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserRecord":
        """Builds a record from its persisted dict."""
        return cls(
            id=data["id"],
            email=data["email"],
            name=data.get("name") or "",
            password_hash=data["password"],
        )
