"""Input validators for request data."""

import re
from pathlib import PurePath
from typing import Optional

from core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")

# bcrypt only hashes the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
MAX_NAME_LENGTH = 120


def normalize_email(email: str) -> str:
    """Trims and lower-cases an email so lookups are case-insensitive."""
    return email.strip().lower()


def validate_email(email: Optional[str]) -> str:
    """Validates an email address and returns its normalized form.

    Raises ValidationError if the value does not look like an address.
    """
    if not email or not email.strip():
        raise ValidationError(message="Email is required")

    normalized = normalize_email(email)
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError(
            message="Invalid email address",
            details={"email": normalized[:50]},
        )
    return normalized


def validate_password(password: Optional[str]) -> str:
    """Validates a password for registration."""
    if not password:
        raise ValidationError(message="Password is required")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
        )
    return password


def validate_name(name: Optional[str]) -> str:
    if name is None:
        return ""
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(message=f"Name must be at most {MAX_NAME_LENGTH} characters")
    return name


def validate_identifier(value: str, field: str = "id") -> str:
    """Validates a path identifier (user, quiz or question id).

    Only alphanumerics, hyphens and underscores are accepted, which rules
    out key-separator injection into the document store.
    """
    if not value or not IDENTIFIER_PATTERN.match(value):
        raise ValidationError(
            message=f"Invalid {field}",
            details={field: value[:40] if value else value},
        )
    return value


def display_filename(filename: Optional[str], default: str = "document.pdf") -> str:
    """Returns the bare file name of an upload (no directories)."""
    if not filename:
        return default

    name = PurePath(filename.replace("\\", "/")).name.strip()
    return name or default
