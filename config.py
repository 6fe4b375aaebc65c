# =============================================================================
# CONFIGURATION - PDF Quiz Service
# =============================================================================
# Centralised settings read from environment variables (and .env)
# =============================================================================

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

DEFAULT_JWT_SECRET = "dev-secret-change-me"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class QuizServiceConfig:
    """Runtime configuration of the quiz service.

    Attributes:
        environment: Deployment name (development, test, production)
        host: Interface uvicorn binds to
        port: Port uvicorn listens on
        log_level: Root level for the service loggers
        jwt_secret: HMAC secret used to sign session tokens
        bcrypt_rounds: Cost factor for password hashing
        agentfs_id: AgentFS database id backing the document store
        generation_model: Model alias used to generate quizzes
        grading_model: Model alias used to grade long answers
        oracle_timeout_seconds: Upper bound on a single oracle call
        max_pdf_chars: Prefix of extracted PDF text sent to the oracle
        cors_origins: Allowed CORS origins ("*" = any)
    """

    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    jwt_secret: str = DEFAULT_JWT_SECRET
    bcrypt_rounds: int = 10
    agentfs_id: str = "pdf-quiz"
    generation_model: str = "haiku"
    grading_model: str = "haiku"
    oracle_timeout_seconds: float = 60.0
    max_pdf_chars: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "QuizServiceConfig":
        """Builds the configuration from environment variables."""
        return cls(
            environment=os.getenv("ENVIRONMENT", "development"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 5000),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            jwt_secret=os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET,
            bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 10),
            agentfs_id=os.getenv("AGENTFS_ID", "pdf-quiz"),
            generation_model=os.getenv("GENERATION_MODEL", "haiku"),
            grading_model=os.getenv("GRADING_MODEL", "haiku"),
            oracle_timeout_seconds=_env_float("ORACLE_TIMEOUT_SECONDS", 60.0),
            max_pdf_chars=_env_int("MAX_PDF_CHARS", 8000),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        )

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET

    def to_dict(self) -> dict[str, Any]:
        """Serializes the configuration, never exposing the JWT secret."""
        return {
            "server": {
                "environment": self.environment,
                "host": self.host,
                "port": self.port,
                "log_level": self.log_level,
                "cors_origins": self.cors_origins,
            },
            "auth": {
                "jwt_secret": "***",
                "default_secret": self.uses_default_secret,
                "bcrypt_rounds": self.bcrypt_rounds,
            },
            "storage": {"agentfs_id": self.agentfs_id},
            "oracle": {
                "generation_model": self.generation_model,
                "grading_model": self.grading_model,
                "timeout_seconds": self.oracle_timeout_seconds,
                "max_pdf_chars": self.max_pdf_chars,
            },
        }


@lru_cache(maxsize=1)
def get_config() -> QuizServiceConfig:
    """Returns the process-wide configuration (loaded once)."""
    load_dotenv()
    return QuizServiceConfig.from_env()


def reload_config() -> QuizServiceConfig:
    """Drops the cached configuration and reads the environment again."""
    get_config.cache_clear()
    return get_config()
