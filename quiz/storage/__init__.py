"""Quiz Storage - Persistence on the AgentFS KV store."""

from .quiz_store import QuizStore
from .user_store import UserStore

__all__ = ["QuizStore", "UserStore"]
