"""Quiz Cache - Local copy of the server's quizzes.

The server is the source of truth. Data only flows server -> cache: a fetch
replaces the cached list of a user, and entries older than
``max_age_seconds`` are reported as missing so the caller fetches again.
"""

import time
from dataclasses import dataclass, field
from typing import Callable

from core.logger import get_logger
from quiz.models.schemas import Quiz

logger = get_logger("quiz_cache")


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CacheEntry:
    """Quizzes of one user as last fetched from the server."""

    quizzes: list[Quiz]
    fetched_at: float


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    stale: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0


# =============================================================================
# Quiz Cache
# =============================================================================


class QuizCache:
    """Per-user cache of quiz lists with a maximum age.

    Example:
        >>> cache = QuizCache(max_age_seconds=300)
        >>> cache.put(user_id, quizzes)
        >>> cache.get(user_id)  # None once the entry is older than 300s
    """

    def __init__(self, max_age_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._stats = CacheStats()

    def is_stale(self, user_id: str) -> bool:
        """True when nothing is cached for the user or the entry is too old."""
        entry = self._entries.get(user_id)
        if entry is None:
            return True
        return self._clock() - entry.fetched_at > self.max_age_seconds

    def get(self, user_id: str) -> list[Quiz] | None:
        """Returns a copy of the cached list, or None when missing or stale."""
        if user_id not in self._entries:
            self._stats.misses += 1
            return None

        if self.is_stale(user_id):
            self._stats.misses += 1
            self._stats.stale += 1
            logger.debug(f"Cached quizzes of {user_id} are stale")
            return None

        self._stats.hits += 1
        return list(self._entries[user_id].quizzes)

    def put(self, user_id: str, quizzes: list[Quiz]) -> None:
        """Replaces the cached list with a fresh server response."""
        self._entries[user_id] = CacheEntry(quizzes=list(quizzes), fetched_at=self._clock())

    def invalidate(self, user_id: str) -> bool:
        return self._entries.pop(user_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> dict:
        return {
            "users": len(self._entries),
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "stale": self._stats.stale,
            "hit_rate": round(self._stats.hit_rate, 4),
        }
