"""Quiz Store - Quiz documents on top of the AgentFS KV store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

import app_state
from core.exceptions import StorageError
from core.logger import get_logger

from ..models.schemas import Question, Quiz

logger = get_logger("quiz_store")

# Serializes read-modify-write of the per-user quiz lists
OWNER_INDEX_LOCK = "quiz_owner_index"


class QuizStore:
    """Persistence of quizzes in the AgentFS KV store.

    Key layout:
        - quiz:{quiz_id} -> quiz document (camelCase JSON)
        - quiz:user:{user_id} -> ordered list of the user's quiz ids
        - question:{question_id} -> id of the quiz owning the question

    A quiz is always built fully in memory before it is written. The
    document goes first and the owner list last, and a failed save deletes
    whatever it already wrote, so no partial quiz stays reachable.

    Example:
        >>> store = QuizStore(agentfs)
        >>> await store.save_quiz(quiz)
        >>> loaded = await store.load_quiz(quiz.id)
    """

    KEY_PREFIX = "quiz"
    QUESTION_PREFIX = "question"

    def __init__(self, agentfs: AgentFS):
        """Binds the store to an open AgentFS instance.

        Args:
            agentfs: Configured AgentFS instance
        """
        self.agentfs = agentfs

    def _quiz_key(self, quiz_id: str) -> str:
        return f"{self.KEY_PREFIX}:{quiz_id}"

    def _owner_key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:user:{user_id}"

    def _question_key(self, question_id: str) -> str:
        return f"{self.QUESTION_PREFIX}:{question_id}"

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

    async def _delete(self, key: str) -> None:
        try:
            await self.agentfs.kv.delete(key)
        except Exception as e:
            logger.warning(f"KV rollback failed for {key}: {e}")

    async def save_quiz(self, quiz: Quiz) -> None:
        """Persists a new quiz and indexes its owner and questions.

        The owner list is written last. If any write fails, every key
        already written is deleted before the StorageError propagates.

        Args:
            quiz: Fully built quiz

        Raises:
            StorageError: a KV read or write failed
        """
        written: list[str] = []
        try:
            quiz_key = self._quiz_key(quiz.id)
            written.append(quiz_key)
            await self._set(quiz_key, quiz.model_dump(mode="json", by_alias=True))

            for question in quiz.questions:
                question_key = self._question_key(question.id)
                written.append(question_key)
                await self._set(question_key, quiz.id)

            async with app_state.get_lock(OWNER_INDEX_LOCK):
                owner_key = self._owner_key(quiz.user_id)
                quiz_ids = [*(await self._get(owner_key) or []), quiz.id]
                await self._set(owner_key, quiz_ids)
        except StorageError:
            logger.error(f"Quiz save failed: {quiz.id}; rolling back {len(written)} key(s)")
            for key in reversed(written):
                await self._delete(key)
            raise

        logger.info(f"Quiz saved: {quiz.id} ({len(quiz.questions)} questions, user {quiz.user_id})")

    async def load_quiz(self, quiz_id: str) -> Quiz | None:
        """Loads a quiz by id.

        Returns:
            Quiz if found, None otherwise
        """
        data = await self._get(self._quiz_key(quiz_id))
        if not data:
            logger.debug(f"Quiz not found: {quiz_id}")
            return None

        return Quiz.model_validate(data)

    async def list_user_quizzes(self, user_id: str) -> list[Quiz]:
        """Returns every quiz owned by ``user_id`` in creation order."""
        quiz_ids = await self._get(self._owner_key(user_id)) or []

        quizzes = []
        for quiz_id in quiz_ids:
            quiz = await self.load_quiz(quiz_id)
            if quiz is not None:
                quizzes.append(quiz)
        return quizzes

    async def find_question(self, question_id: str) -> tuple[Quiz, Question] | None:
        """Locates the quiz that contains ``question_id``.

        Returns:
            (quiz, question) if some quiz holds the question, None otherwise
        """
        quiz_id = await self._get(self._question_key(question_id))
        if not quiz_id:
            return None

        quiz = await self.load_quiz(quiz_id)
        if quiz is None:
            return None

        question = quiz.find_question(question_id)
        if question is None:
            return None

        return quiz, question
