"""Quiz Engine - Generation, evaluation and ownership checks."""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Callable

from core.exceptions import AuthorizationError, NotFoundError, ValidationError
from core.logger import get_logger
from utils.pdf_text import extract_pdf_text, truncate_text
from utils.validators import display_filename

from ..llm.oracle import CompletionOracle
from ..llm.parsing import parse_structured
from ..models.schemas import AnswerEvaluation, GradingVerdict, OracleQuiz, Question, Quiz
from ..prompts.templates import (
    GRADING_SYSTEM_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    build_generation_prompt,
    build_grading_prompt,
)
from ..storage.quiz_store import QuizStore
from .scoring_engine import AnswerScoringEngine

logger = get_logger("quiz_engine")


class QuizEngine:
    """Orchestrates the quiz lifecycle.

    - generate_quiz: PDF bytes -> text -> generation oracle -> stored Quiz
    - evaluate_answer: exact match or grading oracle, depending on the type
    - list_user_quizzes / get_quiz: reads restricted to the owner

    The quiz is built entirely in memory and persisted with one call, so a
    failure at any step leaves nothing behind.

    Example:
        >>> engine = QuizEngine(store, generation_oracle, grading_oracle)
        >>> quiz = await engine.generate_quiz(pdf_bytes, "notes.pdf", user_id)
        >>> result = await engine.evaluate_answer(quiz.questions[0].id, "Paris")
    """

    def __init__(
        self,
        store: QuizStore,
        generation_oracle: CompletionOracle,
        grading_oracle: CompletionOracle,
        max_pdf_chars: int = 8000,
        text_extractor: Callable[[bytes], str] = extract_pdf_text,
        scoring: AnswerScoringEngine | None = None,
    ):
        self.store = store
        self.generation_oracle = generation_oracle
        self.grading_oracle = grading_oracle
        self.max_pdf_chars = max_pdf_chars
        self.text_extractor = text_extractor
        self.scoring = scoring or AnswerScoringEngine()

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate_quiz(self, pdf_bytes: bytes, filename: str | None, user_id: str) -> Quiz:
        """Generates and stores a quiz for ``user_id`` from a PDF.

        Args:
            pdf_bytes: Uploaded file contents
            filename: Original file name (used for the fallback title)
            user_id: Owner of the new quiz

        Returns:
            The persisted quiz, questions in oracle order

        Raises:
            ValidationError: no file content
            UpstreamError: extraction, oracle or output parsing failed
            StorageError: the quiz could not be persisted
        """
        if not pdf_bytes:
            raise ValidationError(message="No PDF file uploaded")

        text = await asyncio.to_thread(self.text_extractor, pdf_bytes)
        content = truncate_text(text, self.max_pdf_chars)

        logger.info(f"Generating quiz for user {user_id} from {len(content)} chars")
        raw = await self.generation_oracle.complete(QUIZ_SYSTEM_PROMPT, build_generation_prompt(content))
        generated = parse_structured(raw, OracleQuiz)

        title = (generated.title or "").strip() or f"Quiz from {display_filename(filename)}"
        questions = [
            Question(
                id=str(uuid.uuid4()),
                question_text=item.question_text,
                question_type=item.question_type,
                options=item.options,
                correct_answer=item.correct_answer,
                explanation=item.explanation,
            )
            for item in generated.questions
        ]
        quiz = Quiz(
            id=str(uuid.uuid4()),
            title=title,
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
            questions=questions,
        )

        await self.store.save_quiz(quiz)
        logger.info(f"[Quiz {quiz.id}] Generated with {len(questions)} questions")
        return quiz

    # =========================================================================
    # EVALUATION
    # =========================================================================

    async def evaluate_answer(self, question_id: str, answer: str) -> AnswerEvaluation:
        """Grades ``answer`` against the stored question.

        Raises:
            NotFoundError: no quiz holds ``question_id``
            UpstreamError: the grading oracle failed or answered badly
        """
        found = await self.store.find_question(question_id)
        if found is None:
            raise NotFoundError(message="Question not found")

        quiz, question = found

        if not self.scoring.needs_oracle(question):
            return self.scoring.grade(question, answer)

        logger.info(f"[Quiz {quiz.id}] Grading long answer for question {question.id}")
        raw = await self.grading_oracle.complete(
            GRADING_SYSTEM_PROMPT,
            build_grading_prompt(question.question_text, question.correct_answer, answer),
        )
        verdict = parse_structured(raw, GradingVerdict)
        return self.scoring.from_verdict(verdict)

    # =========================================================================
    # READS
    # =========================================================================

    async def list_user_quizzes(self, requested_user_id: str, acting_user_id: str) -> list[Quiz]:
        if requested_user_id != acting_user_id:
            logger.warning(f"User {acting_user_id} tried to list quizzes of {requested_user_id}")
            raise AuthorizationError(message="Not authorized to access these quizzes")

        return await self.store.list_user_quizzes(requested_user_id)

    async def get_quiz(self, quiz_id: str, acting_user_id: str) -> Quiz:
        quiz = await self.store.load_quiz(quiz_id)
        if quiz is None:
            raise NotFoundError(message="Quiz not found")

        if quiz.user_id != acting_user_id:
            raise AuthorizationError(message="Not authorized to access this quiz")

        return quiz
