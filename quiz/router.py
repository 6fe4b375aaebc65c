"""Quiz Router - FastAPI endpoints for generation, evaluation and listing."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

import app_state
from config import get_config
from core.auth import authenticate
from core.exceptions import StorageError, UpstreamError, ValidationError
from core.logger import get_logger
from utils.validators import validate_identifier

from .engine.quiz_engine import QuizEngine
from .llm.oracle import CompletionOracle
from .models.schemas import AnswerEvaluation, EvaluateAnswerRequest, GeneratedQuizResponse, Quiz
from .storage.quiz_store import QuizStore

logger = get_logger("quiz_router")

router = APIRouter(prefix="/api/quizzes", tags=["Quiz"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


async def get_quiz_store(agentfs=Depends(app_state.get_agentfs)) -> QuizStore:
    """Dependency that binds a QuizStore to the shared AgentFS."""
    return QuizStore(agentfs)


async def get_quiz_engine(
    store: QuizStore = Depends(get_quiz_store),
    generation_oracle: CompletionOracle = Depends(app_state.get_generation_oracle),
    grading_oracle: CompletionOracle = Depends(app_state.get_grading_oracle),
) -> QuizEngine:
    """Dependency that builds a QuizEngine for the request."""
    return QuizEngine(
        store=store,
        generation_oracle=generation_oracle,
        grading_oracle=grading_oracle,
        max_pdf_chars=get_config().max_pdf_chars,
    )


# =============================================================================
# GENERATION
# =============================================================================


@router.post("/generate", response_model=GeneratedQuizResponse, status_code=201)
async def generate_quiz(
    pdf_file: Optional[UploadFile] = File(default=None, alias="pdfFile"),
    user_id: Optional[str] = Form(default=None, alias="userId"),
    acting_user_id: str = Depends(authenticate),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Generates a quiz from an uploaded PDF.

    - Extracts the text of the PDF and keeps the first MAX_PDF_CHARS characters
    - Asks the generation oracle for a structured quiz
    - Stores the quiz for the authenticated user (the ``userId`` form field
      is informational only)
    """
    if pdf_file is None:
        raise ValidationError(message="No PDF file uploaded")

    pdf_bytes = await pdf_file.read()
    if not pdf_bytes:
        raise ValidationError(message="No PDF file uploaded")

    if user_id and user_id != acting_user_id:
        logger.warning(f"Form userId {user_id} differs from token user {acting_user_id}; using token user")

    try:
        quiz = await engine.generate_quiz(pdf_bytes, pdf_file.filename, acting_user_id)
    except (UpstreamError, StorageError) as e:
        logger.error(f"Quiz generation failed: {e.message} {e.details}")
        raise UpstreamError(message="Failed to generate quiz", details=e.details) from e

    return GeneratedQuizResponse(id=quiz.id, title=quiz.title, questions=quiz.questions)


# =============================================================================
# EVALUATION
# =============================================================================


@router.post("/evaluate", response_model=AnswerEvaluation)
async def evaluate_answer(
    request: EvaluateAnswerRequest,
    _user_id: str = Depends(authenticate),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Evaluates one answer.

    - multipleChoice / fillInBlank: case-insensitive exact match
    - longAnswer: graded by the grading oracle
    """
    try:
        return await engine.evaluate_answer(request.question_id, request.answer)
    except (UpstreamError, StorageError) as e:
        logger.error(f"Answer evaluation failed for {request.question_id}: {e.message} {e.details}")
        raise UpstreamError(message="Failed to evaluate answer", details=e.details) from e


# =============================================================================
# LISTING
# =============================================================================


@router.get("/user/{user_id}", response_model=list[Quiz])
async def list_user_quizzes(
    user_id: str,
    acting_user_id: str = Depends(authenticate),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Lists every quiz of ``user_id``; only the user themself may ask."""
    return await engine.list_user_quizzes(user_id, acting_user_id)


@router.get("/{quiz_id}", response_model=Quiz)
async def get_quiz(
    quiz_id: str,
    acting_user_id: str = Depends(authenticate),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Fetches a single quiz owned by the authenticated user."""
    validate_identifier(quiz_id, field="quizId")
    return await engine.get_quiz(quiz_id, acting_user_id)
