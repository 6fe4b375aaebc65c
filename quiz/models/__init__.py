"""Quiz Models - Enums, Schemas and stored records."""

from .enums import QUESTION_TYPE_ALIASES, QuestionType
from .records import UserRecord
from .schemas import (
    AnswerEvaluation,
    AuthResponse,
    CamelModel,
    EvaluateAnswerRequest,
    GeneratedQuizResponse,
    GradingVerdict,
    LoginRequest,
    OracleQuestion,
    OracleQuiz,
    Question,
    Quiz,
    RegisterRequest,
    UserPublic,
)

__all__ = [
    # Enums
    "QuestionType",
    "QUESTION_TYPE_ALIASES",
    # Schemas
    "CamelModel",
    "Question",
    "Quiz",
    "GeneratedQuizResponse",
    "UserPublic",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "EvaluateAnswerRequest",
    "AnswerEvaluation",
    "OracleQuestion",
    "OracleQuiz",
    "GradingVerdict",
    # Records
    "UserRecord",
]
