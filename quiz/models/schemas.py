"""Quiz Schemas - Pydantic models for storage, request/response and oracle output.

Field names are snake_case in Python and camelCase on the wire
(``question_text`` <-> ``questionText``), matching the mobile client.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .enums import QUESTION_TYPE_ALIASES, QuestionType


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# QUIZ DOCUMENTS
# =============================================================================


class Question(CamelModel):
    """Question owned by exactly one quiz."""

    id: str = Field(..., description="Question id (uuid4)")
    question_text: str = Field(..., description="Prompt shown to the student")
    question_type: QuestionType = Field(..., description="multipleChoice, fillInBlank or longAnswer")
    options: list[str] | None = Field(default=None, description="Choices (multiple choice only)")
    correct_answer: str = Field(..., description="Reference answer")
    explanation: str | None = Field(default=None, description="Why the answer is correct")


class Quiz(CamelModel):
    """Quiz generated from one PDF; questions are in display/grading order."""

    id: str = Field(..., description="Quiz id (uuid4)")
    title: str = Field(..., description="Quiz title")
    user_id: str = Field(..., description="Owning user id")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    questions: list[Question] = Field(default_factory=list, description="Ordered questions")

    def find_question(self, question_id: str) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


class GeneratedQuizResponse(CamelModel):
    """Response of the generation endpoint."""

    id: str
    title: str
    questions: list[Question]


# =============================================================================
# AUTH
# =============================================================================


class UserPublic(CamelModel):
    """Public projection of a user (never includes the password hash)."""

    id: str
    email: str
    name: str = ""


class RegisterRequest(CamelModel):
    email: str = Field(..., description="Unique email address")
    password: str = Field(..., description="Plain text password (hashed before storage)")
    name: str = Field(default="", description="Display name")


class LoginRequest(CamelModel):
    email: str
    password: str


class AuthResponse(CamelModel):
    token: str = Field(..., description="Bearer session token")
    user: UserPublic


# =============================================================================
# EVALUATION
# =============================================================================


class EvaluateAnswerRequest(CamelModel):
    question_id: str = Field(..., description="Id of the question being answered")
    answer: str = Field(..., description="Free-text answer submitted by the student")


class AnswerEvaluation(CamelModel):
    """Verdict returned for a submitted answer."""

    is_correct: bool = Field(..., description="Whether the answer is accepted")
    feedback: str = Field(..., description="Feedback for the student")
    score: float = Field(..., ge=0.0, le=1.0, description="Score in [0, 1]")


# =============================================================================
# ORACLE OUTPUT
# =============================================================================


class OracleQuestion(CamelModel):
    """One question as produced by the generation oracle."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    question_text: str = Field(..., min_length=1)
    question_type: QuestionType
    options: list[str] | None = None
    correct_answer: str = Field(..., min_length=1)
    explanation: str | None = None

    @field_validator("question_type", mode="before")
    @classmethod
    def normalize_question_type(cls, value):
        """Accepts spelling variants such as ``multiple_choice`` or ``fill-in-the-blank``."""
        if isinstance(value, str):
            key = re.sub(r"[^a-z]", "", value.lower())
            if key in QUESTION_TYPE_ALIASES:
                return QUESTION_TYPE_ALIASES[key]
        return value

    @model_validator(mode="after")
    def check_options(self) -> "OracleQuestion":
        if self.question_type is QuestionType.MULTIPLE_CHOICE and not self.options:
            raise ValueError("multiple choice questions need options")
        if self.question_type is not QuestionType.MULTIPLE_CHOICE and self.options == []:
            self.options = None
        return self


class OracleQuiz(CamelModel):
    """Structured quiz expected from the generation oracle."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str | None = None
    questions: list[OracleQuestion] = Field(..., min_length=1)


class GradingVerdict(CamelModel):
    """Structured verdict expected from the grading oracle."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    is_correct: bool
    feedback: str
    score: float = Field(..., ge=0.0, le=1.0)
