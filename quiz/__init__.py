"""Quiz Module - PDF quiz generation and answer evaluation.

Architecture:
- models/: Enums, Pydantic schemas, stored records
- engine/: QuizEngine, AnswerScoringEngine
- llm/: Completion oracles, LLMClientFactory, output parsing
- storage/: QuizStore, UserStore (AgentFS integration)
- prompts/: Prompt templates
- router.py: FastAPI endpoints
"""

from .engine import AnswerScoringEngine, QuizEngine, grade_exact
from .llm import ClaudeOracle, CompletionOracle, LLMClientFactory
from .models import AnswerEvaluation, Question, QuestionType, Quiz
from .storage import QuizStore, UserStore

__all__ = [
    # Models
    "QuestionType",
    "Question",
    "Quiz",
    "AnswerEvaluation",
    # Engines
    "QuizEngine",
    "AnswerScoringEngine",
    "grade_exact",
    # LLM
    "CompletionOracle",
    "ClaudeOracle",
    "LLMClientFactory",
    # Storage
    "QuizStore",
    "UserStore",
]
