"""Quiz Engines - Business logic."""

from .quiz_engine import QuizEngine
from .scoring_engine import AnswerScoringEngine, answers_match, grade_exact

__all__ = ["QuizEngine", "AnswerScoringEngine", "answers_match", "grade_exact"]
