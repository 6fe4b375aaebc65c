"""Quiz Scoring Engine - Answer grading rules."""

from ..models.enums import QuestionType
from ..models.schemas import AnswerEvaluation, GradingVerdict, Question

CORRECT_FEEDBACK = "Correct!"
INCORRECT_FEEDBACK = "Incorrect. The correct answer was {correct_answer}."


def answers_match(answer: str, correct_answer: str) -> bool:
    """Case-insensitive exact comparison (no trimming, no fuzzy matching)."""
    return answer.lower() == correct_answer.lower()


def grade_exact(question: Question, answer: str) -> AnswerEvaluation:
    """Grades a multiple-choice or fill-in-the-blank answer.

    Shared by the server and the Python client so both always agree.

    Example:
        >>> grade_exact(question, "paris").score  # correct_answer "Paris"
        1.0
    """
    if answers_match(answer, question.correct_answer):
        return AnswerEvaluation(is_correct=True, feedback=CORRECT_FEEDBACK, score=1.0)

    return AnswerEvaluation(
        is_correct=False,
        feedback=INCORRECT_FEEDBACK.format(correct_answer=question.correct_answer),
        score=0.0,
    )


class AnswerScoringEngine:
    """Grading rules per question type.

    - multipleChoice / fillInBlank: exact match, score 1.0 or 0.0
    - longAnswer: verdict produced by the grading oracle

    Example:
        >>> engine = AnswerScoringEngine()
        >>> if engine.needs_oracle(question):
        ...     evaluation = engine.from_verdict(verdict)
        ... else:
        ...     evaluation = engine.grade(question, answer)
    """

    @staticmethod
    def needs_oracle(question: Question) -> bool:
        return not QuestionType(question.question_type).auto_gradable

    def grade(self, question: Question, answer: str) -> AnswerEvaluation:
        if self.needs_oracle(question):
            raise ValueError(f"{question.question_type} questions are graded by the oracle")
        return grade_exact(question, answer)

    @staticmethod
    def from_verdict(verdict: GradingVerdict) -> AnswerEvaluation:
        """Copies an oracle verdict into the response shape."""
        return AnswerEvaluation(
            is_correct=verdict.is_correct,
            feedback=verdict.feedback,
            score=verdict.score,
        )
