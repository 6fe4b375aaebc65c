"""Quiz Enums - Question types."""

from enum import Enum


class QuestionType(str, Enum):
    """Kinds of questions a quiz can hold (wire values used by the mobile app)."""

    MULTIPLE_CHOICE = "multipleChoice"  # Graded by exact match against the options
    FILL_IN_BLANK = "fillInBlank"  # Graded by exact match
    LONG_ANSWER = "longAnswer"  # Graded by the grading oracle

    @property
    def auto_gradable(self) -> bool:
        """Whether the answer can be checked without the grading oracle."""
        return self is not QuestionType.LONG_ANSWER


# Spellings the generation oracle uses for each type, keyed by their
# lower-cased alphanumeric form.
QUESTION_TYPE_ALIASES: dict[str, QuestionType] = {
    "multiplechoice": QuestionType.MULTIPLE_CHOICE,
    "mcq": QuestionType.MULTIPLE_CHOICE,
    "choice": QuestionType.MULTIPLE_CHOICE,
    "fillinblank": QuestionType.FILL_IN_BLANK,
    "fillintheblank": QuestionType.FILL_IN_BLANK,
    "fillintheblanks": QuestionType.FILL_IN_BLANK,
    "fillblank": QuestionType.FILL_IN_BLANK,
    "longanswer": QuestionType.LONG_ANSWER,
    "longform": QuestionType.LONG_ANSWER,
    "essay": QuestionType.LONG_ANSWER,
    "openended": QuestionType.LONG_ANSWER,
}
