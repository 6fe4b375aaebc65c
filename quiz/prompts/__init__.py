"""Quiz Prompts - Oracle prompt templates."""

from .templates import (
    GRADING_PROMPT,
    GRADING_SYSTEM_PROMPT,
    QUIZ_GENERATION_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    build_generation_prompt,
    build_grading_prompt,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "QUIZ_GENERATION_PROMPT",
    "GRADING_SYSTEM_PROMPT",
    "GRADING_PROMPT",
    "build_generation_prompt",
    "build_grading_prompt",
]
