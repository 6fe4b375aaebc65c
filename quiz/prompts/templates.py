"""Quiz Templates - Prompts for quiz generation and long-answer grading."""

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

QUIZ_SYSTEM_PROMPT = (
    "You are an educational assistant that creates comprehensive quizzes based on PDF content. "
    "Create a quiz with a mix of multiple choice, fill-in-the-blank, and long answer questions. "
    "Respond ONLY with valid JSON, without any additional text."
)

GRADING_SYSTEM_PROMPT = (
    "You are an educational assistant that evaluates student answers to questions. "
    "Provide feedback and score the answer. "
    "Respond ONLY with valid JSON, without any additional text."
)

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

QUIZ_GENERATION_PROMPT = """Create a quiz for the following content from a PDF.

CONTENT:
{content}

REQUIREMENTS:
1. Base every question EXCLUSIVELY on the content above.
2. Mix the three question types:
   - "multipleChoice": 4 options, exactly one of them is the correct answer
   - "fillInBlank": a sentence with a blank ("____") and a short exact answer
   - "longAnswer": an open question answered in a few sentences
3. For multipleChoice, "correctAnswer" must be the full text of the correct option.
4. Give a short explanation for every question.

OUTPUT FORMAT (JSON):
```json
{{
  "title": "Short title describing the document",
  "questions": [
    {{
      "questionText": "Which ...?",
      "questionType": "multipleChoice",
      "options": ["...", "...", "...", "..."],
      "correctAnswer": "...",
      "explanation": "..."
    }},
    {{
      "questionText": "The ____ is ...",
      "questionType": "fillInBlank",
      "correctAnswer": "...",
      "explanation": "..."
    }},
    {{
      "questionText": "Explain ...",
      "questionType": "longAnswer",
      "correctAnswer": "...",
      "explanation": "..."
    }}
  ]
}}
```

Generate the complete JSON now:"""


GRADING_PROMPT = """Question: {question_text}

Correct Answer: {correct_answer}

Student Answer: {answer}

Evaluate if the student's answer is correct, partially correct, or incorrect.
Provide constructive feedback and a score from 0.0 to 1.0.

OUTPUT FORMAT (JSON):
{{"isCorrect": true, "feedback": "...", "score": 0.8}}"""


def build_generation_prompt(content: str) -> str:
    """Fills the generation template with the (already truncated) PDF text."""
    return QUIZ_GENERATION_PROMPT.format(content=content)


def build_grading_prompt(question_text: str, correct_answer: str, answer: str) -> str:
    return GRADING_PROMPT.format(
        question_text=question_text,
        correct_answer=correct_answer,
        answer=answer,
    )
