"""LLM Client Factory - Builds the oracles used by the quiz engine."""

from config import QuizServiceConfig, get_config

from .oracle import ClaudeOracle


class LLMClientFactory:
    """Factory for the generation and grading oracles.

    Centralizes model selection and timeouts so every oracle is built
    from the same configuration.

    Example:
        >>> factory = LLMClientFactory()
        >>> oracle = factory.create_generation_oracle()
        >>> text = await oracle.complete(QUIZ_SYSTEM_PROMPT, prompt)
    """

    def __init__(self, config: QuizServiceConfig | None = None):
        self.config = config or get_config()

    def create_generation_oracle(self) -> ClaudeOracle:
        """Oracle that turns PDF text into a structured quiz."""
        return ClaudeOracle(
            model=self.config.generation_model,
            timeout_seconds=self.config.oracle_timeout_seconds,
            name="generation",
        )

    def create_grading_oracle(self) -> ClaudeOracle:
        """Oracle that grades long answers."""
        return ClaudeOracle(
            model=self.config.grading_model,
            timeout_seconds=self.config.oracle_timeout_seconds,
            name="grading",
        )
