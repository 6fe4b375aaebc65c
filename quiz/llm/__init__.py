"""Quiz LLM - Oracles and output parsing."""

from .factory import LLMClientFactory
from .oracle import ClaudeOracle, CompletionOracle
from .parsing import extract_json_object, parse_structured

__all__ = [
    "LLMClientFactory",
    "ClaudeOracle",
    "CompletionOracle",
    "extract_json_object",
    "parse_structured",
]
