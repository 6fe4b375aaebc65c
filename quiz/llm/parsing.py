"""Oracle output parsing - JSON extraction and schema validation."""

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import UpstreamError
from core.logger import get_logger

logger = get_logger("oracle_parsing")

ModelT = TypeVar("ModelT", bound=BaseModel)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(content: str) -> dict[str, Any]:
    """Extracts the JSON object from an oracle response.

    Accepts bare JSON, JSON inside a markdown code fence, or JSON surrounded
    by prose. Bare JSON is tried first, so string values may themselves
    contain code fences.

    Raises:
        UpstreamError: no JSON object can be decoded
    """
    if not content or not content.strip():
        raise UpstreamError(message="Empty response from language model")

    text = content.strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = _decode_embedded(text)

    if not isinstance(data, dict):
        raise UpstreamError(
            message="Malformed response from language model",
            details={"error": f"expected a JSON object, got {type(data).__name__}"},
        )
    return data


def _decode_embedded(text: str) -> Any:
    """Decodes JSON wrapped in a markdown fence or surrounded by prose."""
    if text.startswith("```") and text.endswith("```") and "\n" in text:
        # Whole response is one fence: keep everything between the outer markers
        inner = text.split("\n", 1)[1][:-3].strip()
        try:
            return json.loads(inner)
        except json.JSONDecodeError:
            pass

    if "```json" in text:
        text = text.split("```json", 1)[1].split("```", 1)[0].strip()
    elif "```" in text:
        text = text.split("```", 1)[1].split("```", 1)[0].strip()

    if not text.startswith("{"):
        match = _JSON_OBJECT.search(text)
        if match:
            text = match.group(0)

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Could not decode oracle JSON: {e} (preview: {text[:200]!r})")
        raise UpstreamError(
            message="Malformed response from language model",
            details={"error": str(e)},
        ) from e


def parse_structured(content: str, schema: type[ModelT]) -> ModelT:
    """Extracts the JSON object from ``content`` and validates it against ``schema``.

    Raises:
        UpstreamError: the JSON is missing or does not match the schema
    """
    data = extract_json_object(content)
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"Oracle output does not match {schema.__name__}: {e.error_count()} error(s)")
        raise UpstreamError(
            message="Language model response did not match the expected format",
            details={"schema": schema.__name__, "errors": e.errors(include_url=False)},
        ) from e
