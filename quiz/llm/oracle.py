"""Completion Oracle - Text completion through the Claude Agent SDK.

The rest of the service only depends on the ``CompletionOracle`` protocol, so
handlers receive an oracle as an injected dependency and tests can script one.
"""

import asyncio
from typing import Protocol, runtime_checkable

from core.exceptions import UpstreamError
from core.logger import get_logger

logger = get_logger("oracle")


@runtime_checkable
class CompletionOracle(Protocol):
    """Opaque text completion service."""

    async def complete(self, system_prompt: str, prompt: str) -> str:
        """Returns the completion text for ``prompt``."""
        ...


class ClaudeOracle:
    """Oracle backed by ``claude_agent_sdk.query``.

    Runs a single turn without tools and concatenates the assistant text
    blocks. Every call is bounded by ``timeout_seconds``.

    Example:
        >>> oracle = ClaudeOracle(model="haiku", timeout_seconds=60)
        >>> text = await oracle.complete("Answer in JSON.", "Create a quiz ...")
    """

    def __init__(self, model: str = "haiku", timeout_seconds: float = 60.0, name: str = "oracle"):
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.name = name

    async def _collect(self, system_prompt: str, prompt: str) -> str:
        from claude_agent_sdk import AssistantMessage, ClaudeAgentOptions, TextBlock
        from claude_agent_sdk import query as sdk_query

        options = ClaudeAgentOptions(
            model=self.model,
            system_prompt=system_prompt,
            max_turns=1,
            allowed_tools=[],
        )

        text = ""
        async for message in sdk_query(prompt=prompt, options=options):
            if isinstance(message, AssistantMessage):
                for block in message.content:
                    if isinstance(block, TextBlock):
                        text += block.text
        return text

    async def complete(self, system_prompt: str, prompt: str) -> str:
        logger.info(f"[{self.name}] Calling model {self.model} ({len(prompt)} prompt chars)")

        try:
            text = await asyncio.wait_for(
                self._collect(system_prompt, prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"[{self.name}] Timed out after {self.timeout_seconds}s")
            raise UpstreamError(
                message="Language model timed out",
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except Exception as e:
            logger.error(f"[{self.name}] Call failed: {e}")
            raise UpstreamError(
                message="Language model request failed",
                details={"error": str(e)},
            ) from e

        if not text.strip():
            raise UpstreamError(message="Language model returned an empty response")

        logger.info(f"[{self.name}] Response received ({len(text)} chars)")
        return text
