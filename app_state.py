"""Core module - shared state (document store and oracles)."""

from __future__ import annotations

import asyncio
import weakref
from typing import TYPE_CHECKING, Optional

from config import get_config
from core.logger import get_logger

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

    from quiz.llm.oracle import CompletionOracle

logger = get_logger("app_state")

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Process-wide AgentFS handle (opened on first use, closed on shutdown)
agentfs: Optional[AgentFS] = None

generation_oracle: Optional[CompletionOracle] = None
grading_oracle: Optional[CompletionOracle] = None

# Named locks, created on first use for the running event loop
_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[str, asyncio.Lock]] = (
    weakref.WeakKeyDictionary()
)


def get_lock(name: str) -> asyncio.Lock:
    """Returns the lock called ``name`` for the running event loop.

    Must be called from a coroutine. Each loop gets its own set of locks, so
    a lock is never awaited from a loop other than the one that created it.
    """
    loop = asyncio.get_running_loop()
    loop_locks = _locks.setdefault(loop, {})
    lock = loop_locks.get(name)
    if lock is None:
        lock = loop_locks[name] = asyncio.Lock()
    return lock


# =============================================================================
# DOCUMENT STORE
# =============================================================================


async def get_agentfs() -> AgentFS:
    """Get the AgentFS instance, opening it on first use."""
    global agentfs
    if agentfs is not None:
        return agentfs

    async with get_lock("agentfs_open"):
        if agentfs is None:
            from agentfs_sdk import AgentFS, AgentFSOptions

            store_id = get_config().agentfs_id
            agentfs = await AgentFS.open(AgentFSOptions(id=store_id))
            logger.info(f"AgentFS opened: {store_id}")

    return agentfs


def is_store_open() -> bool:
    return agentfs is not None


async def close_store():
    """Close the AgentFS handle if it was opened."""
    global agentfs
    if agentfs is None:
        return

    try:
        await agentfs.close()
        logger.info("AgentFS closed")
    except Exception as e:
        logger.warning(f"Error closing AgentFS: {e}")
    finally:
        agentfs = None


# =============================================================================
# ORACLES
# =============================================================================


async def get_generation_oracle() -> CompletionOracle:
    """Get the oracle used to generate quizzes."""
    global generation_oracle
    if generation_oracle is None:
        from quiz.llm.factory import LLMClientFactory

        generation_oracle = LLMClientFactory(get_config()).create_generation_oracle()
    return generation_oracle


async def get_grading_oracle() -> CompletionOracle:
    """Get the oracle used to grade long answers."""
    global grading_oracle
    if grading_oracle is None:
        from quiz.llm.factory import LLMClientFactory

        grading_oracle = LLMClientFactory(get_config()).create_grading_oracle()
    return grading_oracle


async def cleanup():
    """Release shared resources on shutdown."""
    global generation_oracle, grading_oracle
    await close_store()
    generation_oracle = None
    grading_oracle = None
