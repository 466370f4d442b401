"""LangSmith tracing utilities for monitoring and debugging."""
import functools
import logging
import time
from typing import Callable

from langsmith import traceable

logger = logging.getLogger(__name__)


def trace_agent(agent_name: str):
    """Decorator to trace an async agent step with metadata.

    Tracing is only exported when LangSmith is enabled through its
    environment variables; elapsed time is always logged at DEBUG.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        @traceable(
            name=f"agent_{agent_name}",
            metadata={"agent_type": agent_name}
        )
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.debug("[%s] finished in %.2fs", agent_name, time.time() - start_time)

        return async_wrapper

    return decorator
