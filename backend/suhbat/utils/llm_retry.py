"""
LLM Retry Utilities

Provides error classification and a bounded retry combinator for LLM API calls.
Overload errors back off linearly (2s, 4s, 6s); any other model error waits 1s.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from suhbat.utils.metrics import llm_retry_attempts_total

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_MAX_ATTEMPTS = 3


class ModelError(Exception):
    """General LLM API error"""
    pass


class ModelOverloadedError(ModelError):
    """Raised when the LLM API reports it is overloaded (503)"""
    pass


class ModelNotConfiguredError(ModelError):
    """Raised when no API key is configured; never retried"""
    pass


_OVERLOAD_MARKERS = ("503", "overloaded", "unavailable")


def classify_model_error(error: Exception) -> ModelError:
    """
    Map a raw SDK exception onto the model error taxonomy.

    Args:
        error: Exception raised by the underlying client

    Returns:
        ModelOverloadedError for 503/overload conditions, ModelError otherwise
    """
    if isinstance(error, ModelError):
        return error

    for attr in ("status", "status_code", "code"):
        if getattr(error, attr, None) == 503:
            return ModelOverloadedError(f"Model overloaded: {error}")

    error_msg = str(error).lower()
    if any(marker in error_msg for marker in _OVERLOAD_MARKERS):
        return ModelOverloadedError(f"Model overloaded: {error}")

    return ModelError(f"API error: {error}")


class LinearOverloadBackoff(wait_base):
    """
    Wait `overload_step * attempt` after an overload, `default_wait` after anything else.

    attempt_number is the attempt that just failed, so three attempts give
    2s then 4s between them on repeated overloads.
    """

    def __init__(self, overload_step: float = 2.0, default_wait: float = 1.0):
        self.overload_step = overload_step
        self.default_wait = default_wait

    def __call__(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, ModelOverloadedError):
            return self.overload_step * retry_state.attempt_number
        return self.default_wait


def _log_before_sleep(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception()
    wait_seconds = retry_state.next_action.sleep if retry_state.next_action else 0
    reason = "overloaded" if isinstance(error, ModelOverloadedError) else "error"
    llm_retry_attempts_total.labels(reason=reason).inc()
    if reason == "overloaded":
        logger.warning(
            f"Model overloaded (attempt {retry_state.attempt_number}). "
            f"Waiting {wait_seconds:.0f}s before retry..."
        )
    else:
        logger.warning(
            f"Attempt {retry_state.attempt_number} failed: {error}. "
            f"Waiting {wait_seconds:.0f}s before retry..."
        )


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff: Optional[wait_base] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """
    Run `operation` up to `max_attempts` times, awaiting `backoff` between attempts.

    Args:
        operation: Zero-argument coroutine function raising ModelError on failure
        max_attempts: Total attempts including the first (default 3)
        backoff: Wait strategy (default LinearOverloadBackoff)
        sleep: Awaitable delay; asyncio.sleep keeps the wait cancellable

    Returns:
        The first successful result

    Raises:
        ModelError: The last error once attempts are exhausted

    Example:
        text = await call_with_retry(lambda: llm.ainvoke(prompt), max_attempts=3)
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=backoff or LinearOverloadBackoff(),
        retry=(
            retry_if_exception_type(ModelError)
            & retry_if_not_exception_type(ModelNotConfiguredError)
        ),
        before_sleep=_log_before_sleep,
        sleep=sleep,
        reraise=True,
    )
    return await retrying(operation)
