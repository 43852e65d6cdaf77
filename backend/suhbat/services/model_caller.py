"""
Model Caller
Sends one combined prompt to Gemini and returns the trimmed response text,
retrying transient failures through suhbat.utils.llm_retry.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from suhbat.config import Settings
from suhbat.utils.llm_retry import (
    DEFAULT_MAX_ATTEMPTS,
    ModelError,
    ModelNotConfiguredError,
    ModelOverloadedError,
    call_with_retry,
    classify_model_error,
)
from suhbat.utils.logging_config import log_llm_call
from suhbat.utils.metrics import llm_requests_total, track_llm_latency

logger = logging.getLogger(__name__)


def _response_text(response: Any) -> str:
    """Extract text from an AIMessage (content may be a string or a list of parts)."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content or "")


class ModelCaller:
    """
    Bounded-retry wrapper around the text-generation client.

    Built once at startup and injected into the request handlers.
    """

    def __init__(
        self,
        llm: Optional[Any],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        model_name: Optional[str] = None
    ):
        """
        Initialize the model caller.

        Args:
            llm: Chat model exposing `ainvoke`; None when no API key is configured
            max_attempts: Attempts per call, including the first
            sleep: Delay function awaited between attempts
            model_name: Model name for logs
        """
        self.llm = llm
        self.max_attempts = max_attempts
        self.sleep = sleep
        self.model_name = model_name or getattr(llm, "model", None)

    @property
    def is_configured(self) -> bool:
        return self.llm is not None

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """
        Generate text for a (system, task) prompt pair.

        Returns:
            Trimmed response text

        Raises:
            ModelError: When every attempt failed (the last error is re-raised)
        """
        if self.llm is None:
            llm_requests_total.labels(status="not_configured").inc()
            raise ModelNotConfiguredError("GEMINI_API_KEY is not configured")

        full_prompt = f"{system_prompt}\n\n{user_prompt}"
        attempt = 0

        async def attempt_call() -> str:
            nonlocal attempt
            attempt += 1
            logger.info(
                f"Attempt {attempt}/{self.max_attempts}: Sending to AI ({len(full_prompt)} chars)..."
            )
            start_time = time.time()
            try:
                with track_llm_latency():
                    response = await self.llm.ainvoke(full_prompt)
                text = _response_text(response).strip()
                if not text:
                    raise ModelError("Model returned an empty response")
            except Exception as e:
                error = classify_model_error(e)
                status = "overloaded" if isinstance(error, ModelOverloadedError) else "error"
                llm_requests_total.labels(status=status).inc()
                logger.error(f"Attempt {attempt}/{self.max_attempts} failed: {e}")
                if error is e:
                    raise
                raise error from e

            llm_requests_total.labels(status="success").inc()
            log_llm_call(
                logger,
                attempt=attempt,
                max_attempts=self.max_attempts,
                prompt_chars=len(full_prompt),
                latency_ms=(time.time() - start_time) * 1000,
                model=self.model_name,
            )
            logger.debug(f"AI Response: {text[:100]}...")
            return text

        return await call_with_retry(
            attempt_call,
            max_attempts=self.max_attempts,
            sleep=self.sleep,
        )


def create_model_caller(settings: Settings) -> ModelCaller:
    """
    Build the process-wide model caller from settings.

    A missing API key yields an unconfigured caller whose calls fail fast;
    startup is never blocked by it.
    """
    if not settings.api_key_configured:
        logger.warning("GEMINI_API_KEY is missing - model calls will fail until it is configured")
        return ModelCaller(None, max_attempts=settings.model_max_attempts, model_name=settings.gemini_model)

    llm = ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.gemini_api_key,
        temperature=settings.gemini_temperature,
        top_p=settings.gemini_top_p,
        top_k=settings.gemini_top_k,
        max_output_tokens=settings.gemini_max_output_tokens,
    )
    logger.info(f"Gemini client initialized (model={settings.gemini_model})")
    return ModelCaller(llm, max_attempts=settings.model_max_attempts, model_name=settings.gemini_model)
