"""
Metrics Collection and Monitoring

Provides Prometheus-style metrics for monitoring application performance and behavior.
"""

import time
from contextlib import contextmanager

from prometheus_client import Counter, Histogram


# LLM Metrics
llm_requests_total = Counter(
    "llm_requests_total",
    "Total number of LLM API requests",
    ["status"]  # status: success, error, overloaded, not_configured
)

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM API call latency in seconds",
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)
)

llm_retry_attempts_total = Counter(
    "llm_retry_attempts_total",
    "Total number of LLM retry attempts",
    ["reason"]  # reason: overloaded, error
)


# Interview Metrics
interview_requests_total = Counter(
    "interview_requests_total",
    "Total interview API requests",
    ["endpoint", "outcome"]  # outcome: success, invalid_profession, upstream_error, fallback
)

evaluation_fallbacks_total = Counter(
    "evaluation_fallbacks_total",
    "Evaluations answered with the neutral fallback result",
    ["reason"]  # reason: model_error, malformed_response, malformed_history
)


@contextmanager
def track_llm_latency():
    """
    Context manager recording one LLM call's latency.

    Example:
        with track_llm_latency():
            response = await llm.ainvoke(prompt)
    """
    start_time = time.time()
    try:
        yield
    finally:
        llm_latency_seconds.observe(time.time() - start_time)


def record_interview_request(endpoint: str, outcome: str) -> None:
    interview_requests_total.labels(endpoint=endpoint, outcome=outcome).inc()


def record_evaluation_fallback(reason: str) -> None:
    evaluation_fallbacks_total.labels(reason=reason).inc()
