"""Retry with exponential backoff for model and API calls.

Supporting utility for the agent loop that drives the kernels:
- Exponential backoff with jitter
- Error classification (retry vs no-retry)
- Pre-configured LLM and API profiles from settings
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from .config import settings
from .exceptions import RetryableError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Checked first: a message matching any of these fails fast
NON_RETRYABLE_PATTERNS = (
    # HTTP client errors
    "status 400",
    "status: 400",
    "bad request",
    "status 401",
    "status: 401",
    "unauthorized",
    "status 403",
    "status: 403",
    "forbidden",
    "status 404",
    "status: 404",
    "not found",
    "status 422",
    "status: 422",
    "unprocessable",
    # Auth and permission
    "authentication",
    "invalid api key",
    "api key invalid",
    "permission denied",
    "access denied",
    # Quota and billing
    "quota exceeded",
    "quota_exceeded",
    "billing",
    "insufficient_quota",
    "usage limit",
    # Invalid requests
    "invalid request",
    "invalid_request",
    "malformed",
    "invalid argument",
    "invalid_argument",
    # Content policy
    "content policy",
    "safety",
    "blocked",
    # Model errors
    "model not found",
    "invalid model",
)

RETRYABLE_PATTERNS = (
    # Rate limiting
    "rate limit",
    "rate_limit",
    "ratelimit",
    "too many requests",
    "429",
    # Timeouts
    "timeout",
    "timed out",
    "etimedout",
    "deadline exceeded",
    # Network
    "econnreset",
    "econnrefused",
    "socket hang up",
    "network error",
    "connection refused",
    "connection reset",
    "epipe",
    "enotfound",
    # Server errors
    "500",
    "502",
    "503",
    "504",
    "internal server error",
    "bad gateway",
    "service unavailable",
    "gateway timeout",
    # Capacity
    "overloaded",
    "capacity",
    "temporarily unavailable",
    "try again",
    "resource exhausted",
    "resource_exhausted",
)

RETRYABLE_EXCEPTION_TYPES: tuple[type[BaseException], ...] = (
    TimeoutError,
    ConnectionError,
    asyncio.TimeoutError,
)


@dataclass
class RetryConfig:
    """Backoff parameters. Waits are in seconds."""

    max_retries: int
    base_multiplier: float
    min_wait: float
    operation_name: str = "Operation"


def is_retryable(error: BaseException) -> bool:
    """Classify an error as worth retrying.

    Unknown errors are not retried so real bugs are not masked.
    """
    if isinstance(error, RetryableError):
        return True
    if isinstance(error, ValidationError):
        return False

    message = str(error).lower()

    for pattern in NON_RETRYABLE_PATTERNS:
        if pattern in message:
            return False

    for pattern in RETRYABLE_PATTERNS:
        if pattern in message:
            return True

    if isinstance(error, RETRYABLE_EXCEPTION_TYPES):
        return True

    logger.info(f"Unknown error type, not retrying: {message[:100]}")
    return False


def calculate_wait_time(attempt: int, config: RetryConfig) -> float:
    """max(min_wait, base_multiplier * 2^attempt * jitter), jitter in [0.5, 1.0]."""
    exponential_wait = config.base_multiplier * (2**attempt)
    jitter = 0.5 + random.random() * 0.5
    return max(config.min_wait, exponential_wait * jitter)


async def with_retry(operation: Callable[[], Awaitable[T]], config: RetryConfig) -> T:
    """Run ``operation``, retrying retryable failures with backoff.

    Raises:
        The last error once it is non-retryable or retries are exhausted.
    """
    name = config.operation_name
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e):
                logger.info(f"{name} failed with non-retryable error: {e}")
                raise
            if attempt >= config.max_retries:
                logger.warning(f"{name} exhausted all {config.max_retries} retries. Final error: {e}")
                raise

            wait_time = calculate_wait_time(attempt, config)
            logger.info(
                f"{name} attempt {attempt + 1}/{config.max_retries + 1} failed: {e}. "
                f"Retrying in {wait_time:.1f}s..."
            )
            await asyncio.sleep(wait_time)
            attempt += 1


async def retry_llm(operation: Callable[[], Awaitable[T]], operation_name: str = "LLM call") -> T:
    """Generous retries for expensive model calls."""
    return await with_retry(
        operation,
        RetryConfig(
            max_retries=settings.llm_max_retries,
            base_multiplier=settings.llm_base_multiplier,
            min_wait=settings.llm_min_wait,
            operation_name=operation_name,
        ),
    )


async def retry_api(operation: Callable[[], Awaitable[T]], operation_name: str = "API call") -> T:
    """Moderate retries for API calls."""
    return await with_retry(
        operation,
        RetryConfig(
            max_retries=settings.api_max_retries,
            base_multiplier=settings.api_base_multiplier,
            min_wait=settings.api_min_wait,
            operation_name=operation_name,
        ),
    )
