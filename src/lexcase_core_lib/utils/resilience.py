"""Resilience utilities for loading rule tables from remote services.

Standard retry policies for transient failures while fetching configuration
at startup (service not yet reachable, scale-to-zero, etc.). Rule data that
arrives but fails validation is a configuration error and is never retried.
"""

import logging
from typing import Any, Callable, Tuple, Type, TypeVar

from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_custom_retry(
    max_attempts: int = 5,
    min_wait: float = 2,
    max_wait: float = 32,
    multiplier: float = 1,
    non_retryable: Tuple[Type[BaseException], ...] = (RuleConfigurationError,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Create a custom retry decorator with specific parameters.

    Args:
        max_attempts: Maximum number of retry attempts
        min_wait: Minimum wait time between retries (seconds)
        max_wait: Maximum wait time between retries (seconds)
        multiplier: Exponential backoff multiplier
        non_retryable: Exception types re-raised immediately

    Returns:
        A retry decorator configured with the specified parameters

    Example:
        ```python
        quick_retry = create_custom_retry(max_attempts=3, min_wait=0, max_wait=1)

        @quick_retry
        async def fetch_rules():
            ...
        ```
    """
    return retry(
        retry=retry_if_not_exception_type(non_retryable),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


# Standard retry policy for startup configuration fetches
# - Wait 2^x * 1 seconds between retries (2s, 4s, 8s, 16s, 32s)
# - Stop after 5 attempts
# - Log warnings before sleeping
# - Re-raise the exception if all retries fail
service_startup_retry: Callable[[Callable[..., Any]], Callable[..., Any]] = create_custom_retry()
