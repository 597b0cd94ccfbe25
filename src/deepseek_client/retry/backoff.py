"""
Backoff calculation.
"""

import random

from .config import RetryConfig, RetryStrategy


def calculate_backoff(attempt: int, config: RetryConfig) -> float:
    """
    Calculate backoff delay for a given attempt.

    Args:
        attempt: Zero-based index of the attempt that just failed
        config: Retry configuration

    Returns:
        Delay in seconds with jitter applied, never above config.max_delay
    """
    if config.strategy == RetryStrategy.EXPONENTIAL:
        delay = config.base_delay * (2**attempt)
    elif config.strategy == RetryStrategy.LINEAR:
        delay = config.base_delay * (attempt + 1)
    else:  # CONSTANT
        delay = config.base_delay

    # Apply max delay cap
    delay = min(delay, config.max_delay)

    # Apply jitter (±jitter%)
    if config.jitter > 0:
        jitter_amount = delay * config.jitter * (2 * random.random() - 1)
        delay = delay + jitter_amount

    return min(max(0.0, delay), config.max_delay)
