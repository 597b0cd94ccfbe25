"""
DeepSeek Client - Retry Logic.

Configurable backoff strategies with exponential growth and jitter.
"""

from .config import RetryConfig, RetryStrategy
from .backoff import calculate_backoff

__all__ = [
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
]
