"""
Retry configuration and strategy definitions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Set


class RetryStrategy(str, Enum):
    """Available backoff strategies."""

    EXPONENTIAL = "exponential"  # delay = base * (2 ** attempt)
    LINEAR = "linear"  # delay = base * (attempt + 1)
    CONSTANT = "constant"  # delay = base


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Total attempts per request, first one included (default: 3)
        base_delay: Base delay in seconds (default: 0.5)
        max_delay: Maximum delay cap in seconds (default: 8.0)
        strategy: Backoff strategy to use (default: exponential)
        jitter: Jitter factor as fraction of delay (default: 0.1 = ±10%)
        retryable_status_codes: HTTP status codes that trigger retry

    Jitter is applied after the max_delay cap and the result is clamped to
    [0, max_delay]. With jitter=0, delays never decrease from one attempt to
    the next. With jitter > 0, delays that have reached the cap can come out
    smaller than an earlier one.
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 8.0
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL
    jitter: float = 0.1
    retryable_status_codes: Set[int] = field(
        default_factory=lambda: {429, 500, 502, 503, 504}
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Retry delays cannot be negative")

    def should_retry(self, status_code: int) -> bool:
        """Check if the given status code should trigger a retry."""
        return status_code in self.retryable_status_codes or status_code >= 500

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_attempts=6,
            base_delay=1.0,
            max_delay=30.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_attempts=2,
            base_delay=0.25,
            max_delay=2.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=1)
