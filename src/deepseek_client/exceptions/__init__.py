"""
DeepSeek Client - Exception Hierarchy.

Custom exceptions for DeepSeek API operations with retry-awareness.
"""

from .base import (
    DeepSeekError,
    ConfigError,
    InvalidParameter,
    TransportFailure,
    RequestTimeout,
    RateLimitExceeded,
    ApiError,
    AuthenticationError,
    ServerError,
    DecodeError,
)

__all__ = [
    "DeepSeekError",
    "ConfigError",
    "InvalidParameter",
    "TransportFailure",
    "RequestTimeout",
    "RateLimitExceeded",
    "ApiError",
    "AuthenticationError",
    "ServerError",
    "DecodeError",
]
