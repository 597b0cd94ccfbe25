"""
DeepSeek Client - Typed async access to the DeepSeek chat completions API.

Fluent request building, bounded retries with backoff, and structured
decoding of responses and API errors.
"""

from .builder import ChatBuilder
from .client import DeepSeekClient
from .config import DeepSeekConfig
from .dispatch import Dispatcher
from .exceptions import (
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
from .models import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Choice,
    FinishReason,
    Message,
    Model,
    ResponseMessage,
    Role,
    Temperature,
    Usage,
)
from .retry import RetryConfig, RetryStrategy, calculate_backoff
from .transport import HttpxTransport, Transport, TransportResponse

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "DeepSeekClient",
    "DeepSeekConfig",
    "ChatBuilder",
    "Dispatcher",
    # Transport
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    # Models
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "FinishReason",
    "Message",
    "Model",
    "ResponseMessage",
    "Role",
    "Temperature",
    "Usage",
    # Exceptions
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
    # Retry
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
]
