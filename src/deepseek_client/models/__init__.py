"""
DeepSeek Client - Request and Response Models.
"""

from .request import ChatCompletionRequest, Message, Model, Role, Temperature
from .response import (
    ApiErrorPayload,
    ChatCompletionResponse,
    Choice,
    FinishReason,
    ResponseMessage,
    Usage,
)

__all__ = [
    "ChatCompletionRequest",
    "Message",
    "Model",
    "Role",
    "Temperature",
    "ApiErrorPayload",
    "ChatCompletionResponse",
    "Choice",
    "FinishReason",
    "ResponseMessage",
    "Usage",
]
