"""
Response models for the DeepSeek chat completions API.

Success bodies are decoded strictly: anything that does not fit the schema
raises DecodeError. Error bodies are decoded best-effort since they are only
used for diagnostics.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import DecodeError

# Longest body excerpt carried on errors
MAX_BODY_EXCERPT = 512

# Rough per-token prices used by Usage.estimate_cost
PROMPT_TOKEN_RATE = 0.0001
COMPLETION_TOKEN_RATE = 0.0002


def truncate_body(body: bytes | str, limit: int = MAX_BODY_EXCERPT) -> str:
    """Return a printable, length-limited excerpt of a response body."""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if len(body) > limit:
        return body[:limit] + "..."
    return body


class FinishReason(str, Enum):
    """Why the model stopped generating."""

    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    INSUFFICIENT_SYSTEM_RESOURCE = "insufficient_system_resource"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


def _optional(data: dict, key: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if (isinstance(value, bool) and kind is int) or not isinstance(value, kind):
        raise DecodeError(f"Field '{key}' has unexpected type {type(value).__name__}")
    return value


def _required(data: dict, key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in data or data[key] is None:
        raise DecodeError(f"Missing required field '{key}'")
    return _optional(data, key, kind)


def _object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected {what} to be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Usage:
    """Token usage counters."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    reasoning_tokens: int | None = None
    prompt_cache_hit_tokens: int | None = None
    prompt_cache_miss_tokens: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Usage":
        data = _object(data, "usage")
        return cls(
            prompt_tokens=_required(data, "prompt_tokens", int),
            completion_tokens=_required(data, "completion_tokens", int),
            total_tokens=_required(data, "total_tokens", int),
            reasoning_tokens=_optional(data, "reasoning_tokens", int),
            prompt_cache_hit_tokens=_optional(data, "prompt_cache_hit_tokens", int),
            prompt_cache_miss_tokens=_optional(data, "prompt_cache_miss_tokens", int),
        )

    def estimate_cost(
        self,
        prompt_rate: float = PROMPT_TOKEN_RATE,
        completion_rate: float = COMPLETION_TOKEN_RATE,
    ) -> float:
        """
        Rough cost estimate from prompt and completion token counts.

        The default rates are placeholders; pass the current per-token prices.
        """
        return self.prompt_tokens * prompt_rate + self.completion_tokens * completion_rate


@dataclass(frozen=True)
class ResponseMessage:
    """Assistant message returned in a choice."""

    role: str
    content: str | None = None
    reasoning_content: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ResponseMessage":
        data = _object(data, "message")
        return cls(
            role=_required(data, "role", str),
            content=_optional(data, "content", str),
            reasoning_content=_optional(data, "reasoning_content", str),
        )

    def has_content(self) -> bool:
        return bool(self.content)

    def has_reasoning(self) -> bool:
        return bool(self.reasoning_content)

    def total_length(self) -> int:
        """Combined character count of content and reasoning."""
        return len(self.content or "") + len(self.reasoning_content or "")


@dataclass(frozen=True)
class Choice:
    """A single completion choice."""

    index: int
    message: ResponseMessage
    finish_reason: FinishReason | None = None

    @classmethod
    def from_dict(cls, data: dict, position: int = 0) -> "Choice":
        data = _object(data, "choice")
        index = _optional(data, "index", int)
        finish_reason = _optional(data, "finish_reason", str)
        return cls(
            index=position if index is None else index,
            message=ResponseMessage.from_dict(data.get("message")),
            finish_reason=FinishReason(finish_reason) if finish_reason is not None else None,
        )


@dataclass(frozen=True)
class ChatCompletionResponse:
    """Decoded /chat/completions response."""

    choices: tuple[Choice, ...]
    usage: Usage | None = None
    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    system_fingerprint: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ChatCompletionResponse":
        data = _object(data, "response")
        choices = _required(data, "choices", list)
        usage = data.get("usage")
        return cls(
            choices=tuple(Choice.from_dict(choice, i) for i, choice in enumerate(choices)),
            usage=Usage.from_dict(usage) if usage is not None else None,
            id=_optional(data, "id", str),
            object=_optional(data, "object", str),
            created=_optional(data, "created", int),
            model=_optional(data, "model", str),
            system_fingerprint=_optional(data, "system_fingerprint", str),
        )

    @classmethod
    def from_json(cls, body: bytes | str) -> "ChatCompletionResponse":
        """Decode a raw success body, raising DecodeError on any mismatch."""
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Response is not valid JSON: {e}", body=truncate_body(body)) from e
        try:
            return cls.from_dict(data)
        except DecodeError as e:
            e.body = truncate_body(body)
            raise

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content

    @property
    def reasoning(self) -> str | None:
        """Reasoning content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.reasoning_content

    @property
    def total_tokens(self) -> int | None:
        return self.usage.total_tokens if self.usage else None

    def is_finished(self) -> bool:
        """True when the first choice stopped naturally."""
        return bool(self.choices) and self.choices[0].finish_reason == FinishReason.STOP


@dataclass(frozen=True)
class ApiErrorPayload:
    """Error details decoded from a non-2xx body."""

    status: int
    message: str
    error_type: str | None = None
    code: str | None = None

    @classmethod
    def parse(cls, status: int, body: bytes) -> "ApiErrorPayload":
        """Decode {"error": {"message", "type", "code"}}, falling back to the raw body."""
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None

        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            code = error.get("code")
            return cls(
                status=status,
                message=error["message"],
                error_type=error.get("type") if isinstance(error.get("type"), str) else None,
                code=str(code) if code is not None else None,
            )

        excerpt = truncate_body(body).strip()
        return cls(status=status, message=excerpt or f"HTTP {status}")
