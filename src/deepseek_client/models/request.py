"""
Request models for the DeepSeek chat completions API.

Range checks live in module-level ``check_*`` helpers so the builder can
validate a value the moment it is set and the request can re-check the whole
payload before it is sent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..exceptions import InvalidParameter


class Role(str, Enum):
    """Message roles in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Model(str, Enum):
    """Available DeepSeek model variants."""

    CHAT = "deepseek-chat"
    REASONER = "deepseek-reasoner"
    CODER = "deepseek-coder"

    def supports_reasoning(self) -> bool:
        """Only the reasoner returns reasoning_content."""
        return self is Model.REASONER

    def __str__(self) -> str:
        return self.value


class Temperature:
    """Common temperature presets."""

    VERY_LOW = 0.1
    LOW = 0.3
    MEDIUM = 0.7
    HIGH = 1.0
    VERY_HIGH = 1.5


@dataclass(frozen=True)
class Message:
    """A single message in a conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict:
        """Convert to dictionary format for API requests."""
        return {"role": Role(self.role).value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=Role.ASSISTANT, content=content)


def _check_range(name: str, value: float, low: float, high: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")
    value = float(value)
    # NaN fails both comparisons
    if not low <= value <= high:
        raise InvalidParameter(f"{name} must be between {low} and {high}, got {value}")
    return value


def check_temperature(value: float) -> float:
    return _check_range("Temperature", value, 0.0, 2.0)


def check_top_p(value: float) -> float:
    return _check_range("top_p", value, 0.0, 1.0)


def check_penalty(name: str, value: float) -> float:
    return _check_range(name, value, -2.0, 2.0)


def check_max_tokens(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameter(f"max_tokens must be a positive integer, got {value!r}")
    return value


def check_n(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 10:
        raise InvalidParameter(f"n must be between 1 and 10, got {value!r}")
    return value


def check_stop(stop: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(stop, str):
        stop = [stop]
    sequences = tuple(stop)
    if not sequences:
        raise InvalidParameter("stop must contain at least one sequence")
    for sequence in sequences:
        if not isinstance(sequence, str) or not sequence:
            raise InvalidParameter(f"stop sequences must be non-empty strings, got {sequence!r}")
    return sequences


def check_content(content: str) -> str:
    if not isinstance(content, str) or not content:
        raise InvalidParameter("Message content cannot be empty")
    return content


@dataclass(frozen=True)
class ChatCompletionRequest:
    """
    A finalized chat completion request.

    Optional parameters left as None are omitted from the wire body.
    """

    messages: tuple[Message, ...]
    model: Model = Model.CHAT
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: tuple[str, ...] | None = None
    n: int | None = None
    user: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "messages", tuple(self.messages))
        if self.stop is not None:
            object.__setattr__(self, "stop", tuple(self.stop))

    @classmethod
    def from_user_message(cls, content: str, **kwargs) -> "ChatCompletionRequest":
        """Create a request holding a single user message."""
        return cls(messages=(Message.user(content),), **kwargs)

    def validate(self) -> None:
        """Raise InvalidParameter if the request breaks any invariant."""
        if not self.messages:
            raise InvalidParameter("At least one message is required")

        try:
            Model(self.model)
        except ValueError:
            raise InvalidParameter(f"Unknown model: {self.model!r}") from None

        for i, message in enumerate(self.messages):
            try:
                Role(message.role)
            except ValueError:
                raise InvalidParameter(
                    f"Message at index {i} has unknown role {message.role!r}"
                ) from None
            if not isinstance(message.content, str):
                raise InvalidParameter(f"Message at index {i} content must be a string")
            if not message.content:
                raise InvalidParameter(f"Message at index {i} is empty")

        if self.temperature is not None:
            check_temperature(self.temperature)
        if self.max_tokens is not None:
            check_max_tokens(self.max_tokens)
        if self.top_p is not None:
            check_top_p(self.top_p)
        if self.frequency_penalty is not None:
            check_penalty("frequency_penalty", self.frequency_penalty)
        if self.presence_penalty is not None:
            check_penalty("presence_penalty", self.presence_penalty)
        if self.stop is not None:
            check_stop(self.stop)
        if self.n is not None:
            check_n(self.n)

    def to_dict(self) -> dict:
        """Convert to the JSON body expected by /chat/completions."""
        body = {
            "model": Model(self.model).value,
            "messages": [message.to_dict() for message in self.messages],
        }
        optional = {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
            "stop": list(self.stop) if self.stop is not None else None,
            "n": self.n,
            "user": self.user,
        }
        body.update({key: value for key, value in optional.items() if value is not None})
        return body
