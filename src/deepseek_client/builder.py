"""
Fluent conversation builder.

Every ``add_*``/``with_*`` call validates its argument first and only then
touches state, so a call that raises InvalidParameter leaves the builder
exactly as it was.
"""

from typing import TYPE_CHECKING, Sequence

from .exceptions import InvalidParameter
from .models import ChatCompletionRequest, ChatCompletionResponse, Message, Model, Role
from .models.request import (
    check_content,
    check_max_tokens,
    check_n,
    check_penalty,
    check_stop,
    check_temperature,
    check_top_p,
)

if TYPE_CHECKING:
    from .dispatch import Dispatcher


class ChatBuilder:
    """
    Accumulates a multi-turn conversation and request parameters.

    Example:
        response = await (
            client.chat()
            .add_system_message("You are terse.")
            .add_user_message("What is 6 * 7?")
            .with_model(Model.REASONER)
            .send()
        )
    """

    def __init__(self, dispatcher: "Dispatcher", model: Model = Model.CHAT):
        self._dispatcher = dispatcher
        self.messages: list[Message] = []
        self.model = model
        self.temperature: float | None = None
        self.max_tokens: int | None = None
        self.top_p: float | None = None
        self.frequency_penalty: float | None = None
        self.presence_penalty: float | None = None
        self.stop: tuple[str, ...] | None = None
        self.n: int | None = None
        self.user: str | None = None

    def add_message(self, role: Role | str, content: str) -> "ChatBuilder":
        try:
            role = Role(role)
        except ValueError:
            raise InvalidParameter(f"Unknown role: {role!r}") from None
        self.messages.append(Message(role=role, content=check_content(content)))
        return self

    def add_system_message(self, content: str) -> "ChatBuilder":
        return self.add_message(Role.SYSTEM, content)

    def add_user_message(self, content: str) -> "ChatBuilder":
        return self.add_message(Role.USER, content)

    def add_assistant_message(self, content: str) -> "ChatBuilder":
        return self.add_message(Role.ASSISTANT, content)

    def with_model(self, model: Model | str) -> "ChatBuilder":
        try:
            self.model = Model(model)
        except ValueError:
            raise InvalidParameter(f"Unknown model: {model!r}") from None
        return self

    def with_temperature(self, temperature: float) -> "ChatBuilder":
        """Set sampling temperature, 0.0 to 2.0 inclusive."""
        self.temperature = check_temperature(temperature)
        return self

    def with_max_tokens(self, max_tokens: int) -> "ChatBuilder":
        self.max_tokens = check_max_tokens(max_tokens)
        return self

    def with_top_p(self, top_p: float) -> "ChatBuilder":
        self.top_p = check_top_p(top_p)
        return self

    def with_frequency_penalty(self, penalty: float) -> "ChatBuilder":
        self.frequency_penalty = check_penalty("frequency_penalty", penalty)
        return self

    def with_presence_penalty(self, penalty: float) -> "ChatBuilder":
        self.presence_penalty = check_penalty("presence_penalty", penalty)
        return self

    def with_stop(self, stop: str | Sequence[str]) -> "ChatBuilder":
        self.stop = check_stop(stop)
        return self

    def with_n(self, n: int) -> "ChatBuilder":
        self.n = check_n(n)
        return self

    def with_user(self, user: str) -> "ChatBuilder":
        if not isinstance(user, str) or not user:
            raise InvalidParameter("user must be a non-empty string")
        self.user = user
        return self

    def build(self) -> ChatCompletionRequest:
        """Freeze the accumulated state into a request."""
        request = ChatCompletionRequest(
            messages=tuple(self.messages),
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            frequency_penalty=self.frequency_penalty,
            presence_penalty=self.presence_penalty,
            stop=self.stop,
            n=self.n,
            user=self.user,
        )
        request.validate()
        return request

    async def send(self) -> ChatCompletionResponse:
        """Build the request and send it. The only call that does network I/O."""
        return await self._dispatcher.send(self.build())
