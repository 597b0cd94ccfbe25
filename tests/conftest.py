"""Shared fixtures: an in-memory transport that replays scripted outcomes."""

import json

import pytest

from deepseek_client.config import DeepSeekConfig
from deepseek_client.dispatch import Dispatcher
from deepseek_client.retry import RetryConfig
from deepseek_client.transport import TransportResponse


def completion_response(content: str | None = "Hello!", reasoning: str | None = None) -> dict:
    """Create a canned /chat/completions body."""
    message = {"role": "assistant"}
    if content is not None:
        message["content"] = content
    if reasoning is not None:
        message["reasoning_content"] = reasoning
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "deepseek-chat",
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 8, "total_tokens": 18},
    }


def json_response(status: int, data: dict, headers: dict | None = None) -> TransportResponse:
    return TransportResponse(status=status, body=json.dumps(data).encode(), headers=headers or {})


class ScriptedTransport:
    """
    Transport stub that returns (or raises) one scripted outcome per call.

    The last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def execute(self, method, url, headers, body, timeout):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers),
                "json": json.loads(body) if body else None,
                "timeout": timeout,
            }
        )
        outcome = self.outcomes[min(len(self.calls) - 1, len(self.outcomes) - 1)]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Replacement for asyncio.sleep that records delays without waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def config():
    return DeepSeekConfig.new("test-api-key").with_base_url("https://api.test")


@pytest.fixture
def retry_config():
    """Deterministic retry policy: 3 attempts, 0.5s/1s/2s delays, no jitter."""
    return RetryConfig(max_attempts=3, base_delay=0.5, max_delay=8.0, jitter=0)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_dispatcher(config, retry_config, sleep):
    """Build a dispatcher around a scripted transport."""

    def factory(*outcomes, retry=None):
        transport = ScriptedTransport(*outcomes)
        dispatcher = Dispatcher(config, transport, retry or retry_config, sleep=sleep)
        return dispatcher, transport

    return factory
