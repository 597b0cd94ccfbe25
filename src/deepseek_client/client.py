"""
DeepSeek API client.

Composes a DeepSeekConfig with a Dispatcher and hands out conversation
builders bound to them.
"""

import logging

from .builder import ChatBuilder
from .config import DeepSeekConfig
from .dispatch import Dispatcher, OnRetry
from .exceptions import DeepSeekError
from .models import ChatCompletionRequest, ChatCompletionResponse, Model
from .retry import RetryConfig
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class DeepSeekClient:
    """
    Client for the DeepSeek chat completions API.

    Features:
    - Fluent multi-turn conversation builder
    - Chat, Reasoner and Coder model variants
    - Exponential backoff with jitter on transient failures
    - API key kept out of reprs and logs
    """

    def __init__(
        self,
        config: DeepSeekConfig,
        retry_config: RetryConfig | None = None,
        transport: Transport | None = None,
        on_retry: OnRetry | None = None,
    ):
        """
        Initialize DeepSeek client.

        Args:
            config: Validated client configuration
            retry_config: Retry configuration (default: 3 attempts, exponential)
            transport: HTTP transport (default: httpx with config's TLS/proxy settings)
            on_retry: Optional callback(attempt, error, delay) called before each retry
        """
        self.config = config
        self.retry_config = retry_config or RetryConfig()
        if transport is None:
            transport = HttpxTransport(verify=config.validate_certs, proxy=config.proxy)
        self.dispatcher = Dispatcher(config, transport, self.retry_config, on_retry=on_retry)

    @classmethod
    def new(cls, config: DeepSeekConfig) -> "DeepSeekClient":
        return cls(config)

    @classmethod
    def from_environment(cls, **kwargs) -> "DeepSeekClient":
        """Create a client from DEEPSEEK_* environment variables (and .env)."""
        return cls(DeepSeekConfig.from_environment(), **kwargs)

    @property
    def provider_name(self) -> str:
        return "DeepSeek"

    def chat(self, model: Model = Model.CHAT) -> ChatBuilder:
        """Start a new conversation builder."""
        return ChatBuilder(self.dispatcher, model=model)

    async def chat_completion(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Send a request built elsewhere."""
        return await self.dispatcher.send(request)

    async def list_models(self) -> list[dict]:
        """List models available to this API key."""
        return await self.dispatcher.list_models()

    async def test_connection(self) -> bool:
        """Check that the API is reachable and accepts the configured key."""
        try:
            await self.dispatcher.list_models()
        except DeepSeekError as e:
            logger.warning(f"[{self.provider_name}] Connection test failed: {e}")
            return False
        return True

    def __repr__(self) -> str:
        return f"DeepSeekClient(base_url={self.config.base_url!r})"
