"""
Request dispatch with retry.

Serializes a request, sends it through a Transport, classifies the outcome and
retries transient failures (transport errors, 429, 5xx) with backoff. Every
call runs its own bounded loop; nothing is shared between calls.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Mapping

from .config import DeepSeekConfig
from .exceptions import (
    ApiError,
    AuthenticationError,
    DecodeError,
    DeepSeekError,
    RateLimitExceeded,
    ServerError,
    TransportFailure,
)
from .models import ApiErrorPayload, ChatCompletionRequest, ChatCompletionResponse
from .models.response import truncate_body
from .retry import RetryConfig, calculate_backoff
from .transport import Transport, TransportResponse

logger = logging.getLogger(__name__)

OnRetry = Callable[[int, DeepSeekError, float], None]


def _retry_after(headers: Mapping[str, str]) -> float | None:
    for key, value in headers.items():
        if key.lower() == "retry-after":
            try:
                return max(0.0, float(value))
            except (TypeError, ValueError):
                # HTTP-date form is not used by the API
                return None
    return None


def classify_response(response: TransportResponse) -> DeepSeekError | None:
    """
    Map a non-2xx response to the matching error.

    Returns None for 2xx responses.
    """
    if response.ok:
        return None

    payload = ApiErrorPayload.parse(response.status, response.body)

    if response.status == 429:
        return RateLimitExceeded(
            payload.message,
            retry_after=_retry_after(response.headers),
        )
    if response.status in (401, 403):
        return AuthenticationError(
            payload.message,
            status=response.status,
            error_type=payload.error_type,
            code=payload.code,
        )
    if response.status >= 500:
        return ServerError(
            payload.message,
            status=response.status,
            error_type=payload.error_type,
            code=payload.code,
        )
    return ApiError(
        payload.message,
        status=response.status,
        error_type=payload.error_type,
        code=payload.code,
    )


class Dispatcher:
    """
    Sends requests to the DeepSeek API with bounded retries.

    Holds only immutable collaborators, so one dispatcher can serve any
    number of concurrent calls.
    """

    def __init__(
        self,
        config: DeepSeekConfig,
        transport: Transport,
        retry_config: RetryConfig | None = None,
        on_retry: OnRetry | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the dispatcher.

        Args:
            config: Client configuration (endpoint, key, timeout)
            transport: Transport used for every attempt
            retry_config: Retry configuration for transient failures
            on_retry: Optional callback(attempt, error, delay) called before each retry
            sleep: Coroutine used to wait between attempts
        """
        self.config = config
        self.transport = transport
        self.retry_config = retry_config or RetryConfig()
        self.on_retry = on_retry
        self._sleep = sleep

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self.config.authorization_header(),
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _is_transient(self, error: DeepSeekError) -> bool:
        if error.status_code is not None:
            return self.retry_config.should_retry(error.status_code)
        return error.retryable

    def _delay(self, attempt: int, error: DeepSeekError) -> float:
        delay = calculate_backoff(attempt, self.retry_config)
        if isinstance(error, RateLimitExceeded) and error.retry_after is not None:
            delay = min(max(delay, error.retry_after), self.retry_config.max_delay)
        return delay

    async def execute(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
    ) -> TransportResponse:
        """
        Send one logical request, retrying transient failures.

        Returns the first 2xx response. Raises the classified error for
        permanent failures, or the last error once attempts run out.
        """
        url = self._url(path)
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        max_attempts = self.retry_config.max_attempts
        last_error: DeepSeekError | None = None

        for attempt in range(max_attempts):
            logger.debug(f"[DeepSeek] {method} {url} (attempt {attempt + 1}/{max_attempts})")
            try:
                response = await self.transport.execute(
                    method,
                    url,
                    self._headers(),
                    body,
                    self.config.timeout,
                )
            except TransportFailure as e:
                error: DeepSeekError = e
            else:
                error = classify_response(response)
                if error is None:
                    return response

            if not self._is_transient(error):
                raise error

            last_error = error
            if attempt + 1 >= max_attempts:
                break

            delay = self._delay(attempt, error)
            if self.on_retry:
                self.on_retry(attempt, error, delay)
            else:
                logger.warning(
                    f"[DeepSeek] Retry {attempt + 1}/{max_attempts - 1}: {error}, "
                    f"waiting {delay:.1f}s"
                )
            await self._sleep(delay)

        logger.error(f"[DeepSeek] All {max_attempts} attempts exhausted: {last_error}")
        raise last_error

    async def send(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """Validate, send and decode a chat completion request."""
        request.validate()
        response = await self.execute("POST", "/chat/completions", request.to_dict())
        return ChatCompletionResponse.from_json(response.body)

    async def list_models(self) -> list[dict]:
        """Return the model entries listed by GET /models."""
        response = await self.execute("GET", "/models")
        try:
            data = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(
                f"Model list is not valid JSON: {e}", body=truncate_body(response.body)
            ) from e
        if not isinstance(data, dict) or not isinstance(data.get("data", []), list):
            raise DecodeError("Model list has unexpected shape", body=truncate_body(response.body))
        return data.get("data", [])
