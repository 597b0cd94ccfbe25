"""
Base exception classes for DeepSeek client operations.

Each exception includes a `retryable` flag indicating whether the request
can be safely sent again with the same parameters.
"""


class DeepSeekError(Exception):
    """Base exception for all DeepSeek client errors."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)

    def is_auth_error(self) -> bool:
        """True for 401/403 responses."""
        return self.status_code in (401, 403)

    def is_rate_limit(self) -> bool:
        """True when the server rejected the request for rate limiting."""
        return self.status_code == 429


class ConfigError(DeepSeekError):
    """Raised when configuration is missing or malformed. Not retryable."""

    def __init__(self, message: str = "Invalid configuration", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class InvalidParameter(DeepSeekError):
    """Raised when a request parameter fails validation. Not retryable."""

    def __init__(self, message: str = "Invalid parameter", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class TransportFailure(DeepSeekError):
    """Raised when the request never produced an HTTP response. Retryable."""

    def __init__(self, message: str = "Connection failed", **kwargs):
        super().__init__(message, retryable=True, **kwargs)


class RequestTimeout(TransportFailure):
    """Raised when a single attempt exceeds the configured timeout."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        timeout: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.timeout = timeout


class RateLimitExceeded(DeepSeekError):
    """Raised on HTTP 429. Always retryable."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        kwargs.setdefault("status_code", 429)
        super().__init__(message, retryable=True, **kwargs)
        self.retry_after = retry_after


class ApiError(DeepSeekError):
    """Raised when the API answers with a non-2xx status. Not retryable."""

    def __init__(
        self,
        message: str = "API error",
        *,
        status: int,
        error_type: str | None = None,
        code: str | None = None,
        retryable: bool = False,
    ):
        super().__init__(message, retryable=retryable, status_code=status)
        self.status = status
        self.error_type = error_type
        self.code = code


class AuthenticationError(ApiError):
    """Raised when the API key is rejected (401/403). Not retryable."""

    def __init__(self, message: str = "Authentication failed", *, status: int = 401, **kwargs):
        super().__init__(message, status=status, **kwargs)


class ServerError(ApiError):
    """Raised when the server returns a 5xx error. Retryable."""

    def __init__(self, message: str = "Server error", *, status: int = 500, **kwargs):
        kwargs["retryable"] = True
        super().__init__(message, status=status, **kwargs)


class DecodeError(DeepSeekError):
    """Raised when a success body does not match the response schema. Not retryable."""

    def __init__(self, message: str = "Failed to decode response", *, body: str = "", **kwargs):
        super().__init__(message, retryable=False, **kwargs)
        self.body = body
