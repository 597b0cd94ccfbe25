"""
Client configuration.

Holds the API key, endpoint and timeout. A config is validated whenever it is
created, including through the ``with_*`` helpers, which return new instances.
"""

import math
import os
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Mapping

import httpx
from dotenv import load_dotenv
from pydantic import SecretStr

from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "deepseek-client/0.1.0"

ENV_API_KEY = "DEEPSEEK_API_KEY"
ENV_BASE_URL = "DEEPSEEK_API_BASE_URL"
ENV_TIMEOUT = "DEEPSEEK_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class DeepSeekConfig:
    """
    Immutable configuration for a DeepSeek client.

    Attributes:
        api_key: API key, stored as a redacting secret
        base_url: API base URL
        timeout: Per-attempt request timeout in seconds
        validate_certs: Verify TLS certificates
        proxy: Optional proxy URL
        user_agent: User-Agent header value
    """

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    validate_certs: bool = True
    proxy: str | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if not isinstance(self.api_key, SecretStr):
            object.__setattr__(self, "api_key", SecretStr(str(self.api_key or "")))
        if isinstance(self.timeout, timedelta):
            object.__setattr__(self, "timeout", self.timeout.total_seconds())
        object.__setattr__(self, "base_url", str(self.base_url).rstrip("/"))
        self.validate()

    @classmethod
    def new(cls, api_key: str) -> "DeepSeekConfig":
        """Create a configuration with default endpoint and timeout."""
        return cls(api_key=SecretStr(api_key))

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "DeepSeekConfig":
        """
        Build a configuration from environment variables.

        Reads DEEPSEEK_API_KEY (required), DEEPSEEK_API_BASE_URL and
        DEEPSEEK_TIMEOUT_SECONDS. When no mapping is given, a local .env file
        is loaded first and the process environment is used.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        api_key = environ.get(ENV_API_KEY)
        if api_key is None:
            raise ConfigError(
                f"{ENV_API_KEY} environment variable not found. "
                "Please set it to your DeepSeek API key."
            )

        base_url = environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL

        raw_timeout = environ.get(ENV_TIMEOUT)
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}"
                ) from None

        return cls(api_key=SecretStr(api_key), base_url=base_url, timeout=timeout)

    def with_base_url(self, url: str) -> "DeepSeekConfig":
        return replace(self, base_url=url)

    def with_timeout(self, timeout: float | timedelta) -> "DeepSeekConfig":
        return replace(self, timeout=timeout)

    def with_proxy(self, proxy: str) -> "DeepSeekConfig":
        return replace(self, proxy=proxy)

    def with_validate_certs(self, validate: bool) -> "DeepSeekConfig":
        return replace(self, validate_certs=validate)

    def with_user_agent(self, user_agent: str) -> "DeepSeekConfig":
        return replace(self, user_agent=user_agent)

    def validate(self) -> None:
        """Raise ConfigError if any field is missing or malformed."""
        if not self.api_key.get_secret_value().strip():
            raise ConfigError("API key cannot be empty")

        _require_http_url(self.base_url, "Base URL")
        if self.proxy is not None:
            _require_http_url(self.proxy, "Proxy URL")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigError(f"Timeout must be a number of seconds, got {self.timeout!r}")
        if not self.timeout > 0 or not math.isfinite(self.timeout):
            raise ConfigError(f"Timeout must be a finite number greater than 0, got {self.timeout}")

    def authorization_header(self) -> str:
        """Return the Authorization header value. The only place the key is unwrapped."""
        return f"Bearer {self.api_key.get_secret_value()}"


def _require_http_url(value: str, label: str) -> None:
    if not value or not value.strip():
        raise ConfigError(f"{label} cannot be empty")
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError(f"{label} is not a valid URL: {value!r}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"{label} must start with http:// or https://, got {value!r}")
