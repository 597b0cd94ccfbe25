"""
HTTP transport.

The dispatcher only needs "send a request, get status/headers/body back or a
TransportFailure". HttpxTransport provides that on top of httpx.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Protocol

import httpx

from .exceptions import RequestTimeout, TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP outcome handed back to the dispatcher."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Anything that can execute a single HTTP request."""

    async def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> TransportResponse:
        """Send one request. Raises TransportFailure when no response arrives."""
        ...


class HttpxTransport:
    """
    Transport backed by httpx.AsyncClient.

    A fresh client is opened per request, so instances carry no connection
    state and are safe to share between concurrent calls.
    """

    def __init__(self, verify: bool = True, proxy: str | None = None):
        self.verify = verify
        self.proxy = proxy

    async def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> TransportResponse:
        try:
            async with httpx.AsyncClient(
                timeout=timeout, verify=self.verify, proxy=self.proxy
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=dict(headers),
                    content=body,
                )
        except httpx.TimeoutException as e:
            raise RequestTimeout(
                f"Request timed out after {timeout}s", timeout=timeout
            ) from e
        except httpx.TransportError as e:
            raise TransportFailure(f"Failed to connect to DeepSeek: {e}") from e
        except httpx.RequestError as e:
            raise TransportFailure(f"Request to DeepSeek failed: {e}") from e

        logger.debug(f"[DeepSeek] {method} {url} -> {response.status_code}")
        return TransportResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
