"""
Transport protocol for XRPL JSON-RPC calls.

Defines the seam where concrete HTTP implementations plug in. The
JSON-RPC client depends on this protocol, not on httpx directly, so the
transport can be swapped without editing client logic.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)

Transport contract:
    - Connection, TLS, timeout and HTTP status failures raise TransportError.
    - A body that is not a JSON object raises DecodeError with the raw body.
    - Anything else is returned as a dict, unvalidated.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from xrpl_iou.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)

# Per-request timeout in seconds.
DEFAULT_TIMEOUT_S = 10.0


@runtime_checkable
class JsonRpcTransport(Protocol):
    """Async transport for JSON-RPC POST requests."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON-RPC request and return the parsed response.

        Args:
            url: The JSON-RPC endpoint URL.
            payload: The JSON-RPC request body (method, params).

        Returns:
            Parsed JSON response as a dict.

        Raises:
            TransportError: The round trip did not complete.
            DecodeError: The body was not a JSON object.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    One short-lived AsyncClient per call: no connection pool is shared
    between lifecycles, so concurrent callers never contend.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = headers or {}

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send JSON-RPC request via httpx."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        **self._headers,
                    },
                )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"HTTP request timed out after {self._timeout}s",
                details={"url": url, "timeout_s": self._timeout},
            ) from e
        except httpx.ConnectError as e:
            raise TransportError(
                f"Failed to connect to {url}",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP error: {e}",
                details={"url": url, "error": str(e)},
            ) from e

        logger.debug("HTTP %s from %s", response.status_code, url)
        if response.status_code >= 400:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                details={
                    "url": url,
                    "status_code": response.status_code,
                    "reason": response.reason_phrase,
                },
            )

        return decode_body(response.text, url=url)


def decode_body(body: str, *, url: str | None = None) -> dict[str, Any]:
    """Parse a response body into a JSON object.

    Raises:
        DecodeError: If the body is not valid JSON or not a JSON object.
    """
    try:
        result = json.loads(body)
    except json.JSONDecodeError as e:
        raise DecodeError(
            "Response was not valid JSON",
            raw_body=body,
            details={"url": url},
        ) from e

    if not isinstance(result, dict):
        raise DecodeError(
            "Response JSON was not an object",
            raw_body=body,
            details={"url": url, "type": type(result).__name__},
        )

    return result
