"""
JSON-RPC transport.

Sends one request envelope per call and hands back the raw response body;
decoding is left to the caller.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx
from loguru import logger

from ethwatch.chain.models import ChainRequest
from ethwatch.utils.exceptions import TransportError, sanitize_error_message


@runtime_checkable
class RpcTransport(Protocol):
    """Anything that can deliver a JSON-RPC call and return the response bytes."""

    async def send(self, method: str, request_id: int, params: list[Any] | None = None) -> bytes:
        ...


class HttpxRpcTransport:
    """Posts JSON-RPC requests to a single node endpoint over HTTP."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            endpoint: Node JSON-RPC URL
            timeout: Client timeout in seconds (ignored when ``client`` is given)
            client: Optional pre-built client; the caller keeps ownership of it
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def send(self, method: str, request_id: int, params: list[Any] | None = None) -> bytes:
        request = ChainRequest(method=method, params=list(params or []), id=request_id)
        body = request.model_dump_json().encode("utf-8")
        client = self._get_client()

        try:
            resp = await client.post(
                self.endpoint,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise TransportError(
                sanitize_error_message(f"HTTP request {method} failed: {exc}"),
                method=method,
            ) from exc

        if resp.is_error:
            raise TransportError(
                f"HTTP request {method} returned status {resp.status_code}",
                method=method,
                status_code=resp.status_code,
            )

        logger.debug("RPC {} id={} -> {} bytes", method, request_id, len(resp.content))
        return resp.content
