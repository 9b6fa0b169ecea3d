"""Tests for HttpxRpcTransport against httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from ethwatch.chain.transport import HttpxRpcTransport, RpcTransport
from ethwatch.utils.exceptions import TransportError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_posts_jsonrpc_envelope_and_returns_raw_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"jsonrpc":"2.0","id":1,"result":"0x1"}')

    async with _client(handler) as client:
        transport = HttpxRpcTransport("http://node.test/rpc", client=client)
        raw = await transport.send("eth_getTransactionByHash", 5, ["0xabc"])

    assert raw == b'{"jsonrpc":"2.0","id":1,"result":"0x1"}'
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "http://node.test/rpc"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {
        "jsonrpc": "2.0",
        "method": "eth_getTransactionByHash",
        "params": ["0xabc"],
        "id": 5,
    }


@pytest.mark.asyncio
async def test_send_without_params_sends_empty_array() -> None:
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, content=b"{}")

    async with _client(handler) as client:
        await HttpxRpcTransport("http://node.test", client=client).send("eth_chainId", 1)

    assert bodies == [b'{"jsonrpc":"2.0","method":"eth_chainId","params":[],"id":1}']


@pytest.mark.asyncio
async def test_network_failure_becomes_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        transport = HttpxRpcTransport("http://node.test", client=client)
        with pytest.raises(TransportError) as exc_info:
            await transport.send("eth_chainId", 1)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.method == "eth_chainId"


@pytest.mark.asyncio
async def test_http_error_status_becomes_transport_error() -> None:
    async with _client(lambda request: httpx.Response(502, content=b"bad gateway")) as client:
        transport = HttpxRpcTransport("http://node.test", client=client)
        with pytest.raises(TransportError) as exc_info:
            await transport.send("eth_blockNumber", 1)

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    async with _client(lambda request: httpx.Response(200)) as client:
        transport = HttpxRpcTransport("http://node.test", client=client)
        await transport.aclose()
        assert not client.is_closed


@pytest.mark.asyncio
async def test_aclose_closes_owned_client() -> None:
    transport = HttpxRpcTransport("http://node.test", timeout=1.0)
    client = transport._get_client()
    await transport.aclose()
    assert client.is_closed
    assert transport._client is None


def test_httpx_transport_satisfies_protocol() -> None:
    assert isinstance(HttpxRpcTransport("http://node.test"), RpcTransport)
