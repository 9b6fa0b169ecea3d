"""Pytest hooks and fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable

import pytest
from loguru import logger

from ethwatch.chain.parser import EthereumParser
from ethwatch.storage.subscription_store import MemorySubscriptionStore

CannedResponse = bytes | Exception | Callable[[list[Any]], bytes]


def rpc_result(result: Any, request_id: int = 1) -> bytes:
    return json.dumps({"jsonrpc": "2.0", "id": request_id, "result": result}).encode()


def rpc_error(code: int, message: str, request_id: int = 1) -> bytes:
    return json.dumps(
        {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
    ).encode()


class FakeTransport:
    """In-memory RpcTransport answering by method name and recording every call."""

    def __init__(self, responses: dict[str, CannedResponse] | None = None):
        self.responses: dict[str, CannedResponse] = dict(responses or {})
        self.calls: list[tuple[str, int, list[Any]]] = []

    def methods(self) -> list[str]:
        return [method for method, _, _ in self.calls]

    async def send(self, method: str, request_id: int, params: list[Any] | None = None) -> bytes:
        params = list(params or [])
        self.calls.append((method, request_id, params))
        canned = self.responses.get(method)
        if canned is None:
            raise AssertionError(f"unexpected RPC call: {method}")
        if isinstance(canned, Exception):
            raise canned
        if callable(canned):
            return canned(params)
        return canned


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def store() -> MemorySubscriptionStore:
    return MemorySubscriptionStore()


@pytest.fixture
def parser(transport: FakeTransport, store: MemorySubscriptionStore) -> EthereumParser:
    return EthereumParser(transport, store)


@pytest.fixture
def log_messages():
    """Collect (level, message) pairs emitted through loguru during a test."""
    messages: list[tuple[str, str]] = []
    sink_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(sink_id)
