"""Helpers for chain HTTP endpoint payloads."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from ethwatch.chain.parser import EthereumParser


def parse_subscribe_body(body: Any) -> str:
    """Extract the address from a POST /subscribe body or raise 400."""
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid request body")
    address = body.get("address")
    if not isinstance(address, str) or not address:
        raise HTTPException(status_code=400, detail="Address is required")
    return address


async def get_current_block_response(*, parser: EthereumParser) -> dict[str, Any]:
    """Build response payload for GET /get-current-block."""
    result = await parser.get_current_block()
    return {"current_block": result.block, "ok": result.ok}


def subscribe_response(*, parser: EthereumParser, address: str) -> dict[str, Any]:
    """Build response payload for POST /subscribe."""
    return {"status": parser.subscribe(address), "address": address}


async def get_transactions_response(*, parser: EthereumParser, address: str) -> list[dict[str, Any]]:
    """Build response payload for GET /get-transaction/{address}. Failures give []."""
    result = await parser.get_transactions(address)
    return [tx.to_api() for tx in result.transactions]
