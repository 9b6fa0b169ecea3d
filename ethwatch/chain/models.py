"""JSON-RPC wire models and the chain records decoded from them."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"


class ChainRequest(BaseModel):
    """JSON-RPC 2.0 request envelope. Built fresh for every call."""
    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: list[Any] = Field(default_factory=list)
    id: int


class RpcErrorDetail(BaseModel):
    """The ``error`` member of a failed JSON-RPC response."""
    code: int
    message: str
    data: Any = None


class ChainResponse(BaseModel):
    """
    JSON-RPC 2.0 response envelope.

    ``result`` is kept undecoded; callers must check ``error`` first, a
    non-null error means the call failed whatever ``result`` holds.
    """
    id: int | str | None = None
    jsonrpc: str = JSONRPC_VERSION
    result: Any = None
    error: RpcErrorDetail | None = None


class LogEntry(BaseModel):
    """One event log returned by ``eth_getLogs``."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    address: str
    block_hash: str = Field(alias="blockHash")
    block_number: str = Field(alias="blockNumber")
    transaction_hash: str = Field(alias="transactionHash")


class Transaction(BaseModel):
    """
    Public view of a transaction.

    Nonce, signature (v, r, s), input and block linkage are discarded when the
    node's object is decoded.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hash: str
    from_address: str = Field(alias="from")
    to: str | None = None
    gas: str = ""
    gas_price: str = Field(default="", alias="gasPrice")
    transaction_index: str | None = Field(default=None, alias="transactionIndex")
    value: str = ""

    def to_api(self) -> dict[str, Any]:
        """Serialize with the node's field names (``from``, ``gasPrice``)."""
        return self.model_dump(by_alias=True)
