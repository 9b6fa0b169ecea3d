"""
Ethereum JSON-RPC client and ERC-20 transfer lookup.
"""

from ethwatch.chain.hexcodec import address_to_topic, hex_to_int, int_to_hex
from ethwatch.chain.models import ChainRequest, ChainResponse, LogEntry, RpcErrorDetail, Transaction
from ethwatch.chain.parser import (
    ERC20_TRANSFER_TOPIC,
    BlockNumberResult,
    EthereumParser,
    TransactionsResult,
)
from ethwatch.chain.transport import HttpxRpcTransport, RpcTransport

__all__ = [
    "address_to_topic",
    "hex_to_int",
    "int_to_hex",
    "ChainRequest",
    "ChainResponse",
    "LogEntry",
    "RpcErrorDetail",
    "Transaction",
    "ERC20_TRANSFER_TOPIC",
    "BlockNumberResult",
    "EthereumParser",
    "TransactionsResult",
    "HttpxRpcTransport",
    "RpcTransport",
]
