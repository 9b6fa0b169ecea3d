"""
Ethereum Parser

Chain queries over a JSON-RPC transport: current block, and ERC-20 transfer
transactions for watched addresses resolved from Transfer event logs.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ethwatch.chain.hexcodec import address_to_topic, hex_to_int, int_to_hex
from ethwatch.chain.models import ChainResponse, LogEntry, Transaction
from ethwatch.chain.transport import RpcTransport
from ethwatch.storage.subscription_store import SubscriptionStore
from ethwatch.utils.exceptions import EthWatchError, ProtocolError, UnmarshalError

# keccak256("Transfer(address,address,uint256)")
ERC20_TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

METHOD_CHAIN_ID = "eth_chainId"
METHOD_BLOCK_NUMBER = "eth_blockNumber"
METHOD_GET_LOGS = "eth_getLogs"
METHOD_TX_BY_HASH = "eth_getTransactionByHash"

CHAIN_ID_REQUEST_ID = 1
GENESIS_BLOCK = 0

_LOG_LIST = TypeAdapter(List[LogEntry])


@dataclass
class BlockNumberResult:
    """Current block query result"""
    block: int
    ok: bool
    error: Optional[str] = None


@dataclass
class TransactionsResult:
    """Transfer transactions found for an address"""
    address: str
    transactions: List[Transaction] = field(default_factory=list)
    ok: bool = True
    error: Optional[str] = None
    skipped: int = 0


class EthereumParser:
    """Query a node for blocks and ERC-20 transfers of watched addresses"""

    def __init__(
        self,
        transport: RpcTransport,
        store: SubscriptionStore,
        transfer_topic: str = ERC20_TRANSFER_TOPIC,
    ):
        """
        Initialize parser.

        Args:
            transport: JSON-RPC transport to the node
            store: Shared subscription store
            transfer_topic: topic0 matched by the logs filter
        """
        self.transport = transport
        self.store = store
        self.transfer_topic = transfer_topic
        self._address_locks: Dict[str, asyncio.Lock] = {}

    def _address_lock(self, address: str) -> asyncio.Lock:
        lock = self._address_locks.get(address)
        if lock is None:
            lock = self._address_locks.setdefault(address, asyncio.Lock())
        return lock

    async def _call(self, method: str, request_id: int, params: Optional[List[Any]] = None) -> Any:
        """Send one request and return the undecoded ``result``."""
        raw = await self.transport.send(method, request_id, params)
        if not raw:
            raise UnmarshalError(f"empty response to {method}", method=method)

        try:
            response = ChainResponse.model_validate_json(raw)
        except ValidationError as e:
            raise UnmarshalError(f"failed to unmarshal {method} response: {e}", method=method) from e

        if response.error is not None:
            raise ProtocolError(method, response.error.code, response.error.message)
        return response.result

    async def _call_hex(self, method: str, request_id: int) -> int:
        result = await self._call(method, request_id)
        if not isinstance(result, str):
            raise UnmarshalError(f"{method} result is not a hex string: {result!r}", method=method)
        return hex_to_int(result)

    async def get_chain_id(self) -> int:
        """Return the node's chain id."""
        return await self._call_hex(METHOD_CHAIN_ID, CHAIN_ID_REQUEST_ID)

    async def get_block_number(self) -> int:
        """Return the head block number, raising on any failure."""
        chain_id = await self.get_chain_id()
        return await self._call_hex(METHOD_BLOCK_NUMBER, chain_id)

    async def get_current_block(self) -> BlockNumberResult:
        """
        Get the current head block.

        Failures are logged and reported through ``ok``/``error``; ``block``
        is then 0 and must not be read as genesis.
        """
        try:
            block = await self.get_block_number()
        except EthWatchError as e:
            logger.error("Failed to get current block: {}", e)
            return BlockNumberResult(block=GENESIS_BLOCK, ok=False, error=str(e))
        return BlockNumberResult(block=block, ok=True)

    def subscribe(self, address: str) -> bool:
        """Watch ``address``. Idempotent; always True."""
        if not self.store.is_subscribed(address):
            self.store.store_subscription(address)
            logger.info("Subscribed address {}", address)
        return True

    def is_subscribed(self, address: str) -> bool:
        return self.store.is_subscribed(address)

    def build_transfer_filter(self, address: str) -> Dict[str, Any]:
        """Logs filter matching Transfer events with ``address`` as sender or recipient."""
        topic = address_to_topic(address)
        return {
            "fromBlock": int_to_hex(GENESIS_BLOCK),
            "toBlock": "latest",
            "topics": [self.transfer_topic, [topic, topic]],
        }

    async def get_logs(self, address: str, request_id: int) -> List[LogEntry]:
        """Fetch Transfer logs touching ``address`` over the whole chain history."""
        params = [self.build_transfer_filter(address)]
        result = await self._call(METHOD_GET_LOGS, request_id, params)
        if result is None:
            return []
        try:
            return _LOG_LIST.validate_python(result)
        except ValidationError as e:
            raise UnmarshalError(f"failed to unmarshal logs: {e}", method=METHOD_GET_LOGS) from e

    async def get_transaction(self, tx_hash: str, request_id: int) -> Transaction:
        """Fetch one transaction by hash."""
        result = await self._call(METHOD_TX_BY_HASH, request_id, [tx_hash])
        if result is None:
            raise UnmarshalError(f"transaction {tx_hash} not found", method=METHOD_TX_BY_HASH)
        try:
            return Transaction.model_validate(result)
        except ValidationError as e:
            raise UnmarshalError(
                f"failed to unmarshal transaction {tx_hash}: {e}", method=METHOD_TX_BY_HASH
            ) from e

    async def get_transactions(self, address: str) -> TransactionsResult:
        """
        List ERC-20 transfer transactions sent from or to ``address``.

        Unsubscribed addresses get an empty result without touching the node.
        A failed chain id or logs query yields an empty result with
        ``ok=False``; a failed lookup of a single transaction only drops that
        transaction and counts it in ``skipped``.

        Every call rescans from block 0.
        """
        if not self.is_subscribed(address):
            logger.info("Address {} is not subscribed", address)
            return TransactionsResult(address=address)

        async with self._address_lock(address):
            try:
                chain_id = await self.get_chain_id()
            except EthWatchError as e:
                logger.error("Failed to get chain ID: {}", e)
                return TransactionsResult(address=address, ok=False, error=str(e))

            try:
                logs = await self.get_logs(address, chain_id)
            except EthWatchError as e:
                logger.error("Failed to get logs for {}: {}", address, e)
                return TransactionsResult(address=address, ok=False, error=str(e))

            result = TransactionsResult(address=address)
            seen: set[str] = set()
            for entry in logs:
                # one transaction can emit several Transfer events
                if entry.transaction_hash in seen:
                    continue
                seen.add(entry.transaction_hash)
                try:
                    tx = await self.get_transaction(entry.transaction_hash, chain_id)
                except EthWatchError as e:
                    logger.warning("Failed to get transaction {}: {}", entry.transaction_hash, e)
                    result.skipped += 1
                    continue
                result.transactions.append(tx)

            logger.debug(
                "Found {} transactions for {} ({} logs, {} skipped)",
                len(result.transactions), address, len(logs), result.skipped,
            )
            return result
