"""Build an EthereumParser from configuration."""

from __future__ import annotations

from loguru import logger

from ethwatch.chain.parser import EthereumParser
from ethwatch.chain.transport import HttpxRpcTransport
from ethwatch.config.schema import Config
from ethwatch.storage.subscription_store import MemorySubscriptionStore, SubscriptionStore
from ethwatch.utils.exceptions import sanitize_error_message


def create_parser(config: Config, store: SubscriptionStore | None = None) -> EthereumParser:
    """
    Create a parser talking to ``config.rpc.url``.

    A fresh in-memory store is used unless one is passed in.
    """
    transport = HttpxRpcTransport(config.rpc.url, timeout=config.rpc.timeout)
    parser = EthereumParser(
        transport,
        store if store is not None else MemorySubscriptionStore(),
        transfer_topic=config.rpc.transfer_topic,
    )
    logger.info("Chain parser using {}", sanitize_error_message(config.rpc.url))
    return parser


async def close_parser(parser: EthereumParser) -> None:
    """Release the parser's HTTP client, if its transport owns one."""
    aclose = getattr(parser.transport, "aclose", None)
    if aclose is not None:
        await aclose()
