"""ethwatch - HTTP facade for watching ERC-20 transfers over Ethereum JSON-RPC."""

__version__ = "0.1.0"
__logo__ = "⛓"
