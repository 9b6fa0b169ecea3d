"""Service wiring shared by the HTTP server and the CLI."""

from ethwatch.services.chain_service import close_parser, create_parser

__all__ = ["close_parser", "create_parser"]
