"""CLI commands for ethwatch.

``serve`` runs the HTTP API; ``block`` and ``transactions`` are one-shot
queries against the configured node.
"""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ethwatch import __logo__, __version__
from ethwatch.cli.shared.logging_utils import configure_console_logging, ensure_rotating_log_file
from ethwatch.cli.shared.network_utils import is_port_in_use

app = typer.Typer(
    name="ethwatch",
    help=f"{__logo__} ethwatch - ERC-20 transfer watcher over Ethereum JSON-RPC",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} ethwatch v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """ethwatch - ERC-20 transfer watcher."""
    pass


def _load_config():
    from ethwatch.config.access import get_config

    try:
        return get_config()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


# ============================================================================
# Server
# ============================================================================


@app.command()
def serve(
    host: str = typer.Option(None, "--host", "-h", help="Bind host (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Start the HTTP API."""
    config = _load_config()
    host = host or config.server.host
    port = port or config.server.port

    if is_port_in_use(host, port):
        console.print(
            f"[red]Port {port} is already in use.[/red] "
            f"Please close the process using this port, or use [cyan]--port[/cyan] to specify another port (current: {host}:{port})."
        )
        raise typer.Exit(1)

    level = "DEBUG" if verbose else config.logging.level
    configure_console_logging(level)
    if config.logging.file_enabled:
        log_path = ensure_rotating_log_file("serve", level=level)
        console.print(f"[dim]Logs: {log_path}[/dim]")

    from ethwatch.api.server import app as api_app, app_state

    app_state["config"] = config

    import uvicorn
    uvicorn_config = uvicorn.Config(
        api_app,
        host=host,
        port=port,
        log_level="debug" if verbose else "info",
        timeout_keep_alive=config.server.keep_alive_seconds,
        timeout_graceful_shutdown=config.server.graceful_shutdown_seconds,
    )
    api_server = uvicorn.Server(uvicorn_config)

    console.print(f"{__logo__} Starting ethwatch on {host}:{port}...")
    console.print(
        f"[green]✓[/green] API: http://{host}:{port}/ "
        "(GET /get-current-block, POST /subscribe, GET /get-transaction/{address})"
    )

    try:
        api_server.run()
    except OSError as e:
        if is_port_in_use(host, port):
            console.print(f"[red]Port {port} is already in use.[/red]")
            raise typer.Exit(1) from e
        raise
    console.print("Server gracefully stopped")


# ============================================================================
# One-shot queries
# ============================================================================


@app.command()
def block():
    """Print the current head block number."""
    from ethwatch.services.chain_service import close_parser, create_parser

    config = _load_config()
    configure_console_logging(config.logging.level)

    async def run():
        parser = create_parser(config)
        try:
            return await parser.get_current_block()
        finally:
            await close_parser(parser)

    result = asyncio.run(run())
    if not result.ok:
        console.print(f"[red]Failed to get current block:[/red] {escape(str(result.error))}")
        raise typer.Exit(1)
    console.print(f"Current block: [cyan]{result.block}[/cyan]")


@app.command()
def transactions(
    address: str = typer.Argument(..., help="Address to look up (sender or recipient)"),
):
    """List ERC-20 transfer transactions touching ADDRESS."""
    from ethwatch.services.chain_service import close_parser, create_parser

    config = _load_config()
    configure_console_logging(config.logging.level)

    async def run():
        parser = create_parser(config)
        try:
            parser.subscribe(address)
            return await parser.get_transactions(address)
        finally:
            await close_parser(parser)

    result = asyncio.run(run())
    if not result.ok:
        console.print(f"[red]Failed to get transactions:[/red] {escape(str(result.error))}")
        raise typer.Exit(1)

    table = Table(title=f"Transfers for {address}")
    table.add_column("Hash", style="cyan")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Value")
    table.add_column("Gas")
    for tx in result.transactions:
        table.add_row(tx.hash, tx.from_address, tx.to or "-", tx.value, tx.gas)
    console.print(table)
    if result.skipped:
        console.print(f"[yellow]{result.skipped} transaction(s) could not be fetched[/yellow]")


if __name__ == "__main__":
    app()
