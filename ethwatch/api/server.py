"""FastAPI server for ethwatch.

Three chain endpoints over one shared EthereumParser. The parser is built in
the lifespan from config unless a caller (tests, the CLI) injects one into
``app_state`` first.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from ethwatch import __version__
from ethwatch.api.http.chain_methods import (
    get_current_block_response,
    get_transactions_response,
    parse_subscribe_body,
    subscribe_response,
)
from ethwatch.api.http.error_helpers import classify_http_status, unknown_error_detail
from ethwatch.chain.parser import EthereumParser
from ethwatch.config.access import get_config as get_cached_config
from ethwatch.services.chain_service import close_parser, create_parser
from ethwatch.utils.exceptions import EthWatchError, classify_exception, sanitize_error_message

app_state: dict[str, Any] = {
    "config": None,
    "parser": None,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the parser on startup and close its HTTP client on shutdown."""
    if app_state.get("_injected"):
        yield
        return

    config = app_state.get("config") or get_cached_config()
    app_state["config"] = config
    app_state["parser"] = create_parser(config)
    logger.info("ethwatch API server started")
    try:
        yield
    finally:
        parser = app_state.get("parser")
        if parser is not None:
            await close_parser(parser)
        app_state["parser"] = None
        logger.info("ethwatch API server stopped")


app = FastAPI(
    title="ethwatch API",
    description="Current block and ERC-20 transfers of watched addresses",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(EthWatchError)
async def ethwatch_exception_handler(request: Request, exc: EthWatchError):
    return JSONResponse(status_code=classify_http_status(exc), content=exc.to_dict())


@app.middleware("http")
async def recovery_middleware(request: Request, call_next):
    """Turn any unhandled exception into a plain 500 and keep serving."""
    try:
        return await call_next(request)
    except Exception as exc:
        code, _, _ = classify_exception(exc)
        logger.exception(
            "Unhandled exception [{}] on {} {}: {}",
            code, request.method, request.url.path, sanitize_error_message(unknown_error_detail(exc)),
        )
        return PlainTextResponse("Internal Server Error", status_code=500)


def _get_parser() -> EthereumParser:
    parser = app_state.get("parser")
    if parser is None:
        raise HTTPException(status_code=503, detail="Chain parser not initialized")
    return parser


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True, "service": "ethwatch"}


@app.get("/get-current-block")
async def get_current_block():
    """Current head block; ``current_block`` is 0 and ``ok`` false when the node query failed."""
    return await get_current_block_response(parser=_get_parser())


@app.post("/subscribe")
async def subscribe(request: Request):
    """Watch an address: body ``{"address": "0x..."}``."""
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid request body")
    address = parse_subscribe_body(body)
    return subscribe_response(parser=_get_parser(), address=address)


@app.get("/get-transaction/")
async def get_transaction_missing_address():
    raise HTTPException(status_code=400, detail="Address is required")


@app.get("/get-transaction/{address}")
async def get_transaction(address: str):
    """ERC-20 transfer transactions of a watched address; [] when unsubscribed or on failure."""
    return await get_transactions_response(parser=_get_parser(), address=address)
