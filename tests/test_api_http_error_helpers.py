import asyncio

from ethwatch.api.http.error_helpers import classify_http_status, unknown_error_detail
from ethwatch.utils.exceptions import DecodeError, ProtocolError, TransportError


def test_unknown_error_detail():
    assert unknown_error_detail(None) == "Unknown error"
    assert unknown_error_detail(RuntimeError("x")) == "x"


def test_classify_http_status():
    assert classify_http_status(DecodeError("bad hex")) == 400
    assert classify_http_status(TransportError("down")) == 503
    assert classify_http_status(ProtocolError("eth_chainId", -32000, "boom")) == 502
    assert classify_http_status(asyncio.TimeoutError()) == 504
    assert classify_http_status(RuntimeError("x")) == 500
