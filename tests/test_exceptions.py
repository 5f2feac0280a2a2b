import asyncio

import aiohttp

from cfnet.core.exceptions import (
    TRANSPORT_ERRORS,
    DecodingError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    SerializationError,
)


def test_domain_errors_share_base():
    for error in (
        InvalidURLError(""),
        SerializationError("bad"),
        NoDataError("http://example.test"),
        DecodingError(dict, b"{}"),
    ):
        assert isinstance(error, NetworkError)


def test_invalid_url_message_includes_reason():
    error = InvalidURLError("ftp://x", "unsupported scheme 'ftp'")
    assert error.path == "ftp://x"
    assert "unsupported scheme" in str(error)


def test_decoding_error_without_cause_has_no_errors():
    assert DecodingError(dict, b"").errors() == []


def test_transport_errors_cover_aiohttp_and_timeouts():
    assert isinstance(aiohttp.ClientConnectionError(), TRANSPORT_ERRORS)
    assert isinstance(asyncio.TimeoutError(), TRANSPORT_ERRORS)
    assert not isinstance(NoDataError("x"), TRANSPORT_ERRORS)
