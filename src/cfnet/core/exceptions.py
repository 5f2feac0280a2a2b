"""Errors raised by the request layer.

Transport failures are not wrapped: whatever aiohttp raises reaches the caller
unchanged. ``TRANSPORT_ERRORS`` lists those types for callers that want to
catch them next to the domain errors below.
"""

import asyncio
from typing import Any, Optional

import aiohttp


TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (aiohttp.ClientError, asyncio.TimeoutError)


class NetworkError(Exception):
    """Base exception for errors detected by this layer."""


class InvalidURLError(NetworkError):
    """The request path cannot be turned into an absolute http(s) URL.

    Attributes:
        path: The offending path exactly as it was given
        reason: Short description of what is wrong with it
    """
    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Invalid URL: {path!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SerializationError(NetworkError):
    """Request params could not be encoded as a JSON body.

    Attributes:
        key: Dotted location of the first value that failed, if known
    """
    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class NoDataError(NetworkError):
    """The transport completed but the response carried no payload."""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No data received from {url}")


class DecodingError(NetworkError):
    """The payload does not match the declared response type.

    The pydantic ``ValidationError`` is kept as ``__cause__``.

    Attributes:
        response_type: Type the payload was decoded into
        payload: Raw bytes that failed to decode
    """
    def __init__(self, response_type: Any, payload: bytes):
        self.response_type = response_type
        self.payload = payload
        name = getattr(response_type, "__name__", repr(response_type))
        super().__init__(f"Response could not be decoded as {name}")

    def errors(self) -> list[dict[str, Any]]:
        """Validation errors reported by pydantic, empty if there is no cause."""
        cause = self.__cause__
        if cause is not None and hasattr(cause, "errors"):
            return cause.errors()
        return []
