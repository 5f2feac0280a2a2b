"""Typed HTTP requests over a pluggable dispatcher."""

from cfnet.adapters.aiohttp_dispatcher import DEFAULT_DISPATCHER, AioHttpNetworkDispatcher
from cfnet.adapters.loop_context import LoopContext
from cfnet.config import DispatcherConfig, NetworkSettings
from cfnet.core.exceptions import (
    TRANSPORT_ERRORS,
    DecodingError,
    InvalidURLError,
    NetworkError,
    NoDataError,
    SerializationError,
)
from cfnet.core.interfaces.dispatcher import NetworkDispatcher
from cfnet.core.interfaces.execution_context import ExecutionContext
from cfnet.core.logging_config import configure_logging
from cfnet.core.models.request import HTTPMethod, PreparedRequest, RequestData
from cfnet.core.request_builder import prepare_request
from cfnet.request_type import RequestType

__all__ = [
    "AioHttpNetworkDispatcher",
    "DEFAULT_DISPATCHER",
    "DecodingError",
    "DispatcherConfig",
    "ExecutionContext",
    "HTTPMethod",
    "InvalidURLError",
    "LoopContext",
    "NetworkDispatcher",
    "NetworkError",
    "NetworkSettings",
    "NoDataError",
    "PreparedRequest",
    "RequestData",
    "RequestType",
    "SerializationError",
    "TRANSPORT_ERRORS",
    "configure_logging",
    "prepare_request",
]
