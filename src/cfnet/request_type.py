"""Typed requests.

A request kind subclasses ``RequestType`` with the type its response decodes
into::

    class Ticker(BaseModel):
        symbol: str
        price: float

    class GetTicker(RequestType[Ticker]):
        def __init__(self, symbol: str):
            self.symbol = symbol

        @property
        def data(self) -> RequestData:
            return RequestData(path=f"https://api.example.com/ticker/{self.symbol}")

The response type is resolved once, when the subclass is created, into a
pydantic ``TypeAdapter``; anything pydantic can validate from JSON works
(models, ``list[Model]``, ``dict[str, float]`` ...). It can also be given as a
``response_type`` class attribute.

``fetch`` is the awaitable form. ``execute`` is the continuation form: it
always hands its result to an ExecutionContext, so callers never see a
callback run on the transport's loop or thread.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar, get_args, get_origin

from pydantic import TypeAdapter, ValidationError

from cfnet.adapters.aiohttp_dispatcher import DEFAULT_DISPATCHER
from cfnet.adapters.loop_context import LoopContext
from cfnet.core.exceptions import DecodingError, InvalidURLError, NoDataError, SerializationError
from cfnet.core.interfaces.dispatcher import NetworkDispatcher
from cfnet.core.interfaces.execution_context import ExecutionContext
from cfnet.core.models.request import PreparedRequest, RequestData
from cfnet.core.request_builder import prepare_request


logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")


def _resolve_response_type(cls: type) -> Any:
    explicit = cls.__dict__.get("response_type")
    if explicit is not None:
        return explicit
    for base in cls.__dict__.get("__orig_bases__", ()):
        origin = get_origin(base)
        if isinstance(origin, type) and issubclass(origin, RequestType):
            args = get_args(base)
            if args and not isinstance(args[0], TypeVar):
                return args[0]
    # inherited from a concrete parent
    return getattr(cls, "response_type", None)


class RequestType(ABC, Generic[ResponseT]):
    response_type: ClassVar[Any] = None
    _adapter: ClassVar[Optional[TypeAdapter]] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        response_type = _resolve_response_type(cls)
        if response_type is None:
            # still generic, e.g. an intermediate base class
            return
        cls.response_type = response_type
        cls._adapter = TypeAdapter(response_type)

    @property
    @abstractmethod
    def data(self) -> RequestData:
        """Descriptor for this request."""
        pass

    @classmethod
    def decode(cls, raw: bytes) -> ResponseT:
        """Decode a JSON payload into the response type.

        Raises DecodingError for malformed JSON as well as schema mismatch.
        """
        if cls._adapter is None:
            raise TypeError(f"{cls.__name__} does not declare a response type")
        try:
            return cls._adapter.validate_json(raw)
        except ValidationError as exc:
            raise DecodingError(cls.response_type, raw) from exc

    @classmethod
    def _decode_payload(cls, request: RequestData, payload: bytes) -> ResponseT:
        # dispatchers other than the default may hand back an empty payload
        if not payload:
            raise NoDataError(request.path)
        return cls.decode(payload)

    def prepare(self) -> PreparedRequest:
        """Check the descriptor without doing any I/O."""
        return prepare_request(self.data)

    async def fetch(self, dispatcher: NetworkDispatcher = DEFAULT_DISPATCHER) -> ResponseT:
        """Dispatch the request and return the decoded response."""
        request = self.data
        prepare_request(request)
        payload = await dispatcher.dispatch(request)
        return self._decode_payload(request, payload)

    def execute(
        self,
        on_success: Callable[[ResponseT], None],
        on_error: Callable[[BaseException], None],
        dispatcher: NetworkDispatcher = DEFAULT_DISPATCHER,
        context: Optional[ExecutionContext] = None,
    ) -> "asyncio.Task[None]":
        """Run the request and deliver exactly one continuation on ``context``.

        Must be called while an event loop is running. ``context`` defaults to
        that loop. Path and params are checked before the dispatcher is
        touched; if they are invalid the dispatcher is never called and the
        error goes straight to ``on_error``. The returned task finishes once
        the continuation has run.
        """
        if context is None:
            context = LoopContext.current()
        request = self.data

        try:
            prepare_request(request)
        except (InvalidURLError, SerializationError) as exc:
            logger.debug("[request] %s rejected before dispatch: %s", type(self).__name__, exc)
            return asyncio.ensure_future(context.deliver(on_error, exc))

        return asyncio.ensure_future(self._complete(request, dispatcher, context, on_success, on_error))

    async def _complete(
        self,
        request: RequestData,
        dispatcher: NetworkDispatcher,
        context: ExecutionContext,
        on_success: Callable[[ResponseT], None],
        on_error: Callable[[BaseException], None],
    ) -> None:
        try:
            payload = await dispatcher.dispatch(request)
            result = self._decode_payload(request, payload)
        except Exception as exc:
            await context.deliver(on_error, exc)
            return
        await context.deliver(on_success, result)
