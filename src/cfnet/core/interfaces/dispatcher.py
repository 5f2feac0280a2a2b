# cfnet/core/interfaces/dispatcher.py
import asyncio
from abc import ABC, abstractmethod
from typing import Callable

from cfnet.core.models.request import RequestData


class NetworkDispatcher(ABC):
    """Performs the network I/O for one RequestData.

    Implementations must not keep per-call state: a single instance is shared
    by every request and may be awaited concurrently.
    """

    @abstractmethod
    async def dispatch(self, request: RequestData) -> bytes:
        """Send the request once and return the raw response payload.

        Raises InvalidURLError or SerializationError before any network
        attempt, NoDataError when the response is empty, and lets transport
        errors propagate unmodified. The HTTP status code is not inspected.
        """
        pass

    def submit(
        self,
        request: RequestData,
        on_success: Callable[[bytes], None],
        on_error: Callable[[BaseException], None],
    ) -> "asyncio.Task[None]":
        """Schedule ``dispatch`` and report through exactly one callback.

        Returns immediately. Callbacks run on the event loop driving the
        dispatch; no hop to another context happens at this level.
        """
        async def _run() -> None:
            try:
                payload = await self.dispatch(request)
            except Exception as exc:
                on_error(exc)
                return
            on_success(payload)

        return asyncio.ensure_future(_run())
