# cfnet/adapters/loop_context.py
import asyncio
import logging
from typing import Any, Callable

from cfnet.core.interfaces.execution_context import ExecutionContext


logger = logging.getLogger(__name__)


class LoopContext(ExecutionContext):
    """Delivers callbacks on one asyncio event loop.

    The loop plays the role of the application's main context: whichever loop
    or thread a request completed on, its continuation is posted here with
    ``call_soon_threadsafe`` and runs in a later iteration of this loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    @classmethod
    def current(cls) -> "LoopContext":
        """Context bound to the loop running the caller."""
        return cls(asyncio.get_running_loop())

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    async def deliver(self, callback: Callable[..., Any], *args: Any) -> None:
        waiter_loop = asyncio.get_running_loop()
        done = waiter_loop.create_future()

        def _resolve() -> None:
            if not done.done():
                done.set_result(None)

        def _invoke() -> None:
            try:
                callback(*args)
            finally:
                # a raising callback still counts as delivered; the error goes
                # to the target loop's exception handler
                if waiter_loop is self._loop:
                    _resolve()
                else:
                    waiter_loop.call_soon_threadsafe(_resolve)

        logger.debug("[context] posting %s to loop id=%s", getattr(callback, "__name__", callback), id(self._loop))
        self._loop.call_soon_threadsafe(_invoke)
        await done
