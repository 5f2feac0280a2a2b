# cfnet/adapters/aiohttp_dispatcher.py
import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from cfnet.config import DispatcherConfig
from cfnet.core.exceptions import NoDataError
from cfnet.core.interfaces.dispatcher import NetworkDispatcher
from cfnet.core.logging_config import request_scope
from cfnet.core.models.request import RequestData
from cfnet.core.request_builder import prepare_request


logger = logging.getLogger(__name__)


class AioHttpNetworkDispatcher(NetworkDispatcher):
    """aiohttp implementation of NetworkDispatcher.

    A ClientSession belongs to the loop it was created on, so the dispatcher
    keeps one session per event loop, created lazily and reused by every
    dispatch on that loop. Sessions left behind by loops that have since
    closed are released on the next dispatch; ``close()`` closes all of them.
    """

    def __init__(self, config: Optional[DispatcherConfig] = None):
        self._config = config or DispatcherConfig()
        self._sessions: Dict[asyncio.AbstractEventLoop, aiohttp.ClientSession] = {}
        if self._config.timeout is None:
            self._client_timeout = None
        else:
            self._client_timeout = aiohttp.ClientTimeout(total=self._config.timeout)

    @property
    def config(self) -> DispatcherConfig:
        return self._config

    async def __aenter__(self) -> "AioHttpNetworkDispatcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the session bound to the running loop."""
        loop = asyncio.get_running_loop()
        session = self._sessions.get(loop)
        if session is None or session.closed:
            kwargs = {}
            if self._client_timeout is not None:
                kwargs["timeout"] = self._client_timeout
            session = aiohttp.ClientSession(**kwargs)
            self._sessions[loop] = session
            logger.debug("[dispatcher] opened session loop id=%s", id(loop))
        return session

    async def _release_stale_sessions(self) -> None:
        # a closed loop has no transports left to shut down, so its session
        # can be closed from whichever loop is running now
        for loop in [loop for loop in list(self._sessions) if loop.is_closed()]:
            session = self._sessions.pop(loop, None)
            if session is not None and not session.closed:
                await session.close()
                logger.debug("[dispatcher] released session of closed loop id=%s", id(loop))

    async def dispatch(self, request: RequestData) -> bytes:
        prepared = prepare_request(request, content_type=self._config.json_content_type)
        await self._release_stale_sessions()

        with request_scope():
            logger.debug(
                "[dispatcher] %s %s body=%s", prepared.method, prepared.url,
                len(prepared.body) if prepared.body is not None else None,
            )
            async with self.session.request(
                prepared.method,
                prepared.url,
                data=prepared.body,
                headers=prepared.headers,
            ) as response:
                payload = await response.read()
                logger.debug(
                    "[dispatcher] %s %s status=%s bytes=%d",
                    prepared.method, prepared.url, response.status, len(payload),
                )

        if not payload:
            raise NoDataError(str(prepared.url))
        return payload

    async def close(self) -> None:
        """Close the sessions of this loop, of loops that have closed, and of
        loops running in other threads.

        A session whose loop is alive but idle cannot be closed from here; it
        stays registered until ``close()`` runs on that loop.
        """
        current = asyncio.get_running_loop()
        for loop, session in list(self._sessions.items()):
            if loop is current or loop.is_closed():
                self._sessions.pop(loop, None)
                if not session.closed:
                    await session.close()
            elif loop.is_running():
                self._sessions.pop(loop, None)
                if not session.closed:
                    await asyncio.wrap_future(
                        asyncio.run_coroutine_threadsafe(session.close(), loop)
                    )


DEFAULT_DISPATCHER = AioHttpNetworkDispatcher()
