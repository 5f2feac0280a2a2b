"""Logging helpers.

cfnet modules log through ``logging.getLogger(__name__)`` and never install
handlers on import. Each dispatch runs inside ``request_scope`` so every
record it emits carries a short ``request_id``; that is what tells the log
lines of concurrent requests apart. ``configure_logging`` is for
applications that want those ids in their output.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import IO, Iterator, Optional

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "cfnet_request_id", default="-"
)

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s] %(message)s"
HANDLER_NAME = "cfnet"


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Tag log records emitted inside the block with a request id."""
    token = request_id_var.set(request_id or new_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)


class RequestIdFilter(logging.Filter):
    """Adds ``request_id`` to records that do not carry one already."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def configure_logging(
    level: int | str | None = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Attach a request-id aware stream handler (stderr by default) to the
    root logger and set its level. Calling it again replaces the handler it
    installed before and leaves every other handler alone."""
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)
    elif level is None:
        level = logging.INFO

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
