# cfnet/core/models/request.py
import copy
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from yarl import URL


class HTTPMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PATCH = "PATCH"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error):
        # not copyable; kept as is and rejected when params are encoded
        return value


@dataclass(frozen=True)
class RequestData:
    """Immutable description of one HTTP call.

    Nothing is validated here apart from the method: the path is checked and
    params are encoded only when the request is prepared for dispatch.
    ``params`` is snapshotted all the way down (mappings become read-only
    mappings, lists become tuples) and ``headers`` is copied into a read-only
    mapping, so later changes to the caller's objects never reach the request.
    """

    path: str
    method: HTTPMethod = HTTPMethod.GET
    params: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None

    def __post_init__(self):
        # frozen dataclass, so normalized values go through object.__setattr__
        object.__setattr__(self, "method", HTTPMethod(self.method))
        if self.params is not None:
            object.__setattr__(self, "params", _freeze(self.params))
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def has_body(self) -> bool:
        return self.params is not None


@dataclass(frozen=True)
class PreparedRequest:
    """Transport-ready form of a RequestData: absolute URL and encoded body."""

    url: URL
    method: str
    body: Optional[bytes] = None
    headers: dict[str, str] = field(default_factory=dict)
