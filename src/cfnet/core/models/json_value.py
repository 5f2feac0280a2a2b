"""JSON value model used for request bodies.

Params are accepted as arbitrary mappings on ``RequestData``. Before a request
goes out they are walked against the closed set of JSON shapes below and
encoded; the first value outside that set stops the encoding with a
``SerializationError`` naming where it was found.
"""

import json
import math
from typing import Any, Mapping, Union

from cfnet.core.exceptions import SerializationError

JSONScalar = Union[None, bool, int, float, str]
JSONValue = Union[JSONScalar, list["JSONValue"], dict[str, "JSONValue"]]


def _location(path: str, key: Any) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else str(key)


def to_json_value(value: Any, path: str = "") -> JSONValue:
    """Return ``value`` as a JSONValue or raise SerializationError.

    bool is checked before int since it is a subclass of it. Tuples become
    lists, any other Mapping becomes a dict with string keys.
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(
                f"Non-finite number {value!r} is not valid JSON", key=path or None
            )
        return float(value)
    if isinstance(value, (list, tuple)):
        return [to_json_value(item, _location(path, i)) for i, item in enumerate(value)]
    if isinstance(value, Mapping):
        obj: dict[str, JSONValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"Object keys must be strings, got {type(key).__name__}",
                    key=path or None,
                )
            obj[key] = to_json_value(item, _location(path, key))
        return obj
    raise SerializationError(
        f"Value of type {type(value).__name__} is not JSON serializable",
        key=path or None,
    )


def encode_params(params: Mapping[str, Any]) -> bytes:
    """Encode a params mapping as a compact UTF-8 JSON object."""
    document = to_json_value(params)
    try:
        return json.dumps(document, separators=(",", ":"), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:  # pragma: no cover - to_json_value already checked
        raise SerializationError(str(exc)) from exc
