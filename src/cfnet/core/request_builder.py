"""Turns a RequestData into a PreparedRequest.

All checks that can fail before any I/O live here so both the dispatcher and
the typed request layer report them the same way.
"""

from typing import Optional

from yarl import URL

from cfnet.core.exceptions import InvalidURLError
from cfnet.core.models.json_value import encode_params
from cfnet.core.models.request import PreparedRequest, RequestData

JSON_CONTENT_TYPE = "application/json"
_SUPPORTED_SCHEMES = ("http", "https")


def parse_url(path: str) -> URL:
    """Parse ``path`` into an absolute http(s) URL or raise InvalidURLError."""
    if not isinstance(path, str) or not path.strip():
        raise InvalidURLError(path, "empty path")
    try:
        url = URL(path)
    except (TypeError, ValueError) as exc:
        raise InvalidURLError(path, str(exc)) from exc
    if not url.is_absolute():
        raise InvalidURLError(path, "URL must be absolute")
    if url.scheme not in _SUPPORTED_SCHEMES:
        raise InvalidURLError(path, f"unsupported scheme {url.scheme!r}")
    if not url.host:
        raise InvalidURLError(path, "missing host")
    return url


def prepare_request(
    request: RequestData,
    content_type: Optional[str] = None,
) -> PreparedRequest:
    """Validate the path and encode params.

    Headers are copied as given and nothing is added to them by default.
    Passing ``content_type`` (e.g. JSON_CONTENT_TYPE) opts in to sending it
    with a body when the caller set no Content-Type of its own.
    """
    url = parse_url(request.path)

    body = None
    if request.params is not None:
        body = encode_params(request.params)

    headers = dict(request.headers) if request.headers else {}
    if body is not None and content_type:
        if not any(name.lower() == "content-type" for name in headers):
            headers["Content-Type"] = content_type

    return PreparedRequest(url=url, method=request.method.value, body=body, headers=headers)
