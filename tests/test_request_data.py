"""Tests for RequestData and the request builder.

RequestData is a plain value: nothing but the method is checked when it is
built. Path and params problems only show up in prepare_request.
"""

import dataclasses
import math
import threading

import pytest
from yarl import URL

from cfnet.core.exceptions import InvalidURLError, SerializationError
from cfnet.core.models.request import HTTPMethod, RequestData
from cfnet.core.request_builder import JSON_CONTENT_TYPE, parse_url, prepare_request


def test_defaults():
    request = RequestData(path="https://api.example.test/ticker")
    assert request.method is HTTPMethod.GET
    assert request.params is None
    assert request.headers is None
    assert not request.has_body


def test_method_accepts_member_name_string():
    request = RequestData(path="https://api.example.test", method="PATCH")
    assert request.method is HTTPMethod.PATCH


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        RequestData(path="https://api.example.test", method="PUT")


def test_invalid_path_is_not_checked_at_construction():
    request = RequestData(path="")
    assert request.path == ""


def test_descriptor_is_immutable():
    params = {"symbol": "BTC"}
    headers = {"X-Api-Key": "k"}
    request = RequestData(path="https://api.example.test", params=params, headers=headers)

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.path = "https://other.test"  # type: ignore[misc]
    with pytest.raises(TypeError):
        request.params["symbol"] = "ETH"  # type: ignore[index]
    with pytest.raises(TypeError):
        request.headers["X-Api-Key"] = "other"  # type: ignore[index]

    # later changes to the caller's dicts do not leak in
    params["symbol"] = "ETH"
    headers["X-Api-Key"] = "other"
    assert request.params == {"symbol": "BTC"}
    assert request.headers == {"X-Api-Key": "k"}


def test_nested_params_changes_do_not_reach_body():
    inner = {"symbol": "BTC"}
    venues = ["spot"]
    request = RequestData(
        path="https://api.example.test", params={"filter": inner, "venues": venues}
    )
    before = prepare_request(request).body

    inner["symbol"] = "ETH"
    venues.append("futures")

    assert before == b'{"filter":{"symbol":"BTC"},"venues":["spot"]}'
    assert prepare_request(request).body == before


def test_nested_params_are_read_only():
    request = RequestData(path="https://api.example.test", params={"filter": {"symbol": "BTC"}, "ids": [1, 2]})
    with pytest.raises(TypeError):
        request.params["filter"]["symbol"] = "ETH"
    assert request.params["ids"] == (1, 2)


def test_uncopyable_param_still_fails_at_prepare():
    lock = threading.Lock()
    request = RequestData(path="https://api.example.test", params={"lock": lock})
    assert request.params["lock"] is lock
    with pytest.raises(SerializationError) as excinfo:
        prepare_request(request)
    assert excinfo.value.key == "lock"


def test_replace_derives_new_descriptor():
    request = RequestData(path="https://api.example.test")
    post = dataclasses.replace(request, method=HTTPMethod.POST, params={"a": 1})
    assert request.method is HTTPMethod.GET
    assert post.method is HTTPMethod.POST
    assert post.params == {"a": 1}


@pytest.mark.parametrize(
    "path",
    ["", "   ", "not a url", "/relative/path", "ftp://example.test/file", "http://", "http://[::1"],
)
def test_parse_url_rejects(path):
    with pytest.raises(InvalidURLError) as excinfo:
        parse_url(path)
    assert excinfo.value.path == path


def test_parse_url_accepts_absolute_http():
    url = parse_url("https://api.example.test/v1/prices?limit=5")
    assert url == URL("https://api.example.test/v1/prices?limit=5")


def test_prepare_without_params_has_no_body():
    for method in HTTPMethod:
        prepared = prepare_request(RequestData(path="https://api.example.test", method=method))
        assert prepared.body is None
        assert prepared.method == method.value
        assert prepared.headers == {}


def test_prepare_encodes_params_for_every_method():
    for method in (HTTPMethod.GET, HTTPMethod.DELETE, HTTPMethod.POST, HTTPMethod.PATCH):
        prepared = prepare_request(
            RequestData(path="https://api.example.test", method=method, params={"id": 7, "note": None})
        )
        assert prepared.body == b'{"id":7,"note":null}'


def test_prepare_empty_params_still_sends_body():
    prepared = prepare_request(RequestData(path="https://api.example.test", params={}))
    assert prepared.body == b"{}"


def test_prepare_headers_verbatim_and_no_content_type_added():
    request = RequestData(
        path="https://api.example.test",
        method=HTTPMethod.POST,
        params={"a": 1},
        headers={"Authorization": "Bearer t", "x-custom": "v"},
    )
    prepared = prepare_request(request)
    assert prepared.body == b'{"a":1}'
    assert prepared.headers == {"Authorization": "Bearer t", "x-custom": "v"}


def test_prepare_body_without_headers_sends_no_headers():
    request = RequestData(path="https://api.example.test", method=HTTPMethod.POST, params={"a": 1})
    assert prepare_request(request).headers == {}


def test_prepare_content_type_opt_in():
    request = RequestData(path="https://api.example.test", params={"a": 1})
    prepared = prepare_request(request, content_type=JSON_CONTENT_TYPE)
    assert prepared.headers == {"Content-Type": "application/json"}


def test_prepare_opt_in_keeps_caller_content_type():
    request = RequestData(
        path="https://api.example.test",
        method=HTTPMethod.POST,
        params={"a": 1},
        headers={"content-type": "application/vnd.api+json"},
    )
    prepared = prepare_request(request, content_type=JSON_CONTENT_TYPE)
    assert prepared.headers == {"content-type": "application/vnd.api+json"}


def test_prepare_opt_in_without_body_adds_nothing():
    request = RequestData(path="https://api.example.test", headers={"Accept": "application/json"})
    prepared = prepare_request(request, content_type=JSON_CONTENT_TYPE)
    assert prepared.headers == {"Accept": "application/json"}


def test_prepare_invalid_path_checked_before_params():
    request = RequestData(path="", params={"bad": object()})
    with pytest.raises(InvalidURLError):
        prepare_request(request)


def test_prepare_non_serializable_params():
    request = RequestData(path="https://api.example.test", params={"when": {1, 2}})
    with pytest.raises(SerializationError) as excinfo:
        prepare_request(request)
    assert excinfo.value.key == "when"


def test_prepare_nan_rejected():
    request = RequestData(path="https://api.example.test", params={"price": math.nan})
    with pytest.raises(SerializationError):
        prepare_request(request)
