import json

import pytest

from http_handler.adapters.json_body_builder import JsonBodyBuilder
from http_handler.core.exceptions import SerializationError
from http_handler.core.models.request import HandlerRequest
from http_handler.core.models.request_type import RequestType


@pytest.fixture
def builder():
    return JsonBodyBuilder()


@pytest.mark.parametrize("method", ["GET", "get"])
def test_get_has_no_body_even_with_parameters(builder, method):
    request = HandlerRequest("/items", method=method, parameters={"page": 1})
    assert builder.build_body(request) is None


def test_missing_parameters_give_no_body(builder):
    request = HandlerRequest("/items", method="POST", parameters=None)
    assert builder.build_body(request) is None


def test_empty_parameters_are_sent_as_empty_object(builder):
    request = HandlerRequest("/items", method="POST", parameters={})
    assert builder.build_body(request) == b"{}"


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_non_get_body_is_json_of_parameters(builder, method):
    parameters = {"x": 1, "nested": {"tags": ["a", "b"], "ok": True, "none": None}}
    request = HandlerRequest("/items", method=method, parameters=parameters)

    body = builder.build_body(request)

    assert isinstance(body, bytes)
    assert json.loads(body) == parameters


def test_body_is_compact_json(builder):
    request = HandlerRequest("/items", method="POST", parameters={"name": "Zoë"})
    assert builder.build_body(request) == b'{"name":"Zo\\u00eb"}'


def test_multipart_type_is_serialized_like_regular(builder):
    regular = HandlerRequest("/upload", method="POST", parameters={"a": 1})
    multipart = HandlerRequest("/upload", method="POST", parameters={"a": 1}, type=RequestType.multipart)
    assert builder.build_body(regular) == builder.build_body(multipart)


@pytest.mark.parametrize("value", [object(), {1, 2}, float("nan")])
def test_unserializable_parameters_raise_serialization_error(builder, value):
    request = HandlerRequest("/items", method="POST", parameters={"bad": value})

    with pytest.raises(SerializationError) as excinfo:
        builder.build_body(request)

    assert excinfo.value.parameters == {"bad": value}
    assert isinstance(excinfo.value.__cause__, (TypeError, ValueError))
