from dataclasses import FrozenInstanceError
from pytest import mark, raises

from http_request_simple import ClientConfig, ValidationError, Verb
from http_request_simple.builder import RequestBuilder

URL = "http://localhost:25000/foo/bar?awesome=true"
BODY = {"awesome": "band", "foo": "fighters", "is": "an"}


def test_build_get_request():
    request = RequestBuilder().build(URL)

    assert request.method is Verb.GET
    assert request.url == URL
    assert request.path == "/foo/bar"
    assert request.query == {"awesome": "true"}
    assert request.body is None
    assert "Content-type" not in request.headers
    assert "Content-length" not in request.headers
    assert request.headers["Accept"].startswith("application/json")


def test_descriptor_is_immutable():
    request = RequestBuilder().build(URL)

    with raises(FrozenInstanceError):
        request.body = "foo"  # type: ignore

    with raises(TypeError):
        request.headers["X-foo"] = "bar"  # type: ignore


@mark.parametrize("method", ["post", "PUT", Verb.PATCH])
def test_build_request_with_form_body(method):
    request = RequestBuilder().build(URL, method, BODY)

    assert request.body == "awesome=band&foo=fighters&is=an"
    assert request.headers["Content-type"] == "application/x-www-form-urlencoded"
    assert request.headers["Content-length"] == str(len(request.body))


def test_build_request_with_json_body():
    builder = RequestBuilder(ClientConfig(body_encoding="json"))
    request = builder.build(URL, Verb.POST, {"name": "Zoë", "tags": [1, 2]})

    assert request.body == '{"name":"Zo\\u00eb","tags":[1,2]}'
    assert request.headers["Content-type"] == "application/json"


@mark.parametrize("method", ["GET", "HEAD", "OPTIONS", "TRACE", "DELETE"])
def test_data_is_not_sent_for_verbs_without_body(method):
    request = RequestBuilder().build(URL, method, BODY)

    assert request.body is None
    assert "Content-type" not in request.headers


@mark.parametrize("data", ["dfssdf", 42, ["a", "b"], b"bytes", True])
def test_data_must_be_a_mapping(data):
    with raises(ValidationError) as info:
        RequestBuilder().build(URL, Verb.POST, data)

    assert info.value.status is None
    assert info.value.data is None


def test_unknown_method():
    with raises(ValidationError, match="Unknown HTTP method"):
        RequestBuilder().build(URL, "FETCH")


@mark.parametrize(
    "url",
    ["", "/foo/bar", "ftp://localhost/foo", "http:///foo", "http://localhost:99999/"],
)
def test_invalid_urls(url):
    with raises(ValidationError):
        RequestBuilder().build(url)


def test_relative_url_is_resolved_against_base_url():
    builder = RequestBuilder(ClientConfig(base_url="http://localhost:25000"))
    request = builder.build("/foo/bar?awesome=true")

    assert request.url == URL
    assert request.path == "/foo/bar"


def test_query_string_is_normalized():
    request = RequestBuilder().build("http://localhost/a?x=1&y=a%20b&x=2")

    assert request.query == {"x": ["1", "2"], "y": "a b"}
    assert request.url == "http://localhost/a?x=1&x=2&y=a+b"


def test_empty_path_becomes_root():
    request = RequestBuilder().build("http://localhost")
    assert request.path == "/"
    assert request.url == "http://localhost/"


def test_base_headers_are_used():
    config = ClientConfig(headers={"authorization": "Bearer xyz", "accept": "text/plain"})
    request = RequestBuilder(config).build(URL)

    assert request.headers["Authorization"] == "Bearer xyz"
    assert request.headers["Accept"] == "text/plain"


def test_nested_form_data_is_rejected():
    with raises(ValidationError, match="cannot be encoded"):
        RequestBuilder().build(URL, Verb.POST, {"nested": {"a": 1}})


def test_unserializable_json_data_is_rejected():
    builder = RequestBuilder(ClientConfig(body_encoding="json"))
    with raises(ValidationError, match="cannot be encoded"):
        builder.build(URL, Verb.POST, {"obj": object()})


@mark.parametrize(
    "headers",
    [
        {"X-token": "abc\r\nEvil: injected"},
        {"X-token": "abc\nEvil: injected"},
        {"X-token": "abc\0"},
        {"X-token": "Zoë ☃"},
        {"X token": "abc"},
        {"X-token:": "abc"},
        {"": "abc"},
    ],
)
def test_invalid_headers_are_rejected(headers):
    with raises(ValidationError) as info:
        ClientConfig(headers=headers)

    assert info.value.status is None


def test_latin1_header_values_are_accepted():
    config = ClientConfig(headers={"X-name": "Zoë", "x-custom_header.v2": "1"})
    assert config.headers == {"X-name": "Zoë", "X-custom_header.v2": "1"}
