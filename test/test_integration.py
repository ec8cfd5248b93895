"""End-to-end tests of the client against the in-process echo server."""

import socket

from pytest import fixture, mark, raises

from echo_server import (
    CHUNKED_URL,
    CUSTOM_ERROR_NAME,
    OBJECT_ERROR_URL,
    REDIRECT_URL,
    SERVER_ERROR_URL,
    STRING_ERROR_MESSAGE,
    STRING_ERROR_URL,
    VALID_URL,
)
from http_request_simple import (
    HttpClient,
    NotFoundError,
    RedirectError,
    RemoteError,
    TransportError,
    ValidationError,
    Verb,
)

QUERYSTRING = "awesome=true"
PARSED_QUERYSTRING = {"awesome": "true"}
NOT_FOUND_URL = "/bar/hello/world"
BODY = {"awesome": "band", "foo": "fighters", "is": "an"}

VERBS_WITHOUT_BODY = [Verb.GET, Verb.OPTIONS, Verb.TRACE, Verb.DELETE]
VERBS_WITH_BODY = [Verb.POST, Verb.PUT, Verb.PATCH]


@fixture
def client():
    return HttpClient.create(timeout=5)


@mark.trio
async def test_data_that_is_not_an_object_is_rejected(client, server_url):
    with raises(ValidationError) as info:
        await client.request(f"{server_url}{NOT_FOUND_URL}?{QUERYSTRING}", "dfssdf")

    assert info.value.status is None


@mark.trio
async def test_404_errors(client, server_url):
    with raises(NotFoundError) as info:
        await client.get(f"{server_url}{NOT_FOUND_URL}?{QUERYSTRING}")

    assert info.value.status == 404
    assert info.value.data is None


@mark.trio
async def test_404_with_base_url(server_url):
    client = HttpClient.create(base_url=server_url)

    with raises(RemoteError) as info:
        await client.get(f"{NOT_FOUND_URL}?{QUERYSTRING}")

    assert info.value.status == 404


@mark.trio
async def test_custom_errors_passed_as_strings(client, server_url):
    with raises(RemoteError) as info:
        await client.get(f"{server_url}{STRING_ERROR_URL}?{QUERYSTRING}")

    assert info.value.status == 400
    assert info.value.data == STRING_ERROR_MESSAGE


@mark.trio
async def test_custom_errors_passed_as_objects(client, server_url):
    with raises(RemoteError) as info:
        await client.get(f"{server_url}{OBJECT_ERROR_URL}?{QUERYSTRING}")

    assert info.value.status == 400
    assert info.value.data["name"] == CUSTOM_ERROR_NAME
    assert info.value.data["code"] == 42


@mark.trio
async def test_unparseable_error_payload_is_returned_as_text(client, server_url):
    with raises(RemoteError) as info:
        await client.post(f"{server_url}{SERVER_ERROR_URL}", BODY)

    assert info.value.status == 500
    assert info.value.data == "{not json"


@mark.trio
async def test_redirects_are_not_followed(client, server_url):
    with raises(RedirectError) as info:
        await client.get(f"{server_url}{REDIRECT_URL}")

    assert info.value.status == 302


@mark.trio
@mark.parametrize("verb", VERBS_WITHOUT_BODY)
async def test_requests_without_body(client, server_url, verb):
    shortcut = getattr(client, verb.value.lower())
    result = await shortcut(f"{server_url}{VALID_URL}?{QUERYSTRING}")

    assert result.status == 200
    assert result.data["reqPath"] == VALID_URL
    assert result.data["reqQueryString"] == PARSED_QUERYSTRING
    assert result.data["reqMethod"] == verb.value
    assert result.data["reqBody"] == {}


@mark.trio
async def test_head_request(client, server_url):
    result = await client.head(f"{server_url}{VALID_URL}?{QUERYSTRING}")

    assert result.status == 200
    assert result.data is None
    assert result.headers["Content-type"] == "application/json"


@mark.trio
@mark.parametrize("verb", VERBS_WITH_BODY)
async def test_requests_with_body(client, server_url, verb):
    shortcut = getattr(client, verb.value.lower())
    result = await shortcut(f"{server_url}{VALID_URL}?{QUERYSTRING}", BODY)

    assert result.status == 200
    assert result.data["reqPath"] == VALID_URL
    assert result.data["reqQueryString"] == PARSED_QUERYSTRING
    assert result.data["reqMethod"] == verb.value
    assert result.data["reqBody"] == BODY
    assert result.data["reqContentType"] == "application/x-www-form-urlencoded"


@mark.trio
async def test_json_body(server_url):
    client = HttpClient.create(base_url=server_url, body_encoding="json")
    body = {"name": "Zoë", "tags": ["a", "b"], "count": 3}
    result = await client.put(VALID_URL, body)

    assert result.data["reqBody"] == body
    assert result.data["reqContentType"] == "application/json"


@mark.trio
async def test_data_is_not_sent_with_get(client, server_url):
    result = await client.get(f"{server_url}{VALID_URL}", BODY)
    assert result.data["reqBody"] == {}


@mark.trio
async def test_repeated_query_keys(client, server_url):
    result = await client.get(f"{server_url}{VALID_URL}?a=1&a=2&b=x")
    assert result.data["reqQueryString"] == {"a": ["1", "2"], "b": "x"}


@mark.trio
async def test_chunked_response(client, server_url):
    result = await client.get(f"{server_url}{CHUNKED_URL}")

    assert result.status == 200
    assert result.data == {"chunked": True}


@mark.trio
async def test_connection_refused():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    client = HttpClient.create(timeout=5)
    with raises(TransportError) as info:
        await client.get(f"http://127.0.0.1:{port}{VALID_URL}")

    assert info.value.status is None
    assert info.value.data is None
    assert "Cannot connect" in info.value.message
