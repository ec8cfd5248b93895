from pytest import raises

from http_request_simple.query import encode_form, encode_query, parse_query_string


def test_parse_single_values():
    assert parse_query_string("awesome=true") == {"awesome": "true"}
    assert parse_query_string("?a=1&b=2") == {"a": "1", "b": "2"}
    assert parse_query_string("") == {}


def test_parse_repeated_keys_become_lists():
    assert parse_query_string("a=1&b=x&a=2&a=3") == {"a": ["1", "2", "3"], "b": "x"}


def test_parse_keeps_blank_values_and_decodes():
    assert parse_query_string("empty=&name=foo+bar&q=%26") == {
        "empty": "",
        "name": "foo bar",
        "q": "&",
    }


def test_encode_query_is_inverse_of_parse():
    query = "a=1&a=2&name=foo+bar"
    assert encode_query(parse_query_string(query)) == query


def test_encode_form():
    assert encode_form({"awesome": "band", "foo": "fighters"}) == "awesome=band&foo=fighters"
    assert encode_form({"n": 3, "ok": True, "no": False, "none": None}) == (
        "n=3&ok=true&no=false&none="
    )
    assert encode_form({"tags": ["a", "b"]}) == "tags=a&tags=b"
    assert encode_form({"text": "a b&c"}) == "text=a+b%26c"


def test_encode_form_rejects_nested_mappings():
    with raises(ValueError, match="nested"):
        encode_form({"nested": {"a": 1}})
