"""Query string and form body encoding.

Parsing follows the usual querystring conventions: a key that appears once
maps to a string, a key that appears several times maps to the list of its
values in order of appearance.
"""

from typing import Any, Mapping, Union
from urllib.parse import parse_qsl, urlencode

__all__ = ("QueryMapping", "encode_form", "encode_query", "parse_query_string")

QueryMapping = dict[str, Union[str, list[str]]]


def parse_query_string(query: str) -> QueryMapping:
    """Parses a query string into a mapping.

    Parameters:
        query: the query string, with or without the leading ``?``

    Returns:
        a dictionary mapping keys to a single string value or to a list of
        values for repeated keys
    """
    result: QueryMapping = {}
    if query.startswith("?"):
        query = query[1:]

    for key, value in parse_qsl(query, keep_blank_values=True):
        existing = result.get(key)
        if existing is None:
            result[key] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            result[key] = [existing, value]

    return result


def encode_query(query: Mapping[str, Union[str, list[str]]]) -> str:
    """Encodes a parsed query mapping back into a query string. Inverse of
    `parse_query_string()`.
    """
    return urlencode(query, doseq=True)


def _format_form_value(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(
        f"value of {key!r} cannot be form-encoded: {type(value).__name__}"
    )


def encode_form(data: Mapping[str, Any]) -> str:
    """Encodes a mapping as an ``application/x-www-form-urlencoded`` body.

    Lists and tuples become repeated keys. Nested mappings are not supported.

    Raises:
        ValueError: if a value cannot be represented in a form body
    """
    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        key = str(key)
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_form_value(key, item)) for item in value)
        else:
            pairs.append((key, _format_form_value(key, value)))
    return urlencode(pairs)
