"""Enum types used throughout the HTTP request client."""

from enum import Enum
from typing import Union

__all__ = ("Verb",)


class Verb(Enum):
    """HTTP request methods supported by the client."""

    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PUT = "PUT"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def from_name(cls, name: Union[str, "Verb"]) -> "Verb":
        """Returns the verb corresponding to the given case-insensitive name.

        Raises:
            ValueError: if the name does not refer to a known verb
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise ValueError(f"HTTP method must be a string, got {name!r}")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown HTTP method: {name!r}") from None

    @property
    def carries_body(self) -> bool:
        """Whether the request data is sent in the body of requests with
        this verb.
        """
        return self in _VERBS_WITH_BODY


_VERBS_WITH_BODY = frozenset((Verb.POST, Verb.PUT, Verb.PATCH))
