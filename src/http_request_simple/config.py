"""Configuration of the HTTP request client."""

import re

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from .errors import ValidationError
from .version import __version__

__all__ = ("BodyEncoding", "ClientConfig", "DEFAULT_USER_AGENT")

BodyEncoding = Literal["form", "json"]

#: User agent sent with each request unless the configuration overrides it
DEFAULT_USER_AGENT = f"http-request-simple/{__version__}"

#: Header names must be RFC 7230 tokens
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _validate_header(name: str, value: str) -> None:
    """Checks that a header can be written to the wire as is.

    Raises:
        ValidationError: if the name is not a token, or the value contains
            line breaks or characters outside Latin-1
    """
    if not _HEADER_NAME_RE.fullmatch(name):
        raise ValidationError(f"Invalid header name: {name!r}")
    if "\r" in value or "\n" in value or "\0" in value:
        raise ValidationError(
            f"Header {name!r} contains a line break or a NUL character"
        )
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise ValidationError(
            f"Header {name!r} contains characters outside Latin-1"
        ) from None


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration of an HTTP client.

    Use `dataclasses.replace()` to derive a modified configuration.
    """

    base_url: Optional[str] = None
    """URL that relative request URLs are resolved against; ``None`` if only
    absolute URLs are accepted.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    """Headers sent with every request."""

    body_encoding: BodyEncoding = "form"
    """How request data is serialized into the body of POST, PUT and PATCH
    requests.
    """

    timeout: float = 10
    """Number of seconds after which a single request/response exchange is
    abandoned.
    """

    def __post_init__(self):
        if self.body_encoding not in ("form", "json"):
            raise ValueError(f"Unknown body encoding: {self.body_encoding!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        headers = {str(k).capitalize(): str(v) for k, v in self.headers.items()}
        for name, value in headers.items():
            _validate_header(name, value)
        object.__setattr__(self, "headers", MappingProxyType(headers))
