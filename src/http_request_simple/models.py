"""Value types passed between the stages of a single request."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from .enums import Verb

__all__ = ("RawResponse", "RequestDescriptor", "ResponseResult", "Transport")


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully specified, immutable description of one outgoing request."""

    method: Verb
    url: str
    """Absolute URL of the request with the normalized query string."""

    path: str
    """Path component of the URL, without the query string."""

    query: Mapping[str, Union[str, list[str]]]
    headers: Mapping[str, str]
    body: Optional[str] = None

    @property
    def encoded_body(self) -> Optional[bytes]:
        return self.body.encode("utf-8") if self.body is not None else None


@dataclass(frozen=True)
class RawResponse:
    """Response as read from the wire, before any classification."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        object.__setattr__(
            self,
            "headers",
            {str(key).capitalize(): value for key, value in self.headers.items()},
        )

    def getheader(self, header: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(header.capitalize(), default)


@dataclass(frozen=True)
class ResponseResult:
    """Successful (2xx) response of the remote server."""

    status: int
    data: Any = None
    """The decoded body: parsed JSON, text, or ``None`` for empty bodies."""

    headers: dict[str, str] = field(default_factory=dict)

    @property
    def json(self) -> dict[str, Any]:
        """Returns a JSON-serializable representation of the result."""
        return {"status": self.status, "headers": dict(self.headers), "data": self.data}


#: Type of transport functions: they send a request and return the raw
#: response, or raise an exception if the exchange failed
Transport = Callable[[RequestDescriptor], Awaitable[RawResponse]]
