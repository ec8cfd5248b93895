"""Asynchronous HTTP request client with uniform result and error shapes."""

from .client import HttpClient
from .config import ClientConfig
from .enums import Verb
from .errors import (
    AccessDeniedError,
    AuthenticationNeededError,
    ClientError,
    Error,
    NotFoundError,
    RedirectError,
    RemoteError,
    TransportError,
    ValidationError,
)
from .models import RawResponse, RequestDescriptor, ResponseResult
from .query import parse_query_string
from .version import __version__, __version_info__

__all__ = (
    "__version__",
    "__version_info__",
    "AccessDeniedError",
    "AuthenticationNeededError",
    "ClientConfig",
    "ClientError",
    "Error",
    "HttpClient",
    "NotFoundError",
    "RawResponse",
    "RedirectError",
    "RemoteError",
    "RequestDescriptor",
    "ResponseResult",
    "TransportError",
    "ValidationError",
    "Verb",
    "parse_query_string",
)
