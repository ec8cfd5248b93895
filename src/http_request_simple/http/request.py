"""Simple HTTP request object for the low-level HTTP transport."""

from __future__ import annotations

import logging

from io import BytesIO
from ssl import create_default_context
from trio import (
    BrokenResourceError,
    ClosedResourceError,
    TooSlowError,
    fail_after,
    open_ssl_over_tcp_stream,
    open_tcp_stream,
)
from typing import Optional, OrderedDict
from urllib.parse import quote, urlsplit

from http_request_simple.config import DEFAULT_USER_AGENT
from http_request_simple.errors import TransportError
from http_request_simple.models import RawResponse, RequestDescriptor

from .response import Response

__all__ = ("Request", "send_request")

log = logging.getLogger(__name__)

#: Characters that are left intact when quoting the path of a request
_PATH_SAFE_CHARS = "/%;:@&=+$,!~*'()"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class Request:
    """HTTP request object."""

    data: Optional[bytes]
    """The data to send in the body of the HTTP request."""

    headers: OrderedDict[str, bytes]
    """The headers to send with the HTTP request."""

    method: str
    """The HTTP method of the request."""

    def __init__(
        self,
        url: str,
        method: str = "GET",
        data: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        """Constructs a new HTTP request object.

        Parameters:
            url: the URL to load
            method: the HTTP method to use
            data: the data to send in the body of the request or ``None`` if
                the request has no body
            headers: additional headers of the request.
        """
        self.url = url
        self.method = method
        self.data = data
        self.headers = OrderedDict()
        for key, value in (headers or {}).items():
            self.add_header(key, value.encode("latin-1"))

    @classmethod
    def from_descriptor(cls, descriptor: RequestDescriptor) -> Request:
        """Creates a wire-level request from a request descriptor."""
        return cls(
            descriptor.url,
            method=descriptor.method.value,
            data=descriptor.encoded_body,
            headers=dict(descriptor.headers),
        )

    def add_header(self, key: str, val: bytes) -> None:
        """Adds an HTTP header to the request.

        Parameters:
            key: the name of the header to add. It will be capitalized.
            val: the value of the header to add
        """
        self.headers[key.capitalize()] = val

    def has_header(self, key: str) -> bool:
        """Checks whether the request contains the given HTTP header.

        Parameters:
            key: the name of the header to check. It will be capitalized.
        """
        return key.capitalize() in self.headers

    def encode(self) -> bytes:
        """Returns the request line, the headers and the body of the request,
        encoded for the wire. Adds the ``Host``, ``Connection``,
        ``User-Agent`` and ``Content-Length`` headers if they are missing.
        """
        parts = urlsplit(self.url)

        if not self.has_header("Host"):
            assert parts.hostname is not None

            hostname = parts.hostname
            port = parts.port
            if ":" in hostname:
                hostname = f"[{hostname}]"

            if port and port != _DEFAULT_PORTS.get(parts.scheme):
                self.add_header("Host", f"{hostname}:{port}".encode("ascii"))
            else:
                self.add_header("Host", hostname.encode("ascii"))

        if not self.has_header("Connection"):
            self.add_header("Connection", b"close")

        if not self.has_header("User-Agent"):
            self.add_header("User-Agent", DEFAULT_USER_AGENT.encode("ascii"))

        if self.data is not None and not self.has_header("Content-Length"):
            self.add_header("Content-Length", str(len(self.data)).encode("ascii"))

        target = quote(parts.path or "/", safe=_PATH_SAFE_CHARS)
        if parts.query:
            target = f"{target}?{parts.query}"

        request = BytesIO()
        request.write(f"{self.method} {target} HTTP/1.1\r\n".encode("ascii"))
        for header, value in self.headers.items():
            request.write(header.encode("ascii"))
            request.write(b": ")
            request.write(value)
            request.write(b"\r\n")
        request.write(b"\r\n")
        if self.data is not None:
            request.write(self.data)

        return request.getvalue()

    async def send(self, timeout: float = 10) -> RawResponse:
        """Sends the HTTP request and reads the entire response.

        Parameters:
            timeout: number of seconds after which the exchange is abandoned

        Returns:
            the status code, the headers and the body of the response

        Raises:
            TooSlowError: if the exchange did not finish in time
            OSError: if the connection could not be established
            ValueError: if the server sent a malformed response
        """
        parts = urlsplit(self.url)
        payload = self.encode()
        port = parts.port or _DEFAULT_PORTS[parts.scheme]

        with fail_after(timeout):
            if parts.scheme == "https":
                stream = await open_ssl_over_tcp_stream(
                    parts.hostname, port, ssl_context=create_default_context()
                )
            else:
                stream = await open_tcp_stream(parts.hostname, port)

            response = Response(stream, head=self.method == "HEAD")
            try:
                await stream.send_all(payload)
                await response.ensure_headers_processed()
                body = await response.read_body()
            finally:
                await response.aclose()

        return RawResponse(
            status=response.status, headers=dict(response.headers), body=body
        )


async def send_request(
    descriptor: RequestDescriptor, timeout: float = 10
) -> RawResponse:
    """Sends the request described by the given descriptor over a new
    connection and returns the raw response.

    Raises:
        TransportError: if the request could not be sent or the response
            could not be read
    """
    method, url = descriptor.method.value, descriptor.url
    log.debug(f"Sending {method} request to {url}")

    try:
        request = Request.from_descriptor(descriptor)
        return await request.send(timeout=timeout)
    except TooSlowError as ex:
        raise TransportError(f"{method} {url} timed out after {timeout} seconds") from ex
    except (BrokenResourceError, ClosedResourceError) as ex:
        raise TransportError(f"Connection to {url} was lost: {ex}") from ex
    except OSError as ex:
        raise TransportError(f"Cannot connect to {url}: {ex}") from ex
    except ValueError as ex:
        raise TransportError(f"{method} {url} failed: {ex}") from ex
