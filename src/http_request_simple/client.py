"""HTTP client object that ties request building, the transport and
response normalization together.
"""

from __future__ import annotations

import logging

from functools import partial
from typing import Any, Mapping, Optional, Union

from .builder import RequestBuilder
from .config import BodyEncoding, ClientConfig
from .enums import Verb
from .errors import ClientError, TransportError
from .http import send_request
from .models import RequestDescriptor, ResponseResult, Transport
from .normalizer import normalize

__all__ = ("HttpClient",)

log = logging.getLogger(__name__)


class HttpClient:
    """Asynchronous HTTP client with one method per HTTP verb.

    Each call either returns a ResponseResult_ for a 2xx response or raises
    a ClientError_. Calls share no mutable state so a single client may be
    used from several tasks concurrently.
    """

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 10,
        body_encoding: BodyEncoding = "form",
        transport: Optional[Transport] = None,
    ) -> HttpClient:
        """Convenience constructor.

        Parameters:
            base_url: URL that relative request URLs are resolved against
            headers: headers to send with every request
            timeout: timeout of a single request/response exchange, in
                seconds
            body_encoding: ``"form"`` or ``"json"``; how request data is
                encoded in the body of POST, PUT and PATCH requests
            transport: optional transport function to use instead of the
                default one

        Returns:
            a configured client object
        """
        config = ClientConfig(
            base_url=base_url,
            headers=headers or {},
            timeout=timeout,
            body_encoding=body_encoding,
        )
        return cls(config, transport=transport)

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """Constructor.

        Parameters:
            config: the configuration of the client
            transport: async function that sends a request descriptor and
                returns the raw response. Defaults to a plain HTTP/1.1
                transport that opens a new connection for each request.
        """
        self.config = config or ClientConfig()
        self._builder = RequestBuilder(self.config)
        self._transport = transport or partial(
            send_request, timeout=self.config.timeout
        )

    def build_request(
        self, url: str, method: Union[str, Verb] = Verb.GET, data: Any = None
    ) -> RequestDescriptor:
        """Validates the arguments of a request and returns its descriptor
        without sending it.

        Raises:
            ValidationError: if any of the arguments is invalid
        """
        return self._builder.build(url, method, data)

    async def request(
        self,
        url: str,
        method: Union[str, Verb, Mapping[str, Any]] = Verb.GET,
        data: Any = None,
    ) -> ResponseResult:
        """Sends a request and returns the normalized response.

        Parameters:
            url: the URL to send the request to
            method: the HTTP method to use. When a mapping is given here
                instead, it is used as the request data of a GET request.
            data: the data to send with the request; must be a mapping

        Returns:
            the result of the request if the server responded with a 2xx
            status code

        Raises:
            ValidationError: if the arguments are invalid; raised before any
                network activity
            TransportError: if the server could not be reached or the
                response could not be read
            RemoteError: if the server responded with any other status code
        """
        if isinstance(method, Mapping) and data is None:
            method, data = Verb.GET, method

        descriptor = self._builder.build(url, method, data)

        try:
            raw = await self._transport(descriptor)
        except ClientError:
            raise
        except Exception as ex:
            raise TransportError(
                f"{descriptor.method.value} {descriptor.url} failed: {ex}"
            ) from ex

        result = normalize(raw)
        log.debug(f"{descriptor.method.value} {descriptor.url} -> {result.status}")
        return result

    async def get(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a GET request. See `request()` for details."""
        return await self.request(url, Verb.GET, data)

    async def head(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a HEAD request. See `request()` for details."""
        return await self.request(url, Verb.HEAD, data)

    async def options(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends an OPTIONS request. See `request()` for details."""
        return await self.request(url, Verb.OPTIONS, data)

    async def trace(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a TRACE request. See `request()` for details."""
        return await self.request(url, Verb.TRACE, data)

    async def post(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a POST request. See `request()` for details."""
        return await self.request(url, Verb.POST, data)

    async def put(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a PUT request. See `request()` for details."""
        return await self.request(url, Verb.PUT, data)

    async def patch(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a PATCH request. See `request()` for details."""
        return await self.request(url, Verb.PATCH, data)

    async def delete(
        self, url: str, data: Optional[Mapping[str, Any]] = None
    ) -> ResponseResult:
        """Sends a DELETE request. See `request()` for details."""
        return await self.request(url, Verb.DELETE, data)
