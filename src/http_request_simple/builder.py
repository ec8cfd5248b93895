"""Validation of request arguments and construction of request descriptors."""

from json import dumps
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union
from urllib.parse import urljoin, urlsplit, urlunsplit

from .config import ClientConfig
from .enums import Verb
from .errors import ValidationError
from .models import RequestDescriptor
from .query import encode_form, encode_query, parse_query_string

__all__ = ("RequestBuilder",)

_CONTENT_TYPES = {
    "form": "application/x-www-form-urlencoded",
    "json": "application/json",
}

_DEFAULT_ACCEPT = "application/json, text/plain, */*"


class RequestBuilder:
    """Turns the arguments of a request into a RequestDescriptor_.

    All checks happen here, synchronously, so invalid arguments are rejected
    before any network activity.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()

    def build(
        self, url: str, method: Union[str, Verb] = Verb.GET, data: Any = None
    ) -> RequestDescriptor:
        """Builds the descriptor of a request.

        Parameters:
            url: the URL to send the request to. Relative URLs are resolved
                against the base URL of the configuration.
            method: the HTTP method of the request
            data: the data to send with the request; must be a mapping if
                given. It is serialized into the body only for verbs that
                carry a body.

        Raises:
            ValidationError: if any of the arguments is invalid
        """
        try:
            verb = Verb.from_name(method)
        except ValueError as ex:
            raise ValidationError(str(ex)) from None

        if data is not None and not isinstance(data, Mapping):
            raise ValidationError(
                f"data must be a mapping, got {type(data).__name__}"
            )

        scheme, netloc, path, query = self._split_url(url)

        headers = dict(self.config.headers)
        headers.setdefault("Accept", _DEFAULT_ACCEPT)

        body = None
        if data is not None and verb.carries_body:
            body = self._encode_body(data)
            headers["Content-type"] = _CONTENT_TYPES[self.config.body_encoding]
            headers["Content-length"] = str(len(body.encode("utf-8")))

        parsed_query = parse_query_string(query)
        full_url = urlunsplit((scheme, netloc, path, encode_query(parsed_query), ""))

        return RequestDescriptor(
            method=verb,
            url=full_url,
            path=path,
            query=MappingProxyType(parsed_query),
            headers=MappingProxyType(headers),
            body=body,
        )

    def _encode_body(self, data: Mapping[str, Any]) -> str:
        try:
            if self.config.body_encoding == "json":
                return dumps(data, separators=(",", ":"))
            else:
                return encode_form(data)
        except (TypeError, ValueError) as ex:
            raise ValidationError(f"data cannot be encoded: {ex}") from None

    def _split_url(self, url: str) -> tuple[str, str, str, str]:
        if not isinstance(url, str) or not url:
            raise ValidationError(f"URL must be a non-empty string, got {url!r}")

        parts = urlsplit(url)
        if not parts.scheme:
            if self.config.base_url is None:
                raise ValidationError(f"URL must be absolute: {url!r}")
            parts = urlsplit(urljoin(self.config.base_url, url))

        if parts.scheme not in ("http", "https"):
            raise ValidationError(f"Unsupported URL scheme: {parts.scheme!r}")

        try:
            parts.port
        except ValueError:
            raise ValidationError(f"Invalid port in URL: {url!r}") from None

        if not parts.hostname:
            raise ValidationError(f"URL has no host: {url!r}")

        return parts.scheme, parts.netloc, parts.path or "/", parts.query
