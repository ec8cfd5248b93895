"""Classification of raw responses into results or errors."""

import logging

from json import loads
from typing import Any, Optional

from .errors import (
    AccessDeniedError,
    AuthenticationNeededError,
    NotFoundError,
    RedirectError,
    RemoteError,
)
from .models import RawResponse, ResponseResult

__all__ = ("normalize", "parse_body")

log = logging.getLogger(__name__)

#: Error classes for status codes that have a dedicated error class
_ERRORS_BY_STATUS: dict[int, type[RemoteError]] = {
    401: AuthenticationNeededError,
    403: AccessDeniedError,
    404: NotFoundError,
}


def _parse_content_type(value: Optional[str]) -> tuple[str, str]:
    """Splits a ``Content-Type`` header into a lowercase media type and a
    charset, defaulting to UTF-8.
    """
    if not value:
        return "", "utf-8"

    media_type, *params = value.split(";")
    charset = "utf-8"
    for param in params:
        key, _, param_value = param.strip().partition("=")
        if key.lower() == "charset" and param_value:
            charset = param_value.strip().strip('"')

    return media_type.strip().lower(), charset


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def parse_body(body: bytes, content_type: Optional[str] = None) -> Any:
    """Decodes the body of a response. Never raises.

    Parameters:
        body: the raw body
        content_type: the value of the ``Content-Type`` header

    Returns:
        ``None`` for an empty body, the decoded JSON value if the content type
        indicates JSON and the body can be decoded, or the body as text
        otherwise
    """
    if not body:
        return None

    media_type, charset = _parse_content_type(content_type)
    try:
        text = body.decode(charset, errors="replace")
    except LookupError:
        text = body.decode("utf-8", errors="replace")

    if _is_json(media_type):
        try:
            return loads(text)
        except (ValueError, RecursionError):
            log.warning(f"Response declared as {media_type} is not valid JSON")

    return text


def _error_message(status: int, data: Any) -> str:
    if isinstance(data, str) and data.strip():
        return data
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return f"Request failed with status code {status}"


def normalize(raw: RawResponse) -> ResponseResult:
    """Converts a raw response into a result object.

    Parameters:
        raw: the response read from the wire

    Returns:
        the result for 2xx responses

    Raises:
        RemoteError: for any other status code. The ``data`` attribute of the
            error holds the decoded error payload in the same shape as the
            server sent it.
    """
    data = parse_body(raw.body, raw.getheader("Content-Type"))
    status = raw.status

    if 200 <= status < 300:
        return ResponseResult(status=status, data=data, headers=dict(raw.headers))

    if 300 <= status < 400:
        error_class = RedirectError
    else:
        error_class = _ERRORS_BY_STATUS.get(status, RemoteError)

    message = _error_message(status, data)
    log.debug(f"Remote error {status}: {message}")
    raise error_class(message, status=status, data=data)
