"""Error classes for the HTTP request client.

Every failed call of the client raises a ClientError_ or one of its
subclasses. The ``status`` attribute tells whether the request ever reached
the remote server: it is ``None`` for local validation failures and
connection-level failures, and the HTTP status code otherwise.
"""

from typing import Any, Optional

__all__ = (
    "Error",
    "ClientError",
    "ValidationError",
    "TransportError",
    "RemoteError",
    "RedirectError",
    "AuthenticationNeededError",
    "AccessDeniedError",
    "NotFoundError",
)


class Error(RuntimeError):
    """Base class for all exceptions that are thrown from this package."""

    pass


class ClientError(Error):
    """Error raised by the HTTP client when a request could not be completed
    successfully.
    """

    status: Optional[int]
    """The HTTP status code sent by the remote server, or ``None`` if the
    request never reached the server.
    """

    data: Any
    """The decoded error payload sent by the remote server, in the same shape
    as the server sent it (a string, a dict or a list), or ``None``.
    """

    message: str
    """Human-readable description of the error."""

    def __init__(
        self, message: str, *, status: Optional[int] = None, data: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, status={self.status!r}, "
            f"data={self.data!r})"
        )

    @property
    def json(self) -> dict[str, Any]:
        """Returns a JSON-serializable representation of the error."""
        return {"status": self.status, "data": self.data, "message": self.message}


class ValidationError(ClientError):
    """Error raised when the arguments of a request are invalid. Raised
    before any network activity takes place.
    """

    pass


class TransportError(ClientError):
    """Error raised when the request could not be delivered to the remote
    server or the response could not be read; e.g., the connection was
    refused or timed out.
    """

    pass


class RemoteError(ClientError):
    """Error raised when the remote server responded with a status code
    outside the 2xx range.
    """

    pass


class RedirectError(RemoteError):
    """Error raised for 3xx responses; redirects are not followed."""

    pass


class AuthenticationNeededError(RemoteError):
    """Error raised for responses that indicate that authentication will be
    needed to access a resource.
    """

    pass


class AccessDeniedError(RemoteError):
    """Error raised for responses that indicate that access to a particular
    resource was denied by the server.
    """

    pass


class NotFoundError(RemoteError):
    """Error raised for responses that indicate that a remote resource is
    not found.
    """

    pass
