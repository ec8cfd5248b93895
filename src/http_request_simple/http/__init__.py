"""Very low-level HTTP/1.1 transport on top of Trio streams.

This is used in place of higher-level libraries as we need full control
over how the request is written and how the response is read.
"""

from .request import Request, send_request
from .response import Response

__all__ = ("Request", "Response", "send_request")
