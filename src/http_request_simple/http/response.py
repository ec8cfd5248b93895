"""Simple HTTP response object for the low-level HTTP transport."""

from __future__ import annotations

from typing import Generator, Optional, TYPE_CHECKING

from .dechunkers import Dechunker, NullDechunker, ResponseDechunker

if TYPE_CHECKING:
    from trio.abc import ReceiveStream

__all__ = ("Response",)

#: Status codes whose responses never carry a body
_STATUS_CODES_WITHOUT_BODY = frozenset((204, 304))


class LineReader:
    """Helper object for Trio that takes a ReceiveStream and parses lines
    out of it.
    """

    stream: ReceiveStream
    _buffer: bytearray
    _line_generator: Generator[Optional[bytes], Optional[bytes], None]

    def __init__(self, stream: ReceiveStream, max_line_length: int = 16384):
        self.stream = stream

        self._buffer = bytearray()
        self._line_generator = self.generate_lines(max_line_length, self._buffer)

    @staticmethod
    def generate_lines(
        max_line_length: int, buffer: bytearray
    ) -> Generator[Optional[bytes], Optional[bytes], None]:
        buf = buffer
        find_start = 0
        while True:
            newline_idx = buf.find(b"\n", find_start)
            if newline_idx < 0:
                if len(buf) > max_line_length:
                    raise ValueError("line too long")
                # next time, start the search where this one left off
                find_start = len(buf)
                more_data = yield
            else:
                line = bytes(buf[: newline_idx + 1])
                # bytearray deletes from the front in place
                del buf[: newline_idx + 1]
                find_start = 0
                more_data = yield line

            if more_data is not None:
                buf += more_data

    def get_remainder(self) -> bytes:
        """Returns the bytes that were read from the stream but not consumed
        as lines yet.
        """
        self._line_generator.close()
        return bytes(self._buffer)

    async def readline(self) -> bytes:
        line = next(self._line_generator)
        while line is None:
            more_data = await self.stream.receive_some(4096)
            if not more_data:
                return b""  # EOF
            line = self._line_generator.send(more_data)
        return line


class Response:
    """Simple HTTP response object that reads from a Trio stream, parses
    the status line and the headers, and reads the body, de-chunking chunked
    responses automatically.
    """

    _dechunker: Optional[Dechunker]
    _headers: Optional[dict[str, str]]
    _remainder: bytes
    _status: Optional[int]
    _stream: ReceiveStream

    def __init__(self, stream: ReceiveStream, *, head: bool = False):
        """Constructor.

        Parameters:
            stream: the stream to read the response from
            head: whether the response belongs to a HEAD request; these
                never have a body
        """
        self._stream = stream
        self._head = head

        self._dechunker = None
        self._headers = None
        self._remainder = b""
        self._status = None

    async def _read_headers(self) -> None:
        self._headers = {}

        line_reader = LineReader(self._stream)
        readline = line_reader.readline

        line = await readline()
        if not line:
            raise ValueError("Connection closed before the response arrived")

        parts = line.strip().split(b" ", 2)
        if len(parts) < 2 or not parts[0].startswith(b"HTTP/"):
            raise ValueError("Invalid response line: {0!r}".format(line))

        try:
            self._status = int(parts[1])
        except ValueError:
            raise ValueError("Invalid status code: {0!r}".format(parts[1])) from None

        while True:
            line = await readline()
            if not line:
                raise ValueError("Connection closed while reading headers")

            line = line.strip()
            if not line:
                break

            key, sep, value = line.partition(b":")
            if not sep:
                raise ValueError("Found invalid HTTP header line: {0!r}".format(line))

            key = key.decode("ascii").strip().capitalize()
            value = value.strip().decode("latin-1")
            if key in self._headers:
                self._headers[key] = f"{self._headers[key]}, {value}"
            else:
                self._headers[key] = value

        self._remainder = line_reader.get_remainder()

    def _process_headers(self) -> None:
        if "chunked" in (self.getheader("Transfer-Encoding") or "").lower():
            self._dechunker = ResponseDechunker()
        else:
            self._dechunker = NullDechunker()

    async def aclose(self) -> None:
        """Closes the response object."""
        await self._stream.aclose()

    async def ensure_headers_processed(self) -> None:
        """Ensures that the headers of the response are processed."""
        if self._headers is None:
            await self._read_headers()
            self._process_headers()

    def getheader(self, header: str, default: Optional[str] = None) -> Optional[str]:
        """Returns the value of the given header or the given default value,
        assuming that the headers are already processed.

        Use `ensure_headers_processed()` if you want to make sure that the
        headers are already processed.
        """
        assert self._headers is not None, "Headers are not processed yet"
        return self._headers.get(header.capitalize(), default)

    @property
    def has_body(self) -> bool:
        """Whether the response may carry a body, based on the request
        method and the status code.
        """
        assert self._status is not None, "Headers are not processed yet"
        return not (
            self._head
            or self._status < 200
            or self._status in _STATUS_CODES_WITHOUT_BODY
        )

    @property
    def headers(self) -> dict[str, str]:
        """Returns a dictionary containing the response headers, with
        capitalized header names, assuming that the headers are already
        processed.
        """
        assert self._headers is not None, "Headers are not processed yet"
        return self._headers

    @property
    def status(self) -> int:
        """Returns the status code of the response."""
        assert self._status is not None, "Headers are not processed yet"
        return self._status

    async def read_body(self) -> bytes:
        """Reads the entire body of the response.

        The end of the body is determined by the ``Content-Length`` header,
        by the terminating chunk of a chunked response, or by the server
        closing the connection, in this order of preference.

        Returns:
            the de-chunked body of the response
        """
        await self.ensure_headers_processed()
        if not self.has_body:
            return b""

        assert self._dechunker is not None

        expected_length: Optional[int] = None
        if isinstance(self._dechunker, NullDechunker):
            content_length = self.getheader("Content-Length")
            if content_length is not None:
                try:
                    expected_length = int(content_length)
                except ValueError:
                    raise ValueError(
                        "Invalid Content-Length header: {0!r}".format(content_length)
                    ) from None

        result = bytearray(self._dechunker.feed(self._remainder))
        self._remainder = b""

        while not self._dechunker.finished:
            if expected_length is not None and len(result) >= expected_length:
                break

            chunk = await self._stream.receive_some(4096)
            if not chunk:
                if expected_length is not None:
                    raise ValueError(
                        "Connection closed after {0} of {1} body bytes".format(
                            len(result), expected_length
                        )
                    )
                break

            # The dechunker may return an empty chunk; that does not mean EOF
            result += self._dechunker.feed(chunk)

        if expected_length is not None:
            del result[expected_length:]

        return bytes(result)
