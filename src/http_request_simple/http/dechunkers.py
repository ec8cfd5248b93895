"""Dechunker objects that convert a chunked HTTP response body into a
normal byte stream.
"""

from abc import ABCMeta, abstractmethod
from enum import Enum

__all__ = ("Dechunker", "NullDechunker", "ResponseDechunker")


class ResponseDechunkerState(Enum):
    SIZE = "SIZE"
    EXTENSION = "EXTENSION"
    SIZE_ENDING = "SIZE_ENDING"
    BODY = "BODY"
    BODY_ENDING_CR = "BODY_ENDING_CR"
    BODY_ENDING_LF = "BODY_ENDING_LF"
    TRAILER = "TRAILER"
    TRAILER_ENDING = "TRAILER_ENDING"
    DONE = "DONE"


class Dechunker(metaclass=ABCMeta):
    """Base class for dechunkers."""

    @abstractmethod
    def feed(self, data: bytes) -> bytes:
        raise NotImplementedError

    @property
    def finished(self) -> bool:
        """Whether the dechunker has seen the end of the body. Dechunkers
        that cannot tell always return ``False``.
        """
        return False


class NullDechunker(Dechunker):
    """Null dechunker that is suitable for un-chunked HTTP responses."""

    def feed(self, data: bytes) -> bytes:
        """Returns the data fed into the dechunker without changes."""
        return data


class ResponseDechunker(Dechunker):
    """Merges the chunks of an HTTP response body that is streamed using
    chunked transfer encoding.

    Chunk extensions and trailer headers are skipped.
    """

    def __init__(self):
        """Constructor."""
        self.reset()

    @property
    def finished(self) -> bool:
        return self._state is ResponseDechunkerState.DONE

    def feed(self, data: bytes) -> bytes:
        """Feeds some bytes into the dechunker object. Returns dechunked
        data.

        Parameters:
            data: the bytes to feed into the dechunker

        Returns:
            the dechunked data

        Raises:
            ValueError: if the data violates the chunked transfer encoding
                protocol
        """
        result = bytearray()
        index, length = 0, len(data)

        while index < length:
            if self._state is ResponseDechunkerState.BODY:
                # Copy the whole run of chunk data in one step
                end = min(length, index + self._chunk_length)
                result += data[index:end]
                self._chunk_length -= end - index
                index = end
                if self._chunk_length == 0:
                    self._state = ResponseDechunkerState.BODY_ENDING_CR
            else:
                self._feed_byte(data[index])
                index += 1

        return bytes(result)

    def reset(self) -> None:
        """Resets the dechunker to its ground state."""
        self._chunk_length = 0
        self._size_digits = 0
        self._trailer_line_length = 0
        self._state = ResponseDechunkerState.SIZE

    def _feed_byte(self, byte: int) -> None:
        state = self._state

        if state is ResponseDechunkerState.SIZE:
            if byte == 13:
                if not self._size_digits:
                    raise ValueError(
                        "chunked transfer encoding protocol violation; "
                        "missing chunk size"
                    )
                self._state = ResponseDechunkerState.SIZE_ENDING
            elif byte == 59:  # ';' starts a chunk extension
                self._state = ResponseDechunkerState.EXTENSION
            else:
                try:
                    self._chunk_length = (self._chunk_length << 4) + int(chr(byte), 16)
                except ValueError:
                    raise ValueError(
                        "chunked transfer encoding protocol "
                        "violation; got char with code {0} when expecting a "
                        "hexadecimal number".format(byte)
                    ) from None
                self._size_digits += 1

        elif state is ResponseDechunkerState.EXTENSION:
            if byte == 13:
                self._state = ResponseDechunkerState.SIZE_ENDING

        elif state is ResponseDechunkerState.SIZE_ENDING:
            self._expect(byte, 10)
            self._size_digits = 0
            if self._chunk_length > 0:
                self._state = ResponseDechunkerState.BODY
            else:
                self._trailer_line_length = 0
                self._state = ResponseDechunkerState.TRAILER

        elif state is ResponseDechunkerState.BODY_ENDING_CR:
            self._expect(byte, 13)
            self._state = ResponseDechunkerState.BODY_ENDING_LF

        elif state is ResponseDechunkerState.BODY_ENDING_LF:
            self._expect(byte, 10)
            self._state = ResponseDechunkerState.SIZE

        elif state is ResponseDechunkerState.TRAILER:
            if byte == 13:
                self._state = ResponseDechunkerState.TRAILER_ENDING
            else:
                self._trailer_line_length += 1

        elif state is ResponseDechunkerState.TRAILER_ENDING:
            self._expect(byte, 10)
            if self._trailer_line_length == 0:
                self._state = ResponseDechunkerState.DONE
            else:
                self._trailer_line_length = 0
                self._state = ResponseDechunkerState.TRAILER

        # bytes after the terminating chunk are ignored in the DONE state

    @staticmethod
    def _expect(byte: int, expected: int) -> None:
        if byte != expected:
            raise ValueError(
                "chunked transfer encoding protocol violation; got char "
                "with code {0} when expecting {1}".format(byte, expected)
            )
