"""
Append-only output sink with a fixed-size buffer.
"""

import logging
from typing import BinaryIO

from .errors import SinkWriteError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 64 * 1024


class SinkWriter:
    """
    Streams byte chunks to a binary stream in the order they are written.

    Chunks are collected in a bytearray of at most ``buffer_size`` bytes and
    handed to the stream whenever it fills, so memory use does not grow with
    the amount of data written. Any OSError from the stream (broken pipe,
    disk full, ...) is raised as SinkWriteError and ends the writer; bytes
    already handed over are not rolled back.

    Example:
        >>> with SinkWriter(sys.stdout.buffer) as sink:
        ...     sink.write(b"\\x00\\x00\\x80\\x3f")
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self.stream = stream
        self.buffer_size = buffer_size
        self.bytes_written = 0
        self._buffer = bytearray()
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    def write(self, chunk: bytes) -> None:
        """Append *chunk*, flushing the buffer to the stream when it is full."""
        if self._failed:
            raise SinkWriteError("Sink has already failed; no further writes accepted")
        self._buffer += chunk
        if len(self._buffer) >= self.buffer_size:
            self._drain()

    def flush(self) -> None:
        """Hand all buffered bytes to the stream and flush it."""
        if self._failed:
            raise SinkWriteError("Sink has already failed; no further writes accepted")
        self._drain()
        try:
            self.stream.flush()
        except OSError as exc:
            self._fail(exc)

    def _drain(self) -> None:
        if not self._buffer:
            return
        view = memoryview(bytes(self._buffer))
        self._buffer.clear()
        # Raw streams may accept only part of a chunk per call.
        while view:
            try:
                written = self.stream.write(view)
            except OSError as exc:
                self._fail(exc)
            if written is None:
                written = len(view)
            if written <= 0:
                self._fail(OSError(f"stream accepted no bytes of {len(view)}"))
            self.bytes_written += written
            view = view[written:]

    def _fail(self, exc: OSError) -> None:
        self._failed = True
        self._buffer.clear()
        logger.debug(f"Output sink failed after {self.bytes_written} bytes: {exc}")
        raise SinkWriteError(f"Unable to write to output sink: {exc}") from exc

    def __enter__(self) -> "SinkWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.flush()
