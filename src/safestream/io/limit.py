"""Reader that enforces a maximum content length."""

import io
import logging

from ..core.model import ReaderClosedError, ReaderState, SizeExceededError
from .base import ByteSource, read_into

logger = logging.getLogger(__name__)


class SizeBoundingReader(io.RawIOBase):
    """Pass bytes through until more than `max_size` bytes have been read.

    The limit is inclusive. The call that pushes the running total past it
    raises ``SizeExceededError`` and its bytes are discarded, never returned.
    """

    def __init__(self, source: ByteSource, max_size: int):
        super().__init__()
        # close() needs _source even when construction fails
        self._source = source
        if max_size < 0:
            raise ValueError("max_size cannot be negative")
        self.max_size = max_size
        self.bytes_read = 0
        self.state = ReaderState.STREAMING

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ReaderClosedError("I/O operation on closed reader")
        if self.state is not ReaderState.STREAMING:
            raise ReaderClosedError(f"Read called after end of stream ({self.state.value})")
        # an empty request is not end-of-stream
        if memoryview(buffer).nbytes == 0:
            return 0

        try:
            size = read_into(self._source, buffer)
        except (OSError, ReaderClosedError):
            self.state = ReaderState.DONE_ERROR
            raise

        self.bytes_read += size
        if self.bytes_read > self.max_size:
            self.state = ReaderState.DONE_ERROR
            memoryview(buffer).cast("B")[:size] = bytes(size)
            logger.warning(
                "content exceeded maximum size",
                extra={"limit_bytes": self.max_size, "received_bytes": self.bytes_read},
            )
            raise SizeExceededError(self.max_size)

        if size == 0:
            self.state = ReaderState.DONE_SUCCESS
            logger.debug("content within size limit (%d of %d bytes)", self.bytes_read, self.max_size)
        return size

    def close(self):
        """Close the reader and the source it owns."""
        if not self.closed:
            close = getattr(self._source, "close", None)
            try:
                if close is not None:
                    close()
            finally:
                super().close()


def make_size_bounding_reader(source: ByteSource, max_size: int) -> SizeBoundingReader:
    """Wrap `source` so reading more than `max_size` bytes fails."""
    return SizeBoundingReader(source, max_size)
