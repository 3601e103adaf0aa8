"""Local file byte sources."""

import logging
from pathlib import Path
from typing import BinaryIO, Union

logger = logging.getLogger(__name__)


class LocalByteSource:
    """Sequential reader over a local file or binary file-like object."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self.bytes_read = 0
        self._file = None
        self._should_close_file = False

        if hasattr(source, 'read'):
            # BinaryIO object, read from its current position
            self._file = source
        else:
            # Path or str
            self._file = open(source, 'rb')
            self._should_close_file = True
            logger.debug("opened local source %s", source)

    def readinto(self, buffer) -> int:
        """Read up to ``len(buffer)`` bytes into `buffer`; 0 at end of file."""
        if self._file is None:
            raise IOError("Source is closed")

        if hasattr(self._file, 'readinto'):
            size = self._file.readinto(buffer)
        else:
            data = self._file.read(len(buffer))
            size = len(data)
            memoryview(buffer).cast("B")[:size] = data

        if size is None:
            raise IOError("File returned no data without signalling end of file")
        self.bytes_read += size
        return size

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the file if we opened it."""
        if self._should_close_file and self._file is not None:
            self._file.close()
        self._file = None


def open_local_source(source: Union[Path, str, BinaryIO]) -> LocalByteSource:
    """Create a local byte source."""
    return LocalByteSource(source)
