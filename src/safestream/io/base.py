"""Base protocols and shared constants for the I/O layer."""

from typing import Protocol, runtime_checkable


DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KB
HTTP_TIMEOUT = 30  # seconds


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for chunked, readable byte sources."""

    def readinto(self, buffer) -> int:
        """Fill `buffer` with up to ``len(buffer)`` bytes and return the count.
        A return of 0 means end-of-stream. May raise OSError at any call.
        """
        ...


def read_into(source, buffer) -> int:
    """Delegate one chunked read to `source`, writing into `buffer`.

    Sources without ``readinto`` are read with ``read(len(buffer))`` and the
    result is copied into the buffer.
    """
    if hasattr(source, "readinto"):
        size = source.readinto(buffer)
        # non-blocking raw streams return None when no data is available yet
        if size is None:
            raise IOError("Source returned no data without signalling end-of-stream")
        return size

    data = source.read(len(buffer))
    size = len(data)
    if size > len(buffer):
        raise IOError(f"Source returned {size} bytes for a {len(buffer)} byte read")
    memoryview(buffer).cast("B")[:size] = data
    return size
