"""safestream - validating readers for untrusted byte streams."""

from .core.model import (                                             # re-export
    DigestAlgorithm, ReaderState,
    SafeStreamError, HashMismatchError, SizeExceededError, ReaderClosedError,
)
from .io import (
    ByteSource, DigestVerifyingReader, SizeBoundingReader,
    make_digest_verifying_reader, make_size_bounding_reader,
    open_source, DEFAULT_CHUNK_SIZE,
)


def fetch_max_size(source, max_size: int) -> SizeBoundingReader:
    """Open `source` (path, URL, or file-like object) and bound it to `max_size` bytes."""
    return make_size_bounding_reader(open_source(source), max_size)


def fetch_sha256(source, size: int, sha256: bytes) -> DigestVerifyingReader:
    """Open `source`, bound it to `size` bytes and verify its SHA-256 digest at end-of-stream."""
    # size is checked on every chunk, the digest only once the bounded stream ends
    bounded = make_size_bounding_reader(open_source(source), size)
    return make_digest_verifying_reader(bounded, sha256, DigestAlgorithm.SHA256)


def read_to_end(reader, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Drain `reader` until end-of-stream and return everything it delivered.

    Any validation or I/O failure propagates; the bytes collected so far are
    dropped with it and must never be treated as trusted.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    out = bytearray()
    buf = bytearray(chunk_size)
    while True:
        size = reader.readinto(buf)
        if not size:
            return bytes(out)
        out += buf[:size]


__all__ = [
    "make_digest_verifying_reader", "make_size_bounding_reader",
    "fetch_sha256", "fetch_max_size", "read_to_end", "open_source",
    "DigestVerifyingReader", "SizeBoundingReader", "ByteSource",
    "DigestAlgorithm", "ReaderState",
    "SafeStreamError", "HashMismatchError", "SizeExceededError", "ReaderClosedError",
]
