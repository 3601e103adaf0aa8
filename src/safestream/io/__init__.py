"""I/O layer for safestream - byte sources and validating readers."""

# Re-export these for import convenience
from .base import ByteSource, DEFAULT_CHUNK_SIZE, HTTP_TIMEOUT, read_into
from .digest import DigestVerifyingReader, make_digest_verifying_reader
from .limit import SizeBoundingReader, make_size_bounding_reader
from .local import open_local_source
from .http_sync import open_http_source


def open_source(source):
    """Factory function to create an appropriate byte source based on source type."""
    if hasattr(source, 'read'):  # BinaryIO
        return open_local_source(source)

    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        return open_http_source(source_str)
    else:
        return open_local_source(source)
