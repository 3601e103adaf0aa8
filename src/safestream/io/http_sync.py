"""Streaming HTTP byte source using requests."""

import logging
from typing import Optional

import requests
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from .base import HTTP_TIMEOUT


logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPByteSource:
    """Sequential reader over the body of an HTTP GET response."""

    def __init__(self, url: str, timeout: float = HTTP_TIMEOUT):
        self.url = url
        self.bytes_read = 0
        self.content_length: Optional[int] = None
        self._session = _get_session()
        self._response = None

        # Issue the request immediately so status errors surface on open
        self._perform_get(timeout)

    def _perform_get(self, timeout: float):
        """Start a streaming GET request."""
        try:
            response = self._session.get(self.url, stream=True, timeout=timeout)
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            response.close()
            raise IOError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get('content-length')
        if content_length_header:
            self.content_length = int(content_length_header)

        # transparently undo gzip/deflate transfer encodings
        response.raw.decode_content = True
        self._response = response
        logger.debug("opened HTTP source %s (content-length %s)", self.url, self.content_length)

    def readinto(self, buffer) -> int:
        """Read up to ``len(buffer)`` body bytes into `buffer`; 0 at end of body."""
        if self._response is None:
            raise IOError("Source is closed")

        try:
            # urllib3 2 buffers decoded output, so b"" only at end of body
            data = self._response.raw.read(len(buffer))
        except (Urllib3HTTPError, requests.RequestException) as e:
            raise IOError(f"Reading response body failed: {e}")

        size = len(data)
        memoryview(buffer).cast("B")[:size] = data
        self.bytes_read += size
        return size

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release the response; the session is shared and stays open."""
        if self._response is not None:
            self._response.close()
            self._response = None


def open_http_source(url: str, timeout: float = HTTP_TIMEOUT) -> HTTPByteSource:
    """Create a streaming HTTP byte source."""
    return HTTPByteSource(url, timeout)
