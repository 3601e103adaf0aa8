"""Tests for the source factory and fetch helpers."""

import hashlib
import io
import tempfile
from pathlib import Path

import pytest
from pytest_httpserver import HTTPServer

from safestream import (
    HashMismatchError, SizeExceededError, DigestVerifyingReader, SizeBoundingReader,
    fetch_max_size, fetch_sha256, read_to_end,
)
from safestream.io import open_source
from safestream.io.http_sync import HTTPByteSource
from safestream.io.local import LocalByteSource


class TestOpenSource:
    """Test the main factory function."""

    def test_open_source_with_path_string(self):
        """Test factory with path string."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()

            source = open_source(f.name)
            assert isinstance(source, LocalByteSource)
            buf = bytearray(5)
            assert source.readinto(buf) == 5
            source.close()

    def test_open_source_with_path_object(self):
        """Test factory with Path object."""
        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(b"0123456789")
            f.flush()
            temp_path = Path(f.name)

        try:
            source = open_source(temp_path)
            assert isinstance(source, LocalByteSource)
            source.close()
        finally:
            temp_path.unlink()

    def test_open_source_with_binary_io(self):
        """Test factory with BinaryIO object."""
        source = open_source(io.BytesIO(b"0123456789"))
        assert isinstance(source, LocalByteSource)

    def test_open_source_with_http_url(self):
        """Test factory with HTTP URL."""
        server = HTTPServer(host="127.0.0.1", port=0)
        server.expect_request("/blob").respond_with_data(b"hello")
        server.start()
        try:
            source = open_source(f"http://127.0.0.1:{server.port}/blob")
            assert isinstance(source, HTTPByteSource)
            source.close()
        finally:
            server.stop()


class TestFetchHelpers:
    """Test composed readers over local sources."""

    def test_fetch_sha256_wraps_size_bound(self):
        """The digest check sits on top of the size bound."""
        reader = fetch_sha256(io.BytesIO(b"hello"), 5, hashlib.sha256(b"hello").digest())
        assert isinstance(reader, DigestVerifyingReader)
        assert isinstance(reader._source, SizeBoundingReader)
        assert read_to_end(reader) == b"hello"

    def test_fetch_sha256_oversized(self):
        """Oversized content fails on size even with a matching digest."""
        reader = fetch_sha256(io.BytesIO(b"hello"), 4, hashlib.sha256(b"hello").digest())
        with pytest.raises(SizeExceededError):
            read_to_end(reader, chunk_size=1)

    def test_fetch_sha256_from_path(self):
        """Verified fetch of a local file."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"hello")
            f.flush()

            reader = fetch_sha256(f.name, 5, hashlib.sha256(b"world").digest())
            with pytest.raises(HashMismatchError):
                read_to_end(reader)
            reader.close()

    def test_fetch_max_size(self):
        """Size-bounded fetch of in-memory content."""
        reader = fetch_max_size(io.BytesIO(b"hello"), 5)
        assert read_to_end(reader) == b"hello"

    def test_read_to_end_chunk_size(self):
        """Non-positive chunk sizes are rejected."""
        with pytest.raises(ValueError):
            read_to_end(fetch_max_size(io.BytesIO(b""), 0), chunk_size=0)
