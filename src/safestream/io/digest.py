"""Reader that verifies content against an expected digest at end-of-stream."""

import hmac
import io
import logging

from ..core.model import DigestAlgorithm, HashMismatchError, ReaderClosedError, ReaderState
from .base import ByteSource, read_into

logger = logging.getLogger(__name__)


class DigestVerifyingReader(io.RawIOBase):
    """Pass bytes through unchanged while hashing them.

    The running digest is finalized on the call where the wrapped source first
    reports end-of-stream. If it differs from the expected digest that call
    raises ``HashMismatchError`` instead of returning 0. Bytes handed out before
    that point are not trusted until end-of-stream has been reached cleanly.
    """

    def __init__(self, source: ByteSource, expected: bytes,
                 algorithm: DigestAlgorithm = DigestAlgorithm.SHA256):
        super().__init__()
        self._source = source
        self.expected = bytes(expected)
        self.algorithm = algorithm
        self.state = ReaderState.STREAMING
        self._digest = algorithm.new()

    @classmethod
    def sha256(cls, source: ByteSource, expected: bytes) -> "DigestVerifyingReader":
        return cls(source, expected, DigestAlgorithm.SHA256)

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
            self._digest = None
            raise

        if size:
            self._digest.update(memoryview(buffer).cast("B")[:size])
            return size

        calculated, self._digest = self._digest.digest(), None
        if not hmac.compare_digest(calculated, self.expected):
            self.state = ReaderState.DONE_ERROR
            logger.warning(
                "content digest mismatch",
                extra={
                    "algorithm": self.algorithm.value,
                    "calculated": calculated.hex(),
                    "expected": self.expected.hex(),
                },
            )
            raise HashMismatchError(calculated, self.expected)

        self.state = ReaderState.DONE_SUCCESS
        logger.debug("content digest verified (%s %s)", self.algorithm.value, calculated.hex())
        return 0

    def close(self):
        """Close the reader and the source it owns."""
        if not self.closed:
            close = getattr(self._source, "close", None)
            try:
                if close is not None:
                    close()
            finally:
                super().close()


def make_digest_verifying_reader(source: ByteSource, expected_digest: bytes,
                                 algorithm: DigestAlgorithm = DigestAlgorithm.SHA256) -> DigestVerifyingReader:
    """Wrap `source` so its content is checked against `expected_digest`."""
    return DigestVerifyingReader(source, expected_digest, algorithm)
