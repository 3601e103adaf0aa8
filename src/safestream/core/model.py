from __future__ import annotations
import enum
import hashlib


class DigestAlgorithm(enum.Enum):
    """Hash algorithms a digest-verifying reader can check against."""

    SHA256 = "sha256"

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.value).digest_size

    def new(self):
        return hashlib.new(self.value)


class ReaderState(enum.Enum):
    STREAMING = "streaming"
    DONE_SUCCESS = "done-success"
    DONE_ERROR = "done-error"


class SafeStreamError(IOError):
    """Base class for content that failed validation while streaming."""
    pass


class HashMismatchError(SafeStreamError):
    """Raised at end-of-stream when the content digest differs from the expected one."""

    def __init__(self, calculated: bytes, expected: bytes):
        self.calculated = bytes(calculated)
        self.expected = bytes(expected)
        super().__init__(
            f"hash mismatch: calculated {self.calculated.hex()}, expected {self.expected.hex()}"
        )

    @property
    def calculated_hex(self) -> str:
        return self.calculated.hex()

    @property
    def expected_hex(self) -> str:
        return self.expected.hex()


class SizeExceededError(SafeStreamError):
    """Raised when a stream delivers more bytes than its declared maximum."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"maximum size {size} exceeded")


class ReaderClosedError(ValueError):
    """Raised when a reader is used after it reached end-of-stream or failed."""
    pass
