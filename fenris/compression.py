"""zlib-based compression and decompression of byte strings."""

from __future__ import annotations

import zlib
from enum import Enum

__all__ = [
    "CompressionResult",
    "CompressionError",
    "compression_result_to_string",
    "compress",
    "decompress",
]


class CompressionResult(Enum):
    """Outcome of a compression or decompression operation."""

    SUCCESS = 0
    INVALID_LEVEL = 1
    COMPRESSION_FAILED = 2
    DECOMPRESSION_FAILED = 3
    BUFFER_TOO_SMALL = 4
    INVALID_DATA = 5


_DESCRIPTIONS = {
    CompressionResult.SUCCESS: "success",
    CompressionResult.INVALID_LEVEL: "invalid compression level",
    CompressionResult.COMPRESSION_FAILED: "compression operation failed",
    CompressionResult.DECOMPRESSION_FAILED: "decompression operation failed",
    CompressionResult.BUFFER_TOO_SMALL: "buffer too small for operation",
    CompressionResult.INVALID_DATA: "invalid compressed data",
}


def compression_result_to_string(result: CompressionResult) -> str:
    """Return a human-readable description of a compression result."""
    return _DESCRIPTIONS.get(result, "unrecognized compression result")


class CompressionError(Exception):
    """Raised when compression or decompression fails."""

    def __init__(self, result: CompressionResult) -> None:
        super().__init__(compression_result_to_string(result))
        self.result = result


def compress(data: bytes, level: int) -> bytes:
    """Compress ``data`` into a zlib stream at ``level`` (0 to 9)."""
    if not 0 <= level <= 9:
        raise CompressionError(CompressionResult.INVALID_LEVEL)
    try:
        return zlib.compress(bytes(data), level)
    except zlib.error as exc:
        raise CompressionError(CompressionResult.COMPRESSION_FAILED) from exc


def decompress(data: bytes, original_size: int) -> bytes:
    """Decompress a zlib stream whose output must fit in ``original_size`` bytes.

    Raises CompressionError with BUFFER_TOO_SMALL when the stream expands to
    more than ``original_size`` bytes and INVALID_DATA when it is corrupt or
    truncated.
    """
    if original_size < 0:
        raise ValueError("original_size must not be negative")

    decompressor = zlib.decompressobj()
    try:
        if original_size:
            output = decompressor.decompress(bytes(data), original_size)
            pending = decompressor.unconsumed_tail
        else:
            output = b""
            pending = bytes(data)

        if not decompressor.eof:
            # Anything more than the stream trailer means the output overflows.
            overflow = decompressor.decompress(pending, 1)
            if overflow:
                raise CompressionError(CompressionResult.BUFFER_TOO_SMALL)
    except zlib.error as exc:
        raise CompressionError(CompressionResult.INVALID_DATA) from exc

    if not decompressor.eof:
        raise CompressionError(CompressionResult.INVALID_DATA)
    return output