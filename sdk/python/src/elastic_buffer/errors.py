"""
Exceptions raised by elastic buffer operations.

Allocation exhaustion and size overflow are the only runtime failures.
Both carry the matching result code from ``eb_types`` so callers that
prefer status codes can use ``check_result``.
"""

from typing import Optional

from .eb_types import EB_OK, EB_ERROR_OUT_OF_MEMORY, EB_ERROR_OVERFLOW


class ElasticBufferError(Exception):
    """Base class for elastic buffer failures."""

    code = EB_ERROR_OUT_OF_MEMORY

    def __init__(self, message: str, requested: Optional[int] = None):
        super().__init__(message)
        self.requested = requested


class OutOfMemoryError(ElasticBufferError, MemoryError):
    """The allocator could not satisfy a request."""

    code = EB_ERROR_OUT_OF_MEMORY


class SizeOverflowError(OutOfMemoryError, OverflowError):
    """A record count times width, or its sum with the current size, is too large."""

    code = EB_ERROR_OVERFLOW


def check_result(result: int) -> bool:
    """Check if a result code indicates success."""
    return result == EB_OK


def error_code(exc: BaseException) -> int:
    """Map an exception raised by this package to its result code."""
    if isinstance(exc, ElasticBufferError):
        return exc.code
    if isinstance(exc, MemoryError):
        return EB_ERROR_OUT_OF_MEMORY
    raise TypeError(f"Not an elastic buffer failure: {exc!r}")
