"""
ElasticBuffer type definitions.

This module provides the enums, constants and structures shared by the
buffer, allocator and configuration modules.
"""

from .eb_types import (
    SIZE_MAX,
    BufferState,
    EB_OK,
    EB_ERROR_OUT_OF_MEMORY,
    EB_ERROR_OVERFLOW,
    RecordVisitor,
)

from .buffer_types import (
    ExportedBuffer,
    BufferStats,
    AllocatorStats,
)

__all__ = [
    "SIZE_MAX",
    "BufferState",
    "EB_OK",
    "EB_ERROR_OUT_OF_MEMORY",
    "EB_ERROR_OVERFLOW",
    "RecordVisitor",
    "ExportedBuffer",
    "BufferStats",
    "AllocatorStats",
]
