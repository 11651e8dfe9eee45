"""
ElasticBuffer SDK - Python

A growable buffer of fixed-width records held in one contiguous allocation.
The allocation doubles when it runs out of room and halves towards twice the
content once the content falls under a quarter of it.

Components:
- ElasticBuffer: append, resize, shrink, truncate, positional access,
  iteration, export and duplicate
- ResizePolicy: when and how far to grow or shrink the allocation
- Allocators: heap and memory-limited backing allocators
- RecordArray: struct-typed records on top of an ElasticBuffer
"""

from .eb_types import (
    SIZE_MAX,
    BufferState,
    EB_OK,
    EB_ERROR_OUT_OF_MEMORY,
    EB_ERROR_OVERFLOW,
    ExportedBuffer,
    BufferStats,
    AllocatorStats,
)

from .errors import (
    ElasticBufferError,
    OutOfMemoryError,
    SizeOverflowError,
    check_result,
    error_code,
)

from .allocator import (
    Allocator,
    HeapAllocator,
    BoundedAllocator,
    default_allocator,
)

from .resize_policy import (
    ResizePolicy,
    DEFAULT_POLICY,
)

from .config import (
    ElasticBufferConfig,
    config_from_env,
)

from .buffer import (
    ElasticBuffer,
    create_elastic_buffer,
    free_elastic_buffer,
    elastic_buffer_context,
)

from .record_array import RecordArray

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "ElasticBuffer",
    "RecordArray",

    # Buffer lifecycle
    "create_elastic_buffer",
    "free_elastic_buffer",
    "elastic_buffer_context",

    # Resize policy
    "ResizePolicy",
    "DEFAULT_POLICY",

    # Allocators
    "Allocator",
    "HeapAllocator",
    "BoundedAllocator",
    "default_allocator",

    # Configuration
    "ElasticBufferConfig",
    "config_from_env",

    # Errors
    "ElasticBufferError",
    "OutOfMemoryError",
    "SizeOverflowError",
    "check_result",
    "error_code",

    # Types
    "SIZE_MAX",
    "BufferState",
    "EB_OK",
    "EB_ERROR_OUT_OF_MEMORY",
    "EB_ERROR_OVERFLOW",
    "ExportedBuffer",
    "BufferStats",
    "AllocatorStats",
]
