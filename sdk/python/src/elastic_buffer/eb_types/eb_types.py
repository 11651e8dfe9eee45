"""
Core ElasticBuffer types and enums.

This module defines the fundamental types, enums and result codes used
throughout the ElasticBuffer SDK.
"""

from enum import IntEnum
from typing import Callable
from ctypes import c_size_t, sizeof


# ============================================================================
# Size Limits
# ============================================================================

# Largest byte count representable by the platform's size_t
SIZE_MAX = (1 << (8 * sizeof(c_size_t))) - 1


# ============================================================================
# Buffer State
# ============================================================================

class BufferState(IntEnum):
    """Lifecycle state of an elastic buffer."""
    ACTIVE = 0  # Owns its storage and accepts operations
    EXPORTED = 1  # Storage handed to the caller
    FREED = 2  # Storage released


# ============================================================================
# Result Codes
# ============================================================================

EB_OK = 0
EB_ERROR_OUT_OF_MEMORY = -1
EB_ERROR_OVERFLOW = -2


# ============================================================================
# Callback Types
# ============================================================================

# Called once per record with a writable view of its bytes
RecordVisitor = Callable[[memoryview], None]
