"""
Buffer-specific type definitions.

Result and statistics structures returned by elastic buffers and their
allocators.
"""

from dataclasses import dataclass

from .eb_types import BufferState


# ============================================================================
# Exported Buffer
# ============================================================================

@dataclass
class ExportedBuffer:
    """Storage handed out by export, together with its record count."""
    data: bytearray
    record_count: int

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return bytes(self.data)


# ============================================================================
# Buffer Statistics
# ============================================================================

@dataclass
class BufferStats:
    """Snapshot of an elastic buffer's bookkeeping."""
    size: int = 0
    capacity: int = 0
    state: BufferState = BufferState.ACTIVE

    @property
    def spare(self) -> int:
        """Allocated bytes not holding content."""
        return self.capacity - self.size


# ============================================================================
# Allocator Statistics
# ============================================================================

@dataclass
class AllocatorStats:
    """Allocator statistics structure."""
    allocations: int = 0
    reallocations: int = 0
    releases: int = 0
    failures: int = 0
    bytes_in_use: int = 0
    peak_bytes: int = 0
