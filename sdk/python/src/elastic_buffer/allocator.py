"""
Backing allocators for elastic buffers.

An allocator hands out ``bytearray`` blocks of an exact size and accounts
for the bytes it has outstanding. Every failure is reported as
``MemoryError`` and leaves the block passed in untouched, so callers can
keep using the old block when a reallocation is refused.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .eb_types import AllocatorStats

logger = logging.getLogger(__name__)


# ============================================================================
# Allocator Interface
# ============================================================================

class Allocator(ABC):
    """Abstract base class for backing allocators."""

    @abstractmethod
    def allocate(self, size: int) -> bytearray:
        """
        Allocate a new block.

        Args:
            size: Block size in bytes (positive)

        Returns:
            Zero-filled block of exactly ``size`` bytes

        Raises:
            MemoryError: If the request cannot be satisfied
        """

    @abstractmethod
    def reallocate(self, storage: bytearray, size: int) -> bytearray:
        """
        Resize a block, preserving ``min(len(storage), size)`` leading bytes.

        Args:
            storage: Block previously returned by this allocator
            size: New block size in bytes (positive)

        Returns:
            Block of exactly ``size`` bytes

        Raises:
            MemoryError: If the request cannot be satisfied; ``storage`` is
                still valid and unchanged
        """

    @abstractmethod
    def release(self, storage: Optional[bytearray]) -> None:
        """Release a block. Releasing ``None`` is a no-op."""

    @abstractmethod
    def disown(self, storage: Optional[bytearray]) -> None:
        """Stop accounting for a block whose ownership moved to a caller."""

    @abstractmethod
    def stats(self) -> AllocatorStats:
        """Get allocator statistics."""


# ============================================================================
# Heap Allocator
# ============================================================================

class HeapAllocator(Allocator):
    """
    Allocator backed by the Python heap.

    Reallocation builds the new block before dropping the old one, which
    costs a copy but means a refused request never disturbs the caller's
    data.
    """

    def __init__(self):
        self._stats = AllocatorStats()

    def _new_block(self, size: int) -> bytearray:
        try:
            return bytearray(size)
        except (MemoryError, OverflowError) as e:
            self._stats.failures += 1
            raise MemoryError(f"Cannot allocate {size} bytes") from e

    def _account(self, delta: int) -> None:
        self._stats.bytes_in_use += delta
        if self._stats.bytes_in_use > self._stats.peak_bytes:
            self._stats.peak_bytes = self._stats.bytes_in_use

    def allocate(self, size: int) -> bytearray:
        block = self._new_block(size)
        self._stats.allocations += 1
        self._account(size)
        return block

    def reallocate(self, storage: bytearray, size: int) -> bytearray:
        old_size = len(storage)
        block = self._new_block(size)
        keep = min(old_size, size)
        block[:keep] = memoryview(storage)[:keep]
        self._stats.reallocations += 1
        self._account(size - old_size)
        return block

    def release(self, storage: Optional[bytearray]) -> None:
        if storage is None:
            return
        self._stats.releases += 1
        self._account(-len(storage))

    def disown(self, storage: Optional[bytearray]) -> None:
        if storage is None:
            return
        self._account(-len(storage))

    def stats(self) -> AllocatorStats:
        return AllocatorStats(**vars(self._stats))


# ============================================================================
# Bounded Allocator
# ============================================================================

class BoundedAllocator(HeapAllocator):
    """Heap allocator that refuses to hold more than ``limit`` bytes at once."""

    def __init__(self, limit: int):
        if limit < 0:
            raise ValueError(f"Invalid memory limit: {limit}")
        super().__init__()
        self._limit = limit

    @property
    def limit(self) -> int:
        """Get the memory limit in bytes."""
        return self._limit

    def _check(self, delta: int) -> None:
        if self._stats.bytes_in_use + delta > self._limit:
            self._stats.failures += 1
            logger.warning(
                "Allocation of %d more bytes refused (%d of %d in use)",
                delta, self._stats.bytes_in_use, self._limit,
            )
            raise MemoryError(
                f"Memory limit exceeded: {self._stats.bytes_in_use} + {delta} > {self._limit}"
            )

    def allocate(self, size: int) -> bytearray:
        self._check(size)
        return super().allocate(size)

    def reallocate(self, storage: bytearray, size: int) -> bytearray:
        # Old and new blocks coexist while the copy runs
        self._check(size)
        return super().reallocate(storage, size)


def default_allocator() -> Allocator:
    """Create the allocator used when no configuration supplies one."""
    return HeapAllocator()
