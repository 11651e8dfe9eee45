"""
Elastic Buffer.

This module provides ElasticBuffer, a growable store of fixed-width records
kept in a single contiguous allocation. The record width is not part of the
buffer: every record operation receives it, so the same bytes may be read
as records of different widths. Counts are rounded down when the logical
size is not a multiple of the width passed in.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from .config import ElasticBufferConfig
from .eb_types import (
    BufferState,
    BufferStats,
    ExportedBuffer,
    RecordVisitor,
)
from .errors import OutOfMemoryError, SizeOverflowError

logger = logging.getLogger(__name__)


def _check_width(record_width: int) -> None:
    if record_width <= 0:
        raise ValueError(f"Invalid record width: {record_width}")


def _check_count(record_count: int) -> None:
    if record_count < 0:
        raise ValueError(f"Invalid record count: {record_count}")


# ============================================================================
# Elastic Buffer Class
# ============================================================================

class ElasticBuffer:
    """
    Growable array of fixed-width records.

    The buffer exclusively owns its storage until ``export`` hands it to the
    caller. Failed operations leave the buffer exactly as it was, with one
    exception: ``shrink`` never fails, and if the smaller allocation is
    refused it keeps the old one and only records the new size.
    """

    def __init__(self, record_count: int = 0, record_width: int = 1,
                 config: Optional[ElasticBufferConfig] = None):
        """
        Create a buffer holding ``record_count`` uninitialized records.

        Args:
            record_count: Initial number of records
            record_width: Record width in bytes (positive)
            config: Buffer configuration

        Raises:
            OutOfMemoryError: If the initial allocation fails
            SizeOverflowError: If the initial size is too large
        """
        _check_width(record_width)

        self._config = config if config is not None else ElasticBufferConfig()
        self._allocator = self._config.allocator
        self._policy = self._config.policy
        self._size = 0
        self._capacity = 0
        self._storage: Optional[bytearray] = None
        self._state = BufferState.ACTIVE

        self.resize_to(record_count, record_width)

    # ------------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Get the logical size in bytes."""
        self._check_active()
        return self._size

    @property
    def capacity(self) -> int:
        """Get the allocated capacity in bytes."""
        self._check_active()
        return self._capacity

    @property
    def state(self) -> BufferState:
        """Get the lifecycle state."""
        return self._state

    @property
    def config(self) -> ElasticBufferConfig:
        """Get buffer configuration."""
        return self._config

    def stats(self) -> BufferStats:
        """Get a snapshot of size, capacity and state."""
        return BufferStats(size=self._size, capacity=self._capacity, state=self._state)

    def _check_active(self) -> None:
        if self._state is BufferState.EXPORTED:
            raise RuntimeError("Elastic buffer has been exported")
        if self._state is BufferState.FREED:
            raise RuntimeError("Elastic buffer has been freed")

    def _resize(self, nsize: int) -> None:
        """
        Set the logical size to ``nsize`` bytes, reallocating if the policy
        asks for it. On failure the buffer is unmodified.
        """
        nalloc = self._policy.target_capacity(self._capacity, nsize)

        if nalloc == 0:
            # Never ask the allocator for a zero-byte block
            self._allocator.release(self._storage)
            self._storage = None
            self._capacity = 0
        elif nalloc != self._capacity:
            try:
                if self._storage is None:
                    nbuf = self._allocator.allocate(nalloc)
                else:
                    nbuf = self._allocator.reallocate(self._storage, nalloc)
            except MemoryError as e:
                raise OutOfMemoryError(
                    f"Cannot resize elastic buffer from {self._capacity} to {nalloc} bytes",
                    requested=nalloc,
                ) from e
            logger.debug("Reallocated elastic buffer: %d -> %d bytes", self._capacity, nalloc)
            self._storage = nbuf
            self._capacity = nalloc

        self._size = nsize

    # ------------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------------

    def resize_to(self, record_count: int, record_width: int) -> None:
        """
        Resize to exactly ``record_count`` records of ``record_width`` bytes.

        Records past the previous size are uninitialized; records past the
        new size are discarded.

        Raises:
            SizeOverflowError: If the byte count exceeds the maximum size
            OutOfMemoryError: If the reallocation fails
        """
        self._check_active()
        _check_width(record_width)
        _check_count(record_count)

        if record_count > self._config.max_size // record_width:
            raise SizeOverflowError(
                f"{record_count} records of {record_width} bytes exceed maximum size",
            )

        self._resize(record_count * record_width)

    def append(self, data, record_count: int, record_width: int) -> None:
        """
        Append ``record_count`` records of ``record_width`` bytes read from ``data``.

        Args:
            data: Bytes-like object holding at least
                ``record_count * record_width`` bytes
            record_count: Number of records to append
            record_width: Record width in bytes

        Raises:
            SizeOverflowError: If the new size exceeds the maximum size
            OutOfMemoryError: If the reallocation fails
        """
        self._check_active()
        _check_width(record_width)
        _check_count(record_count)

        max_size = self._config.max_size
        if record_count > max_size // record_width:
            raise SizeOverflowError(
                f"{record_count} records of {record_width} bytes exceed maximum size",
            )
        nbytes = record_count * record_width
        if nbytes > max_size - self._size:
            raise SizeOverflowError(
                f"Appending {nbytes} bytes to {self._size} exceeds maximum size",
            )

        with memoryview(data) as view, view.cast("B") as source:
            if len(source) < nbytes:
                raise ValueError(
                    f"Source holds {len(source)} bytes, {nbytes} required"
                )

            pos = self._size
            self._resize(pos + nbytes)

            if nbytes > 0:
                self._storage[pos:pos + nbytes] = source[:nbytes]

    def shrink(self, record_count: int, record_width: int) -> None:
        """
        Delete the final ``record_count`` records of ``record_width`` bytes.

        If there are fewer records than that, the buffer is emptied. This
        never raises for allocation failure; the buffer may then hold more
        than four times its size until the next resize.
        """
        self._check_active()
        _check_width(record_width)
        _check_count(record_count)

        if (record_count > self._config.max_size // record_width
                or record_count * record_width > self._size):
            nsize = 0
        else:
            nsize = self._size - record_count * record_width

        try:
            self._resize(nsize)
        except OutOfMemoryError:
            logger.warning(
                "Could not shrink elastic buffer allocation; keeping %d bytes for %d in use",
                self._capacity, nsize,
            )
            self._size = nsize

    def truncate(self) -> None:
        """
        Release any spare capacity.

        Raises:
            OutOfMemoryError: If the shrinking reallocation fails; content
                and size are untouched
        """
        self._check_active()

        if self._size == 0:
            self._allocator.release(self._storage)
            self._storage = None
            self._capacity = 0
        elif self._capacity > self._size:
            try:
                nbuf = self._allocator.reallocate(self._storage, self._size)
            except MemoryError as e:
                raise OutOfMemoryError(
                    f"Cannot truncate elastic buffer to {self._size} bytes",
                    requested=self._size,
                ) from e
            self._storage = nbuf
            self._capacity = self._size

    # ------------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------------

    def record_count(self, record_width: int) -> int:
        """
        Get the number of whole records of ``record_width`` bytes.

        The count only matches what was appended if every call on this
        buffer used the same width.
        """
        self._check_active()
        _check_width(record_width)
        return self._size // record_width

    def get(self, position: int, record_width: int) -> memoryview:
        """
        Get a writable view of record ``position``.

        The view aliases the buffer's storage only until the next append,
        resize, shrink or truncate. ``position`` must be in range; this is
        asserted, not checked.
        """
        self._check_active()
        offset = position * record_width
        assert record_width > 0 and position >= 0 and offset + record_width <= self._size, \
            f"Record {position} of width {record_width} out of range"
        return memoryview(self._storage)[offset:offset + record_width]

    def records(self, record_width: int) -> Iterator[memoryview]:
        """Iterate over writable views of every record, in position order."""
        self._check_active()
        _check_width(record_width)
        return self._iter_records(record_width)

    def _iter_records(self, record_width: int) -> Iterator[memoryview]:
        count = self._size // record_width
        if count == 0:
            return
        view = memoryview(self._storage)
        for offset in range(0, count * record_width, record_width):
            yield view[offset:offset + record_width]

    def iterate(self, record_width: int, visitor: RecordVisitor) -> None:
        """
        Call ``visitor`` on every record, in position order.

        The visitor may modify record bytes but must not change the
        buffer's size.
        """
        for record in self.records(record_width):
            visitor(record)

    # ------------------------------------------------------------------------
    # Destruction and export
    # ------------------------------------------------------------------------

    def free(self) -> None:
        """Release storage. Calling it again, or after export, does nothing."""
        if self._state is not BufferState.ACTIVE:
            return

        self._allocator.release(self._storage)
        self._storage = None
        self._size = 0
        self._capacity = 0
        self._state = BufferState.FREED

    def export(self, record_width: int) -> ExportedBuffer:
        """
        Hand the storage to the caller and retire the buffer.

        Spare capacity is released first. The buffer cannot be used
        afterwards.

        Returns:
            The storage, exactly ``size`` bytes long, and its record count

        Raises:
            OutOfMemoryError: If releasing spare capacity fails; the buffer
                is left intact and usable
        """
        self._check_active()
        _check_width(record_width)

        self.truncate()

        storage = self._storage
        exported = ExportedBuffer(
            data=storage if storage is not None else bytearray(),
            record_count=self._size // record_width,
        )

        self._allocator.disown(storage)
        self._storage = None
        self._size = 0
        self._capacity = 0
        self._state = BufferState.EXPORTED

        logger.debug("Exported elastic buffer: %d bytes", len(exported.data))
        return exported

    def export_duplicate(self, record_width: int) -> ExportedBuffer:
        """
        Copy the content out, leaving the buffer intact.

        Raises:
            OutOfMemoryError: If the copy cannot be allocated
        """
        self._check_active()
        _check_width(record_width)

        if self._size == 0:
            return ExportedBuffer(data=bytearray(), record_count=0)

        try:
            data = self._allocator.allocate(self._size)
        except MemoryError as e:
            raise OutOfMemoryError(
                f"Cannot allocate {self._size} bytes for duplicate",
                requested=self._size,
            ) from e
        data[:] = memoryview(self._storage)[:self._size]
        self._allocator.disown(data)

        return ExportedBuffer(data=data, record_count=self._size // record_width)

    # ------------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------------

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.free()

    def __len__(self) -> int:
        """Get logical size in bytes."""
        return self.size

    def __bool__(self) -> bool:
        """Check if buffer holds any bytes."""
        return self.size > 0

    def __repr__(self) -> str:
        return (f"ElasticBuffer(size={self._size}, capacity={self._capacity}, "
                f"state={self._state.name})")


# ============================================================================
# Factory Functions
# ============================================================================

def create_elastic_buffer(record_count: int, record_width: int,
                          config: Optional[ElasticBufferConfig] = None) -> ElasticBuffer:
    """
    Create an elastic buffer holding ``record_count`` uninitialized records.

    Args:
        record_count: Initial number of records
        record_width: Record width in bytes (positive)
        config: Buffer configuration

    Returns:
        New buffer instance
    """
    return ElasticBuffer(record_count, record_width, config)


def free_elastic_buffer(buffer: Optional[ElasticBuffer]) -> None:
    """Free ``buffer``; ``None`` is accepted and ignored."""
    if buffer is None:
        return
    buffer.free()


@contextmanager
def elastic_buffer_context(record_count: int = 0, record_width: int = 1,
                           config: Optional[ElasticBufferConfig] = None):
    """
    Context manager for buffer lifecycle.

    Yields:
        ElasticBuffer instance, freed on exit unless it was exported
    """
    buffer = ElasticBuffer(record_count, record_width, config)
    try:
        yield buffer
    finally:
        buffer.free()


__all__ = [
    "ElasticBuffer",
    "create_elastic_buffer",
    "free_elastic_buffer",
    "elastic_buffer_context",
]
