"""
Typed record arrays.

RecordArray fixes a ``struct`` layout over an ElasticBuffer so callers can
append and read tuples instead of raw bytes. The layout's size is the
record width passed to every buffer operation.
"""

import struct
from typing import Any, Iterable, Iterator, Optional, Tuple, Union

from .buffer import ElasticBuffer
from .config import ElasticBufferConfig
from .eb_types import ExportedBuffer


class RecordArray:
    """Array of ``struct``-packed records backed by an elastic buffer."""

    def __init__(self, fmt: Union[str, struct.Struct],
                 config: Optional[ElasticBufferConfig] = None):
        """
        Initialize an empty record array.

        Args:
            fmt: ``struct`` format string or compiled Struct
            config: Configuration for the underlying buffer
        """
        self._struct = fmt if isinstance(fmt, struct.Struct) else struct.Struct(fmt)
        if self._struct.size == 0:
            raise ValueError(f"Record format {self._struct.format!r} has zero size")
        self._buffer = ElasticBuffer(0, self._struct.size, config)

    @property
    def format(self) -> str:
        """Get the record format."""
        return self._struct.format

    @property
    def record_width(self) -> int:
        """Get the record width in bytes."""
        return self._struct.size

    @property
    def buffer(self) -> ElasticBuffer:
        """Get the underlying elastic buffer."""
        return self._buffer

    def _index(self, index: int) -> int:
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError(f"Record index out of range: {index}")
        return index

    def append(self, *values: Any) -> None:
        """Pack ``values`` into one record and append it."""
        self._buffer.append(self._struct.pack(*values), 1, self._struct.size)

    def extend(self, rows: Iterable[Tuple[Any, ...]]) -> None:
        """Append every row of ``rows`` with a single buffer append."""
        packed = b"".join(self._struct.pack(*row) for row in rows)
        count = len(packed) // self._struct.size
        self._buffer.append(packed, count, self._struct.size)

    def pop(self) -> Tuple[Any, ...]:
        """Remove and return the last record."""
        value = self[-1]
        self._buffer.shrink(1, self._struct.size)
        return value

    def clear(self) -> None:
        """Remove every record."""
        self._buffer.resize_to(0, self._struct.size)

    def export(self) -> ExportedBuffer:
        """Hand the packed records to the caller; the array is retired."""
        return self._buffer.export(self._struct.size)

    def to_list(self):
        """Unpack every record into a list of tuples."""
        return list(self)

    def free(self) -> None:
        """Release the underlying buffer."""
        self._buffer.free()

    def __len__(self) -> int:
        return self._buffer.record_count(self._struct.size)

    def __getitem__(self, index: int) -> Tuple[Any, ...]:
        index = self._index(index)
        return self._struct.unpack(self._buffer.get(index, self._struct.size))

    def __setitem__(self, index: int, values: Tuple[Any, ...]) -> None:
        index = self._index(index)
        self._struct.pack_into(self._buffer.get(index, self._struct.size), 0, *values)

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        for record in self._buffer.records(self._struct.size):
            yield self._struct.unpack(record)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.free()

    def __repr__(self) -> str:
        return f"RecordArray(format={self.format!r}, records={len(self)})"
