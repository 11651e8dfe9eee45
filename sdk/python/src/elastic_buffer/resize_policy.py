"""
Capacity policy for elastic buffers.

Growth doubles the allocation so that appends cost amortized O(1) per byte.
Shrinking only happens once usage drops below a quarter of the allocation,
and then only down to twice the usage, so a buffer oscillating around a
size does not reallocate on every call.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResizePolicy:
    """Growth and shrink factors for a buffer's backing allocation."""
    grow_factor: int = 2  # Multiply capacity by this when too small
    shrink_threshold: int = 4  # Shrink when capacity exceeds size times this
    shrink_factor: int = 2  # Shrink capacity to size times this

    def __post_init__(self):
        if self.grow_factor < 1:
            raise ValueError(f"Invalid grow factor: {self.grow_factor}")
        if not 1 <= self.shrink_factor <= self.shrink_threshold:
            raise ValueError(
                f"Invalid shrink factors: shrink_factor={self.shrink_factor}, "
                f"shrink_threshold={self.shrink_threshold}"
            )

    def target_capacity(self, capacity: int, nsize: int) -> int:
        """
        Compute the allocation size for a new logical size.

        Args:
            capacity: Current allocation size in bytes
            nsize: Requested logical size in bytes

        Returns:
            Allocation size to use; equal to ``capacity`` when no
            reallocation is needed
        """
        if capacity < nsize:
            return max(capacity * self.grow_factor, nsize)
        if capacity > nsize * self.shrink_threshold:
            return nsize * self.shrink_factor
        return capacity


DEFAULT_POLICY = ResizePolicy()
