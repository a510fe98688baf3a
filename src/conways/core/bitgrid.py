"""Fixed-capacity packed bit storage for cell states."""

from typing import Iterable
import numpy as np


class BitGrid:
    """A fixed-size sequence of bits addressed by a linear index.

    Bits are packed eight to a byte: bit ``i`` lives in byte ``i // 8`` under
    the mask ``1 << (i % 8)``. Renderers reading :meth:`as_raw_view` rely on
    this layout.
    """

    def __init__(self, size: int) -> None:
        """Create a grid of ``size`` cells, all dead.

        Args:
            size: Number of cells

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"BitGrid size must be non-negative, got {size}")
        self._size = size
        self._bits = np.zeros((size + 7) // 8, dtype=np.uint8)

    @classmethod
    def with_capacity(cls, size: int) -> "BitGrid":
        """Create a grid of ``size`` cells, all dead."""
        return cls(size)

    @classmethod
    def from_array(cls, values: Iterable[bool]) -> "BitGrid":
        """Create a grid from a flat sequence of booleans.

        Args:
            values: Cell states in linear index order

        Returns:
            New BitGrid with one bit per value
        """
        flat = np.asarray(values, dtype=bool).ravel()
        grid = cls(flat.size)
        grid._bits[:] = np.packbits(flat, bitorder="little")
        return grid

    def __len__(self) -> int:
        """Number of bits in the grid."""
        return self._size

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"Bit index {index} out of range for BitGrid of length {self._size}")

    def get(self, index: int) -> bool:
        """Get the bit at ``index``.

        Raises:
            IndexError: If index is outside the grid
        """
        self._check(index)
        return bool((self._bits[index >> 3] >> (index & 7)) & 1)

    def set(self, index: int, value: bool) -> None:
        """Set the bit at ``index``.

        Raises:
            IndexError: If index is outside the grid
        """
        self._check(index)
        mask = np.uint8(1 << (index & 7))
        if value:
            self._bits[index >> 3] |= mask
        else:
            self._bits[index >> 3] &= ~mask

    def __getitem__(self, index: int) -> bool:
        """Same as :meth:`get`."""
        return self.get(index)

    def __setitem__(self, index: int, value: bool) -> None:
        """Same as :meth:`set`."""
        self.set(index, value)

    def clone(self) -> "BitGrid":
        """Return an independent copy with identical contents."""
        other = BitGrid(self._size)
        other._bits[:] = self._bits
        return other

    def as_raw_view(self) -> np.ndarray:
        """Read-only view of the packed bytes."""
        view = self._bits.view()
        view.flags.writeable = False
        return view

    def to_array(self) -> np.ndarray:
        """Unpack into a flat boolean array of length ``len(self)``."""
        return np.unpackbits(self._bits, count=self._size, bitorder="little").astype(bool)

    def count_ones(self) -> int:
        """Number of set bits."""
        return int(self.to_array().sum())

    def __eq__(self, other: object) -> bool:
        """Grids are equal when they have the same length and bits."""
        if not isinstance(other, BitGrid):
            return False
        return self._size == other._size and np.array_equal(self._bits, other._bits)

    def __repr__(self) -> str:
        return f"BitGrid(size={self._size}, ones={self.count_ones()})"
