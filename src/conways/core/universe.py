"""Toroidal universe for Conway's Game of Life."""

from enum import IntEnum
from typing import Iterable, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .bitgrid import BitGrid
from .timer import Timer

DEFAULT_SIZE = 64
DEBUG = False

# Moore neighborhood, centre excluded
_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)


class Cell(IntEnum):
    """State of a single cell."""

    DEAD = 0
    ALIVE = 1


class Universe:
    """A width x height grid of cells whose edges wrap around.

    Cells are stored row-major in a :class:`BitGrid`, so the cell at
    ``(row, col)`` lives at linear index ``row * width + col``. The length of
    the cell storage always equals ``width * height``; changing either
    dimension clears every cell.

    Rules (B3/S23):
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead
    """

    def __init__(self, width: int = DEFAULT_SIZE, height: int = DEFAULT_SIZE, debug: Optional[bool] = None) -> None:
        """Create a universe seeded with the default pattern.

        Cell ``i`` starts alive when ``i`` is even or divisible by 7.

        Args:
            width: Number of columns
            height: Number of rows
            debug: Time every tick and log the span (defaults to the module DEBUG flag)

        Raises:
            ValueError: If either dimension is not positive
        """
        _check_dimension("width", width)
        _check_dimension("height", height)
        self._width = width
        self._height = height
        self.debug = DEBUG if debug is None else debug

        index = np.arange(width * height)
        self._cells = BitGrid.from_array((index % 2 == 0) | (index % 7 == 0))

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def cells(self) -> BitGrid:
        """The committed cell storage."""
        return self._cells

    @property
    def population(self) -> int:
        """Number of living cells."""
        return self._cells.count_ones()

    def cell_buffer(self) -> np.ndarray:
        """Read-only view of the packed cell bytes, for renderers."""
        return self._cells.as_raw_view()

    def clear(self) -> None:
        """Set every cell dead at the current dimensions."""
        self._cells = BitGrid.with_capacity(self._width * self._height)

    def randomize(self, rng: Optional[np.random.Generator] = None) -> None:
        """Clear, then make each cell alive with probability 0.5.

        Args:
            rng: Uniform random source (defaults to a fresh numpy Generator)
        """
        if rng is None:
            rng = np.random.default_rng()
        self.clear()
        self._cells = BitGrid.from_array(rng.random(self._width * self._height) >= 0.5)

    def set_width(self, width: int) -> None:
        """Set the number of columns and clear every cell."""
        _check_dimension("width", width)
        self._width = width
        self.clear()

    def set_height(self, height: int) -> None:
        """Set the number of rows and clear every cell."""
        _check_dimension("height", height)
        self._height = height
        self.clear()

    def replace(self, width: int, height: int, cells: BitGrid) -> None:
        """Swap in new dimensions and cell storage in one step.

        Raises:
            ValueError: If the storage length does not equal width * height
        """
        _check_dimension("width", width)
        _check_dimension("height", height)
        if len(cells) != width * height:
            raise ValueError(f"Cell storage of length {len(cells)} does not fit a {width}x{height} universe")
        self._width = width
        self._height = height
        self._cells = cells

    def get_index(self, row: int, column: int) -> int:
        """Linear index of ``(row, column)``; no wraparound is applied."""
        return row * self._width + column

    def _checked_index(self, row: int, column: int) -> int:
        if not (0 <= row < self._height and 0 <= column < self._width):
            raise IndexError(f"Cell ({row}, {column}) out of bounds for {self._width}x{self._height} universe")
        return self.get_index(row, column)

    def get_cell(self, row: int, column: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If the coordinates are outside the universe
        """
        return self._cells.get(self._checked_index(row, column))

    def set_cell(self, row: int, column: int, alive: bool) -> None:
        """Set the state of a cell.

        Raises:
            IndexError: If the coordinates are outside the universe
        """
        self._cells.set(self._checked_index(row, column), alive)

    def toggle_cell(self, row: int, column: int) -> bool:
        """Flip the state of a cell.

        Returns:
            New state of the cell
        """
        idx = self._checked_index(row, column)
        new_state = not self._cells.get(idx)
        self._cells.set(idx, new_state)
        return new_state

    def set_cells(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Make every listed ``(row, column)`` alive; other cells keep their state."""
        for row, column in cells:
            self.set_cell(row, column, True)

    def live_neighbor_count(self, row: int, column: int) -> int:
        """Count living cells in the Moore neighborhood, wrapping at the edges.

        Returns:
            Number of living neighbors (0-8)
        """
        self._checked_index(row, column)

        north = self._height - 1 if row == 0 else row - 1
        south = 0 if row == self._height - 1 else row + 1
        west = self._width - 1 if column == 0 else column - 1
        east = 0 if column == self._width - 1 else column + 1

        count = 0
        for r, c in (
            (north, west),
            (north, column),
            (north, east),
            (row, west),
            (row, east),
            (south, west),
            (south, column),
            (south, east),
        ):
            count += self._cells.get(self.get_index(r, c))
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for every cell with a circular-padded convolution.

        Returns:
            (height, width) int8 array of neighbor counts
        """
        alive = self._cells.to_array().reshape(self._height, self._width)
        tensor = torch.from_numpy(alive.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        padded = F.pad(tensor, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)
        return neighbors[0, 0].numpy().astype(np.int8)

    def tick(self) -> None:
        """Advance the universe by one generation."""
        if self.debug:
            with Timer("Universe::tick"):
                self._tick()
        else:
            self._tick()

    def _tick(self) -> None:
        # Counts come from the committed grid; the next generation is built
        # separately and swapped in once every cell has been evaluated.
        neighbor_counts = self.count_all_neighbors().ravel()
        alive = self._cells.to_array()

        survive = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))
        birth = ~alive & (neighbor_counts == 3)

        self._cells = BitGrid.from_array(survive | birth)

    def import_world(self, text: str) -> None:
        """Replace dimensions and cells from ``#``/``.`` world text."""
        from .world import import_world

        import_world(self, text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Universe):
            return False
        return self.shape == other.shape and self._cells == other._cells

    def __str__(self) -> str:
        """Rows of '#' for living cells and '.' for dead ones."""
        alive = self._cells.to_array().reshape(self._height, self._width)
        return "\n".join("".join("#" if cell else "." for cell in row) for row in alive)


def _check_dimension(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"Universe {name} must be positive, got {value}")
