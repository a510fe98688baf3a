"""Plain-text world format.

A world is a square grid written as rows of markers, ``#`` for a living cell
and ``.`` for a dead one, one row per line::

    .#.
    ..#
    ###

The side length is the number of markers on the first line. Characters other
than the two markers are ignored, so CRLF line endings and indentation are
accepted.
"""

from pathlib import Path
from typing import Tuple, Union
import logging

from .bitgrid import BitGrid
from .universe import Cell, Universe

logger = logging.getLogger(__name__)

# Side length used when the text has no line break at all
DEFAULT_IMPORT_SIDE = 100

MARKERS = {"#": Cell.ALIVE, ".": Cell.DEAD}


class WorldDecodeError(ValueError):
    """World text does not describe a complete square grid."""


def measure_side(text: str) -> int:
    """Side length implied by the first line of ``text``."""
    newline = text.find("\n")
    if newline == -1:
        return DEFAULT_IMPORT_SIDE
    return sum(1 for char in text[:newline] if char in MARKERS)


def decode_world(text: str) -> Tuple[int, BitGrid]:
    """Decode world text into a side length and cell storage.

    Args:
        text: World text

    Returns:
        Tuple of (side_length, cells) where cells holds side_length**2 bits

    Raises:
        WorldDecodeError: If the side length is zero or the number of markers
            is not exactly side_length**2
    """
    side = measure_side(text)
    size = side * side
    logger.debug("Width of map: %d, size: %d", side, size)

    if side == 0:
        raise WorldDecodeError("First line of world text has no cell markers")

    cells = BitGrid.with_capacity(size)
    counter = 0
    for char in text:
        state = MARKERS.get(char)
        if state is None:
            continue
        if counter >= size:
            raise WorldDecodeError(f"World text has more than {size} cells for a {side}x{side} grid")
        cells.set(counter, state is Cell.ALIVE)
        counter += 1

    if counter != size:
        raise WorldDecodeError(f"World text has {counter} cells, expected {size} for a {side}x{side} grid")

    return side, cells


def import_world(universe: Universe, text: str) -> None:
    """Replace a universe's dimensions and cells with decoded world text.

    The universe is left untouched when the text cannot be decoded.

    Raises:
        WorldDecodeError: If the text is not a complete square grid
    """
    side, cells = decode_world(text)
    universe.replace(side, side, cells)


def export_world(universe: Universe) -> str:
    """Encode a universe as world text, one newline-terminated line per row.

    Only square universes can be imported back.
    """
    return f"{universe}\n"


def load_world(universe: Universe, path: Union[str, Path]) -> None:
    """Import a world file into ``universe``.

    Raises:
        FileNotFoundError: If the file doesn't exist
        WorldDecodeError: If the file is not UTF-8 text or not a complete
            square grid
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise WorldDecodeError(f"World file {path} is not UTF-8 text: {e}") from e
    import_world(universe, text)


def save_world(universe: Universe, path: Union[str, Path]) -> None:
    """Write ``universe`` to a world file."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(export_world(universe))
