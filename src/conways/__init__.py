"""Conway's Game of Life on a toroidal bit-packed universe."""

__version__ = "0.1.0"

from .core.bitgrid import BitGrid
from .core.universe import Cell, Universe
from .core.world import WorldDecodeError, import_world, export_world
from .core.patterns import Pattern, PatternLibrary
from .core.simulation import Simulation

__all__ = [
    "BitGrid",
    "Cell",
    "Universe",
    "WorldDecodeError",
    "import_world",
    "export_world",
    "Pattern",
    "PatternLibrary",
    "Simulation",
]
