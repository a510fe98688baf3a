"""Core universe logic."""

from .bitgrid import BitGrid
from .universe import Cell, Universe
from .world import WorldDecodeError, decode_world, import_world, export_world, load_world, save_world
from .patterns import Pattern, PatternLibrary
from .simulation import FrameStats, Simulation
from .timer import Timer

__all__ = [
    "BitGrid",
    "Cell",
    "Universe",
    "WorldDecodeError",
    "decode_world",
    "import_world",
    "export_world",
    "load_world",
    "save_world",
    "Pattern",
    "PatternLibrary",
    "FrameStats",
    "Simulation",
    "Timer",
]
