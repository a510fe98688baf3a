"""Common Conway's Game of Life patterns."""

from typing import Dict, List, Tuple, Optional

from .universe import Universe


class Pattern:
    """A named set of live cells given as (row, column) offsets."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, column) offsets for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    def apply(self, universe: Universe, row: int = 0, column: int = 0) -> None:
        """Stamp this pattern onto a universe.

        Cells falling past an edge wrap to the opposite side. Cells outside
        the pattern keep their state.

        Args:
            universe: Target universe
            row: Row offset
            column: Column offset
        """
        universe.set_cells(
            ((row + dr) % universe.height, (column + dc) % universe.width) for dr, dc in self.cells
        )

    def apply_centered(self, universe: Universe) -> None:
        """Stamp this pattern onto the middle of a universe."""
        min_row, min_column, _, _ = self.get_bounding_box()
        rows, columns = self.get_size()
        self.apply(
            universe,
            (universe.height - rows) // 2 - min_row,
            (universe.width - columns) // 2 - min_column,
        )

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, columns = zip(*self.cells)
        return (min(rows), min(columns), max(rows), max(columns))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, columns)."""
        min_row, min_column, max_row, max_column = self.get_bounding_box()
        return (max_row - min_row + 1, max_column - min_column + 1)


class PatternLibrary:
    """Built-in patterns, looked up by name."""

    CATEGORIES = {
        "Still Life": ["Block", "Beehive"],
        "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
        "Spaceships": ["Glider", "Lightweight Spaceship"],
        "Methuselahs": ["R-pentomino"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life")
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator")
        )

        # One quadrant of the pulsar, mirrored across both axes
        quadrant = [(0, 2), (0, 3), (0, 4), (2, 0), (3, 0), (4, 0), (2, 5), (3, 5), (4, 5), (5, 2), (5, 3), (5, 4)]
        pulsar = sorted({(r, c) for qr, qc in quadrant for r in (qr, 12 - qr) for c in (qc, 12 - qc)})
        self.add_pattern(Pattern("Pulsar", pulsar, "Period-3 oscillator"))

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4")
        )
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (0, 3), (1, 4), (2, 0), (2, 4), (3, 1), (3, 2), (3, 3), (3, 4)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Patterns added after construction are listed under "Custom".
        """
        categories = {category: list(names) for category, names in self.CATEGORIES.items()}
        builtin = {name for names in self.CATEGORIES.values() for name in names}
        custom = [name for name in self._patterns if name not in builtin]
        if custom:
            categories["Custom"] = custom
        return categories
