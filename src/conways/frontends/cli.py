"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
import numpy as np
from typing import List, Optional

from ..core.universe import DEFAULT_SIZE, Universe
from ..core.simulation import Simulation
from ..core.patterns import PatternLibrary
from ..core.world import load_world, save_world


def greet(name: str) -> str:
    """Build the greeting shown by the ``--greet`` flag and the GUI."""
    return f"Hello, {name}!"


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_universe(
        self,
        width: int,
        height: int,
        world: Optional[str] = None,
        pattern: Optional[str] = None,
        random_fill: bool = False,
        seed: Optional[int] = None,
        debug: bool = False,
        verbose: bool = False,
    ) -> Universe:
        """Create the starting universe.

        A world file wins over a pattern, and a pattern wins over random fill.
        With none of them the default seed pattern is used.

        Args:
            width: Universe width
            height: Universe height
            world: Path to a world text file
            pattern: Name of a built-in pattern to place at the centre
            random_fill: Fill cells at random
            seed: Seed for the random fill
            debug: Time every tick
            verbose: Print setup details

        Returns:
            The initialized universe

        Raises:
            ValueError: If the pattern is unknown or the world file is malformed
        """
        universe = Universe(width, height, debug=debug)

        if world:
            load_world(universe, world)
            if verbose:
                print(f"Loaded world '{world}' ({universe.width}x{universe.height})")
        elif pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            universe.clear()
            loaded_pattern.apply_centered(universe)
            if verbose:
                print(f"Placed pattern '{pattern}' at the centre of a {width}x{height} universe")
        elif random_fill:
            universe.randomize(np.random.default_rng(seed))
            if verbose:
                print(f"Randomized {width}x{height} universe (seed: {seed})")
        elif verbose:
            print(f"Default {width}x{height} universe")

        return universe

    def run_simulation(
        self,
        universe: Universe,
        ticks: int,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> dict:
        """Advance a universe and collect statistics.

        Args:
            universe: Universe to run
            ticks: Number of generations
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Statistics dictionary
        """
        simulation = Simulation(universe)
        initial_population = simulation.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(universe))

        start_time = time.perf_counter()
        for _ in range(ticks):
            simulation.frame()
        duration = time.perf_counter() - start_time

        stats = simulation.get_statistics()
        stats["initial_population"] = initial_population
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = ticks / duration if duration > 0 else 0

        if show_grid:
            print(f"\nFinal grid (generation {simulation.generation}):")
            print(self._format_grid(universe))

        return stats

    def benchmark(self, universe: Universe, ticks: int) -> float:
        """Time ``ticks`` generations; returns seconds per tick."""
        return Simulation(universe).benchmark(ticks)

    def _format_grid(self, universe: Universe, max_size: int = 100) -> str:
        """Format universe for display, truncating if too large."""
        if universe.width > max_size or universe.height > max_size:
            return f"Grid too large to display ({universe.width}x{universe.height})"

        return str(universe)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        print("Available patterns:")
        for category, patterns in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                rows, columns = pattern.get_size()
                print(f"  {pattern_name}: {columns}x{rows}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on a toroidal universe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default 64x64 universe for 100 generations
  conways-cli -n 100

  # Load a world file and show it before and after
  conways-cli --world worlds/glider.txt -n 4 --show-grid

  # Random 128x128 universe, reproducible
  conways-cli -W 128 -H 128 --random --seed 42 -n 500

  # Time 1000 ticks of the default universe
  conways-cli --benchmark 1000
        """,
    )

    # Universe configuration
    parser.add_argument("-W", "--width", type=int, default=DEFAULT_SIZE, help="Universe width (default: 64)")

    parser.add_argument("-H", "--height", type=int, default=DEFAULT_SIZE, help="Universe height (default: 64)")

    parser.add_argument("--world", type=str, help="Import a world text file ('#' alive, '.' dead)")

    parser.add_argument("--pattern", type=str, help="Place a built-in pattern at the centre of an empty universe")

    parser.add_argument("--random", action="store_true", help="Fill the universe at random")

    parser.add_argument("--seed", type=int, help="Random seed for --random")

    # Run configuration
    parser.add_argument(
        "-n",
        "--ticks",
        type=int,
        default=100,
        help="Number of generations to run (default: 100)",
    )

    parser.add_argument("--export", type=str, help="Write the final universe to a world text file")

    parser.add_argument("--benchmark", type=int, metavar="TICKS", help="Time TICKS generations and exit")

    # Output
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed progress and statistics")

    parser.add_argument("-g", "--show-grid", action="store_true", help="Print the initial and final universe")

    parser.add_argument("--list-patterns", action="store_true", help="List all available patterns and exit")

    parser.add_argument("--greet", type=str, metavar="NAME", help="Print a greeting and exit")

    parser.add_argument("--debug", action="store_true", help="Log debug messages and time every tick")

    return parser


def print_results(stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {stats['generation']} generations")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
        fps = stats["fps"]
        print(f"  Frames per second: latest {fps['latest']:.0f}, avg {fps['mean']:.0f}, min {fps['min']:.0f}, max {fps['max']:.0f}")
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats["duration_seconds"],
                stats["generations_per_second"],
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.ticks < 0:
        errors.append("Ticks must be non-negative")

    if args.benchmark is not None and args.benchmark <= 0:
        errors.append("Benchmark ticks must be positive")

    if args.world and args.pattern:
        errors.append("Use either --world or --pattern, not both")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    cli = CLIGameOfLife()

    # Handle special commands
    if args.greet:
        print(greet(args.greet))
        return 0

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        universe = cli.build_universe(
            args.width,
            args.height,
            world=args.world,
            pattern=args.pattern,
            random_fill=args.random,
            seed=args.seed,
            debug=args.debug,
            verbose=args.verbose,
        )

        if args.benchmark:
            seconds = cli.benchmark(universe, args.benchmark)
            print(f"{args.benchmark} ticks of {universe.width}x{universe.height}: {seconds * 1e6:.1f} us/tick")
            return 0

        stats = cli.run_simulation(universe, args.ticks, verbose=args.verbose, show_grid=args.show_grid)
        print_results(stats, args.verbose)

        if args.export:
            save_world(universe, args.export)
            if args.verbose:
                print(f"Saved final universe to '{args.export}'")

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
