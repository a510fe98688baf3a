"""Tests for the CLI frontend."""

import argparse
from unittest.mock import Mock, patch
from io import StringIO

import pytest
from conways.core.universe import Universe
from conways.core.world import export_world
from conways.frontends.cli import (
    CLIGameOfLife,
    create_parser,
    greet,
    print_results,
    validate_args,
    main,
)


def sample_stats(**overrides) -> dict:
    stats = {
        "generation": 10,
        "population": 8,
        "population_density": 0.02,
        "grid_size": (20, 20),
        "fps": {"latest": 60.0, "mean": 58.0, "min": 40.0, "max": 61.0},
        "initial_population": 10,
        "duration_seconds": 0.5,
        "generations_per_second": 20.0,
    }
    stats.update(overrides)
    return stats


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGameOfLife()
        assert cli.pattern_library is not None
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_build_default_universe(self):
        """Test the default seed pattern is used with no other source."""
        cli = CLIGameOfLife()
        universe = cli.build_universe(16, 16)
        assert universe == Universe(16, 16)

    def test_build_with_pattern(self):
        """Test placing a named pattern on an empty universe."""
        cli = CLIGameOfLife()
        universe = cli.build_universe(20, 20, pattern="Blinker")
        assert universe.population == 3

    def test_build_with_unknown_pattern(self):
        """Test an unknown pattern name is an error."""
        cli = CLIGameOfLife()
        with pytest.raises(ValueError):
            cli.build_universe(20, 20, pattern="NonExistentPattern")

    def test_build_random_is_seeded(self):
        """Test random fill is reproducible with a seed."""
        cli = CLIGameOfLife()
        first = cli.build_universe(12, 12, random_fill=True, seed=3)
        second = cli.build_universe(12, 12, random_fill=True, seed=3)
        assert first == second

    def test_build_from_world(self, tmp_path):
        """Test a world file overrides width and height."""
        path = tmp_path / "glider.txt"
        path.write_text(".#...\n..#..\n###..\n.....\n.....\n", encoding="utf-8")

        cli = CLIGameOfLife()
        universe = cli.build_universe(64, 64, world=str(path))

        assert universe.shape == (5, 5)
        assert universe.population == 5

    def test_run_simulation(self):
        """Test running a universe and collecting statistics."""
        cli = CLIGameOfLife()
        universe = cli.build_universe(20, 20, pattern="Block")

        stats = cli.run_simulation(universe, ticks=10)

        assert stats["generation"] == 10
        assert stats["initial_population"] == 4
        assert stats["population"] == 4
        assert "duration_seconds" in stats
        assert "generations_per_second" in stats

    def test_run_simulation_zero_ticks(self):
        """Test zero ticks leaves the universe alone."""
        cli = CLIGameOfLife()
        universe = cli.build_universe(8, 8)
        before = universe.cells.clone()

        stats = cli.run_simulation(universe, ticks=0)

        assert stats["generation"] == 0
        assert universe.cells == before

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_simulation_show_grid(self, mock_stdout):
        """Test initial and final grids are printed."""
        cli = CLIGameOfLife()
        universe = cli.build_universe(5, 5, pattern="Blinker")

        cli.run_simulation(universe, ticks=1, show_grid=True)

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert ".###." in output
        assert "Final grid (generation 1):" in output

    def test_format_grid_small(self):
        """Test formatting a small universe."""
        cli = CLIGameOfLife()
        universe = Universe(3, 3)
        universe.clear()
        universe.set_cell(1, 1, True)

        assert cli._format_grid(universe) == "...\n.#.\n..."

    def test_format_grid_large(self):
        """Test formatting a universe too large to show."""
        cli = CLIGameOfLife()
        assert "too large" in cli._format_grid(Universe(200, 200))

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test listing patterns by category."""
        cli = CLIGameOfLife()
        cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Oscillators:" in output
        assert "Glider: 3x3, 5 cells" in output

    def test_benchmark(self):
        """Test benchmarking returns seconds per tick."""
        cli = CLIGameOfLife()
        assert cli.benchmark(Universe(16, 16), 3) >= 0


class TestArgumentParsing:
    """Test cases for argument parsing and validation."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])

        assert args.width == 64
        assert args.height == 64
        assert args.ticks == 100
        assert args.world is None
        assert args.pattern is None
        assert not args.random
        assert args.benchmark is None
        assert not args.debug

    def test_short_args(self):
        """Test short option forms."""
        args = create_parser().parse_args(["-W", "30", "-H", "20", "-n", "5", "-v", "-g"])

        assert args.width == 30
        assert args.height == 20
        assert args.ticks == 5
        assert args.verbose
        assert args.show_grid

    def test_validate_args_valid(self):
        """Test valid arguments pass."""
        args = create_parser().parse_args(["--pattern", "Glider"])
        assert validate_args(args)

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_invalid_width(self, mock_stdout):
        """Test a non-positive width fails."""
        args = argparse.Namespace(width=0, height=10, ticks=5, benchmark=None, world=None, pattern=None)
        assert not validate_args(args)
        assert "Width must be positive" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_world_and_pattern(self, mock_stdout):
        """Test a world file and a pattern are mutually exclusive."""
        args = create_parser().parse_args(["--world", "a.txt", "--pattern", "Glider"])
        assert not validate_args(args)

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_negative_ticks(self, mock_stdout):
        """Test negative tick counts fail."""
        args = create_parser().parse_args(["-n", "-1"])
        assert not validate_args(args)


class TestOutput:
    """Test cases for result printing and host utilities."""

    def test_greet(self):
        """Test the greeting text."""
        assert greet("World") == "Hello, World!"

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_verbose(self, mock_stdout):
        """Test detailed results."""
        print_results(sample_stats(), verbose=True)

        output = mock_stdout.getvalue()
        assert "Simulation completed after 10 generations" in output
        assert "Grid size: 20x20" in output
        assert "Initial population: 10" in output
        assert "Final population: 8" in output
        assert "Frames per second" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_compact(self, mock_stdout):
        """Test compact results."""
        print_results(sample_stats(), verbose=False)

        output = mock_stdout.getvalue()
        assert "Population: 10 -> 8" in output
        assert "Speed: 20 gen/s" in output


class TestMain:
    """Test cases for the main entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_greet(self, mock_stdout):
        """Test --greet prints and exits."""
        assert main(["--greet", "Life"]) == 0
        assert mock_stdout.getvalue().strip() == "Hello, Life!"

    @patch("conways.frontends.cli.CLIGameOfLife")
    def test_main_list_patterns(self, mock_cli_class):
        """Test --list-patterns."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["conways-cli", "--list-patterns"]):
            result = main()

        assert result == 0
        mock_cli.list_patterns.assert_called_once()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        """Test invalid arguments exit with 1."""
        with patch("sys.argv", ["conways-cli", "--width", "-5"]):
            assert main() == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_pattern(self, mock_stdout):
        """Test an unknown pattern exits with 1."""
        assert main(["--pattern", "InvalidPattern"]) == 1
        assert "Error: Pattern 'InvalidPattern' not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_successful_run(self, mock_stdout):
        """Test a short run prints results."""
        assert main(["-W", "16", "-H", "16", "-n", "3"]) == 0
        assert "Simulation completed after 3 generations" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_world_and_export(self, mock_stdout, tmp_path):
        """Test importing a world, running it and exporting the result."""
        world = tmp_path / "blinker.txt"
        world.write_text(".....\n.....\n.###.\n.....\n.....\n", encoding="utf-8")
        out = tmp_path / "out.txt"

        assert main(["--world", str(world), "-n", "1", "--export", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == ".....\n..#..\n..#..\n..#..\n.....\n"

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_bad_world(self, mock_stdout, tmp_path):
        """Test a malformed world file exits with 1."""
        world = tmp_path / "bad.txt"
        world.write_text("##\n.\n", encoding="utf-8")

        assert main(["--world", str(world)]) == 1
        assert "Error:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_missing_world(self, mock_stdout, tmp_path):
        """Test a missing world file exits with 1."""
        assert main(["--world", str(tmp_path / "missing.txt")]) == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_benchmark(self, mock_stdout):
        """Test --benchmark reports time per tick."""
        assert main(["-W", "16", "-H", "16", "--benchmark", "2"]) == 0
        assert "us/tick" in mock_stdout.getvalue()

    @patch("conways.frontends.cli.CLIGameOfLife")
    def test_main_keyboard_interrupt(self, mock_cli_class):
        """Test Ctrl-C during a run."""
        mock_cli = Mock()
        mock_cli.build_universe.side_effect = KeyboardInterrupt()
        mock_cli_class.return_value = mock_cli

        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main([]) == 1
        assert "interrupted" in mock_stdout.getvalue()

    def test_export_matches_cli_world_format(self, tmp_path):
        """Test the CLI reads what export_world writes."""
        path = tmp_path / "default.txt"
        path.write_text(export_world(Universe(8, 8)), encoding="utf-8")

        universe = CLIGameOfLife().build_universe(64, 64, world=str(path))
        assert universe == Universe(8, 8)
