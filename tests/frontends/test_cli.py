"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import patch

import pytest

from lifeduel.core.game import MultiplayerGame
from lifeduel.core.grid import CellState
from lifeduel.core.match import MatchResult
from lifeduel.core.stats import PlayerCounts
from lifeduel.frontends.cli import (
    CLIMatch,
    create_parser,
    format_result,
    print_results,
    validate_args,
    main,
)


class TestCLIMatch:
    """Test cases for the CLI match runner."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIMatch()
        assert cli.pattern_library is not None
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_run_match_with_patterns(self):
        """Test running a match between two library patterns."""
        cli = CLIMatch()

        result, stats = cli.run_match(
            height=20,
            width=20,
            max_generations=10,
            pattern_a="Block",
            pattern_b="Blinker",
        )

        assert result.reason == "max_generations"
        assert result.generation == 10
        assert result.winner == CellState.PLAYER_A
        assert stats["initial_cells"] == {"player_a": 4, "player_b": 3}
        assert stats["generation"] == 10
        assert "duration_seconds" in stats
        assert "generations_per_second" in stats

    def test_run_match_with_hash(self):
        """Test that a hash gives both players the same starting pattern."""
        cli = CLIMatch()

        result, stats = cli.run_match(height=20, width=20, max_generations=5, hash_string="16" + "1" * 23)

        assert stats["initial_cells"] == {"player_a": 4, "player_b": 4}
        assert result.reason in ["extinction", "max_generations"]

    def test_run_match_random_reproducible(self):
        """Test that seeded random matches repeat exactly."""
        cli = CLIMatch()

        first, first_stats = cli.run_match(
            height=20, width=20, max_generations=20, random_patterns=True, bot_placements=2, seed=11
        )
        second, second_stats = cli.run_match(
            height=20, width=20, max_generations=20, random_patterns=True, bot_placements=2, seed=11
        )

        assert first == second
        assert first_stats["total_births"] == second_stats["total_births"]

    def test_resolve_unknown_pattern(self):
        """Test that unknown pattern names are rejected."""
        cli = CLIMatch()
        with pytest.raises(ValueError):
            cli.resolve_patterns("Glider", "NonExistentPattern")

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_match_verbose(self, mock_stdout):
        """Test progress output in verbose mode."""
        cli = CLIMatch()
        cli.run_match(height=10, width=10, max_generations=3, pattern_a="Block", pattern_b="Block", verbose=True)

        output = mock_stdout.getvalue()
        assert "Player A: Block" in output
        assert "Generation 3: A=4 B=4" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_match_show_grid(self, mock_stdout):
        """Test initial and final grid output."""
        cli = CLIMatch()
        cli.run_match(height=10, width=10, max_generations=2, pattern_a="Block", pattern_b="Block", show_grid=True)

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert "Final grid (generation 2):" in output
        assert "AA" in output
        assert "BB" in output

    def test_format_grid_large(self):
        """Test grid formatting for large grids."""
        cli = CLIMatch()
        formatted = cli._format_grid(MultiplayerGame(100, 100), max_size=50)
        assert "too large to display" in formatted

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        """Test pattern listing."""
        cli = CLIMatch()
        cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "Glider" in output
        assert "Still Life:" in output
        assert "Spaceships:" in output


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_create_parser(self):
        """Test parser creation and defaults."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)

        args = parser.parse_args([])
        assert args.height == 50
        assert args.width == 50
        assert args.max_generations == 100
        assert args.pattern_a == "Glider"
        assert args.pattern_b == "R-pentomino"
        assert args.hash is None
        assert args.random is False
        assert args.bot_placements == 0
        assert args.interval == 0.2

    def test_parse_match_args(self):
        """Test parsing match arguments."""
        parser = create_parser()

        args = parser.parse_args(
            ["-H", "30", "-W", "40", "-m", "60", "--pattern-a", "Toad", "--bot-placements", "2", "--seed", "9"]
        )

        assert args.height == 30
        assert args.width == 40
        assert args.max_generations == 60
        assert args.pattern_a == "Toad"
        assert args.bot_placements == 2
        assert args.seed == 9

    def test_parse_output_args(self):
        """Test parsing output-related arguments."""
        parser = create_parser()

        args = parser.parse_args(["-v", "-g", "--realtime", "--interval", "0.5"])

        assert args.verbose is True
        assert args.show_grid is True
        assert args.realtime is True
        assert args.interval == 0.5


class TestValidation:
    """Test argument validation."""

    def _args(self, **overrides):
        args = create_parser().parse_args([])
        for key, value in overrides.items():
            setattr(args, key, value)
        return args

    def test_validate_args_valid(self):
        """Test validation with valid arguments."""
        assert validate_args(self._args()) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_invalid(self, mock_stdout):
        """Test validation with invalid arguments."""
        args = self._args(height=0, width=-1, max_generations=0, bot_placements=-1, interval=-0.1)

        assert validate_args(args) is False

        output = mock_stdout.getvalue()
        assert "Height must be positive" in output
        assert "Width must be positive" in output
        assert "Max generations must be positive" in output
        assert "Bot placements must be non-negative" in output
        assert "Interval must be non-negative" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_hash_and_random_conflict(self, mock_stdout):
        """Test that hash and random modes are mutually exclusive."""
        assert validate_args(self._args(hash="abcd", random=True)) is False
        assert "not both" in mock_stdout.getvalue()


class TestOutput:
    """Test result formatting."""

    def test_format_result_winner(self):
        result = MatchResult(CellState.PLAYER_B, "extinction", 12, PlayerCounts(0, 7))
        assert format_result(result) == "Player B wins after extinction at generation 12"

    def test_format_result_tie(self):
        result = MatchResult(None, "max_generations", 100, PlayerCounts(3, 3))
        assert format_result(result) == "Tie after generation cap (100) reached"

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_results_verbose(self, mock_stdout):
        """Test detailed statistics output."""
        cli = CLIMatch()
        result, stats = cli.run_match(height=10, width=10, max_generations=2, pattern_a="Block", pattern_b="Blinker")
        print_results(result, stats, verbose=True)

        output = mock_stdout.getvalue()
        assert "Player A wins" in output
        assert "Live cells: A=4, B=3" in output
        assert "Peak cells: A=4, B=3" in output
        assert "Total births:" in output


class TestMain:
    """Test the CLI entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_list_patterns(self, mock_stdout):
        with patch("sys.argv", ["lifeduel-cli", "--list-patterns"]):
            assert main() == 0
        assert "Available patterns:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_unknown_pattern(self, mock_stdout):
        with patch("sys.argv", ["lifeduel-cli", "--pattern-b", "Nope"]):
            assert main() == 1
        assert "Pattern 'Nope' not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_invalid_args(self, mock_stdout):
        with patch("sys.argv", ["lifeduel-cli", "-H", "0"]):
            assert main() == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_invalid_hash(self, mock_stdout):
        with patch("sys.argv", ["lifeduel-cli", "--hash", "xyz"]):
            assert main() == 1
        assert "Error:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_run(self, mock_stdout):
        with patch("sys.argv", ["lifeduel-cli", "-H", "20", "-W", "20", "-m", "10"]):
            assert main() == 0
        assert "Live cells:" in mock_stdout.getvalue()
