"""Command-line interface for two-player Game of Life matches."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..core.grid import CellState
from ..core.game import MultiplayerGame
from ..core.match import Match, MatchConfig, MatchResult
from ..core.patterns import (
    Pattern,
    PatternLibrary,
    build_match_seed,
    pattern_from_hash,
    random_pattern,
)

PLAYER_NAMES = {CellState.PLAYER_A: "Player A", CellState.PLAYER_B: "Player B"}


class CLIMatch:
    """Command-line interface for running two-player matches."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def resolve_patterns(
        self,
        pattern_a: str,
        pattern_b: str,
        hash_string: Optional[str] = None,
        random_patterns: bool = False,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[Pattern, Pattern]:
        """Pick the starting pattern of each player.

        A hash gives both players the same hash-derived pattern; random mode
        draws an independent random pattern per player; otherwise the named
        library patterns are used.

        Raises:
            ValueError: If a named pattern is unknown or the hash is invalid
        """
        if hash_string:
            pattern = pattern_from_hash(hash_string)
            return pattern, pattern
        if random_patterns:
            return random_pattern(rng), random_pattern(rng)

        resolved = []
        for name in (pattern_a, pattern_b):
            pattern = self.pattern_library.get_pattern(name)
            if pattern is None:
                raise ValueError(f"Pattern '{name}' not found")
            resolved.append(pattern)
        return resolved[0], resolved[1]

    def run_match(
        self,
        height: int,
        width: int,
        max_generations: int,
        pattern_a: str = "Glider",
        pattern_b: str = "R-pentomino",
        hash_string: Optional[str] = None,
        random_patterns: bool = False,
        bot_placements: int = 0,
        seed: Optional[int] = None,
        realtime: bool = False,
        interval: float = 0.2,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[MatchResult, Dict[str, Any]]:
        """Run a two-player match.

        Args:
            height: Grid rows
            width: Grid columns
            max_generations: Generation cap
            pattern_a: Library pattern for player A
            pattern_b: Library pattern for player B
            hash_string: Hex hash used to derive both starting patterns
            random_patterns: Use random starting patterns
            bot_placements: Cells the player B bot places every generation
            seed: Random seed for reproducible matches
            realtime: Pause between generations
            interval: Seconds between generations in realtime mode
            verbose: Print progress updates
            show_grid: Show the grid at the start and the end (every tick in realtime mode)

        Returns:
            Tuple of (match result, statistics)
        """
        config = MatchConfig(
            height=height,
            width=width,
            max_generations=max_generations,
            tick_interval=interval,
            bot_player=CellState.PLAYER_B,
            bot_placements=bot_placements,
            seed=seed,
        )
        match = Match(config)

        first, second = self.resolve_patterns(pattern_a, pattern_b, hash_string, random_patterns, match.rng)
        if verbose:
            print(f"Initializing {height}x{width} grid")
            print(f"Player A: {first.name} ({len(first.cells)} cells)")
            print(f"Player B: {second.name} ({len(second.cells)} cells)")

        match.restart(build_match_seed(first, second, height, width))
        initial_counts = match.game.get_cell_counts()

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(match.game))

        def report(current: Match) -> None:
            counts = current.game.get_cell_counts()
            if realtime and show_grid:
                print(f"\nGeneration {current.generation}:")
                print(self._format_grid(current.game))
            if verbose:
                print(f"Generation {current.generation}: A={counts.player_a} B={counts.player_b}")

        start_time = time.time()
        result = match.run(callback=report if (verbose or (realtime and show_grid)) else None, realtime=realtime)
        duration = time.time() - start_time

        stats = match.game.get_statistics()
        stats["initial_cells"] = initial_counts.to_dict()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = result.generation / duration if duration > 0 else 0

        if show_grid and not realtime:
            print(f"\nFinal grid (generation {result.generation}):")
            print(self._format_grid(match.game))

        return result, stats

    def _format_grid(self, game: MultiplayerGame, max_size: int = 80) -> str:
        """Format grid for display, truncating if too large."""
        if game.width > max_size or game.height > max_size:
            return f"Grid too large to display ({game.height}x{game.width})"
        return str(game.grid)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                height, width = pattern.get_size()
                print(f"  {pattern_name}: {height}x{width}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run two-player Game of Life matches from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Glider against R-pentomino on the default 50x50 board
  lifeduel-cli

  # Pick both starting patterns
  lifeduel-cli --pattern-a "Lightweight Spaceship" --pattern-b Beacon

  # Derive both patterns from a hash and watch it in realtime
  lifeduel-cli --hash 00a3f9c1 --realtime --show-grid -W 30 -H 30

  # Random patterns with a bot adding 2 cells for player B each generation
  lifeduel-cli --random --bot-placements 2 --seed 42

  # List available patterns
  lifeduel-cli --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-H", "--height", type=int, default=50, help="Grid height (default: 50)")

    parser.add_argument("-W", "--width", type=int, default=50, help="Grid width (default: 50)")

    # Pattern configuration
    parser.add_argument(
        "--pattern-a",
        type=str,
        default="Glider",
        help="Starting pattern for player A (default: Glider)",
    )

    parser.add_argument(
        "--pattern-b",
        type=str,
        default="R-pentomino",
        help="Starting pattern for player B (default: R-pentomino)",
    )

    parser.add_argument(
        "--hash",
        type=str,
        help="Hex hash string to derive both starting patterns from",
    )

    parser.add_argument(
        "--random",
        action="store_true",
        help="Use random starting patterns",
    )

    # Match configuration
    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=100,
        help="Generation cap (default: 100)",
    )

    parser.add_argument(
        "--bot-placements",
        type=int,
        default=0,
        help="Cells the player B bot places each generation (default: 0)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible matches",
    )

    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pause between generations",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=0.2,
        help="Seconds between generations in realtime mode (default: 0.2)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states (small grids only)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_result(result: MatchResult) -> str:
    """Format the match outcome for display."""
    if result.reason == "extinction":
        reason = f"extinction at generation {result.generation}"
    else:
        reason = f"generation cap ({result.generation}) reached"

    if result.winner is None:
        return f"Tie after {reason}"
    return f"{PLAYER_NAMES[result.winner]} wins after {reason}"


def print_results(result: MatchResult, stats: dict, verbose: bool) -> None:
    """Print match results.

    Args:
        result: Match outcome
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\n{format_result(result)}")
    print(f"Live cells: A={result.counts.player_a}, B={result.counts.player_b}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial cells: A={stats['initial_cells']['player_a']}, B={stats['initial_cells']['player_b']}")
        print(f"  Peak cells: A={stats['peak_cells']['player_a']}, B={stats['peak_cells']['player_b']}")
        print(f"  Total births: A={stats['total_births']['player_a']}, B={stats['total_births']['player_b']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.bot_placements < 0:
        errors.append("Bot placements must be non-negative")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if args.hash and args.random:
        errors.append("Use either --hash or --random, not both")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    cli = CLIMatch()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if not (args.hash or args.random):
        for name in (args.pattern_a, args.pattern_b):
            if cli.pattern_library.get_pattern(name) is None:
                available = cli.pattern_library.list_patterns()
                print(f"Error: Pattern '{name}' not found")
                print(f"Available patterns: {', '.join(available)}")
                print("Use --list-patterns to see detailed information")
                return 1

    try:
        result, stats = cli.run_match(
            height=args.height,
            width=args.width,
            max_generations=args.max_generations,
            pattern_a=args.pattern_a,
            pattern_b=args.pattern_b,
            hash_string=args.hash,
            random_patterns=args.random,
            bot_placements=args.bot_placements,
            seed=args.seed,
            realtime=args.realtime,
            interval=args.interval,
            verbose=args.verbose,
            show_grid=args.show_grid,
        )
        print_results(result, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nMatch interrupted by user")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
