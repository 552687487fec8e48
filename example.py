#!/usr/bin/env python3
"""
Example usage of the lifeduel package.
"""

from lifeduel import CellState, Match, MatchConfig, MultiplayerGame, PatternLibrary
from lifeduel.core.patterns import build_match_seed


def main():
    """Demonstrate programmatic usage of the lifeduel package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    pentomino = library.get_pattern("R-pentomino")

    # A game seeded with one pattern per player
    seed = build_match_seed(glider, pentomino, 20, 20)
    game = MultiplayerGame(20, 20, seed=seed)

    print("Initial state:")
    print(game.grid)
    print(f"Cells: {game.get_cell_counts()}")
    print()

    # Players can toggle their own cells between generations
    game.place_cell(0, 0, CellState.PLAYER_A)

    for _ in range(10):
        game.evolve()
        print(f"Generation {game.generation}:")
        print(game.grid)
        print(f"Cells: {game.get_cell_counts()}")
        print()

    # Or let a Match drive the game to a result
    match = Match(MatchConfig(height=20, width=20, max_generations=50, bot_placements=1, seed=7))
    match.restart(seed)
    result = match.run()
    winner = result.winner.name if result.winner is not None else "tie"
    print(f"Match finished at generation {result.generation} ({result.reason}): {winner}")

    print("Final statistics:")
    for key, value in match.game.get_statistics().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
