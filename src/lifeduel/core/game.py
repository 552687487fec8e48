"""Two-player Conway's Game of Life engine."""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence
import numpy as np

from .grid import CellState, OwnedGrid, PLAYERS
from .stats import GameStats, PlayerCounts

logger = logging.getLogger(__name__)

DEFAULT_HEIGHT = 50
DEFAULT_WIDTH = 50

_EMPTY, _PLAYER_A, _PLAYER_B = (int(state) for state in CellState)


def resolve_birth_owner(
    a_count: int, b_count: int, rng: Optional[np.random.Generator] = None
) -> CellState:
    """Decide who owns a newborn cell from its live neighbour counts.

    The owner with more neighbours wins. A tie is settled by a fair coin; with
    Conway's exactly-three birth rule a tie cannot actually occur.

    Args:
        a_count: Live neighbours owned by player A
        b_count: Live neighbours owned by player B
        rng: Random generator used for the tie-break

    Returns:
        CellState.PLAYER_A or CellState.PLAYER_B
    """
    if a_count > b_count:
        return CellState.PLAYER_A
    if b_count > a_count:
        return CellState.PLAYER_B
    rng = rng if rng is not None else np.random.default_rng()
    return CellState.PLAYER_A if rng.random() < 0.5 else CellState.PLAYER_B


class MultiplayerGame:
    """Two-player Game of Life simulation engine.

    Cells are owned by player A or player B. Conway's rules apply to the
    combined population regardless of owner:
    - Live cell with 2-3 live neighbours survives, keeping its owner
    - Empty cell with exactly 3 live neighbours is born, owned by the
      majority owner among those neighbours
    - All other cells die or stay empty

    Edges do not wrap.
    """

    def __init__(
        self,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
        seed: Optional[Iterable[Sequence[int]]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """Initialize the game.

        Args:
            height: Number of rows
            width: Number of columns
            seed: Optional initial cell states; clipped to the grid
            rng: Random generator for birth tie-breaks

        Raises:
            InvalidDimensionsError: If height or width is not a positive integer
            ValueError: If the seed contains invalid cell states
        """
        self.grid = OwnedGrid(height, width)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._generation = 0
        self._stats = GameStats()

        if seed is not None:
            self.grid.load(seed)
        self._update_stats()

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.grid.height

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.grid.width

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current generation."""
        return self.grid.cells

    @property
    def generation(self) -> int:
        """Generations evolved since construction or the last reset."""
        return self._generation

    @property
    def game_stats(self) -> GameStats:
        """Snapshot of the current statistics."""
        return self._stats.copy()

    def get_cell_counts(self) -> PlayerCounts:
        """Live cells per player in the current generation, as a copy."""
        return self._stats.current_cells.copy()

    def place_cell(self, row: int, column: int, player: int) -> np.ndarray:
        """Toggle a player's cell.

        An empty cell becomes the player's, the player's own cell is removed,
        and an opponent's cell is left alone. Coordinates outside the grid
        are ignored.

        Args:
            row: Row coordinate
            column: Column coordinate
            player: CellState.PLAYER_A or CellState.PLAYER_B

        Returns:
            Read-only view of the current generation

        Raises:
            ValueError: If player is not one of the two players
        """
        if player not in PLAYERS:
            raise ValueError(f"Player must be PLAYER_A or PLAYER_B, got {player!r}")

        if self.grid.in_bounds(row, column):
            current = self.grid.current_cells
            state = int(current[row, column])
            if state == _EMPTY:
                current[row, column] = int(player)
            elif state == player:
                current[row, column] = _EMPTY

        self._update_stats()
        return self.cells

    def evolve(self) -> np.ndarray:
        """Advance the simulation by one generation.

        Returns:
            Read-only view of the new current generation
        """
        self._apply_rules()
        self.grid.swap()
        self._generation += 1
        self._update_stats()

        logger.debug(
            "generation %d: A=%d B=%d",
            self._generation,
            self._stats.current_cells.player_a,
            self._stats.current_cells.player_b,
        )
        return self.cells

    def _apply_rules(self) -> None:
        """Compute the next generation from the current one into the next buffer."""
        a_counts, b_counts = self.grid.count_owned_neighbors()
        live_counts = a_counts + b_counts

        current = self.grid.current_cells
        next_cells = self.grid.next_cells
        next_cells.fill(_EMPTY)

        # Survival: live cell with 2 or 3 live neighbours keeps its owner
        survive_mask = (current != _EMPTY) & ((live_counts == 2) | (live_counts == 3))
        next_cells[survive_mask] = current[survive_mask]

        # Birth: empty cell with exactly 3 live neighbours
        birth_mask = (current == _EMPTY) & (live_counts == 3)
        next_cells[birth_mask & (a_counts > b_counts)] = _PLAYER_A
        next_cells[birth_mask & (b_counts > a_counts)] = _PLAYER_B

        for row, column in zip(*np.nonzero(birth_mask & (a_counts == b_counts))):
            owner = resolve_birth_owner(int(a_counts[row, column]), int(b_counts[row, column]), self._rng)
            next_cells[row, column] = int(owner)

        born = next_cells[birth_mask]
        self._stats.total_births.player_a += int(np.count_nonzero(born == _PLAYER_A))
        self._stats.total_births.player_b += int(np.count_nonzero(born == _PLAYER_B))

    def _update_stats(self) -> None:
        """Recompute live counts from the current generation."""
        self._stats.record_counts(
            self.grid.population(CellState.PLAYER_A),
            self.grid.population(CellState.PLAYER_B),
        )

    def reset(
        self, seed: Optional[Iterable[Sequence[int]]] = None, clear_peaks: bool = False
    ) -> np.ndarray:
        """Reset the simulation.

        Both buffers are cleared, and current counts, births and the generation
        counter return to zero. Peak counts survive a reset unless
        ``clear_peaks`` is set.

        Args:
            seed: Optional cell states to load after clearing
            clear_peaks: Whether to zero the peak counts as well

        Returns:
            Read-only view of the current generation

        Raises:
            ValueError: If the seed contains invalid cell states; the game is
                left unchanged
        """
        prepared = self.grid.prepare_seed(seed) if seed is not None else None

        self.grid.clear()
        self._generation = 0
        self._stats.total_births = PlayerCounts()
        if clear_peaks:
            self._stats.peak_cells = PlayerCounts()

        if prepared is not None:
            self.grid.load(prepared)
        self._update_stats()
        return self.cells

    def get_statistics(self) -> Dict[str, Any]:
        """Get a summary of the simulation.

        Returns:
            Dictionary with various statistics
        """
        counts = self._stats.current_cells
        bbox = self.grid.get_bounding_box()

        return {
            "generation": self._generation,
            "current_cells": counts.to_dict(),
            "peak_cells": self._stats.peak_cells.to_dict(),
            "total_births": self._stats.total_births.to_dict(),
            "population": counts.total,
            "grid_size": self.grid.shape,
            "population_density": counts.total / (self.height * self.width),
            "bounding_box": bbox,
        }
