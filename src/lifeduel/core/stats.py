"""Per-player statistics for two-player simulations."""

from dataclasses import dataclass, field, asdict, replace
from typing import Any, Dict

from .grid import CellState


@dataclass
class PlayerCounts:
    """A pair of counts, one per player."""

    player_a: int = 0
    player_b: int = 0

    def __getitem__(self, owner: int) -> int:
        if owner == CellState.PLAYER_A:
            return self.player_a
        if owner == CellState.PLAYER_B:
            return self.player_b
        raise KeyError(owner)

    def __setitem__(self, owner: int, value: int) -> None:
        if owner == CellState.PLAYER_A:
            self.player_a = value
        elif owner == CellState.PLAYER_B:
            self.player_b = value
        else:
            raise KeyError(owner)

    @property
    def total(self) -> int:
        return self.player_a + self.player_b

    def copy(self) -> "PlayerCounts":
        return replace(self)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class GameStats:
    """Statistics derived from the grid after every mutation.

    Attributes:
        current_cells: Live cells per owner in the current generation
        peak_cells: Highest live count per owner ever observed
        total_births: Cumulative births per owner
    """

    current_cells: PlayerCounts = field(default_factory=PlayerCounts)
    peak_cells: PlayerCounts = field(default_factory=PlayerCounts)
    total_births: PlayerCounts = field(default_factory=PlayerCounts)

    def record_counts(self, player_a: int, player_b: int) -> None:
        """Store fresh live counts and raise the peaks they exceed."""
        self.current_cells = PlayerCounts(player_a, player_b)
        self.peak_cells.player_a = max(self.peak_cells.player_a, player_a)
        self.peak_cells.player_b = max(self.peak_cells.player_b, player_b)

    def copy(self) -> "GameStats":
        return GameStats(
            current_cells=self.current_cells.copy(),
            peak_cells=self.peak_cells.copy(),
            total_births=self.total_births.copy(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to a nested dictionary."""
        return asdict(self)
