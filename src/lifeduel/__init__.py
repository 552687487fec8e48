"""Two-player Conway's Game of Life with owner-tagged cells."""

__version__ = "0.1.0"

from .core.grid import CellState, InvalidDimensionsError, OwnedGrid
from .core.game import MultiplayerGame
from .core.match import Match, MatchConfig, MatchResult
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "CellState",
    "InvalidDimensionsError",
    "OwnedGrid",
    "MultiplayerGame",
    "Match",
    "MatchConfig",
    "MatchResult",
    "Pattern",
    "PatternLibrary",
]
