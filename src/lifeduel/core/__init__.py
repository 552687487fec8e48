"""Core two-player cellular automaton logic."""

from .grid import CellState, InvalidDimensionsError, OwnedGrid
from .game import MultiplayerGame, resolve_birth_owner
from .stats import GameStats, PlayerCounts
from .patterns import Pattern, PatternLibrary, build_match_seed, pattern_from_hash, random_pattern
from .match import Match, MatchConfig, MatchResult, RandomBot

__all__ = [
    "CellState",
    "InvalidDimensionsError",
    "OwnedGrid",
    "MultiplayerGame",
    "resolve_birth_owner",
    "GameStats",
    "PlayerCounts",
    "Pattern",
    "PatternLibrary",
    "build_match_seed",
    "pattern_from_hash",
    "random_pattern",
    "Match",
    "MatchConfig",
    "MatchResult",
    "RandomBot",
]
