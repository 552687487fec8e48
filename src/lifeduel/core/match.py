"""Match driver: ticks a two-player game, runs a bot and decides the winner."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .game import MultiplayerGame, DEFAULT_HEIGHT, DEFAULT_WIDTH
from .grid import CellState, PLAYERS
from .patterns import Seed
from .stats import PlayerCounts

logger = logging.getLogger(__name__)


@dataclass
class MatchConfig:
    """Settings for a single match.

    Attributes:
        height: Grid rows
        width: Grid columns
        max_generations: Generation cap after which the match ends
        tick_interval: Seconds between generations in realtime mode
        bot_player: Player controlled by the bot, or None for no bot
        bot_placements: Cells the bot places before each generation
        seed: Seed for the random generator (None for nondeterministic)
    """

    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    max_generations: int = 100
    tick_interval: float = 0.2
    bot_player: Optional[CellState] = CellState.PLAYER_B
    bot_placements: int = 0
    seed: Optional[int] = None

    def validate(self) -> List[str]:
        """Return a list of problems with this configuration (empty if valid)."""
        errors = []
        if self.height <= 0:
            errors.append("Height must be positive")
        if self.width <= 0:
            errors.append("Width must be positive")
        if self.max_generations <= 0:
            errors.append("Max generations must be positive")
        if self.tick_interval < 0:
            errors.append("Tick interval must be non-negative")
        if self.bot_player is not None and self.bot_player not in PLAYERS:
            errors.append("Bot player must be PLAYER_A or PLAYER_B")
        if self.bot_placements < 0:
            errors.append("Bot placements must be non-negative")
        return errors


@dataclass
class MatchResult:
    """Outcome of a finished match.

    Attributes:
        winner: Player with more live cells, or None for a tie
        reason: 'extinction' or 'max_generations'
        generation: Generation at which the match ended
        counts: Live cells per player at the end
    """

    winner: Optional[CellState]
    reason: str
    generation: int
    counts: PlayerCounts = field(default_factory=PlayerCounts)

    @property
    def is_tie(self) -> bool:
        return self.winner is None


def decide_winner(counts: PlayerCounts) -> Optional[CellState]:
    """The player with more live cells, or None when counts are equal."""
    if counts.player_a > counts.player_b:
        return CellState.PLAYER_A
    if counts.player_b > counts.player_a:
        return CellState.PLAYER_B
    return None


class RandomBot:
    """Bot that toggles random empty cells on its own half of the board.

    Player A plays the top half and player B the bottom half.
    """

    def __init__(self, player: CellState, rng: Optional[np.random.Generator] = None) -> None:
        if player not in PLAYERS:
            raise ValueError(f"Bot player must be PLAYER_A or PLAYER_B, got {player!r}")
        self.player = CellState(player)
        self.rng = rng if rng is not None else np.random.default_rng()

    def _rows(self, game: MultiplayerGame) -> range:
        half = game.height // 2
        if self.player == CellState.PLAYER_A:
            return range(0, max(half, 1))
        return range(half, game.height)

    def play(self, game: MultiplayerGame, placements: int = 1) -> int:
        """Place up to ``placements`` cells on empty squares.

        Returns:
            Number of cells actually placed
        """
        rows = self._rows(game)
        region = game.cells[rows.start:rows.stop]
        empty_rows, empty_columns = np.nonzero(region == int(CellState.EMPTY))
        count = min(placements, len(empty_rows))
        if count == 0:
            return 0

        chosen = self.rng.choice(len(empty_rows), size=count, replace=False)
        for index in chosen:
            game.place_cell(rows.start + int(empty_rows[index]), int(empty_columns[index]), self.player)
        return count


class Match:
    """Drives a MultiplayerGame the way an interactive frontend would.

    The match ends when, after at least one generation, a player has no
    live cells left, or when the generation cap is reached. The player with
    more live cells at that point wins; equal counts is a tie.
    """

    def __init__(self, config: Optional[MatchConfig] = None, game: Optional[MultiplayerGame] = None) -> None:
        """Initialize a match.

        Args:
            config: Match settings (defaults if omitted)
            game: Existing game to drive; a new empty one is created if omitted.
                It must match the configured size and keeps its own generator
                for birth tie-breaks; ``config.seed`` then only drives the bot.

        Raises:
            ValueError: If the configuration is invalid or the game size does
                not match it
        """
        self.config = config or MatchConfig()
        errors = self.config.validate()
        if errors:
            raise ValueError("Invalid match configuration: " + "; ".join(errors))
        if game is not None and (game.height, game.width) != (self.config.height, self.config.width):
            raise ValueError(
                f"Game is {game.height}x{game.width} but the match is configured for "
                f"{self.config.height}x{self.config.width}"
            )

        self.rng = np.random.default_rng(self.config.seed)
        self.game = game or MultiplayerGame(self.config.height, self.config.width, rng=self.rng)
        self.bot = (
            RandomBot(self.config.bot_player, self.rng)
            if self.config.bot_player is not None and self.config.bot_placements > 0
            else None
        )

    @property
    def generation(self) -> int:
        return self.game.generation

    @property
    def is_finished(self) -> bool:
        """Whether the match has reached an end condition."""
        if self.game.generation >= self.config.max_generations:
            return True
        if self.game.generation == 0:
            return False
        counts = self.game.get_cell_counts()
        return counts.player_a == 0 or counts.player_b == 0

    def result(self) -> Optional[MatchResult]:
        """Outcome of the match, or None while it is still running."""
        if not self.is_finished:
            return None

        counts = self.game.get_cell_counts()
        reason = "max_generations" if self.game.generation >= self.config.max_generations else "extinction"
        return MatchResult(decide_winner(counts), reason, self.game.generation, counts)

    def tick(self) -> np.ndarray:
        """Let the bot move, then advance one generation.

        Does nothing once the match is finished.

        Returns:
            Read-only view of the current generation
        """
        if self.is_finished:
            return self.game.cells

        if self.bot is not None:
            self.bot.play(self.game, self.config.bot_placements)
        return self.game.evolve()

    def run(
        self, callback: Optional[Callable[["Match"], None]] = None, realtime: bool = False
    ) -> MatchResult:
        """Tick until the match is finished.

        Args:
            callback: Called with this match after every tick
            realtime: Sleep ``tick_interval`` seconds between ticks

        Returns:
            Final MatchResult
        """
        while not self.is_finished:
            self.tick()
            if callback is not None:
                callback(self)
            if realtime and not self.is_finished:
                time.sleep(self.config.tick_interval)

        result = self.result()
        logger.debug(
            "match finished at generation %d (%s), winner %s",
            result.generation,
            result.reason,
            result.winner.name if result.winner is not None else "none",
        )
        return result

    def restart(self, seed: Optional[Seed] = None) -> np.ndarray:
        """Reset the game, optionally loading a new starting grid."""
        return self.game.reset(seed=seed)
