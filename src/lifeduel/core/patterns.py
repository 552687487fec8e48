"""Game of Life patterns, owner-tagged placement and seed generation."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import string
import numpy as np

from .grid import CellState, validate_dimensions

logger = logging.getLogger(__name__)

Seed = List[List[int]]


class Pattern:
    """Represents a Game of Life pattern as a set of live cell offsets."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        category: str = "Custom",
        period: int = 0,
        rarity: int = 1,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, column) offsets for living cells
            description: Optional description
            category: Category used when listing patterns
            period: Oscillation or travel period (0 if not periodic)
            rarity: Rarity from 1 (common) to 5 (rarest)
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.category = category
        self.period = period
        self.rarity = rarity

    @classmethod
    def from_matrix(cls, name: str, matrix: Sequence[Sequence[int]], **kwargs) -> "Pattern":
        """Create a pattern from rows of 0/1 values.

        Args:
            name: Pattern name
            matrix: Rows where any non-zero value marks a living cell
            **kwargs: Passed through to the constructor

        Returns:
            New Pattern instance
        """
        cells = [(r, c) for r, row in enumerate(matrix) for c, value in enumerate(row) if value]
        return cls(name, cells, **kwargs)

    def to_matrix(self) -> List[List[int]]:
        """Render the normalized pattern as rows of 0/1 values."""
        normalized = self.normalize()
        height, width = normalized.get_size()
        matrix = [[0] * width for _ in range(height)]
        for r, c in normalized.cells:
            matrix[r][c] = 1
        return matrix

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, columns = zip(*self.cells)
        return (min(rows), min(columns), max(rows), max(columns))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (height, width)."""
        if not self.cells:
            return (0, 0)
        min_r, min_c, max_r, max_c = self.get_bounding_box()
        return (max_r - min_r + 1, max_c - min_c + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        min_r, min_c, _, _ = self.get_bounding_box()
        return self._derive([(r - min_r, c - min_c) for r, c in self.cells])

    def mirrored(self) -> "Pattern":
        """Return the pattern rotated by 180 degrees within its bounding box.

        Used to give the second player the same shape facing the opposite way.
        """
        _, _, max_r, max_c = self.normalize().get_bounding_box()
        return self._derive([(max_r - r, max_c - c) for r, c in self.normalize().cells])

    def _derive(self, cells: List[Tuple[int, int]]) -> "Pattern":
        return Pattern(self.name, cells, self.description, self.category, self.period, self.rarity)

    def place(self, game, player: int, row_offset: int = 0, column_offset: int = 0) -> None:
        """Place the pattern for a player on a running game.

        Cells go through ``place_cell``, so a cell the player already owns is
        toggled off and opponent cells are left alone.

        Args:
            game: Target MultiplayerGame
            player: Owner of the placed cells
            row_offset: Vertical offset
            column_offset: Horizontal offset
        """
        for r, c in self.cells:
            game.place_cell(r + row_offset, c + column_offset, player)

    def to_seed(
        self,
        player: int,
        height: int,
        width: int,
        row_offset: int = 0,
        column_offset: int = 0,
    ) -> Seed:
        """Build a seed grid containing only this pattern.

        Cells that fall outside the grid are skipped.

        Args:
            player: Owner of the pattern's cells
            height: Seed rows
            width: Seed columns
            row_offset: Vertical offset
            column_offset: Horizontal offset

        Returns:
            Nested list of cell states
        """
        validate_dimensions(height, width)
        seed = [[int(CellState.EMPTY)] * width for _ in range(height)]
        _stamp(seed, self, player, row_offset, column_offset)
        return seed

    def to_dict(self) -> Dict[str, Any]:
        """Convert pattern to dictionary for serialization."""
        return {
            "name": self.name,
            "cells": [list(cell) for cell in self.cells],
            "description": self.description,
            "category": self.category,
            "period": self.period,
            "rarity": self.rarity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Args:
            data: Dictionary with pattern data

        Returns:
            New Pattern instance
        """
        cells = [(int(cell[0]), int(cell[1])) for cell in data["cells"]]

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            category=data.get("category", "Custom"),
            period=data.get("period", 0),
            rarity=data.get("rarity", 1),
        )

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


def _stamp(seed: Seed, pattern: Pattern, player: int, row_offset: int, column_offset: int) -> None:
    """Write a pattern's cells into empty seed cells within bounds."""
    height, width = len(seed), len(seed[0])
    for r, c in pattern.cells:
        row, column = r + row_offset, c + column_offset
        if 0 <= row < height and 0 <= column < width and seed[row][column] == CellState.EMPTY:
            seed[row][column] = int(player)


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        """Initialize pattern library with the built-in patterns."""
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(
            Pattern.from_matrix(
                "Block", [[1, 1], [1, 1]], description="Most stable pattern", category="Still Life"
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Beehive",
                [[0, 1, 1, 0], [1, 0, 0, 1], [0, 1, 1, 0]],
                description="Beehive still life",
                category="Still Life",
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Loaf",
                [[0, 1, 1, 0], [1, 0, 0, 1], [0, 1, 0, 1], [0, 0, 1, 0]],
                description="Loaf still life",
                category="Still Life",
            )
        )

        # Oscillators
        self.add_pattern(
            Pattern.from_matrix(
                "Blinker",
                [[0, 1, 0], [0, 1, 0], [0, 1, 0]],
                description="Flips between horizontal and vertical",
                category="Oscillators",
                period=2,
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Toad",
                [[0, 1, 1, 1], [1, 1, 1, 0]],
                description="Shifts between two states",
                category="Oscillators",
                period=2,
                rarity=2,
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Beacon",
                [[1, 1, 0, 0], [1, 1, 0, 0], [0, 0, 1, 1], [0, 0, 1, 1]],
                description="Two blocks that blink",
                category="Oscillators",
                period=2,
                rarity=2,
            )
        )

        # Spaceships
        self.add_pattern(
            Pattern.from_matrix(
                "Glider",
                [[0, 1, 0], [0, 0, 1], [1, 1, 1]],
                description="Moves diagonally across the grid",
                category="Spaceships",
                period=4,
                rarity=3,
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Lightweight Spaceship",
                [[0, 1, 0, 0, 1], [1, 0, 0, 0, 0], [1, 0, 0, 0, 1], [1, 1, 1, 1, 0]],
                description="LWSS - Period-4 spaceship",
                category="Spaceships",
                period=4,
                rarity=4,
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern.from_matrix(
                "R-pentomino",
                [[0, 1, 1], [1, 1, 0], [0, 1, 0]],
                description="Chaotic evolution pattern",
                category="Methuselahs",
                period=1103,
                rarity=5,
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Diehard",
                [[0, 0, 0, 0, 0, 0, 1, 0], [1, 1, 0, 0, 0, 0, 0, 0], [0, 1, 0, 0, 0, 1, 1, 1]],
                description="Dies after exactly 130 generations",
                category="Methuselahs",
                rarity=4,
            )
        )
        self.add_pattern(
            Pattern.from_matrix(
                "Acorn",
                [[0, 1, 0, 0, 0, 0, 0], [0, 0, 0, 1, 0, 0, 0], [1, 1, 0, 0, 1, 1, 1]],
                description="Takes 5206 generations to stabilize",
                category="Methuselahs",
                rarity=5,
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get pattern names grouped by category, in insertion order."""
        categories: Dict[str, List[str]] = {}
        for name, pattern in self._patterns.items():
            categories.setdefault(pattern.category, []).append(name)
        return categories


def _hash_cell_alive(rule: int, x: int, y: int, size: int, index: int, char_code: int) -> bool:
    """Whether the cell at column x, row y is alive under one of the eight hash rules."""
    last = size - 1
    if rule == 0:  # diagonals
        return (x == y or x == last - y) and char_code % 2 == 1
    if rule == 1:  # centre-heavy
        centre_distance = abs(x - size / 2) + abs(y - size / 2)
        return centre_distance < size / 2 and char_code % 3 != 0
    if rule == 2:  # edges
        return (x in (0, last) or y in (0, last)) and char_code % 2 == 1
    if rule == 3:  # glider-like
        return (y, x) in ((0, 1), (1, 2), (2, 0), (2, 1), (2, 2)) and char_code % 2 == 1
    if rule == 4:  # symmetric
        return (char_code + x + y) % 3 == 0 and (x <= size // 2 or y <= size // 2)
    if rule == 5:  # cross
        return (x == size // 2 or y == size // 2) and char_code % 2 == 0
    if rule == 6:  # corners
        return x in (0, last) and y in (0, last) and char_code % 2 == 1
    # clusters
    return (index // 3) % 3 == 1 and char_code % 2 == 0


def _hash_rarity(density: float, hash_string: str) -> int:
    rarity = 1
    if density > 0.7 or density < 0.2:
        rarity = 2
    if density > 0.8 or density < 0.1:
        rarity = 3
    if "000" in hash_string:
        rarity = min(5, rarity + 1)
    if "0000" in hash_string:
        rarity = 5
    return rarity


def _hash_category(cell_count: int, density: float) -> str:
    if cell_count <= 4:
        return "Still Life"
    if cell_count <= 8:
        return "Oscillators"
    if density < 0.3:
        return "Spaceships"
    return "Methuselahs"


def pattern_from_hash(hash_string: str, size: int = 5) -> Pattern:
    """Derive a deterministic square pattern from a hexadecimal hash string.

    The second hex digit picks one of eight layout rules and the character
    codes of the hash decide which candidate cells are alive. Character codes
    are taken as given, so "C" and "c" can produce different patterns.

    Args:
        hash_string: Hexadecimal string of at least two characters
        size: Side length of the pattern

    Returns:
        New Pattern instance (possibly with no live cells)

    Raises:
        ValueError: If the hash is too short or not hexadecimal
    """
    if len(hash_string) < 2 or any(ch not in string.hexdigits for ch in hash_string):
        raise ValueError(f"Expected a hexadecimal hash of at least 2 characters, got {hash_string!r}")
    if size <= 0:
        raise ValueError(f"Pattern size must be positive, got {size}")

    rule = int(hash_string[1], 16) % 8
    cells = []
    for y in range(size):
        for x in range(size):
            index = (y * size + x) % len(hash_string)
            if _hash_cell_alive(rule, x, y, size, index, ord(hash_string[index])):
                cells.append((y, x))

    density = len(cells) / (size * size)
    logger.debug("hash %s -> rule %d, %d cells", hash_string[:8], rule, len(cells))
    return Pattern(
        f"Hash #{hash_string[:4].upper()}",
        cells,
        description=f"Generated from hash {hash_string[:8]} (rule {rule})",
        category=_hash_category(len(cells), density),
        rarity=_hash_rarity(density, hash_string),
    )


def random_pattern(
    rng: Optional[np.random.Generator] = None, size: int = 5, density: float = 0.4
) -> Pattern:
    """Generate a randomized square pattern.

    Args:
        rng: Random generator (a fresh one if omitted)
        size: Side length of the pattern
        density: Chance each cell is alive (0.0 to 1.0)

    Returns:
        New Pattern instance
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")
    rng = rng if rng is not None else np.random.default_rng()
    mask = rng.random((size, size)) < density
    return Pattern.from_matrix("Random", mask.tolist(), description=f"Random {size}x{size} pattern")


def build_match_seed(pattern_a: Pattern, pattern_b: Pattern, height: int, width: int) -> Seed:
    """Build a two-player starting grid.

    Player A's pattern is centred in the top-left quadrant and player B's
    pattern, rotated by 180 degrees, in the bottom-right quadrant.

    Args:
        pattern_a: Pattern for player A
        pattern_b: Pattern for player B
        height: Grid rows
        width: Grid columns

    Returns:
        Nested list of cell states
    """
    validate_dimensions(height, width)
    top, left = height // 2, width // 2

    a = pattern_a.normalize()
    a_height, a_width = a.get_size()
    seed = a.to_seed(
        CellState.PLAYER_A,
        height,
        width,
        max(0, (top - a_height) // 2),
        max(0, (left - a_width) // 2),
    )

    b = pattern_b.mirrored()
    b_height, b_width = b.get_size()
    _stamp(
        seed,
        b,
        CellState.PLAYER_B,
        top + max(0, (height - top - b_height) // 2),
        left + max(0, (width - left - b_width) // 2),
    )
    return seed
