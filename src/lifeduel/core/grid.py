"""Owner-tagged grid data structure for the two-player Game of Life."""

from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np
import torch
import torch.nn.functional as F


class CellState(IntEnum):
    """State of a single cell: empty or owned by one of the two players."""

    EMPTY = 0
    PLAYER_A = 1
    PLAYER_B = 2


PLAYERS = (CellState.PLAYER_A, CellState.PLAYER_B)

_VALID_STATES = np.array([int(state) for state in CellState], dtype=np.int64)
_SYMBOLS = {CellState.EMPTY: ".", CellState.PLAYER_A: "A", CellState.PLAYER_B: "B"}


class InvalidDimensionsError(ValueError):
    """Raised when a grid is created with non-positive or non-integer dimensions."""


def validate_dimensions(height: int, width: int) -> None:
    """Check that grid dimensions are strictly positive integers.

    Raises:
        InvalidDimensionsError: If either dimension is invalid
    """
    for name, value in (("height", height), ("width", width)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise InvalidDimensionsError(f"Grid {name} must be a positive integer, got {value!r}")


class OwnedGrid:
    """A bounded 2D grid of owner-tagged cells with two generation buffers.

    Cells are stored row-major as ``[row, column]``. The current generation
    lives in one buffer and the next generation is written to the other;
    ``swap()`` exchanges their roles without copying. Edges never wrap.
    """

    def __init__(self, height: int, width: int) -> None:
        """Initialize an empty grid.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            InvalidDimensionsError: If either dimension is not a positive integer
        """
        validate_dimensions(height, width)
        self._height = int(height)
        self._width = int(width)
        self._buffers = (
            np.zeros((self._height, self._width), dtype=np.int8),
            np.zeros((self._height, self._width), dtype=np.int8),
        )
        self._current = 0

        # Two-channel batch: channel 0 holds player A's mask, channel 1 player B's
        self._torch_input = torch.zeros(2, 1, self._height, self._width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (height, width)."""
        return (self._height, self._width)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current generation."""
        view = self._buffers[self._current].view()
        view.flags.writeable = False
        return view

    @property
    def current_cells(self) -> np.ndarray:
        """Writable current buffer, for the engine that owns this grid."""
        return self._buffers[self._current]

    @property
    def next_cells(self) -> np.ndarray:
        """Writable buffer the next generation is computed into."""
        return self._buffers[1 - self._current]

    def swap(self) -> None:
        """Make the next buffer current."""
        self._current = 1 - self._current

    def in_bounds(self, row: int, column: int) -> bool:
        """Whether (row, column) addresses a cell of this grid."""
        return 0 <= row < self._height and 0 <= column < self._width

    def get_cell(self, row: int, column: int) -> CellState:
        """Get the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(row, column):
            raise IndexError(f"Coordinates ({row}, {column}) out of bounds")
        return CellState(int(self.current_cells[row, column]))

    def set_cell(self, row: int, column: int, state: int) -> None:
        """Set the state of a cell in the current generation.

        Raises:
            IndexError: If coordinates are out of bounds
            ValueError: If state is not a valid cell state
        """
        if not self.in_bounds(row, column):
            raise IndexError(f"Coordinates ({row}, {column}) out of bounds")
        self.current_cells[row, column] = int(CellState(state))

    def clear(self) -> None:
        """Clear both buffers."""
        for buffer in self._buffers:
            buffer.fill(int(CellState.EMPTY))

    def prepare_seed(self, seed: Iterable[Sequence[int]]) -> np.ndarray:
        """Validate a seed and clip it to a full-size array of cell states.

        The seed may be smaller, larger or ragged compared to the grid;
        cells falling outside the grid are ignored and missing cells are empty.
        Nothing is written to the grid.

        Args:
            seed: Rows of cell states, as nested sequences or a 2D array

        Returns:
            Array of shape (height, width)

        Raises:
            ValueError: If the seed contains a value that is not a cell state
        """
        prepared = np.zeros((self._height, self._width), dtype=np.int8)
        for row_index, row in enumerate(seed):
            if row_index >= self._height:
                break
            values = np.asarray(row[: self._width])
            if values.size == 0:
                continue
            if (
                values.ndim != 1
                or not np.issubdtype(values.dtype, np.integer)
                or not np.isin(values, _VALID_STATES).all()
            ):
                raise ValueError(f"Seed row {row_index} contains invalid cell states: {values.tolist()}")
            prepared[row_index, : values.size] = values
        return prepared

    def load(self, seed: Iterable[Sequence[int]]) -> None:
        """Replace the current generation with a seed pattern.

        The whole seed is validated before anything is written, so a bad
        seed leaves the grid untouched.

        Raises:
            ValueError: If the seed contains a value that is not a cell state
        """
        self.current_cells[...] = self.prepare_seed(seed)

    def population(self, owner: Optional[int] = None) -> int:
        """Count live cells, optionally only those of one owner."""
        current = self.current_cells
        if owner is None:
            return int(np.count_nonzero(current))
        return int(np.count_nonzero(current == int(owner)))

    def get_neighbors(self, row: int, column: int) -> List[CellState]:
        """Get the states of the Moore neighbours of a cell.

        Border cells have fewer than eight neighbours.
        """
        current = self.current_cells
        neighbors = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, column + dc
                if self.in_bounds(nr, nc):
                    neighbors.append(CellState(int(current[nr, nc])))
        return neighbors

    def count_owned_neighbors(self) -> Tuple[np.ndarray, np.ndarray]:
        """Count neighbours owned by each player for every cell.

        Uses a zero-padded convolution, so cells outside the grid count as empty.

        Returns:
            Tuple of (player A counts, player B counts), each shaped (height, width)
        """
        current = self.current_cells
        self._torch_input[0, 0] = torch.from_numpy((current == int(CellState.PLAYER_A)).astype(np.float32))
        self._torch_input[1, 0] = torch.from_numpy((current == int(CellState.PLAYER_B)).astype(np.float32))

        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        counts = neighbors[:, 0].numpy().astype(np.int8)
        return counts[0], counts[1]

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column) or None if empty
        """
        rows, columns = np.nonzero(self.current_cells)
        if len(rows) == 0:
            return None
        return (int(rows.min()), int(columns.min()), int(rows.max()), int(columns.max()))

    def to_list(self) -> List[List[int]]:
        """Convert the current generation to nested lists."""
        return self.current_cells.tolist()

    def __eq__(self, other: object) -> bool:
        """Grids are equal when their current generations match."""
        if not isinstance(other, OwnedGrid):
            return False
        return self.shape == other.shape and np.array_equal(self.current_cells, other.current_cells)

    def __str__(self) -> str:
        """Render empty cells as '.' and owned cells as 'A' or 'B'."""
        return "\n".join(
            "".join(_SYMBOLS[CellState(int(cell))] for cell in row) for row in self.current_cells
        )
