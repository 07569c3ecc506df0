"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino, TetrominoType


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

EMPTY = 0

# Mapping from ``TetrominoType`` to the integer stored in the grid.  The
# specific numeric values are not important as long as ``0`` represents an empty
# cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells, indexed ``[row, col]``."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
            ValueError: If ``value`` is not a valid cell value.
        """
        if value != EMPTY and value not in VALUE_PIECES:
            raise ValueError(f"Invalid cell value: {value}")
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def cell_kind(self, row: int, col: int) -> Optional[TetrominoType]:
        """Return the piece kind locked at ``(row, col)`` or ``None``."""

        return VALUE_PIECES.get(self.get_cell(row, col))

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.  This makes
        collision detection simpler as off-board positions are automatically
        rejected.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == EMPTY)
        return False

    def lock_piece(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the board grid.

        The caller guarantees the piece does not overlap locked cells; only the
        bounds are checked here.
        """

        coordinates = np.asarray(tetromino.blocks(), dtype=np.int16)
        if coordinates.size == 0:
            return

        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        value = np.uint8(PIECE_VALUES[tetromino.shape])
        self.grid[rows, cols] = value

    def is_row_full(self, row: int) -> bool:
        """Return ``True`` if every column of ``row`` is occupied."""

        if not 0 <= row < self.height:
            raise IndexError("Row out of bounds")
        return bool(np.all(self.grid[row] != EMPTY))

    def full_rows(self) -> List[int]:
        """Return the indices of all full rows, top to bottom."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_row(self, row: int) -> None:
        """Remove ``row`` and shift every row above it down by one.

        Row 0 becomes empty afterwards.
        """

        if not 0 <= row < self.height:
            raise IndexError("Row out of bounds")
        self.grid[1 : row + 1] = self.grid[:row].copy()
        self.grid[0] = EMPTY

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        All full rows are dropped in a single pass, so adjacent full rows are
        handled together and no shifted row is skipped.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared
