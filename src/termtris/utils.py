"""Collision and rendering helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, EMPTY, PIECE_VALUES, VALUE_PIECES
from .tetromino import Tetromino

EMPTY_SYMBOL = " "


def overlaps(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` cannot legally occupy its position.

    A placement is illegal when any of its blocks falls outside the board or
    lands on a cell that is already occupied.  Every move, rotation, hold and
    spawn decision in the game loop goes through this single predicate.
    """

    for row, col in tetromino.blocks():
        if not (0 <= row < board.height and 0 <= col < board.width):
            return True
        if not board.is_empty(row, col):
            return True
    return False


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``."""

    return not overlaps(board, tetromino.moved(dx, dy))


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape and take precedence over locked cells.
    """

    grid = board.grid.tolist()
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = PIECE_VALUES[active.shape]
    return grid


def cell_symbol(value: int) -> str:
    """Return the display character for a grid value."""

    if value == EMPTY:
        return EMPTY_SYMBOL
    return VALUE_PIECES[value].value
