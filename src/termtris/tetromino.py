"""Tetromino definitions and pure transformations.

Each piece carries its own square occupancy matrix together with a pivot
point.  A piece's absolute cells are ``position + (local - pivot)`` for every
occupied local cell.  All operations here return new :class:`Tetromino`
values; nothing mutates a piece in place, so candidates can be checked for
legality before being committed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

Shape = Tuple[Tuple[bool, ...], ...]
Point = Tuple[int, int]  # (row, col)


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


class Rotation(str, Enum):
    """Direction of a rotation request."""

    LEFT = "left"
    RIGHT = "right"
    DOUBLE = "double"


def _parse(rows: List[str]) -> Shape:
    return tuple(tuple(ch == "#" for ch in row) for row in rows)


# Spawn orientation of every piece.  Matrices are square so that rotations
# stay inside the same bounding box.
_BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _parse(["....", "####", "....", "...."]),
    TetrominoType.O: _parse(["##", "##"]),
    TetrominoType.T: _parse([".#.", "###", "..."]),
    TetrominoType.S: _parse([".##", "##.", "..."]),
    TetrominoType.Z: _parse(["##.", ".##", "..."]),
    TetrominoType.J: _parse(["#..", "###", "..."]),
    TetrominoType.L: _parse(["..#", "###", "..."]),
}

# Local (row, col) used as the rotation and placement origin.
_PIVOTS: Dict[TetrominoType, Point] = {
    TetrominoType.I: (1, 1),
    TetrominoType.O: (0, 0),
    TetrominoType.T: (1, 1),
    TetrominoType.S: (1, 1),
    TetrominoType.Z: (1, 1),
    TetrominoType.J: (1, 1),
    TetrominoType.L: (1, 1),
}

SPAWN_COLUMN = 4

# Anchor rows put the top occupied row of every piece on board row 0.
_SPAWN_ROWS: Dict[TetrominoType, int] = {
    TetrominoType.I: 0,
    TetrominoType.O: 0,
    TetrominoType.T: 1,
    TetrominoType.S: 1,
    TetrominoType.Z: 1,
    TetrominoType.J: 1,
    TetrominoType.L: 1,
}


def _transpose(matrix: Shape) -> Shape:
    return tuple(zip(*matrix))


def rotate_matrix(matrix: Shape, direction: Rotation) -> Shape:
    """Return ``matrix`` rotated in ``direction``.

    ``LEFT`` transposes and then reverses the row order (counter-clockwise as
    drawn with row 0 at the top), ``RIGHT`` transposes and reverses every row
    (clockwise) and ``DOUBLE`` reverses both axes, a half turn.
    """

    if direction is Rotation.LEFT:
        return _transpose(matrix)[::-1]
    if direction is Rotation.RIGHT:
        return tuple(row[::-1] for row in _transpose(matrix))
    if direction is Rotation.DOUBLE:
        return tuple(row[::-1] for row in matrix[::-1])
    raise ValueError(f"Unknown rotation: {direction!r}")


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    matrix: Shape
    pivot: Point
    position: Point  # (row, col)

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy shifted by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        return replace(self, position=(row + dy, col + dx))

    def rotated(self, direction: Rotation) -> "Tetromino":
        """Return a copy with the matrix rotated; pivot and anchor stay put."""

        return replace(self, matrix=rotate_matrix(self.matrix, direction))

    def blocks(self) -> List[Point]:
        """Return the absolute ``(row, col)`` of every occupied cell."""

        row, col = self.position
        pivot_row, pivot_col = self.pivot
        return [
            (row + local_row - pivot_row, col + local_col - pivot_col)
            for local_row, cells in enumerate(self.matrix)
            for local_col, filled in enumerate(cells)
            if filled
        ]

    def covers(self, row: int, col: int) -> bool:
        """Return ``True`` if the piece occupies board cell ``(row, col)``.

        The board coordinate is mapped back into the piece's local matrix and
        checked against the matrix extent, not the board's.
        """

        local_row = row - self.position[0] + self.pivot[0]
        local_col = col - self.position[1] + self.pivot[1]
        if 0 <= local_row < len(self.matrix):
            cells = self.matrix[local_row]
            if 0 <= local_col < len(cells):
                return cells[local_col]
        return False


def spawn_tetromino(shape: TetrominoType) -> Tetromino:
    """Return ``shape`` in its spawn orientation at its spawn anchor."""

    return Tetromino(
        shape=shape,
        matrix=_BASE_SHAPES[shape],
        pivot=_PIVOTS[shape],
        position=(_SPAWN_ROWS[shape], SPAWN_COLUMN),
    )


def translate(piece: Tetromino, dx: int, dy: int) -> Tetromino:
    return piece.moved(dx, dy)


def rotate(piece: Tetromino, direction: Rotation) -> Tetromino:
    return piece.rotated(direction)


def occupied_cells(piece: Tetromino) -> set[Point]:
    return set(piece.blocks())
