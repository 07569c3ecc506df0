"""Game engine for a terminal falling-block puzzle."""

from .board import Board
from .tetromino import (
    Rotation,
    Tetromino,
    TetrominoType,
    occupied_cells,
    rotate,
    spawn_tetromino,
    translate,
)
from .bag import PieceBag, new_bag
from .game_state import Action, GameState, Snapshot
from .utils import can_move, overlaps, render_grid

__all__ = [
    "Action",
    "Board",
    "GameState",
    "PieceBag",
    "Rotation",
    "Snapshot",
    "Tetromino",
    "TetrominoType",
    "can_move",
    "new_bag",
    "occupied_cells",
    "overlaps",
    "render_grid",
    "rotate",
    "spawn_tetromino",
    "translate",
]
