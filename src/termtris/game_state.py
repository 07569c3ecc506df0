"""High level game state container and per-tick update logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
import logging

from .bag import PieceBag
from .board import Board
from .tetromino import Rotation, Tetromino, TetrominoType, spawn_tetromino
from .utils import cell_symbol, overlaps, render_grid

LOGGER = logging.getLogger(__name__)

# Updates per second the front-end aims for.
TICK_RATE = 60
# Ticks between automatic downward moves (one second at ``TICK_RATE``).
GRAVITY_TICKS = 60
# Length of the upcoming-piece preview.
NEXT_PREVIEW = 5


class Action(str, Enum):
    """Logical inputs understood by :meth:`GameState.apply`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_LEFT = "hard_left"
    HARD_RIGHT = "hard_right"
    HARD_DROP = "hard_drop"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    ROTATE_DOUBLE = "rotate_double"
    HOLD = "hold"
    QUIT = "quit"


_ROTATIONS = {
    Action.ROTATE_LEFT: Rotation.LEFT,
    Action.ROTATE_RIGHT: Rotation.RIGHT,
    Action.ROTATE_DOUBLE: Rotation.DOUBLE,
}


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a game for renderers."""

    cells: Tuple[Tuple[str, ...], ...]
    next_pieces: Tuple[TetrominoType, ...]
    held: Optional[TetrominoType]
    can_hold: bool
    lines_cleared: int
    game_over: bool


@dataclass
class GameState:
    """Mutable state for a Tetris game session."""

    board: Board = field(default_factory=Board)
    bag: PieceBag = field(default_factory=PieceBag)
    active: Optional[Tetromino] = None
    held: Optional[TetrominoType] = None
    can_hold: bool = True
    lines_cleared: int = 0
    game_over: bool = False
    gravity_timer: int = GRAVITY_TICKS

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _place_spawned(self, shape: TetrominoType) -> Tetromino:
        """Make a freshly spawned ``shape`` active, ending the game if blocked.

        The blocked piece still becomes active so the final frame shows it.
        """

        piece = spawn_tetromino(shape)
        if overlaps(self.board, piece):
            self.game_over = True
            LOGGER.info(
                "Game over: %s blocked at spawn (%d lines cleared)",
                shape.value,
                self.lines_cleared,
            )
        self.active = piece
        return piece

    def next_piece(self) -> Tetromino:
        """Deal the next piece from the bag and make it active.

        A natural spawn always allows a hold again.
        """

        shape = self.bag.deal()
        self.can_hold = True
        LOGGER.debug("Spawned %s", shape.value)
        return self._place_spawned(shape)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def _commit(self, candidate: Tetromino) -> bool:
        if overlaps(self.board, candidate):
            return False
        self.active = candidate
        return True

    def try_move(self, dx: int, dy: int) -> bool:
        """Move the active piece if the destination is legal."""

        if self.game_over or self.active is None:
            return False
        return self._commit(self.active.moved(dx, dy))

    def try_rotate(self, direction: Rotation) -> bool:
        """Rotate the active piece in place if the result is legal.

        No kicks are attempted; a blocked rotation is simply ignored.
        """

        if self.game_over or self.active is None:
            return False
        return self._commit(self.active.rotated(direction))

    def hard_shift(self, dx: int) -> int:
        """Slide the piece sideways until it hits a wall or block."""

        moved = 0
        while self.try_move(dx, 0):
            moved += 1
        return moved

    def hard_drop(self) -> int:
        """Drop the piece to its lowest legal row and lock it immediately.

        Returns the number of rows fallen.  The gravity countdown restarts.
        """

        if self.game_over or self.active is None:
            return 0
        dropped = 0
        while self.try_move(0, 1):
            dropped += 1
        self.lock_active()
        self.gravity_timer = GRAVITY_TICKS
        return dropped

    # ------------------------------------------------------------------
    # Locking and line clears
    # ------------------------------------------------------------------
    def lock_active(self) -> None:
        """Lock the active piece, clear rows and spawn the next piece."""

        if self.game_over or self.active is None:
            return
        piece = self.active
        self.board.lock_piece(piece)
        LOGGER.debug("Locked %s at %s", piece.shape.value, piece.position)
        self.active = None
        self.clear_full_rows()
        self.next_piece()

    def clear_row(self, row: int) -> None:
        """Clear a single ``row`` and count it."""

        self.board.clear_row(row)
        self.lines_cleared += 1

    def clear_full_rows(self) -> int:
        """Clear every full row and add them to the line counter."""

        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines_cleared += cleared
            LOGGER.info(
                "Cleared %d row(s). Lines cleared: %d", cleared, self.lines_cleared
            )
        return cleared

    # ------------------------------------------------------------------
    # Hold
    # ------------------------------------------------------------------
    def swap_hold(self) -> bool:
        """Swap the active piece with the held one.

        The swap may only happen once per spawned piece; additional calls are
        ignored until another piece is dealt from the bag.  With an empty hold
        slot the next bag piece comes in instead, without re-enabling hold.
        """

        if self.game_over or self.active is None or not self.can_hold:
            return False

        previous = self.held
        self.held = self.active.shape
        self.can_hold = False
        if previous is None:
            shape = self.bag.deal()
        else:
            shape = previous
        LOGGER.debug("Held %s, now playing %s", self.held.value, shape.value)
        self._place_spawned(shape)
        return True

    # ------------------------------------------------------------------
    # Game loop
    # ------------------------------------------------------------------
    def quit(self) -> None:
        """End the session immediately."""

        if not self.game_over:
            LOGGER.info("Game quit (%d lines cleared)", self.lines_cleared)
        self.game_over = True

    def apply(self, action: Optional[Action]) -> None:
        """Apply a single player action.  ``None`` means no input this tick."""

        if action is None or self.game_over:
            return
        if action is Action.MOVE_LEFT:
            self.try_move(-1, 0)
        elif action is Action.MOVE_RIGHT:
            self.try_move(1, 0)
        elif action is Action.SOFT_DROP:
            self.try_move(0, 1)
        elif action is Action.HARD_LEFT:
            self.hard_shift(-1)
        elif action is Action.HARD_RIGHT:
            self.hard_shift(1)
        elif action is Action.HARD_DROP:
            self.hard_drop()
        elif action in _ROTATIONS:
            self.try_rotate(_ROTATIONS[action])
        elif action is Action.HOLD:
            self.swap_hold()
        elif action is Action.QUIT:
            self.quit()
        else:
            raise ValueError(f"Unknown action: {action!r}")

    def apply_gravity(self) -> None:
        """Count down one tick and drop the piece a row when the timer fires."""

        if self.gravity_timer <= 0:
            self.gravity_timer = GRAVITY_TICKS
            if not self.try_move(0, 1):
                self.lock_active()
        else:
            self.gravity_timer -= 1

    def tick(self, action: Optional[Action] = None) -> None:
        """Advance the game by one frame.

        Spawns a piece when none is active, clears any full rows, runs the
        gravity countdown and finally applies at most one player action.
        Nothing changes once the game is over.
        """

        if self.game_over:
            return
        if self.active is None:
            self.next_piece()
            if self.game_over:
                return
        self.clear_full_rows()
        self.apply_gravity()
        self.apply(action)

    def reset_game(self, bag: Optional[PieceBag] = None) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.bag = bag or PieceBag()
        self.active = None
        self.held = None
        self.can_hold = True
        self.lines_cleared = 0
        self.game_over = False
        self.gravity_timer = GRAVITY_TICKS
        self.next_piece()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> Snapshot:
        """Return a render-ready view of the current state."""

        grid = render_grid(self.board, self.active)
        return Snapshot(
            cells=tuple(tuple(cell_symbol(v) for v in row) for row in grid),
            next_pieces=tuple(self.bag.peek(NEXT_PREVIEW)),
            held=self.held,
            can_hold=self.can_hold,
            lines_cleared=self.lines_cleared,
            game_over=self.game_over,
        )
