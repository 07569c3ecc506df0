"""Curses front-end for the Tetris engine.

The engine in :mod:`termtris.game_state` performs no I/O; this module owns the
terminal.  It shows a title menu, a controls screen and the game screen,
polls at most one key per frame and turns it into an :class:`Action`.
"""

from __future__ import annotations

import curses
import logging
import random
from typing import Dict, List, Optional, Sequence

from .bag import PieceBag
from .game_state import TICK_RATE, Action, GameState, Snapshot

LOGGER = logging.getLogger(__name__)

# Milliseconds ``getch`` waits for a key before the next frame runs.
FRAME_MS = 1000 // TICK_RATE

CTRL_C = 3
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)

KEY_BINDINGS: Dict[int, Action] = {
    ord("a"): Action.MOVE_LEFT,
    ord("d"): Action.MOVE_RIGHT,
    ord("s"): Action.SOFT_DROP,
    ord("q"): Action.HARD_LEFT,
    ord("e"): Action.HARD_RIGHT,
    ord(" "): Action.HARD_DROP,
    ord("j"): Action.ROTATE_LEFT,
    ord("k"): Action.ROTATE_RIGHT,
    ord("l"): Action.ROTATE_DOUBLE,
    ord(";"): Action.HOLD,
    CTRL_C: Action.QUIT,
}

CONTROLS_HELP = [
    "a:\tsoft move left",
    "d:\tsoft move right",
    "q:\thard left",
    "e:\thard right",
    "s:\tsoft drop",
    "space:\thard drop",
    "j:\trotate left",
    "k:\trotate right",
    "l:\trotate twice",
    ";:\thold piece",
    "",
    "ctrl+c ends the game or leaves the menu.",
]

TITLE_BANNER = [
    " _                      _        _     ",
    "| |_ ___ _ __ _ __ ___ | |_ _ __(_)___ ",
    "| __/ _ \\ '__| '_ ` _ \\| __| '__| / __|",
    "| ||  __/ |  | | | | | | |_| |  | \\__ \\",
    " \\__\\___|_|  |_| |_| |_|\\__|_|  |_|___/",
]

MENU_OPTIONS = ("Start", "Controls", "Exit")


def key_to_action(key: int) -> Optional[Action]:
    """Map a ``getch`` result to an action; ``-1`` and unbound keys map to ``None``."""

    return KEY_BINDINGS.get(key)


def format_frame(snapshot: Snapshot) -> List[str]:
    """Lay out one frame of the game screen as text lines.

    Each board row is drawn as ``|c|c|...|``; the side panel shares lines 0,
    2, 4 and 6 with the board.
    """

    lines = ["|" + "|".join(row) + "|" for row in snapshot.cells]
    preview = " ".join(kind.value for kind in snapshot.next_pieces)
    held = snapshot.held.value if snapshot.held is not None else "None"
    lines[0] += f" Next: {preview}"
    lines[2] += f" Held: {held}, Can hold: {str(snapshot.can_hold).lower()}"
    lines[4] += f" Lines cleared: {snapshot.lines_cleared}"
    if snapshot.game_over:
        lines[6] += " Game over! Press enter to continue."
    return lines


def format_menu(selected: int) -> str:
    return " ".join(
        f"[{name}]" if i == selected else name for i, name in enumerate(MENU_OPTIONS)
    )


def draw_lines(stdscr, lines: Sequence[str]) -> None:
    """Replace the screen contents with ``lines``.

    Lines that do not fit the window are cut off rather than aborting the
    frame.
    """

    stdscr.erase()
    height, width = stdscr.getmaxyx()
    for y, line in enumerate(lines[:height]):
        try:
            stdscr.addstr(y, 0, line.expandtabs(8)[: max(width - 1, 0)])
        except curses.error:
            LOGGER.debug("Line %d did not fit the terminal", y)
    stdscr.refresh()


def title_screen(stdscr) -> str:
    """Run the title menu and return the chosen option."""

    stdscr.timeout(-1)
    selected = 0
    while True:
        draw_lines(
            stdscr,
            TITLE_BANNER
            + [
                "",
                "Tetris in the terminal.",
                "Use a/d/enter to navigate menus.",
                "",
                format_menu(selected),
            ],
        )
        key = stdscr.getch()
        if key == CTRL_C:
            return "Exit"
        if key == ord("a"):
            selected = (selected - 1) % len(MENU_OPTIONS)
        elif key == ord("d"):
            selected = (selected + 1) % len(MENU_OPTIONS)
        elif key in ENTER_KEYS:
            return MENU_OPTIONS[selected]


def controls_screen(stdscr) -> None:
    """Show the key bindings until any key is pressed."""

    stdscr.timeout(-1)
    draw_lines(stdscr, ["Controls", "(press any key to leave)", ""] + CONTROLS_HELP)
    stdscr.getch()


def game_screen(stdscr, state: GameState) -> GameState:
    """Play one game on ``state`` until it is over and Enter is pressed."""

    LOGGER.info("Game started")
    stdscr.timeout(FRAME_MS)
    while True:
        snapshot = state.snapshot()
        draw_lines(stdscr, format_frame(snapshot))
        if snapshot.game_over:
            break
        state.tick(key_to_action(stdscr.getch()))

    stdscr.timeout(-1)
    while stdscr.getch() not in ENTER_KEYS:
        pass
    LOGGER.info("Game finished with %d lines cleared", state.lines_cleared)
    return state


def run(stdscr, seed: Optional[int] = None) -> None:
    """Entry point for :func:`curses.wrapper`."""

    try:
        curses.curs_set(0)
    except curses.error:
        LOGGER.debug("Terminal cannot hide the cursor")
    curses.raw()
    stdscr.keypad(True)

    rng = random.Random(seed)
    while True:
        choice = title_screen(stdscr)
        if choice == "Start":
            state = GameState()
            state.reset_game(PieceBag(rng=rng))
            game_screen(stdscr, state)
        elif choice == "Controls":
            controls_screen(stdscr)
        else:
            break


__all__ = [
    "KEY_BINDINGS",
    "controls_screen",
    "format_frame",
    "game_screen",
    "key_to_action",
    "run",
    "title_screen",
]
