from __future__ import annotations

import curses

import pytest

from termtris import __main__ as cli
from termtris.bag import PieceBag
from termtris.game_state import Action, GameState
from termtris.run_terminal import (
    CTRL_C,
    FRAME_MS,
    controls_screen,
    draw_lines,
    format_frame,
    game_screen,
    key_to_action,
    title_screen,
)
from termtris.tetromino import TetrominoType

ENTER = 10


class FakeScreen:
    """Minimal stand-in for a curses window."""

    def __init__(self, keys, size=(40, 100)) -> None:
        self.keys = list(keys)
        self.size = size
        self.frames: list[list[str]] = []
        self.timeouts: list[int] = []
        self._lines: list[str] = []

    def erase(self) -> None:
        self._lines = []

    def addstr(self, y: int, x: int, text: str) -> None:
        self._lines.append(text)

    def refresh(self) -> None:
        self.frames.append(list(self._lines))

    def getmaxyx(self):
        return self.size

    def timeout(self, ms: int) -> None:
        self.timeouts.append(ms)

    def getch(self) -> int:
        if not self.keys:
            raise AssertionError("ran out of scripted keys")
        return self.keys.pop(0)


def _game(*kinds: TetrominoType) -> GameState:
    bag = PieceBag(seed=4)
    bag.current = tuple(kinds) + tuple(k for k in bag.current if k not in kinds)
    state = GameState()
    state.reset_game(bag)
    return state


def test_key_bindings() -> None:
    assert key_to_action(ord("a")) is Action.MOVE_LEFT
    assert key_to_action(ord(" ")) is Action.HARD_DROP
    assert key_to_action(ord(";")) is Action.HOLD
    assert key_to_action(CTRL_C) is Action.QUIT
    assert key_to_action(-1) is None
    assert key_to_action(ord("x")) is None


def test_format_frame_layout() -> None:
    state = _game(TetrominoType.I, TetrominoType.O, TetrominoType.T)
    lines = format_frame(state.snapshot())

    assert len(lines) == 20
    assert lines[0].startswith("| | | |I|I|I|I| | | |")
    preview = " ".join(k.value for k in state.bag.peek(5))
    assert lines[0].endswith(f" Next: {preview}")
    assert preview.startswith("O T")
    assert lines[1] == "| | | | | | | | | | |"
    assert lines[2].endswith(" Held: None, Can hold: true")
    assert lines[4].endswith(" Lines cleared: 0")
    assert "Game over" not in lines[6]


def test_format_frame_after_hold_and_game_over() -> None:
    state = _game(TetrominoType.I, TetrominoType.O)
    state.swap_hold()
    state.quit()
    lines = format_frame(state.snapshot())
    assert lines[2].endswith(" Held: I, Can hold: false")
    assert lines[6].endswith(" Game over! Press enter to continue.")


def test_title_menu_navigation() -> None:
    assert title_screen(FakeScreen([ENTER])) == "Start"
    assert title_screen(FakeScreen([ord("d"), ENTER])) == "Controls"
    assert title_screen(FakeScreen([ord("a"), ENTER])) == "Exit"
    assert title_screen(FakeScreen([ord("d"), ord("d"), ord("d"), ENTER])) == "Start"
    assert title_screen(FakeScreen([CTRL_C])) == "Exit"


def test_title_menu_highlights_selection() -> None:
    screen = FakeScreen([ord("d"), ENTER])
    title_screen(screen)
    assert screen.frames[0][-1] == "[Start] Controls Exit"
    assert screen.frames[1][-1] == "Start [Controls] Exit"


def test_controls_screen_returns_on_any_key() -> None:
    screen = FakeScreen([ord("z")])
    controls_screen(screen)
    assert not screen.keys
    assert any("hold piece" in line for line in screen.frames[0])


def test_game_screen_plays_until_quit_and_enter() -> None:
    state = _game(TetrominoType.T, TetrominoType.O)
    screen = FakeScreen([ord("d"), -1, ord(" "), CTRL_C, ord("x"), ENTER])

    game_screen(screen, state)

    assert state.game_over
    assert state.board.cell_kind(19, 5) == TetrominoType.T
    assert screen.timeouts[0] == FRAME_MS
    assert screen.frames[-1][6].endswith("Game over! Press enter to continue.")
    assert not screen.keys


def test_draw_lines_tolerates_small_terminal() -> None:
    class TinyScreen(FakeScreen):
        def addstr(self, y: int, x: int, text: str) -> None:
            if y >= 2:
                raise curses.error("too small")
            super().addstr(y, x, text)

    screen = TinyScreen([], size=(3, 5))
    draw_lines(screen, ["abcdefgh", "ij", "kl", "mn"])
    assert screen.frames == [["abcd", "ij"]]


def test_cli_runs_wrapper_with_seed(monkeypatch) -> None:
    calls = []

    def fake_wrapper(func, *args, **kwargs):
        calls.append((func, args, kwargs))

    monkeypatch.setattr(cli.curses, "wrapper", fake_wrapper)
    cli.main(["--seed", "12"])

    assert calls == [(cli.run, (), {"seed": 12})]


def test_cli_swallows_keyboard_interrupt(monkeypatch) -> None:
    def interrupted(*_args, **_kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.curses, "wrapper", interrupted)
    cli.main([])


def test_cli_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--log-level", "LOUD"])
