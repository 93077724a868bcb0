"""Curses glue shared by the interactive screens."""

import curses

from commet.git.diff import DiffLineKind

# Color pair ids
HEADER = 1
CURSOR = 2
SELECTED = 3
DIM = 4
ADDED = 5
REMOVED = 6
HUNK = 7
STAGED = 8
UNSTAGED = 9
UNTRACKED = 10

DIFF_PAIRS = {
    DiffLineKind.ADDED: ADDED,
    DiffLineKind.REMOVED: REMOVED,
    DiffLineKind.HUNK: HUNK,
}

# Poll interval so background events are drained between keystrokes
POLL_MS = 50


def init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(HEADER, curses.COLOR_CYAN, -1)
    curses.init_pair(CURSOR, curses.COLOR_YELLOW, -1)
    curses.init_pair(SELECTED, curses.COLOR_GREEN, -1)
    curses.init_pair(DIM, curses.COLOR_WHITE, -1)
    curses.init_pair(ADDED, curses.COLOR_GREEN, -1)
    curses.init_pair(REMOVED, curses.COLOR_RED, -1)
    curses.init_pair(HUNK, curses.COLOR_CYAN, -1)
    curses.init_pair(STAGED, curses.COLOR_GREEN, -1)
    curses.init_pair(UNSTAGED, curses.COLOR_YELLOW, -1)
    curses.init_pair(UNTRACKED, curses.COLOR_BLUE, -1)


_NAMED_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdown",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_RESIZE: "resize",
    10: "enter",
    13: "enter",
    27: "esc",
    32: "space",
    127: "backspace",
    8: "backspace",
    3: "ctrl+c",
    21: "ctrl+u",
    22: "ctrl+v",
}


def key_name(code: int) -> str | None:
    """Translate a curses key code into the names the state machines use."""
    if code in _NAMED_KEYS:
        return _NAMED_KEYS[code]
    if 32 < code <= 126:
        return chr(code)
    return None


def put(stdscr, row: int, col: int, text: str, attr: int = 0) -> None:
    """addstr clipped to the window; curses raises when writing the last cell."""
    height, width = stdscr.getmaxyx()
    if row < 0 or row >= height or col >= width:
        return
    text = text[: max(0, width - col - 1)]
    try:
        stdscr.addstr(row, col, text, attr)
    except curses.error:
        pass
