"""Interactive file selector with a live diff preview.

The selector is split in three:

- ``FileSelector`` holds all state and exposes one transition per user
  action plus ``handle_key`` which maps key names onto them. It never
  touches git or curses, so it can be driven directly from tests.
- ``DiffLoader`` runs diff loads on a worker pool and posts ``DiffLoaded``
  events back to the UI loop through a queue.
- ``run_file_selector`` is the curses loop: it polls keys with a short
  timeout, drains finished loads between keys, and redraws.

A ``DiffLoaded`` event carries the cursor index it was requested for and is
dropped if the cursor has since moved elsewhere, so a slow load for a file
the user already scrolled past can't replace the diff on screen.
"""

import curses
import queue
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from commet.git.diff import classify_diff_line, split_diff_lines
from commet.git.repo import GitRepo
from commet.ui import terminal
from commet.ui.terminal import put


class FileStatus(Enum):
    STAGED = "staged"
    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"


STATUS_MARKERS = {
    FileStatus.STAGED: ("●", terminal.STAGED),
    FileStatus.UNSTAGED: ("◯", terminal.UNSTAGED),
    FileStatus.UNTRACKED: ("✦", terminal.UNTRACKED),
}


@dataclass(frozen=True)
class FileEntry:
    path: str
    status: FileStatus


@dataclass
class SelectionResult:
    """Files to commit, and previously staged files the user deselected."""
    selected: list[str]
    to_unstage: list[str]


@dataclass(frozen=True)
class DiffLoaded:
    """Completion event for a background diff load."""
    index: int
    path: str
    text: str


class SelectorAction(Enum):
    CONTINUE = "continue"
    LOAD_DIFF = "load_diff"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class NoChangesError(Exception):
    """Raised when there is nothing to select from."""
    pass


class FileSelector:
    """State machine behind the file picker."""

    # Rows taken by borders, headers and the scroll indicator
    CHROME_LINES = 8
    LIST_WIDTH = 40

    def __init__(
        self,
        files: list[str],
        staged_files: list[str],
        unstaged_files: list[str],
        untracked_files: list[str],
        height: int = 24,
    ):
        if not files:
            raise NoChangesError("no files with changes")

        staged = set(staged_files)
        unstaged = set(unstaged_files)
        untracked = set(untracked_files)

        self.entries: list[FileEntry] = []
        self.selected: dict[int, bool] = {}
        self.initially_staged: set[str] = set()

        for i, path in enumerate(files):
            if path in staged:
                status = FileStatus.STAGED
                self.initially_staged.add(path)
            elif path in unstaged:
                status = FileStatus.UNSTAGED
            elif path in untracked:
                status = FileStatus.UNTRACKED
            else:
                # Not reported by any listing; treat as a working-tree change
                status = FileStatus.UNSTAGED
            self.entries.append(FileEntry(path=path, status=status))
            self.selected[i] = status is FileStatus.STAGED

        self.cursor = 0
        self.height = height
        self.diff_lines: list[str] = []
        self.diff_scroll = 0
        self.loading = True
        self.finished = False
        self.cancelled = False

    @property
    def current_entry(self) -> FileEntry:
        return self.entries[self.cursor]

    # Navigation and selection

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor, clamped to the list. Returns True if it moved."""
        target = max(0, min(len(self.entries) - 1, self.cursor + delta))
        if target == self.cursor:
            return False
        self.cursor = target
        self.loading = True
        return True

    def toggle(self) -> None:
        self.selected[self.cursor] = not self.selected[self.cursor]

    def confirm(self) -> SelectionResult:
        if not any(self.selected.values()):
            self.selected[self.cursor] = True
        self.finished = True
        return self.result()

    def cancel(self) -> None:
        self.finished = True
        self.cancelled = True

    # Diff viewport

    @property
    def page_height(self) -> int:
        return max(1, self.height - self.CHROME_LINES)

    @property
    def max_scroll(self) -> int:
        return max(0, len(self.diff_lines) - self.page_height)

    def scroll_diff(self, delta: int) -> None:
        self.diff_scroll = max(0, min(self.max_scroll, self.diff_scroll + delta))

    def set_height(self, height: int) -> None:
        self.height = height
        self.diff_scroll = min(self.diff_scroll, self.max_scroll)

    def apply_diff(self, event: DiffLoaded) -> bool:
        """Install a finished load if it is for the file under the cursor."""
        if event.index != self.cursor:
            return False
        self.diff_lines = split_diff_lines(event.text)
        self.diff_scroll = 0
        self.loading = False
        return True

    def visible_diff_lines(self) -> list[str]:
        return self.diff_lines[self.diff_scroll:self.diff_scroll + self.page_height]

    # Results

    def selected_files(self) -> list[str]:
        return [entry.path for i, entry in enumerate(self.entries) if self.selected.get(i)]

    def files_to_unstage(self) -> list[str]:
        return [
            entry.path
            for i, entry in enumerate(self.entries)
            if entry.path in self.initially_staged and not self.selected.get(i)
        ]

    def result(self) -> SelectionResult:
        return SelectionResult(selected=self.selected_files(), to_unstage=self.files_to_unstage())

    def handle_key(self, key: str | None) -> SelectorAction:
        if key in ("q", "esc", "ctrl+c"):
            self.cancel()
            return SelectorAction.CANCELLED
        if key in ("up", "k"):
            return SelectorAction.LOAD_DIFF if self.move_cursor(-1) else SelectorAction.CONTINUE
        if key in ("down", "j"):
            return SelectorAction.LOAD_DIFF if self.move_cursor(1) else SelectorAction.CONTINUE
        if key == "space":
            self.toggle()
        elif key == "enter":
            self.confirm()
            return SelectorAction.CONFIRMED
        elif key in ("left", "h"):
            self.scroll_diff(-1)
        elif key in ("right", "l"):
            self.scroll_diff(1)
        elif key == "pgup":
            self.scroll_diff(-self.page_height)
        elif key == "pgdown":
            self.scroll_diff(self.page_height)
        return SelectorAction.CONTINUE


def load_entry_diff(repo: GitRepo, entry: FileEntry) -> str:
    """Pick the diff source by status: index, working tree, or whole file."""
    if entry.status is FileStatus.STAGED:
        return repo.file_diff(entry.path, staged=True)
    if entry.status is FileStatus.UNTRACKED:
        return repo.untracked_diff(entry.path)
    return repo.file_diff(entry.path, staged=False)


class DiffLoader:
    """Loads diffs off the UI thread and queues DiffLoaded events."""

    def __init__(self, load: Callable[[FileEntry], str], max_workers: int = 2):
        self._load = load
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="commet-diff")
        self._events: queue.Queue = queue.Queue()

    def request(self, index: int, entry: FileEntry) -> Future:
        return self._executor.submit(self._run, index, entry)

    def _run(self, index: int, entry: FileEntry) -> None:
        try:
            text = self._load(entry)
        except Exception as e:
            # Worker boundary: a failed load is shown in place of the diff
            text = f"Error loading diff: {e}"
        self._events.put(DiffLoaded(index=index, path=entry.path, text=text))

    def poll(self, timeout: float | None = None) -> list[DiffLoaded]:
        """Collect finished loads. Waits up to timeout for the first one."""
        events = []
        try:
            if timeout is None:
                events.append(self._events.get_nowait())
            else:
                events.append(self._events.get(timeout=timeout))
            while True:
                events.append(self._events.get_nowait())
        except queue.Empty:
            pass
        return events

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def run_file_selector(selector: FileSelector, loader: DiffLoader) -> SelectionResult | None:
    """Run the picker. Returns None if the user quit.

    Controls:
    - ↑/↓ or j/k: navigate (loads that file's diff)
    - Space: toggle selection
    - ←/→ or h/l, PgUp/PgDn: scroll the diff
    - Enter: confirm
    - q/Esc: quit
    """

    def _curses_main(stdscr) -> SelectionResult | None:
        curses.curs_set(0)
        terminal.init_colors()
        stdscr.keypad(True)
        stdscr.timeout(terminal.POLL_MS)

        selector.set_height(stdscr.getmaxyx()[0])
        loader.request(selector.cursor, selector.current_entry)

        while True:
            for event in loader.poll():
                selector.apply_diff(event)

            _render(stdscr, selector)

            code = stdscr.getch()
            if code == -1:
                continue
            key = terminal.key_name(code)
            if key == "resize":
                selector.set_height(stdscr.getmaxyx()[0])
                continue

            action = selector.handle_key(key)
            if action is SelectorAction.LOAD_DIFF:
                loader.request(selector.cursor, selector.current_entry)
            elif action is SelectorAction.CONFIRMED:
                return selector.result()
            elif action is SelectorAction.CANCELLED:
                return None

    try:
        return curses.wrapper(_curses_main)
    except KeyboardInterrupt:
        selector.cancel()
        return None


def _render(stdscr, selector: FileSelector) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()

    if height < 10 or width < 60:
        put(stdscr, 0, 0, "Terminal too small")
        stdscr.refresh()
        return

    list_width = min(selector.LIST_WIDTH, width // 2)
    _render_file_list(stdscr, selector, list_width, height)
    _render_diff(stdscr, selector, list_width + 2, width - list_width - 2, height)
    stdscr.refresh()


def _render_file_list(stdscr, selector: FileSelector, width: int, height: int) -> None:
    header_attr = curses.color_pair(terminal.HEADER) | curses.A_BOLD
    dim_attr = curses.color_pair(terminal.DIM) | curses.A_DIM
    put(stdscr, 0, 0, "+- Files to commit " + "-" * max(0, width - 21) + "+", header_attr)

    help_rows = ["Space select  Enter confirm", "h/l scroll diff  q quit", "● staged ◯ modified ✦ new"]
    list_rows = max(1, height - len(help_rows) - 3)

    # Keep the cursor on screen for long lists
    first = max(0, selector.cursor - list_rows + 1)
    for row, i in enumerate(range(first, min(len(selector.entries), first + list_rows)), start=2):
        entry = selector.entries[i]
        pointer = "❯" if i == selector.cursor else " "
        checkbox = "[x]" if selector.selected.get(i) else "[ ]"
        marker, pair = STATUS_MARKERS[entry.status]

        line_attr = 0
        if i == selector.cursor:
            line_attr = curses.color_pair(terminal.CURSOR) | curses.A_BOLD
        elif selector.selected.get(i):
            line_attr = curses.color_pair(terminal.SELECTED)

        put(stdscr, row, 0, f"{pointer} {checkbox} ", line_attr)
        put(stdscr, row, 6, marker, curses.color_pair(pair) | curses.A_BOLD)
        put(stdscr, row, 8, entry.path[: max(0, width - 9)], line_attr)

    for offset, text in enumerate(help_rows):
        put(stdscr, height - len(help_rows) - 1 + offset, 0, text[:width], dim_attr)


def _render_diff(stdscr, selector: FileSelector, col: int, width: int, height: int) -> None:
    header_attr = curses.color_pair(terminal.HEADER) | curses.A_BOLD
    dim_attr = curses.color_pair(terminal.DIM) | curses.A_DIM
    title = f" {selector.current_entry.path} "
    put(stdscr, 0, col, "+-" + title[: max(0, width - 4)] + "-" * max(0, width - len(title) - 4) + "+", header_attr)

    if selector.loading:
        put(stdscr, 2, col, "Loading diff...", dim_attr)
        return
    if not selector.diff_lines:
        put(stdscr, 2, col, "No changes to display", dim_attr)
        return

    for row, line in enumerate(selector.visible_diff_lines(), start=2):
        pair = terminal.DIFF_PAIRS.get(classify_diff_line(line))
        attr = curses.color_pair(pair) if pair else 0
        put(stdscr, row, col, line.expandtabs(4)[:width], attr)

    total = len(selector.diff_lines)
    if total > selector.page_height:
        start = selector.diff_scroll + 1
        end = min(total, selector.diff_scroll + selector.page_height)
        put(stdscr, height - 2, col, f"[{start}-{end} of {total} lines] h/l: scroll", dim_attr)
