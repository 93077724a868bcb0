"""Menu-driven configuration editor."""

import curses
from enum import Enum
from typing import Callable

from commet import PROVIDER_NAMES
from commet.config import Config, ConfigError
from commet.ui import terminal
from commet.ui.terminal import put


class EditorState(Enum):
    MAIN_MENU = "main_menu"
    AI_SETTINGS = "ai_settings"
    GIT_SETTINGS = "git_settings"
    TEXT_ENTRY = "text_entry"
    MODEL_PICKER = "model_picker"
    CONFIRM_SAVE = "confirm_save"


class EditorAction(Enum):
    CONTINUE = "continue"
    QUIT = "quit"
    SAVED = "saved"


MAIN_ITEMS = ["AI Settings", "Git Settings", "Save & Exit"]

# (field name, label) in menu order
GIT_FIELDS = [
    ("auto_stage", "Auto Stage"),
    ("show_diff", "Show Diff"),
    ("confirm_push", "Confirm Push"),
    ("direct_commit", "Direct Commit"),
    ("interactive", "Interactive Mode"),
    ("use_ai", "Use AI"),
]

BACK = "← Back"
CUSTOM_MODEL = "Custom..."

AI_PROVIDER, AI_API_KEY, AI_MODEL, AI_BACK = range(4)


def _on_off(value: bool) -> str:
    return "✓ enabled" if value else "✗ disabled"


def clean_pasted_text(text: str) -> str:
    """Drop line breaks, tabs and anything outside printable ASCII."""
    return ''.join(ch for ch in text if ' ' <= ch <= '~')


class ConfigEditor:
    """State machine behind the configuration editor.

    Works on the Config it is given; nothing is written until the user
    confirms a save, which goes through the ``save`` callable.
    """

    def __init__(self, config: Config, save: Callable[[Config], object], paste: Callable[[], str] | None = None):
        self.config = config
        self._save = save
        self._paste = paste
        self.state = EditorState.MAIN_MENU
        self.previous_state = EditorState.MAIN_MENU
        self.cursor = 0
        self.dirty = False
        self.message = ""
        self.text_field = ""
        self.text_buffer = ""
        self.model_options: list[str] = []

    # Menu contents

    def menu_items(self) -> list[str]:
        if self.state is EditorState.MAIN_MENU:
            return list(MAIN_ITEMS)
        if self.state is EditorState.AI_SETTINGS:
            return [
                f"Provider: {self.config.ai.provider}",
                f"API Key: {self.config.ai.masked_api_key or '(not set)'}",
                f"Model: {self.display_model()}",
                BACK,
            ]
        if self.state is EditorState.GIT_SETTINGS:
            items = [f"{label}: {_on_off(getattr(self.config.git, name))}" for name, label in GIT_FIELDS]
            return items + [BACK]
        if self.state is EditorState.MODEL_PICKER:
            return self.model_options + [CUSTOM_MODEL]
        return []

    def display_model(self) -> str:
        if self.config.ai.model:
            return self.config.ai.model
        return f"{self.config.ai.default_model} (default)"

    def display_text(self) -> str:
        if self.text_field == "api_key":
            return "*" * len(self.text_buffer)
        return self.text_buffer

    # Transitions

    def handle_key(self, key: str | None) -> EditorAction:
        if key is None:
            return EditorAction.CONTINUE
        if key == "ctrl+c":
            return EditorAction.QUIT

        handler = {
            EditorState.MAIN_MENU: self._handle_main_menu,
            EditorState.AI_SETTINGS: self._handle_ai_settings,
            EditorState.GIT_SETTINGS: self._handle_git_settings,
            EditorState.TEXT_ENTRY: self._handle_text_entry,
            EditorState.MODEL_PICKER: self._handle_model_picker,
            EditorState.CONFIRM_SAVE: self._handle_confirm_save,
        }[self.state]
        return handler(key)

    def _move(self, key: str) -> bool:
        if key in ("up", "k"):
            self.cursor = max(0, self.cursor - 1)
            return True
        if key in ("down", "j"):
            self.cursor = min(len(self.menu_items()) - 1, self.cursor + 1)
            return True
        return False

    def _go(self, state: EditorState, cursor: int = 0) -> None:
        self.state = state
        self.cursor = cursor

    def _leave(self) -> EditorAction:
        if self.dirty:
            self._go(EditorState.CONFIRM_SAVE)
            return EditorAction.CONTINUE
        return EditorAction.QUIT

    def _mark_changed(self, message: str) -> None:
        self.dirty = True
        self.message = message

    def _handle_main_menu(self, key: str) -> EditorAction:
        if key in ("q", "esc"):
            return self._leave()
        if self._move(key):
            return EditorAction.CONTINUE
        if key == "enter":
            if self.cursor == 0:
                self._go(EditorState.AI_SETTINGS)
            elif self.cursor == 1:
                self._go(EditorState.GIT_SETTINGS)
            else:
                return self._leave()
        return EditorAction.CONTINUE

    def _handle_ai_settings(self, key: str) -> EditorAction:
        if key == "q":
            return self._leave()
        if key == "esc":
            self._go(EditorState.MAIN_MENU)
            return EditorAction.CONTINUE
        if self._move(key):
            return EditorAction.CONTINUE
        if key != "enter":
            return EditorAction.CONTINUE

        if self.cursor == AI_PROVIDER:
            self.cycle_provider()
        elif self.cursor == AI_API_KEY:
            self._open_text_entry("api_key", self.config.ai.api_key)
        elif self.cursor == AI_MODEL:
            self._open_model_picker()
        else:
            self._go(EditorState.MAIN_MENU)
        return EditorAction.CONTINUE

    def cycle_provider(self) -> None:
        current = self.config.ai.provider
        index = PROVIDER_NAMES.index(current) if current in PROVIDER_NAMES else -1
        self.config.ai.provider = PROVIDER_NAMES[(index + 1) % len(PROVIDER_NAMES)]
        self.config.ai.model = ""
        self._mark_changed(f"Provider changed to {self.config.ai.provider}")

    def _open_text_entry(self, field: str, initial: str) -> None:
        self.previous_state = self.state
        self.text_field = field
        self.text_buffer = initial
        self.state = EditorState.TEXT_ENTRY

    def _open_model_picker(self) -> None:
        self.model_options = self.config.ai.available_models
        current = self.config.ai.effective_model
        cursor = self.model_options.index(current) if current in self.model_options else 0
        self.previous_state = EditorState.AI_SETTINGS
        self._go(EditorState.MODEL_PICKER, cursor)

    def _handle_git_settings(self, key: str) -> EditorAction:
        if key == "q":
            return self._leave()
        if key == "esc":
            self._go(EditorState.MAIN_MENU, 1)
            return EditorAction.CONTINUE
        if self._move(key):
            return EditorAction.CONTINUE
        if key != "enter":
            return EditorAction.CONTINUE

        if self.cursor < len(GIT_FIELDS):
            name, label = GIT_FIELDS[self.cursor]
            value = not getattr(self.config.git, name)
            setattr(self.config.git, name, value)
            self._mark_changed(f"{label} {'enabled' if value else 'disabled'}")
        else:
            self._go(EditorState.MAIN_MENU, 1)
        return EditorAction.CONTINUE

    def _handle_model_picker(self, key: str) -> EditorAction:
        if key == "q":
            return self._leave()
        if key == "esc":
            self._go(self.previous_state, AI_MODEL)
            return EditorAction.CONTINUE
        if self._move(key):
            return EditorAction.CONTINUE
        if key != "enter":
            return EditorAction.CONTINUE

        if self.cursor < len(self.model_options):
            self.config.ai.model = self.model_options[self.cursor]
            self._mark_changed(f"Model set to {self.config.ai.model}")
            self._go(EditorState.AI_SETTINGS, AI_MODEL)
        else:
            self.state = EditorState.AI_SETTINGS
            self._open_text_entry("model", self.config.ai.model)
            self.cursor = AI_MODEL
        return EditorAction.CONTINUE

    def _handle_text_entry(self, key: str) -> EditorAction:
        if key == "esc":
            self.text_buffer = ""
            self._go(self.previous_state, AI_API_KEY if self.text_field == "api_key" else AI_MODEL)
        elif key == "enter":
            self._apply_text_entry()
        elif key == "backspace":
            self.text_buffer = self.text_buffer[:-1]
        elif key == "ctrl+u":
            self.text_buffer = ""
        elif key == "ctrl+v":
            if self._paste is not None:
                self.text_buffer += clean_pasted_text(self._paste())
        elif key == "space":
            self.text_buffer += " "
        elif len(key) == 1 and ' ' <= key <= '~':
            self.text_buffer += key
        return EditorAction.CONTINUE

    def _apply_text_entry(self) -> None:
        value = self.text_buffer.strip()
        if self.text_field == "api_key":
            self.config.ai.api_key = value
            self._mark_changed("API Key updated" if value else "API Key cleared")
            cursor = AI_API_KEY
        else:
            self.config.ai.model = value
            self._mark_changed(f"Model set to {value}" if value else "Model reset to default")
            cursor = AI_MODEL
        self.text_buffer = ""
        self._go(self.previous_state, cursor)

    def _handle_confirm_save(self, key: str) -> EditorAction:
        if key in ("n", "q"):
            return EditorAction.QUIT
        if key == "esc":
            self._go(EditorState.MAIN_MENU)
            return EditorAction.CONTINUE
        if key in ("y", "enter"):
            try:
                self._save(self.config)
            except ConfigError as e:
                self.message = f"Error saving config: {e}"
                self._go(EditorState.MAIN_MENU)
                return EditorAction.CONTINUE
            self.dirty = False
            self.message = "Configuration saved successfully!"
            return EditorAction.SAVED
        return EditorAction.CONTINUE


_TITLES = {
    EditorState.MAIN_MENU: "Select configuration category:",
    EditorState.AI_SETTINGS: "AI Settings:",
    EditorState.GIT_SETTINGS: "Git Settings:",
    EditorState.MODEL_PICKER: "Select Model:",
}

_HELP = {
    EditorState.MAIN_MENU: "↑/↓ navigate  Enter select  q quit",
    EditorState.AI_SETTINGS: "↑/↓ navigate  Enter select/edit  Esc back",
    EditorState.GIT_SETTINGS: "↑/↓ navigate  Enter toggle  Esc back",
    EditorState.MODEL_PICKER: "↑/↓ navigate  Enter select  Esc back",
    EditorState.TEXT_ENTRY: "Type or paste (Ctrl+V)  Ctrl+U clear  Enter save  Esc cancel",
    EditorState.CONFIRM_SAVE: "y/Enter save  n discard  Esc back",
}


def run_config_editor(editor: ConfigEditor, config_path: str = "~/.commetrc") -> EditorAction:
    """Run the editor until the user quits or saves."""

    def _curses_main(stdscr) -> EditorAction:
        curses.curs_set(0)
        terminal.init_colors()
        stdscr.keypad(True)

        while True:
            _render(stdscr, editor, config_path)
            action = editor.handle_key(terminal.key_name(stdscr.getch()))
            if action is not EditorAction.CONTINUE:
                return action

    try:
        return curses.wrapper(_curses_main)
    except KeyboardInterrupt:
        return EditorAction.QUIT


def _render(stdscr, editor: ConfigEditor, config_path: str) -> None:
    stdscr.erase()
    title_attr = curses.color_pair(terminal.HEADER) | curses.A_BOLD
    cursor_attr = curses.color_pair(terminal.CURSOR) | curses.A_BOLD
    dim_attr = curses.color_pair(terminal.DIM) | curses.A_DIM

    put(stdscr, 0, 0, "Commet Configuration", title_attr)
    row = 2

    if editor.state is EditorState.TEXT_ENTRY:
        label = "API Key" if editor.text_field == "api_key" else "Model"
        put(stdscr, row, 0, f"Enter {label}:")
        put(stdscr, row + 2, 0, f"> {editor.display_text()}_")
        row += 4
    elif editor.state is EditorState.CONFIRM_SAVE:
        put(stdscr, row, 0, "Save Commet Configuration?")
        put(stdscr, row + 2, 0, f"Your changes will be saved to {config_path}")
        row += 4
    else:
        put(stdscr, row, 0, _TITLES[editor.state])
        row += 2
        for i, item in enumerate(editor.menu_items()):
            if i == editor.cursor:
                put(stdscr, row, 0, f"> {item}", cursor_attr)
            else:
                put(stdscr, row, 0, f"  {item}")
            row += 1
        row += 1

    put(stdscr, row, 0, _HELP[editor.state], dim_attr)
    row += 1
    if editor.message:
        put(stdscr, row, 0, editor.message, curses.color_pair(terminal.SELECTED))
        row += 1
    if editor.dirty and editor.state is EditorState.MAIN_MENU:
        put(stdscr, row, 0, "You have unsaved changes! Use 'Save & Exit' to persist them.",
            curses.color_pair(terminal.CURSOR))

    stdscr.refresh()
