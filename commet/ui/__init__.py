"""Interactive Terminal UI Package"""

from commet.ui.file_selector import (
    FileSelector, FileEntry, FileStatus, SelectionResult, SelectorAction,
    DiffLoaded, DiffLoader, NoChangesError, load_entry_diff, run_file_selector,
)
from commet.ui.config_editor import ConfigEditor, EditorState, EditorAction, run_config_editor

__all__ = [
    "FileSelector",
    "FileEntry",
    "FileStatus",
    "SelectionResult",
    "SelectorAction",
    "DiffLoaded",
    "DiffLoader",
    "NoChangesError",
    "load_entry_diff",
    "run_file_selector",
    "ConfigEditor",
    "EditorState",
    "EditorAction",
    "run_config_editor",
]
