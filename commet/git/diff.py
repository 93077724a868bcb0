"""Diff helpers - synthesize untracked-file diffs and classify diff lines."""

from enum import Enum


class DiffLineKind(Enum):
    """Display class of a single unified-diff line."""
    ADDED = "added"
    REMOVED = "removed"
    HUNK = "hunk"
    CONTEXT = "context"


def classify_diff_line(line: str) -> DiffLineKind:
    """Classify a diff line by its prefix.

    File headers (+++ / ---) count as context, not as changes.
    """
    if line.startswith('+') and not line.startswith('+++'):
        return DiffLineKind.ADDED
    if line.startswith('-') and not line.startswith('---'):
        return DiffLineKind.REMOVED
    if line.startswith('@@'):
        return DiffLineKind.HUNK
    return DiffLineKind.CONTEXT


def synthesize_addition_diff(path: str, content: str) -> str:
    """Render a whole file as a single all-additions hunk against /dev/null.

    Only line feeds end a line, as git counts them; a CR before one is dropped.
    """
    lines = []
    if content:
        lines = [line.removesuffix('\r') for line in content.removesuffix('\n').split('\n')]
    parts = [
        "--- /dev/null\n",
        f"+++ b/{path}\n",
        f"@@ -0,0 +1,{len(lines)} @@\n",
    ]
    parts.extend(f"+{line}\n" for line in lines)
    return ''.join(parts)


def split_diff_lines(diff: str) -> list[str]:
    """Split diff text into display lines, dropping the trailing newline."""
    if not diff:
        return []
    return diff.rstrip('\n').split('\n')
