"""Git Operations Package"""

from commet.git.repo import GitRepo, GitError
from commet.git.diff import DiffLineKind, classify_diff_line, synthesize_addition_diff, split_diff_lines

__all__ = [
    "GitRepo",
    "GitError",
    "DiffLineKind",
    "classify_diff_line",
    "synthesize_addition_diff",
    "split_diff_lines",
]
