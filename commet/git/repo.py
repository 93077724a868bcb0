"""Git Repository - fixed git subcommands with line-oriented parsing."""

import subprocess
from pathlib import Path

from commet.git.diff import synthesize_addition_diff


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def _parse_paths(output: str) -> list[str]:
    """Split NUL-terminated -z output. Paths come back verbatim, unquoted."""
    return [path for path in output.split('\0') if path]


class GitRepo:
    """Runs git from the top level of the repository containing cwd.

    Every listing git prints is then relative to the same root, and those
    paths can be handed straight back to git or read from disk.
    """

    def __init__(self, cwd: str | Path | None = None):
        self.cwd = Path(cwd) if cwd else None
        self._verify_git_available()
        self.cwd = self._find_toplevel()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip()
            raise GitError(f"Git command failed: git {' '.join(args)}" + (f"\n{detail}" if detail else ""))
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _find_toplevel(self) -> Path:
        """Fail fast if we're not in a git work tree."""
        try:
            toplevel = self._run_git('rev-parse', '--show-toplevel').strip()
        except GitError:
            raise GitError("Not inside a git repository")
        return Path(toplevel) if toplevel else (self.cwd or Path.cwd())

    # Queries

    def status(self) -> str:
        return self._run_git('status', '--porcelain')

    def has_changes(self) -> bool:
        return bool(self.status().strip())

    def current_branch(self) -> str:
        return self._run_git('branch', '--show-current').strip()

    def staged_files(self) -> list[str]:
        return _parse_paths(self._run_git('diff', '--cached', '--name-only', '-z'))

    def unstaged_files(self) -> list[str]:
        return _parse_paths(self._run_git('diff', '--name-only', '-z'))

    def untracked_files(self) -> list[str]:
        return _parse_paths(self._run_git('ls-files', '--others', '--exclude-standard', '-z'))

    def file_diff(self, path: str, staged: bool) -> str:
        """Diff of a single path against the index (staged) or working tree."""
        args = ['diff', '--cached'] if staged else ['diff']
        return self._run_git(*args, '--', path)

    def untracked_diff(self, path: str) -> str:
        """Whole-file-as-addition diff for a file git doesn't know about yet."""
        full_path = self.cwd / path
        try:
            content = full_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            raise GitError(f"Failed to read untracked file {path}: {e}")
        return synthesize_addition_diff(path, content)

    def diff_for_files(self, paths: list[str], staged: bool = True) -> str:
        args = ['diff']
        if staged:
            args.append('--cached')
        if paths:
            args.append('--')
            args.extend(paths)
        return self._run_git(*args)

    def get_diff(self, auto_stage: bool = False) -> str:
        """Staged diff, falling back to auto-staging or the working tree."""
        diff = self._run_git('diff', '--cached')
        if diff:
            return diff
        if auto_stage:
            self.stage_all()
            return self._run_git('diff', '--cached')
        return self._run_git('diff')

    # Mutations

    def stage_all(self) -> None:
        self._run_git('add', '.')

    def stage_files(self, paths: list[str]) -> None:
        if not paths:
            return
        self._run_git('add', '--', *paths)

    def unstage_files(self, paths: list[str]) -> None:
        if not paths:
            return
        self._run_git('reset', 'HEAD', '--', *paths)

    def commit(self, message: str) -> None:
        self._run_git('commit', '-m', message)

    def push(self) -> None:
        self._run_git('push')
