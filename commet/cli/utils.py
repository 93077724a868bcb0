"""CLI Utility Functions"""

import subprocess
import sys

from commet.output import info


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    try:
        if sys.platform == 'win32':
            subprocess.run(['clip'], input=text.encode('utf-8'), check=True)
        elif sys.platform == 'darwin':
            subprocess.run(['pbcopy'], input=text.encode('utf-8'), check=True)
        else:
            try:
                subprocess.run(['xclip', '-selection', 'clipboard'], input=text.encode('utf-8'), check=True)
            except FileNotFoundError:
                subprocess.run(['xsel', '--clipboard', '--input'], input=text.encode('utf-8'), check=True)
        return True, ""
    except FileNotFoundError:
        if sys.platform == 'linux':
            return False, "Install xclip or xsel: sudo apt install xclip"
        return False, "No clipboard tool found"
    except (subprocess.CalledProcessError, OSError) as e:
        return False, f"Clipboard command failed: {e}"


def read_clipboard() -> str:
    """Clipboard text, or an empty string when no clipboard tool works."""
    if sys.platform == 'win32':
        commands = [['powershell', '-NoProfile', '-Command', 'Get-Clipboard']]
    elif sys.platform == 'darwin':
        commands = [['pbpaste']]
    else:
        commands = [['xclip', '-selection', 'clipboard', '-o'], ['xsel', '--clipboard', '--output']]

    for command in commands:
        try:
            result = subprocess.run(command, capture_output=True, check=True)
        except (FileNotFoundError, subprocess.CalledProcessError, OSError):
            continue
        return result.stdout.decode('utf-8', errors='replace')
    return ""


def ask_confirmation(question: str) -> bool:
    """Ask a y/N question. Anything but y/yes, including Ctrl+C, is a no."""
    try:
        response = input(info(f"{question} (y/N): "))
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    return response.strip().lower() in ('y', 'yes')


def read_commit_message() -> str | None:
    """Prompt for a one-line message. Returns None if the user aborted."""
    try:
        return input(info("Enter commit message: ")).strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return None


def format_file_list(label: str, files: list[str]) -> str:
    return f"{label}: {', '.join(files)}"
