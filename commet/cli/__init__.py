"""Command-line Interface Package"""

from commet.cli.main import main

__all__ = ["main"]
