"""
Tests for CLI output formatting.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import re

import pytest

from commet.cli.commands import display_config
from commet.cli.main import _display_message
from commet.config import AIConfig, Config, ConfigManager, GitConfig
from commet.output import Colors, format_diff

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def print_sample(capsys):
    """Return a function that replays captured output for -s viewing."""
    def _print(out: str):
        with capsys.disabled():
            try:
                print(out)
            except UnicodeEncodeError:
                # Windows cp1252 can't encode Unicode symbols (─, ✓, etc.)
                cleaned = ANSI_RE.sub('', out)
                print(cleaned.encode('ascii', errors='replace').decode('ascii'))
    return _print


@pytest.fixture
def colors_on(monkeypatch):
    monkeypatch.setattr("commet.output.COLORS_ENABLED", True)


@pytest.fixture
def no_env_overrides(monkeypatch):
    monkeypatch.delenv("COMMET_PROVIDER", raising=False)
    monkeypatch.delenv("COMMET_MODEL", raising=False)


# ---------------------------------------------------------------------------
# Diff coloring
# ---------------------------------------------------------------------------

class TestFormatDiff:

    SAMPLE = (
        "diff --git a/app.py b/app.py\n"
        "--- a/app.py\n"
        "+++ b/app.py\n"
        "@@ -1,3 +1,3 @@\n"
        " import os\n"
        "-print('old')\n"
        "+print('new')\n"
    )

    def test_colors_by_line_kind(self, colors_on):
        lines = format_diff(self.SAMPLE).split('\n')
        assert lines[0] == "diff --git a/app.py b/app.py"
        assert lines[1] == "--- a/app.py"
        assert lines[2] == "+++ b/app.py"
        assert lines[3] == f"{Colors.CYAN}@@ -1,3 +1,3 @@{Colors.RESET}"
        assert lines[4] == " import os"
        assert lines[5] == f"{Colors.RED}-print('old'){Colors.RESET}"
        assert lines[6] == f"{Colors.GREEN}+print('new'){Colors.RESET}"

    def test_plain_without_colors(self, monkeypatch):
        monkeypatch.setattr("commet.output.COLORS_ENABLED", False)
        assert format_diff(self.SAMPLE) == self.SAMPLE.rstrip('\n')

    def test_sample_output(self, colors_on, print_sample):
        print_sample(format_diff(self.SAMPLE))


# ---------------------------------------------------------------------------
# Commit message
# ---------------------------------------------------------------------------

class TestDisplayMessage:

    def test_subject_and_body(self, capsys, strip_ansi, print_sample):
        _display_message("feat(cli): add verbose flag\n\n- print timings")
        out = capsys.readouterr().out
        print_sample(out)
        plain = strip_ansi(out)
        assert "feat(cli): add verbose flag" in plain
        assert "- print timings" in plain

    def test_rule_matches_longest_line(self, capsys, strip_ansi):
        _display_message("fix: x\n\nlonger body line here")
        plain = strip_ansi(capsys.readouterr().out)
        assert "─" * len("longer body line here") in plain
        assert "─" * (len("longer body line here") + 1) not in plain


# ---------------------------------------------------------------------------
# Config show
# ---------------------------------------------------------------------------

class TestDisplayConfig:

    def test_masks_api_key(self, capsys, strip_ansi, no_env_overrides):
        config = Config(ai=AIConfig(provider="claude", api_key="sk-ant-1234567890"))
        display_config(config, ConfigManager())
        plain = strip_ansi(capsys.readouterr().out)
        assert "sk-ant-1234567890" not in plain
        assert "sk-a*********7890" in plain
        assert "provider:       claude" in plain

    def test_defaults(self, capsys, strip_ansi, print_sample, no_env_overrides):
        assert display_config(Config(), ConfigManager()) == 0
        out = capsys.readouterr().out
        print_sample(out)
        plain = strip_ansi(out)
        assert "defaults (no .commetrc found)" in plain
        assert "api_key:        (not set)" in plain
        assert "model:          gpt-4o (default)" in plain
        assert "use_ai:         true" in plain
        assert "interactive:    false" in plain

    def test_git_flags(self, capsys, strip_ansi, no_env_overrides):
        config = Config(git=GitConfig(direct_commit=True, confirm_push=True))
        display_config(config, ConfigManager())
        plain = strip_ansi(capsys.readouterr().out)
        assert "direct_commit:  true" in plain
        assert "confirm_push:   true" in plain

    def test_env_overrides_listed(self, capsys, strip_ansi, monkeypatch):
        monkeypatch.setenv("COMMET_PROVIDER", "groq")
        monkeypatch.delenv("COMMET_MODEL", raising=False)
        display_config(Config(), ConfigManager())
        plain = strip_ansi(capsys.readouterr().out)
        assert "COMMET_PROVIDER=groq" in plain
