"""
Unit tests for core modules: Config, ConfigManager, PromptBuilder,
clean_commit_message and the diff helpers.

Run with:
    pytest tests/test_core.py -v
"""

import json

import pytest

from commet.config import AIConfig, Config, ConfigError, ConfigManager, GitConfig, mask_secret, parse_provider
from commet.git.diff import DiffLineKind, classify_diff_line, split_diff_lines, synthesize_addition_diff
from commet.prompts import PromptBuilder, clean_commit_message


# ---------------------------------------------------------------------------
# Diff helpers
# ---------------------------------------------------------------------------

class TestClassifyDiffLine:

    @pytest.mark.parametrize("line, expected", [
        ("+foo", DiffLineKind.ADDED),
        ("+", DiffLineKind.ADDED),
        ("+++ b/x", DiffLineKind.CONTEXT),
        ("-bar", DiffLineKind.REMOVED),
        ("--- a/x", DiffLineKind.CONTEXT),
        ("@@ -1,2 +1,3 @@", DiffLineKind.HUNK),
        ("@@ -10,6 +10,9 @@ def validate_user(user):", DiffLineKind.HUNK),
        (" unchanged", DiffLineKind.CONTEXT),
        ("diff --git a/x b/x", DiffLineKind.CONTEXT),
        ("", DiffLineKind.CONTEXT),
    ])
    def test_prefix_rules(self, line, expected):
        assert classify_diff_line(line) == expected


class TestSynthesizeAdditionDiff:

    def test_three_line_file(self):
        result = synthesize_addition_diff("notes.txt", "one\ntwo\nthree\n")
        assert result == (
            "--- /dev/null\n"
            "+++ b/notes.txt\n"
            "@@ -0,0 +1,3 @@\n"
            "+one\n"
            "+two\n"
            "+three\n"
        )

    def test_missing_trailing_newline_counts_same(self):
        with_newline = synthesize_addition_diff("a.py", "x\ny\n")
        without = synthesize_addition_diff("a.py", "x\ny")
        assert with_newline == without

    def test_empty_file(self):
        result = synthesize_addition_diff("empty.txt", "")
        assert result == "--- /dev/null\n+++ b/empty.txt\n@@ -0,0 +1,0 @@\n"

    def test_only_line_feeds_split(self):
        result = synthesize_addition_diff("page.txt", "a\x0cb\u2028c\x85d\n")
        assert result == "--- /dev/null\n+++ b/page.txt\n@@ -0,0 +1,1 @@\n+a\x0cb\u2028c\x85d\n"

    def test_crlf_line_endings(self):
        result = synthesize_addition_diff("win.txt", "x\r\ny\r\n")
        assert result.endswith("@@ -0,0 +1,2 @@\n+x\n+y\n")

    def test_single_blank_line(self):
        result = synthesize_addition_diff("blank.txt", "\n")
        assert result.endswith("@@ -0,0 +1,1 @@\n+\n")

    def test_every_content_line_is_added(self):
        result = synthesize_addition_diff("src/app.py", "import os\n\nprint(os.name)\n")
        content_lines = result.rstrip('\n').split('\n')[3:]
        assert all(classify_diff_line(line) == DiffLineKind.ADDED for line in content_lines)


class TestSplitDiffLines:

    def test_drops_trailing_newline(self):
        assert split_diff_lines("a\nb\n") == ["a", "b"]

    def test_empty(self):
        assert split_diff_lines("") == []

    def test_keeps_blank_lines_inside(self):
        assert split_diff_lines("a\n\nb") == ["a", "", "b"]


# ---------------------------------------------------------------------------
# PromptBuilder
# ---------------------------------------------------------------------------

class TestPromptBuilder:

    @pytest.fixture
    def diff(self):
        return (
            "diff --git a/src/app.py b/src/app.py\n"
            "--- a/src/app.py\n"
            "+++ b/src/app.py\n"
            "@@ -1,2 +1,3 @@\n"
            "+import logging\n"
        )

    def test_contains_diff(self, diff):
        result = PromptBuilder().build(diff)
        assert "Git diff:\n" + diff.rstrip() in result

    def test_contains_format_rules(self, diff):
        result = PromptBuilder().build(diff)
        assert "50 characters or less" in result
        assert "conventional commit format" in result

    def test_ends_with_output_instruction(self, diff):
        result = PromptBuilder().build(diff)
        assert result.endswith("No explanations, comments, or additional text.")

    def test_diff_comes_after_guidelines(self, diff):
        result = PromptBuilder().build(diff)
        assert result.index("**Content Guidelines:**") < result.index("Git diff:")


# ---------------------------------------------------------------------------
# clean_commit_message
# ---------------------------------------------------------------------------

class TestCleanCommitMessage:

    def test_strips_code_fences(self):
        raw = "```\nfix(api): handle timeout\n```"
        assert clean_commit_message(raw) == "fix(api): handle timeout"

    def test_strips_fence_with_language(self):
        raw = "```text\nfeat: add flag\n\n- detail\n```"
        assert clean_commit_message(raw) == "feat: add flag\n\n- detail"

    def test_strips_preamble(self):
        raw = "Here's a commit message:\n\nfeat(cli): add verbose flag"
        assert clean_commit_message(raw) == "feat(cli): add verbose flag"

    def test_strips_excited_preamble(self):
        raw = "Sure! Here is the commit message:\nchore: bump version"
        assert clean_commit_message(raw) == "chore: bump version"

    def test_preserves_body(self):
        raw = "feat(auth): add login\n\n- add endpoint\n- validate creds"
        assert clean_commit_message(raw) == raw

    def test_strips_inline_backticks_on_subject(self):
        assert clean_commit_message("`docs: fix typo`") == "docs: fix typo"

    def test_empty(self):
        assert clean_commit_message("   ") == ""


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.ai.provider == "openai"
        assert config.ai.api_key == ""
        assert config.ai.model == ""
        assert config.git == GitConfig(
            auto_stage=False, show_diff=False, confirm_push=False,
            direct_commit=False, use_ai=True, interactive=False,
        )

    def test_to_dict_is_nested(self):
        d = Config().to_dict()
        assert set(d) == {"ai", "git"}
        assert d["ai"] == {"provider": "openai", "api_key": "", "model": ""}
        assert d["git"]["use_ai"] is True

    def test_from_dict_reads_nested_values(self):
        config = Config.from_dict({
            "ai": {"provider": "claude", "api_key": "k", "model": "claude-3-haiku-20240307"},
            "git": {"interactive": True, "confirm_push": True},
        })
        assert config.ai.provider == "claude"
        assert config.ai.model == "claude-3-haiku-20240307"
        assert config.git.interactive is True
        assert config.git.confirm_push is True
        assert config.git.use_ai is True

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"ai": {"provider": "groq", "temperature": 2}, "theme": "dark"})
        assert config.ai.provider == "groq"
        assert not hasattr(config.ai, "temperature")

    def test_from_dict_missing_sections(self):
        config = Config.from_dict({})
        assert config == Config()

    def test_validate_invalid_provider(self):
        config = Config(ai=AIConfig(provider="gpt4"))
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.ai.provider == "openai"

    def test_validate_non_bool_git_flag(self):
        config = Config(git=GitConfig(auto_stage="yes"))
        warnings = config.validate()
        assert any("git.auto_stage" in w for w in warnings)
        assert config.git.auto_stage is False

    @pytest.mark.parametrize("provider", [["openai"], {"name": "claude"}, 3])
    def test_validate_non_string_provider(self, provider):
        config = Config(ai=AIConfig(provider=provider))
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.ai.provider == "openai"

    def test_validate_null_model_becomes_empty(self):
        config = Config(ai=AIConfig(model=None))
        assert config.validate() == []
        assert config.ai.model == ""

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"ai": {"provider": "invalid"}})
        err = capsys.readouterr().err
        assert "Config warning" in err


class TestAIConfig:

    def test_default_model_per_provider(self):
        assert AIConfig(provider="openai").default_model == "gpt-4o"
        assert AIConfig(provider="claude").default_model == "claude-3-5-sonnet-20241022"
        assert AIConfig(provider="groq").default_model == "llama-3.1-70b-versatile"

    def test_effective_model_prefers_configured(self):
        assert AIConfig(provider="openai", model="gpt-4").effective_model == "gpt-4"
        assert AIConfig(provider="openai").effective_model == "gpt-4o"

    def test_resolve_api_key_prefers_config(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        assert AIConfig(api_key="from-config").resolve_api_key() == "from-config"

    def test_resolve_api_key_env_fallback(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
        assert AIConfig(provider="claude").resolve_api_key() == "sk-ant"

    def test_resolve_api_key_google_alternatives(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
        assert AIConfig(provider="google").resolve_api_key() == "g-key"

    def test_resolve_api_key_missing(self, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        assert AIConfig(provider="groq").resolve_api_key() == ""


class TestConfigHelpers:

    def test_parse_provider_normalizes(self):
        assert parse_provider(" Claude ") == "claude"

    def test_parse_provider_rejects_unknown(self):
        with pytest.raises(ConfigError, match="valid options"):
            parse_provider("gpt")

    @pytest.mark.parametrize("secret, expected", [
        ("", ""),
        ("short", "*****"),
        ("12345678", "********"),
        ("sk-1234567890abcd", "sk-1*********abcd"),
    ])
    def test_mask_secret(self, secret, expected):
        assert mask_secret(secret) == expected


class TestConfigManager:

    @pytest.fixture
    def home(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        monkeypatch.setattr("pathlib.Path.home", lambda: home)
        return home

    def test_load_returns_defaults_when_no_file(self, home):
        manager = ConfigManager()
        assert manager.load() == Config()
        assert manager.get_config_path() is None

    def test_load_reads_home_file(self, home):
        (home / ".commetrc").write_text(json.dumps({"ai": {"provider": "google"}}))
        manager = ConfigManager()
        assert manager.load().ai.provider == "google"
        assert manager.get_config_path() == home / ".commetrc"

    def test_local_file_wins(self, home, tmp_path):
        (home / ".commetrc").write_text(json.dumps({"ai": {"provider": "google"}}))
        (tmp_path / "work" / ".commetrc").write_text(json.dumps({"ai": {"provider": "groq"}}))
        assert ConfigManager().load().ai.provider == "groq"

    def test_save_and_load_roundtrip(self, home):
        original = Config(ai=AIConfig(provider="claude", api_key="secret"), git=GitConfig(direct_commit=True))
        path = ConfigManager().save(original)
        assert path == home / ".commetrc"

        loaded = ConfigManager().load()
        assert loaded == original

    def test_save_writes_back_to_loaded_file(self, home, tmp_path):
        local = tmp_path / "work" / ".commetrc"
        local.write_text(json.dumps({"ai": {"provider": "groq"}}))
        manager = ConfigManager()
        config = manager.load()
        config.git.show_diff = True
        assert manager.save(config) == local
        assert json.loads(local.read_text())["git"]["show_diff"] is True

    def test_malformed_json_returns_defaults(self, home, capsys):
        (home / ".commetrc").write_text("not valid json {{{")
        assert ConfigManager().load() == Config()
        assert "Could not load" in capsys.readouterr().err

    def test_list_provider_in_file_falls_back(self, home, capsys):
        (home / ".commetrc").write_text(json.dumps({"ai": {"provider": ["openai"], "api_key": "k"}}))
        config = ConfigManager().load()
        assert config.ai.provider == "openai"
        assert config.ai.api_key == "k"
        assert "Config warning" in capsys.readouterr().err

    def test_non_object_json_returns_defaults(self, home):
        (home / ".commetrc").write_text("[1, 2]")
        assert ConfigManager().load() == Config()

    def test_save_failure_raises_config_error(self, home, tmp_path):
        with pytest.raises(ConfigError, match="Could not write"):
            ConfigManager().save(Config(), path=tmp_path)
