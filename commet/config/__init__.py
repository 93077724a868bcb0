"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

from commet import AVAILABLE_MODELS, PROVIDER_NAMES

VALID_PROVIDERS = set(PROVIDER_NAMES)

# Environment variables consulted when no API key is configured
API_KEY_ENV_VARS = {
    "openai": ["OPENAI_API_KEY"],
    "claude": ["ANTHROPIC_API_KEY"],
    "google": ["GEMINI_API_KEY", "GOOGLE_API_KEY"],
    "groq": ["GROQ_API_KEY"],
}


class ConfigError(Exception):
    """Raised when configuration cannot be parsed or written."""
    pass


def parse_provider(value: str) -> str:
    """Normalize a provider name, raising ConfigError for unknown ones."""
    provider = value.strip().lower()
    if provider not in VALID_PROVIDERS:
        raise ConfigError(
            f"Invalid provider: {value} (valid options: {', '.join(PROVIDER_NAMES)})"
        )
    return provider


def mask_secret(secret: str) -> str:
    """Show the first and last four characters of a secret, star the rest."""
    if not secret:
        return ""
    if len(secret) <= 8:
        return "*" * len(secret)
    return secret[:4] + "*" * (len(secret) - 8) + secret[-4:]


@dataclass
class AIConfig:
    """Provider settings."""
    provider: str = "openai"
    api_key: str = ""
    model: str = ""

    @property
    def available_models(self) -> list[str]:
        return list(AVAILABLE_MODELS.get(self.provider, []))

    @property
    def default_model(self) -> str:
        models = self.available_models
        return models[0] if models else ""

    @property
    def effective_model(self) -> str:
        return self.model or self.default_model

    @property
    def masked_api_key(self) -> str:
        return mask_secret(self.api_key)

    def resolve_api_key(self) -> str:
        """Configured key, or the provider's environment variable."""
        if self.api_key:
            return self.api_key
        for name in API_KEY_ENV_VARS.get(self.provider, []):
            value = os.environ.get(name)
            if value:
                return value
        return ""


@dataclass
class GitConfig:
    """Git behaviour flags."""
    auto_stage: bool = False
    show_diff: bool = False
    confirm_push: bool = False
    direct_commit: bool = False
    use_ai: bool = True
    interactive: bool = False


@dataclass
class Config:
    """User configuration with sensible defaults."""
    ai: AIConfig = field(default_factory=AIConfig)
    git: GitConfig = field(default_factory=GitConfig)

    def to_dict(self) -> dict:
        return {"ai": asdict(self.ai), "git": asdict(self.git)}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        ai_defaults = AIConfig()
        git_defaults = GitConfig()

        if not isinstance(self.ai.provider, str) or self.ai.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.ai.provider}', using '{ai_defaults.provider}'")
            self.ai.provider = ai_defaults.provider

        for name in ("api_key", "model"):
            value = getattr(self.ai, name)
            if value is None:
                setattr(self.ai, name, "")
            elif not isinstance(value, str):
                warnings.append(f"Invalid ai.{name} '{value}', using default")
                setattr(self.ai, name, getattr(ai_defaults, name))

        for name in asdict(git_defaults):
            value = getattr(self.git, name)
            if not isinstance(value, bool):
                default = getattr(git_defaults, name)
                warnings.append(f"Invalid git.{name} '{value}', using {str(default).lower()}")
                setattr(self.git, name, default)

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        ai_data = data.get("ai") or {}
        git_data = data.get("git") or {}
        if not isinstance(ai_data, dict):
            ai_data = {}
        if not isinstance(git_data, dict):
            git_data = {}

        ai_keys = set(AIConfig.__dataclass_fields__)
        git_keys = set(GitConfig.__dataclass_fields__)
        config = cls(
            ai=AIConfig(**{k: v for k, v in ai_data.items() if k in ai_keys}),
            git=GitConfig(**{k: v for k, v in git_data.items() if k in git_keys}),
        )
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads and saves configuration.

    Lookup order is ./.commetrc then ~/.commetrc. Saving writes back to
    the file the config came from, or ~/.commetrc when none existed.
    """

    CONFIG_FILENAME = ".commetrc"

    def __init__(self):
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config_path = path
                return self._load_from_file(path)
        self._config_path = None
        return Config()

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def save(self, config: Config, path: Optional[Path] = None) -> Path:
        path = path or self._config_path or Path.home() / self.CONFIG_FILENAME
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2)
                f.write('\n')
        except OSError as e:
            raise ConfigError(f"Could not write {path}: {e}")
        self._config_path = path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


__all__ = [
    "AIConfig",
    "GitConfig",
    "Config",
    "ConfigError",
    "ConfigManager",
    "parse_provider",
    "mask_secret",
    "VALID_PROVIDERS",
    "API_KEY_ENV_VARS",
]
