"""CLI Commands"""

import os
import sys

from commet.config import Config, ConfigError, ConfigManager
from commet.cli.utils import read_clipboard
from commet.output import bold, dim, info, print_success, print_error
from commet.ui import ConfigEditor, EditorAction, run_config_editor


def _flag(value: bool) -> str:
    return info(str(value).lower())


def display_config(config: Config, manager: ConfigManager) -> int:
    """Display current configuration with the API key masked."""
    config_path = manager.get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {manager.CONFIG_FILENAME} found)")

    env_provider = os.environ.get('COMMET_PROVIDER')
    env_model = os.environ.get('COMMET_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    COMMET_PROVIDER={env_provider}")
        if env_model:
            print(f"    COMMET_MODEL={env_model}")

    ai = config.ai
    model = ai.model or f"{ai.default_model} (default)"
    print()
    print(f"  {bold('AI Settings:')}")
    print(f"    provider:       {info(ai.provider)}")
    print(f"    api_key:        {info(ai.masked_api_key or '(not set)')}")
    print(f"    model:          {info(model)}")

    git = config.git
    print()
    print(f"  {bold('Git Settings:')}")
    print(f"    auto_stage:     {_flag(git.auto_stage)}")
    print(f"    show_diff:      {_flag(git.show_diff)}")
    print(f"    confirm_push:   {_flag(git.confirm_push)}")
    print(f"    direct_commit:  {_flag(git.direct_commit)}")
    print(f"    use_ai:         {_flag(git.use_ai)}")
    print(f"    interactive:    {_flag(git.interactive)}")

    print(f"\n  {dim('Run')} commet config set {dim('to change settings')}\n")
    return 0


def run_config_set(args, config: Config, manager: ConfigManager) -> int:
    """Apply flag values, or open the editor when no flags were given."""
    if not (args.provider or args.api_key or args.model):
        return run_config_editor_command(config, manager)

    if args.provider and args.provider != config.ai.provider:
        config.ai.provider = args.provider
        config.ai.model = ""
    if args.api_key:
        config.ai.api_key = args.api_key
    if args.model:
        config.ai.model = args.model

    try:
        path = manager.save(config)
    except ConfigError as e:
        print_error(str(e))
        return 1

    print_success(f"Configuration updated successfully! ({path})")
    return 0


def run_config_editor_command(config: Config, manager: ConfigManager) -> int:
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print_error("The configuration editor needs an interactive terminal. Use flags instead:\n"
                    "  commet config set --provider claude --api-key KEY --model MODEL")
        return 1

    path = manager.get_config_path() or f"~/{manager.CONFIG_FILENAME}"
    editor = ConfigEditor(config, save=manager.save, paste=read_clipboard)
    action = run_config_editor(editor, config_path=str(path))

    if action is EditorAction.SAVED:
        print_success(f"Configuration saved to {manager.get_config_path()}")
    elif editor.dirty:
        print(dim("Changes discarded."))
    return 0


def run_install_completion() -> int:
    """Show shell tab completion setup."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete commet)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell commet | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish commet | source")

    print(f"\n{dim('After setup, press TAB to autocomplete commands and flags.')}")
    return 0
