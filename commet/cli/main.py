"""CLI Main Entry Point"""

import os

from commet.config import Config, ConfigError, ConfigManager, parse_provider
from commet.git import GitRepo, GitError
from commet.llm import LLMClient, LLMError, get_client
from commet.prompts import PromptBuilder, clean_commit_message
from commet.output import (
    bold, dim, print_diff, print_error, print_info, print_success, print_warning, success, warning, CHECK, Spinner,
)
from commet.ui import DiffLoader, FileSelector, NoChangesError, load_entry_diff, run_file_selector

from commet.cli.args import parse_args
from commet.cli.commands import display_config, run_config_set, run_install_completion
from commet.cli.utils import ask_confirmation, copy_to_clipboard, format_file_list, read_commit_message


def _apply_overrides(args, config: Config) -> None:
    """Environment and flag overrides.

    Precedence: CLI args > environment variables > config file
    """
    env_provider = os.environ.get('COMMET_PROVIDER')
    env_model = os.environ.get('COMMET_MODEL')
    if env_provider:
        provider = parse_provider(env_provider)
        if provider != config.ai.provider:
            config.ai.provider = provider
            config.ai.model = ""
    if env_model:
        config.ai.model = env_model
    if args.use_ai is not None:
        config.git.use_ai = args.use_ai


def _collect_interactive_diff(repo: GitRepo) -> str | None:
    """Let the user pick files, apply the staging, return their staged diff.

    Returns None if the user quit the selector.
    """
    staged = repo.staged_files()
    unstaged = repo.unstaged_files()
    untracked = repo.untracked_files()
    files = sorted(set(staged) | set(unstaged) | set(untracked))

    selector = FileSelector(files, staged, unstaged, untracked)
    with DiffLoader(lambda entry: load_entry_diff(repo, entry)) as loader:
        result = run_file_selector(selector, loader)

    if result is None:
        return None
    if not result.selected:
        raise NoChangesError("No files selected")

    if result.to_unstage:
        print_info(format_file_list("Unstaging deselected files", result.to_unstage))
        repo.unstage_files(result.to_unstage)

    needs_staging = set(unstaged) | set(untracked)
    to_stage = [path for path in result.selected if path in needs_staging]
    if to_stage:
        print_info(format_file_list("Staging selected files", to_stage))
        repo.stage_files(to_stage)

    return repo.diff_for_files(result.selected, staged=True)


def _collect_diff(repo: GitRepo, config: Config) -> str:
    with Spinner("Analyzing git changes..."):
        return repo.get_diff(auto_stage=config.git.auto_stage)


def _generate_message(client: LLMClient, diff: str, provider: str) -> str:
    prompt = PromptBuilder().build(diff)
    with Spinner(f"Generating commit message using {provider}..."):
        response = client.generate(prompt)
    return clean_commit_message(response.content)


def _display_message(message: str) -> None:
    lines = message.split('\n')
    width = max((len(line) for line in lines), default=40)
    print(f"\n{dim('─' * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim('─' * width))


def _copy_and_report(message: str, no_copy: bool) -> None:
    if no_copy:
        return
    copied, reason = copy_to_clipboard(message)
    if copied:
        print(f"{success(CHECK)} Copied to clipboard!")
    else:
        print(f"{warning('!')} Could not copy to clipboard{': ' + reason if reason else ''}")


def _maybe_push(repo: GitRepo, config: Config) -> None:
    if not config.git.confirm_push:
        return
    branch = repo.current_branch() or "the current branch"
    if ask_confirmation(f"\nDo you want to push {branch}?"):
        with Spinner("Pushing..."):
            repo.push()
        print_success("Changes pushed successfully!")


def run_commit(args, config: Config) -> int:
    """Collect changes, produce a message, and optionally commit and push."""
    try:
        _apply_overrides(args, config)
    except ConfigError as e:
        print_error(str(e))
        return 1

    use_ai = config.git.use_ai
    client = None
    if use_ai:
        try:
            client = get_client(config.ai)
        except LLMError as e:
            print_error(str(e))
            return 1

    try:
        repo = GitRepo()
        if args.interactive or config.git.interactive:
            diff = _collect_interactive_diff(repo)
            if diff is None:
                return 0
        else:
            diff = _collect_diff(repo, config)
    except NoChangesError as e:
        print_warning(f"{str(e)[:1].upper()}{str(e)[1:]}.")
        return 0
    except GitError as e:
        print_error(str(e))
        return 1

    if not diff.strip():
        print_warning("No changes detected. Make sure you have staged or unstaged changes to commit.")
        return 0

    print_success("Found changes to commit")
    if config.git.show_diff:
        print()
        print_diff(diff)

    if use_ai:
        try:
            message = _generate_message(client, diff, config.ai.provider)
        except LLMError as e:
            print_error(f"Error generating commit message: {e}")
            return 1
        if not message:
            print_warning("The provider returned an empty commit message.")
            return 0
        _display_message(message)
    else:
        message = read_commit_message()
        if message is None:
            return 0
        if not message:
            print_warning("Commit message cannot be empty.")
            return 0

    _copy_and_report(message, args.no_copy)

    if not (args.yes or config.git.direct_commit or not use_ai):
        print(dim("Run with -y (or enable Direct Commit) to commit directly."))
        return 0

    try:
        repo.commit(message)
        print_success("Commit created successfully!")
        _maybe_push(repo, config)
    except GitError as e:
        print_error(str(e))
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.command is None:
        return 0
    if args.command == 'completion':
        return run_install_completion()

    manager = ConfigManager()
    config = manager.load()

    if args.command == 'commit':
        return run_commit(args, config)

    if args.config_command == 'show':
        return display_config(config, manager)
    if args.config_command == 'set':
        return run_config_set(args, config, manager)

    print_error("Usage: commet config {show,set}")
    return 1
