"""CLI Argument Parsing"""

import argparse
import argcomplete

from commet import PROVIDER_NAMES, __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='commet',
        description='Generate AI-powered commit messages',
        epilog='Example: commet commit -i (pick files, then generate a message)'
    )
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    # commit
    commit = subparsers.add_parser('commit', help='Generate a commit message for your changes')
    commit.add_argument('-i', '--interactive', action='store_true', help='Pick files to commit in an interactive selector')
    commit.add_argument('-y', '--yes', action='store_true', help='Create the commit without asking')
    ai_group = commit.add_mutually_exclusive_group()
    ai_group.add_argument('-a', '--ai', dest='use_ai', action='store_const', const=True, default=None, help='Use AI to write the message')
    ai_group.add_argument('--no-ai', dest='use_ai', action='store_const', const=False, help='Type the message yourself')
    commit.add_argument('--no-copy', action='store_true', help='Do not copy the message to the clipboard')

    # config
    config = subparsers.add_parser('config', help='Manage configuration settings')
    config_sub = config.add_subparsers(dest='config_command', metavar='ACTION')
    config_sub.add_parser('show', help='Show current configuration')
    config_set = config_sub.add_parser('set', help='Set configuration values (no flags opens the editor)')
    config_set.add_argument('-p', '--provider', type=str, choices=PROVIDER_NAMES, help='AI provider')
    config_set.add_argument('-k', '--api-key', type=str, metavar='KEY', help='API key for the AI provider')
    config_set.add_argument('-m', '--model', type=str, metavar='MODEL', help='AI model to use')

    # completion
    subparsers.add_parser('completion', help='Show shell tab-completion setup')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
    return args
