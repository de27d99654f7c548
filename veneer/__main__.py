"""veneer — Simple theme generator: one palette TOML, many rendered theme files.

Usage: veneer <command> [options]

Commands are auto-discovered from veneer/commands/.
Each command module's docstring is its documentation.
Run `veneer help <command>` for full module docs.

Palette file:
  --palette PATH wins. Otherwise VENEER_PALETTE, otherwise the nearest
  veneer.toml walking up from the current directory (stopping at .git).

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, veneer looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from veneer import registry
from veneer.core.env import load_env, palette_path
from veneer.core.errors import VeneerError
from veneer.core.report import format_error


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'veneer.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  veneer show\n'
        '  veneer show --palette palettes/ember.toml --json\n'
        '  veneer build templates/vscode/themes/theme.json.tera out/\n'
        '  veneer build templates/ dist/\n'
        '  veneer check templates/kitty.conf.tera\n'
        '  veneer help build\n'
    )
    parser = argparse.ArgumentParser(
        prog='veneer',
        description='Simple theme generator: resolve a palette TOML and render templates against it.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        p.add_argument(
            '--palette',
            metavar='PATH',
            default=None,
            help='Palette TOML file (default: $VENEER_PALETTE, else nearest veneer.toml)',
        )
        cmd.configure(p)

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<8} {_short_help(name, cmd.help)}')
        print('\nRun: veneer help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else: OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'veneer: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    args.palette = palette_path(args.palette)

    try:
        registry.get(args.command).execute(args)
    except VeneerError as err:
        print(f'error: {format_error(err)}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
