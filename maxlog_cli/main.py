#!/usr/bin/env python3
"""
maxlog CLI Tool

Streams container logs from Kubernetes or a local container runtime with
color-coded labels.
"""

import sys
import argparse
import logging
from typing import List, Optional

from maxlog_cli import __version__
from maxlog_cli.cli.commands.inspect import InspectCommand
from maxlog_cli.cli.commands.info import HelpCommand, VersionCommand
from maxlog_cli.cli.commands.logs import LogsCommand
from maxlog_cli.config.global_config import load_config
from maxlog_cli.utils.logging import setup_logging
from maxlog_cli.utils.colors import Colors

COMMANDS = {
    "logs": (LogsCommand, "Show logs of containers"),
    "inspect": (InspectCommand, "Inspect pods or containers"),
    "version": (VersionCommand, "Show version information"),
    "help": (HelpCommand, "Show usage and environment variables"),
}

DEFAULT_COMMAND = "logs"

GLOBAL_FLAGS = ("-v", "--verbose", "-q", "--quiet")

# Options accepted as ``name=value`` or ``name value`` words
OPTION_NAMES = ("tag", "tail", "follow", "focus", "namespace", "apptype", "container")

# Options whose next word is always their value
VALUE_OPTIONS = tuple(f"--{name}" for name in OPTION_NAMES if name != "follow")


def create_parser():
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="maxlog",
        description="maxlog - colorized logs of Kubernetes pods and Podman/Docker containers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  maxlog                             # Follow logs with the MAXLOG_* settings
  maxlog tag=mytag tail=100          # Highlight lines mentioning mytag
  maxlog logs --follow=no            # Print the last lines and exit
  maxlog inspect                     # Show the selected pods or container
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"maxlog version: {__version__}"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output except errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True
    )

    for name, (command_class, help_text) in COMMANDS.items():
        command_parser = subparsers.add_parser(name, help=help_text)
        command_class.add_arguments(command_parser)

    return parser


def _command_position(words: List[str]) -> int:
    position = 0
    while position < len(words) and words[position] in GLOBAL_FLAGS:
        position += 1
    return position


def normalize_argv(argv: List[str]) -> List[str]:
    """
    Accept the short option forms and an implied ``logs`` command.

    ``tag=foo`` and the word pair ``tag foo`` both become ``--tag=foo`` or
    ``--tag foo``. Only known option names are rewritten, and never the
    value of a preceding option. When no command word follows the global
    flags, ``logs`` is inserted.

    Args:
        argv: Command line arguments without the program name

    Returns:
        Arguments ready for the argument parser
    """
    words: List[str] = []
    for arg in argv:
        name = arg.split("=", 1)[0]
        if words and words[-1] in VALUE_OPTIONS:
            words.append(arg)
        elif name in OPTION_NAMES:
            words.append(f"--{arg}")
        else:
            words.append(arg)

    position = _command_position(words)
    if position == len(words) or words[position].startswith("-"):
        if position < len(words) and words[position] in ("-h", "--help", "--version"):
            return words
        words.insert(position, DEFAULT_COMMAND)
    return words


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    words = normalize_argv(sys.argv[1:] if argv is None else argv)
    position = _command_position(words)
    if position < len(words) and words[position] not in COMMANDS and not words[position].startswith("-"):
        use_nerdfont = load_config().use_nerdfont
        print(Colors.error(f"Unknown command: {words[position]}", use_nerdfont), file=sys.stderr)
        return 1

    parser = create_parser()
    args = parser.parse_args(words)

    # Setup logging
    log_level = logging.INFO
    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        command_class, _ = COMMANDS[args.command]
        command = command_class(args)
        return command.run()

    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Operation cancelled by user{Colors.RESET}", file=sys.stderr)
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
