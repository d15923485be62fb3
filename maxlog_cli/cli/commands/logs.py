"""
Logs command: stream annotated container or pod logs to stdout.
"""

import argparse

from maxlog_cli.cli.commands.base import BaseCommand
from maxlog_cli.config.global_config import parse_bool
from maxlog_cli.core.errors import MaxlogError
from maxlog_cli.core.fanin import FanInCoordinator
from maxlog_cli.platforms.factory import create_backend


class LogsCommand(BaseCommand):
    """Command to show the logs of the selected containers."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments."""
        BaseCommand.add_selection_arguments(parser)
        parser.add_argument(
            "--tag",
            default="",
            help="Highlight lines containing this tag and color its script logger"
        )
        parser.add_argument(
            "--follow",
            nargs="?",
            const=True,
            default=True,
            type=parse_bool,
            help="Keep streaming new lines (default: yes; 0, no or false disables)"
        )
        parser.add_argument(
            "--focus",
            help="Hide lines that do not contain this text, ignoring case (MAXLOG_FOCUS)"
        )
        parser.add_argument(
            "--fail-fast",
            action="store_true",
            help="Stop when the first log stream fails instead of waiting for the others"
        )

    def run(self) -> int:
        """Run the logs command."""
        try:
            cfg = self.load_config()
            tail = cfg.tail_lines()
            backend = create_backend(cfg)
            sources = backend.open_sources(tail, self.args.follow)
        except MaxlogError as e:
            self.print_error(str(e))
            return 1

        if not sources:
            self.print_warning(f"No {backend.name} logs selected")
            return 0

        coordinator = FanInCoordinator(
            tag=self.args.tag,
            focus=cfg.focus,
            use_nerdfont=cfg.use_nerdfont,
            fail_fast=self.args.fail_fast,
        )
        results = coordinator.run(sources)

        failed = [result for result in results if not result.ok]
        if failed:
            names = ", ".join(result.name for result in failed)
            self.print_error(f"Log streaming failed for: {names}")
            return 1
        return 0
