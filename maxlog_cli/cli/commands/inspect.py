"""
Inspect command: show what the logs command would read.
"""

import argparse

from maxlog_cli.cli.commands.base import BaseCommand
from maxlog_cli.core.errors import MaxlogError
from maxlog_cli.platforms.factory import create_backend


class InspectCommand(BaseCommand):
    """Print the selected namespace and pods, or the selected container."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments."""
        BaseCommand.add_selection_arguments(parser)

    def run(self) -> int:
        """Run the inspect command."""
        try:
            cfg = self.load_config()
            backend = create_backend(cfg, require_apptype=False)
            details = backend.describe()
        except MaxlogError as e:
            self.print_error(str(e))
            return 1

        details["Tail"] = cfg.tail
        width = max(len(key) for key in details)
        for key, value in details.items():
            print(f"{key:<{width}} : {value}")
        return 0
