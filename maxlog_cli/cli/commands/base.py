"""
Base command class for all CLI commands.
"""

import argparse
import logging
import sys
from abc import ABC, abstractmethod

from maxlog_cli.config.global_config import MaxlogConfig, load_config
from maxlog_cli.utils.colors import Colors

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the command.

        Args:
            args: Parsed command line arguments
        """
        self.args = args
        self.logger = logging.getLogger(self.__class__.__name__)
        self.use_nerdfont = True

    @abstractmethod
    def run(self) -> int:
        """
        Run the command.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        pass

    @staticmethod
    @abstractmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """
        Add command-specific arguments to the parser.

        Args:
            parser: Argument parser to add arguments to
        """
        pass

    @staticmethod
    def add_selection_arguments(parser: argparse.ArgumentParser) -> None:
        """Add the options that override the backend selection settings."""
        parser.add_argument("--namespace", help="Kubernetes namespace (MAXLOG_K8S_NAMESPACE)")
        parser.add_argument("--apptype", help="Pod application type (MAXLOG_K8S_APPTYPE)")
        parser.add_argument("--container", help="Container name in pod mode (MAXLOG_CONTAINER)")
        parser.add_argument("--tail", help="Number of log lines to start with (MAXLOG_TAIL)")

    def load_config(self) -> MaxlogConfig:
        """Load the configuration and apply command line overrides."""
        cfg = load_config()
        for key in ("namespace", "apptype", "container", "tail", "focus"):
            value = getattr(self.args, key, None)
            if value:
                setattr(cfg, key, value)
        self.use_nerdfont = cfg.use_nerdfont
        self.logger.debug(f"Effective configuration: {cfg}")
        return cfg

    def print_error(self, text: str) -> None:
        print(Colors.error(text, self.use_nerdfont), file=sys.stderr)

    def print_warning(self, text: str) -> None:
        print(Colors.warning(text, self.use_nerdfont), file=sys.stderr)
