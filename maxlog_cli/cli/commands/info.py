"""
Version and help commands.
"""

import argparse

from maxlog_cli import __version__
from maxlog_cli.cli.commands.base import BaseCommand
from maxlog_cli.config.global_config import DEFAULT_APP_TYPES

HELP_TEXT = f"""Usage: maxlog [action] [options]
Available actions:
  logs       - Show logs of containers
  inspect    - Inspect pods or containers
  version    - Show version information
  help       - Show this help message
Example: maxlog logs --tag=mytag --tail=100
If no action is set, logs will be used.
Environment variables:
  MAXLOG_MODE        - Set to 'k8s' for Kubernetes mode or 'pod' for podman mode
  Podman mode
  MAXLOG_CONTAINER   - Specify the container name in podman mode
  K8s mode
  MAXLOG_K8S_NAMESPACE  - Namespace for Kubernetes logs
  MAXLOG_K8S_APPTYPE  - This is the pod selector for Kubernetes logs. E.g. {DEFAULT_APP_TYPES}
  Other
  MAXLOG_USE_NERDFONT - Shows symbols from NerdFont (default: yes)
  MAXLOG_TAIL - Number of log lines to display (default: 40)
  MAXLOG_FOCUS - It hides all lines that do not contain the word. It is not case-sensitive."""


class VersionCommand(BaseCommand):
    """Command to show version information."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        pass

    def run(self) -> int:
        print(f"maxlog version: {__version__}")
        return 0


class HelpCommand(BaseCommand):
    """Command to show usage, actions and environment variables."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        pass

    def run(self) -> int:
        print(HELP_TEXT)
        return 0
