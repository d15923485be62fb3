"""
Global configuration for the maxlog CLI.

Settings come from, in increasing precedence: built-in defaults, an optional
``maxlog-config.yml`` in the working directory, and ``MAXLOG_*`` environment
variables. Command line options are applied on top by the commands.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from maxlog_cli.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "maxlog-config.yml"

MODE_K8S = "k8s"
MODE_POD = "pod"

# MAS Manage pod selector
APP_TYPE_LABEL = "mas.ibm.com/appTypeName"
DEFAULT_APP_TYPES = "all, ui, cron, mea, rpt, jms"

ENV_VARS = {
    "mode": "MAXLOG_MODE",
    "container": "MAXLOG_CONTAINER",
    "namespace": "MAXLOG_K8S_NAMESPACE",
    "apptype": "MAXLOG_K8S_APPTYPE",
    "tail": "MAXLOG_TAIL",
    "focus": "MAXLOG_FOCUS",
    "use_nerdfont": "MAXLOG_USE_NERDFONT",
}

FALSE_VALUES = ("0", "no", "false", "off")


def parse_bool(value: Any) -> bool:
    """Interpret a config or command line value as a flag."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in FALSE_VALUES


@dataclass
class MaxlogConfig:
    """Global configuration settings."""
    mode: str = ""
    container: str = ""
    namespace: str = ""
    apptype: str = ""
    tail: str = "40"
    focus: str = ""
    use_nerdfont: bool = True

    def tail_lines(self) -> int:
        """
        Validate the tail depth.

        Returns:
            The tail depth as a positive integer

        Raises:
            ConfigError: If tail is not a positive decimal number
        """
        value = str(self.tail).strip()
        if not value.isdecimal() or int(value) <= 0:
            raise ConfigError(f"Invalid tail value '{self.tail}': expected a positive number")
        return int(value)

    def validate_mode(self) -> str:
        """Return the backend mode, raising ConfigError when unset or unknown."""
        if not self.mode:
            raise ConfigError(
                f"{ENV_VARS['mode']} is not set. Please set it to '{MODE_K8S}' "
                f"for Kubernetes mode or '{MODE_POD}' for podman."
            )
        if self.mode not in (MODE_K8S, MODE_POD):
            raise ConfigError(
                f"Unknown mode: '{self.mode}'. Please set {ENV_VARS['mode']} "
                f"to '{MODE_K8S}' or '{MODE_POD}'."
            )
        return self.mode


def _load_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a mapping")
        return {}
    return data


def load_config(config_file: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> MaxlogConfig:
    """
    Load configuration from file and environment or use defaults.

    Args:
        config_file: YAML file to read; defaults to ``maxlog-config.yml``
        environ: Environment mapping; defaults to ``os.environ``

    Returns:
        The merged configuration
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    known = {f.name for f in fields(MaxlogConfig)}
    for key, value in _load_file(config_file or Path(CONFIG_FILE)).items():
        if key in known and value is not None:
            values[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")

    for key, env_name in ENV_VARS.items():
        value = environ.get(env_name)
        if value:
            values[key] = value

    if "use_nerdfont" in values:
        values["use_nerdfont"] = parse_bool(values["use_nerdfont"])
    for key in ("mode", "container", "namespace", "apptype", "tail", "focus"):
        if key in values:
            values[key] = str(values[key])

    return MaxlogConfig(**values)
