"""
Backend selection from configuration.
"""

import logging

from maxlog_cli.config.global_config import MODE_K8S, MaxlogConfig
from maxlog_cli.core.errors import ConfigError
from maxlog_cli.platforms.common import LogBackend
from maxlog_cli.platforms.docker.docker_manager import DockerLogBackend
from maxlog_cli.platforms.k8s.k8s_manager import K8sLogBackend

logger = logging.getLogger(__name__)


def create_backend(cfg: MaxlogConfig, require_apptype: bool = True) -> LogBackend:
    """
    Build the log backend for the configured mode.

    Args:
        cfg: Effective configuration
        require_apptype: Reject a Kubernetes selection without an app type.
                         Inspecting only needs the namespace.

    Raises:
        ConfigError: If the mode or its required settings are missing
        BackendError: If the backend client cannot be created
    """
    mode = cfg.validate_mode()
    if mode == MODE_K8S:
        if not cfg.namespace:
            raise ConfigError("Please set MAXLOG_K8S_NAMESPACE environment variable.")
        if require_apptype and not cfg.apptype:
            raise ConfigError(
                "Please set MAXLOG_K8S_NAMESPACE and MAXLOG_K8S_APPTYPE environment variables."
            )
        logger.debug(f"Using Kubernetes backend: namespace={cfg.namespace} apptype={cfg.apptype}")
        return K8sLogBackend(cfg.namespace, cfg.apptype)

    if not cfg.container:
        raise ConfigError("Container name is not set. Please set MAXLOG_CONTAINER environment variable.")
    logger.debug(f"Using container runtime backend: container={cfg.container}")
    return DockerLogBackend(cfg.container)
