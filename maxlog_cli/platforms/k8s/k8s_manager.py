"""
Kubernetes log backend.

This module handles the cluster side of log retrieval:
- Loading the kubeconfig with the client's default rules
- Listing the pods of an application type in a namespace
- Requesting each pod's log stream
"""

import logging
from typing import Any, Dict, List, Optional

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from maxlog_cli.config.global_config import APP_TYPE_LABEL, DEFAULT_APP_TYPES
from maxlog_cli.core.errors import BackendError
from maxlog_cli.core.fanin import LogSource
from maxlog_cli.platforms.common import LogBackend, chunked_reader

logger = logging.getLogger(__name__)


def create_core_v1() -> client.CoreV1Api:
    """
    Create a CoreV1Api client from the default kubeconfig.

    Raises:
        BackendError: If no usable kubeconfig is found
    """
    try:
        config.load_kube_config()
    except (config.ConfigException, OSError) as e:
        raise BackendError(f"Error loading kubeconfig: {e}") from e
    return client.CoreV1Api()


class K8sLogBackend(LogBackend):
    """Reads the logs of every pod with a given application type."""

    name = "pod"

    def __init__(self, namespace: str, apptype: str, core_v1: Optional[Any] = None):
        """
        Initialize the Kubernetes log backend.

        Args:
            namespace: Namespace to list pods in
            apptype: Value of the application type label; also the container name
            core_v1: CoreV1Api client; created from the kubeconfig when omitted
        """
        self.namespace = namespace
        self.apptype = apptype
        self.core_v1 = core_v1 if core_v1 is not None else create_core_v1()

    @property
    def label_selector(self) -> str:
        return f"{APP_TYPE_LABEL}={self.apptype}"

    def source_names(self) -> List[str]:
        try:
            pods = self.core_v1.list_namespaced_pod(
                namespace=self.namespace,
                label_selector=self.label_selector,
            )
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            raise BackendError(f"Error getting pods: {e}") from e

        names = [pod.metadata.name for pod in pods.items]
        logger.info(f"Selected {len(names)} pods in {self.namespace} ({self.label_selector})")
        return names

    def open_source(self, name: str, tail: int, follow: bool) -> LogSource:
        try:
            response = self.core_v1.read_namespaced_pod_log(
                name=name,
                namespace=self.namespace,
                container=self.apptype,
                follow=follow,
                tail_lines=tail,
                _preload_content=False,
            )
        except (ApiException, urllib3.exceptions.HTTPError) as e:
            raise BackendError(f"Error getting pod logs for {name}: {e}") from e

        return LogSource(
            name=name,
            stream=chunked_reader(response.stream(decode_content=True)),
            framed=False,
            on_close=response.release_conn,
        )

    def describe(self) -> Dict[str, str]:
        return {
            "Namespace": self.namespace,
            "AppType": self.apptype or DEFAULT_APP_TYPES,
            "Selected Pods": str(len(self.source_names())),
        }
