"""
Docker/Podman log backend.

This module talks to the container runtime's Docker-compatible HTTP API:
- Resolving a container name to its ID
- Requesting the multiplexed log stream of a container
"""

import logging
import os
from typing import Dict, List, Optional
from urllib.parse import quote

import requests
import requests_unixsocket

from maxlog_cli.core.errors import BackendError
from maxlog_cli.core.fanin import LogSource
from maxlog_cli.platforms.common import LogBackend, chunked_reader

logger = logging.getLogger(__name__)

DEFAULT_SOCKET = "/var/run/docker.sock"


def api_base_url(docker_host: Optional[str] = None) -> str:
    """
    Build the API base URL from a ``DOCKER_HOST`` value.

    Args:
        docker_host: ``unix://<path>`` or ``tcp://<host>:<port>``; the default
                     socket is used when empty

    Returns:
        Base URL usable with a requests-unixsocket session
    """
    if not docker_host:
        docker_host = f"unix://{DEFAULT_SOCKET}"
    if docker_host.startswith("unix://"):
        return "http+unix://" + quote(docker_host[len("unix://"):], safe="")
    if docker_host.startswith("tcp://"):
        return "http://" + docker_host[len("tcp://"):]
    if docker_host.startswith(("http://", "https://")):
        return docker_host.rstrip("/")
    raise BackendError(f"Unsupported DOCKER_HOST: {docker_host}")


class DockerLogBackend(LogBackend):
    """Reads the logs of one named container."""

    name = "container"

    def __init__(
        self,
        container: str,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: int = 10,
    ):
        """
        Initialize the Docker log backend.

        Args:
            container: Container name as shown by ``docker ps``
            session: HTTP session; a requests-unixsocket session by default
            base_url: API base URL; derived from ``DOCKER_HOST`` by default
            timeout: Connect timeout in seconds
        """
        self.container = container
        self.session = session or requests_unixsocket.Session()
        self.base_url = base_url or api_base_url(os.environ.get("DOCKER_HOST"))
        self.timeout = timeout

    def _get(self, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} {kwargs.get('params', '')}")
        try:
            return self.session.get(url, timeout=(self.timeout, None), **kwargs)
        except requests.RequestException as e:
            raise BackendError(f"Cannot reach container runtime: {e}") from e

    def find_container_id(self, name: str) -> str:
        """
        Resolve a container name to its ID.

        Raises:
            BackendError: If the runtime cannot be queried or no container matches
        """
        response = self._get("/containers/json")
        if response.status_code != 200:
            raise BackendError(f"Listing containers failed: HTTP {response.status_code}")

        for container in response.json():
            if f"/{name}" in container.get("Names", []):
                return container["Id"]

        raise BackendError(f"The search for container '{name}' has not yielded any results.")

    def source_names(self) -> List[str]:
        return [self.container]

    def open_source(self, name: str, tail: int, follow: bool) -> LogSource:
        cid = self.find_container_id(name)
        params = {
            "stdout": "1",
            "stderr": "1",
            "timestamps": "1",
            "follow": "1" if follow else "0",
            "tail": str(tail),
        }
        response = self._get(f"/containers/{cid}/logs", params=params, stream=True)
        if response.status_code != 200:
            response.close()
            raise BackendError(f"Fetching logs of {name} failed: HTTP {response.status_code}")

        return LogSource(
            name=name,
            stream=chunked_reader(response.iter_content(chunk_size=None)),
            framed=True,
            on_close=response.close,
        )

    def describe(self) -> Dict[str, str]:
        return {
            "Container": self.container,
            "CID": self.find_container_id(self.container),
        }
