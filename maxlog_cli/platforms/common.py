"""
Common backend helpers.

This module contains functionality shared by the Docker and Kubernetes log
backends: the backend interface and an adapter that turns a chunked HTTP
response into a readable binary stream for the decoders.
"""

import io
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

import urllib3

from maxlog_cli.core.fanin import LogSource

logger = logging.getLogger(__name__)


class ChunkedStream(io.RawIOBase):
    """Raw binary stream over an iterator of byte chunks."""

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except urllib3.exceptions.HTTPError as e:
                # Broken chunked transfer surfaces as a read error
                raise OSError(str(e)) from e
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


def chunked_reader(chunks: Iterable[bytes]) -> io.BufferedReader:
    """Wrap chunks in a buffered reader supporting ``read(n)`` and ``readline()``."""
    return io.BufferedReader(ChunkedStream(chunks))


class LogBackend(ABC):
    """Base class for log backends."""

    name = "backend"

    @abstractmethod
    def source_names(self) -> List[str]:
        """
        List the containers or pods to read logs from.

        Raises:
            BackendError: If the backend cannot be queried
        """
        pass

    @abstractmethod
    def open_source(self, name: str, tail: int, follow: bool) -> LogSource:
        """
        Request the log stream of one container or pod.

        Args:
            name: Container or pod name
            tail: Number of most recent lines to start with
            follow: Keep the stream open for new lines

        Raises:
            BackendError: If the stream cannot be opened
        """
        pass

    @abstractmethod
    def describe(self) -> Dict[str, str]:
        """Summarise the backend selection for the inspect command."""
        pass

    def open_sources(self, tail: int, follow: bool) -> List[LogSource]:
        """Open every selected source, closing the opened ones if any request fails."""
        sources: List[LogSource] = []
        try:
            for name in self.source_names():
                logger.debug(f"Opening {self.name} log stream for {name}")
                sources.append(self.open_source(name, tail, follow))
        except Exception:
            for source in sources:
                source.close()
            raise
        return sources
