"""
Concurrent fan-in of log sources.

Each LogSource is read on its own thread: decoded, filtered, annotated and
written to one shared LineWriter. The coordinator waits until every source
has reported a SourceResult, so no source is abandoned while it still
streams. In follow mode the streams never end and the coordinator blocks
until the process is interrupted.
"""

import logging
import queue
import sys
import threading
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterator, List, Optional, Sequence, TextIO

from maxlog_cli.core.annotate import annotate, matches_focus, rules_for
from maxlog_cli.core.frames import decode

logger = logging.getLogger(__name__)


@dataclass
class LogSource:
    """One readable log stream and the name of the container or pod behind it."""
    name: str
    stream: BinaryIO
    framed: bool = False
    on_close: Optional[Callable[[], None]] = None

    def close(self) -> None:
        """Release the stream and any connection backing it."""
        try:
            self.stream.close()
        finally:
            if self.on_close is not None:
                self.on_close()


@dataclass(frozen=True)
class SourceResult:
    """Terminal state of one source: lines written and the failure, if any."""
    name: str
    lines: int
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LineWriter:
    """Writes whole lines to a text sink, one line at a time across threads."""

    def __init__(self, sink: Optional[TextIO] = None):
        self._sink = sink
        self._lock = threading.Lock()

    @property
    def sink(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured
        return self._sink if self._sink is not None else sys.stdout

    def write_line(self, text: str) -> None:
        with self._lock:
            self.sink.write(text + "\n")
            self.sink.flush()


class FanInCoordinator:
    """
    Runs one reader thread per log source and merges their output.

    Attributes:
        writer: Shared output for annotated lines.
        tag: Tag to highlight; empty disables highlighting.
        focus: Only lines containing this text are written; empty keeps all.
        use_nerdfont: Draw Nerd Font caps around labels.
        fail_fast: Return as soon as one source fails instead of waiting
                   for the others.
    """

    def __init__(
        self,
        writer: Optional[LineWriter] = None,
        tag: str = "",
        focus: str = "",
        use_nerdfont: bool = True,
        fail_fast: bool = False,
    ):
        self.writer = writer or LineWriter()
        self.tag = tag
        self.focus = focus
        self.use_nerdfont = use_nerdfont
        self.fail_fast = fail_fast
        self._rules = rules_for(tag)

    def annotated_lines(self, source: LogSource) -> Iterator[str]:
        """
        Decode, filter and annotate one source until its stream ends.

        Raises:
            SourceReadError: If the stream fails before end of data
        """
        for line in decode(source.stream, source.framed):
            if matches_focus(line, self.focus):
                yield annotate(line, self.tag, self.use_nerdfont, self._rules)

    def _worker(self, source: LogSource, results: "queue.Queue[SourceResult]") -> None:
        lines = 0
        error = None
        try:
            for text in self.annotated_lines(source):
                self.writer.write_line(text)
                lines += 1
        except Exception as e:
            error = e
        finally:
            try:
                source.close()
            except Exception as e:
                logger.debug(f"Failed to close log source {source.name}: {e}")
            results.put(SourceResult(source.name, lines, error))

    def run(self, sources: Sequence[LogSource]) -> List[SourceResult]:
        """
        Stream all sources concurrently and wait for them to finish.

        Args:
            sources: Opened log sources, one reader thread each

        Returns:
            One SourceResult per source in completion order. With
            ``fail_fast`` the list ends at the first failure.
        """
        results: "queue.Queue[SourceResult]" = queue.Queue()
        for source in sources:
            logger.debug(f"Starting reader for {source.name}")
            thread = threading.Thread(
                target=self._worker,
                args=(source, results),
                name=f"maxlog-{source.name}",
                daemon=True,
            )
            thread.start()

        finished: List[SourceResult] = []
        while len(finished) < len(sources):
            result = results.get()
            finished.append(result)
            if result.ok:
                logger.debug(f"Log stream for {result.name} ended after {result.lines} lines")
                continue
            logger.error(f"Log stream for {result.name} failed: {result.error}")
            if self.fail_fast:
                break
        return finished
