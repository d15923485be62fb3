"""pytest tests for concurrent fan-in of log sources."""

import io
import struct
import threading

from maxlog_cli.core.annotate import annotate
from maxlog_cli.core.fanin import FanInCoordinator, LineWriter, LogSource
from maxlog_cli.utils.colors import Colors


def frame(payload: bytes) -> bytes:
    return struct.pack(">BxxxI", 1, len(payload)) + payload


def text_source(name: str, lines) -> LogSource:
    data = "".join(f"{line}\n" for line in lines).encode()
    return LogSource(name=name, stream=io.BytesIO(data))


class FailingStream(io.RawIOBase):
    """Yields some lines, then fails like a dropped connection."""

    def __init__(self, lines):
        self._lines = [f"{line}\n".encode() for line in lines]

    def readable(self):
        return True

    def readline(self, size=-1):
        if self._lines:
            return self._lines.pop(0)
        raise ConnectionResetError("stream reset")


class BlockingStream(io.RawIOBase):
    """Never returns data until released, like a followed stream."""

    def __init__(self):
        self.release = threading.Event()

    def readable(self):
        return True

    def readline(self, size=-1):
        self.release.wait(timeout=10)
        return b""


def make_coordinator(**kwargs):
    sink = io.StringIO()
    return FanInCoordinator(writer=LineWriter(sink), **kwargs), sink


def test_all_lines_of_all_sources_are_written():
    coordinator, sink = make_coordinator()
    sources = [
        text_source(name, [f"[INFO] {name} line {i}" for i in range(5)])
        for name in ("pod-a", "pod-b", "pod-c")
    ]

    results = coordinator.run(sources)

    assert sorted(r.name for r in results) == ["pod-a", "pod-b", "pod-c"]
    assert all(r.ok and r.lines == 5 for r in results)
    output = sink.getvalue().splitlines()
    assert len(output) == 15
    for name in ("pod-a", "pod-b", "pod-c"):
        for i in range(5):
            assert annotate(f"[INFO] {name} line {i}") in output


def test_order_is_kept_within_a_source():
    coordinator, sink = make_coordinator()
    lines = [f"{name} {i}" for name in ("a", "b") for i in range(50)]
    sources = [
        text_source("a", [line for line in lines if line.startswith("a")]),
        text_source("b", [line for line in lines if line.startswith("b")]),
    ]

    coordinator.run(sources)

    output = sink.getvalue().splitlines()
    assert [line for line in output if line.startswith("a")] == [f"a {i}" for i in range(50)]
    assert [line for line in output if line.startswith("b")] == [f"b {i}" for i in range(50)]


def test_framed_and_unframed_sources_mix():
    coordinator, sink = make_coordinator()
    framed = LogSource(
        name="container",
        stream=io.BytesIO(frame(b"2025-01-01T00:00:00Z from runtime\n")),
        framed=True,
    )
    results = coordinator.run([framed, text_source("pod", ["from cluster"])])

    assert all(r.ok for r in results)
    assert sorted(sink.getvalue().splitlines()) == ["from cluster", "from runtime"]


def test_failed_source_does_not_stop_others():
    coordinator, sink = make_coordinator()
    broken = LogSource(name="broken", stream=FailingStream(["before failure"]))
    healthy = text_source("healthy", [f"line {i}" for i in range(5)])

    results = {r.name: r for r in coordinator.run([broken, healthy])}

    assert not results["broken"].ok
    assert results["broken"].lines == 1
    assert results["healthy"].ok
    output = sink.getvalue().splitlines()
    assert "before failure" in output
    assert all(f"line {i}" in output for i in range(5))


def test_fail_fast_returns_on_first_failure():
    coordinator, _ = make_coordinator(fail_fast=True)
    blocking = BlockingStream()
    try:
        results = coordinator.run([
            LogSource(name="follow", stream=blocking),
            LogSource(name="broken", stream=FailingStream([])),
        ])
    finally:
        blocking.release.set()

    assert [r.name for r in results] == ["broken"]
    assert not results[0].ok


def test_no_sources_returns_immediately():
    coordinator, sink = make_coordinator()
    assert coordinator.run([]) == []
    assert sink.getvalue() == ""


def test_sources_are_closed_when_done():
    coordinator, _ = make_coordinator()
    closed = []
    source = text_source("pod", ["one"])
    source.on_close = lambda: closed.append(source.name)

    coordinator.run([source])

    assert closed == ["pod"]
    assert source.stream.closed


def test_focus_filters_lines():
    coordinator, sink = make_coordinator(focus="order")
    coordinator.run([text_source("pod", ["ORDER 1 created", "heartbeat", "order 2 shipped"])])
    assert sink.getvalue().splitlines() == ["ORDER 1 created", "order 2 shipped"]


def test_tag_is_highlighted_in_output():
    coordinator, sink = make_coordinator(tag="ABC")
    coordinator.run([text_source("pod", ["12:00 [job] ABC done"])])
    assert Colors.WHITE + " [job]" in sink.getvalue()


def test_line_writer_writes_whole_lines_from_many_threads():
    sink = io.StringIO()
    writer = LineWriter(sink)
    line = Colors.RED + "x" * 200 + Colors.RESET

    threads = [
        threading.Thread(target=lambda: [writer.write_line(line) for _ in range(100)])
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    output = sink.getvalue().splitlines()
    assert len(output) == 800
    assert set(output) == {line}
