"""
Log stream decoding.

Two wire shapes reach the decoder:

- Framed: the container runtime multiplexes stdout/stderr into frames made
  of an 8-byte header ``[type:1][reserved:3][length:4 big-endian]`` followed
  by ``length`` payload bytes. Each payload is ``"<timestamp> <message>"``.
- Unframed: the cluster API returns plain newline-delimited text.

Both decoders are generators that hold at most one record in memory and stop
cleanly at end of data. Any other read failure is raised as SourceReadError.
"""

import logging
import struct
from typing import BinaryIO, Iterator, Optional, Tuple

from maxlog_cli.core.errors import SourceReadError

logger = logging.getLogger(__name__)

HEADER_SIZE = 8
HEADER_FORMAT = ">BxxxI"

STREAM_NAMES = {0: "stdin", 1: "stdout", 2: "stderr"}


def _read(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, wrapping I/O failures."""
    try:
        return stream.read(size)
    except OSError as e:
        raise SourceReadError(f"Failed to read log stream: {e}") from e


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read exactly ``size`` bytes unless the stream ends first.

    Args:
        stream: Binary stream to read from
        size: Number of bytes wanted

    Returns:
        The bytes read; shorter than ``size`` only at end of data
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = _read(stream, remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def split_timestamp(payload: str) -> Optional[Tuple[str, str]]:
    """
    Split a runtime log record into its timestamp and message.

    Returns:
        (timestamp, message), or None when the record has no separator
    """
    timestamp, sep, message = payload.partition(" ")
    if not sep:
        return None
    return timestamp, message


def decode_framed(stream: BinaryIO) -> Iterator[str]:
    """
    Decode a multiplexed runtime log stream into message lines.

    Records without a timestamp separator are dropped. A truncated header or
    payload is treated as end of data.

    Args:
        stream: Binary stream positioned at a frame boundary

    Yields:
        Message text of each record, timestamp and trailing newline removed
    """
    while True:
        header = read_exact(stream, HEADER_SIZE)
        if len(header) < HEADER_SIZE:
            if header:
                logger.debug(f"Discarding truncated frame header ({len(header)} bytes)")
            return

        stream_type, length = struct.unpack(HEADER_FORMAT, header)
        payload = read_exact(stream, length)
        if len(payload) < length:
            logger.debug(f"Frame truncated: expected {length} bytes, got {len(payload)}")
            return

        record = split_timestamp(payload.decode("utf-8", errors="replace"))
        if record is None:
            logger.debug(f"Dropping malformed {STREAM_NAMES.get(stream_type, 'unknown')} record")
            continue

        yield record[1].rstrip("\r\n")


def decode_lines(stream: BinaryIO) -> Iterator[str]:
    """Decode newline-delimited text, yielding lines without their newline."""
    while True:
        try:
            line = stream.readline()
        except OSError as e:
            raise SourceReadError(f"Failed to read log stream: {e}") from e
        if not line:
            return
        yield line.decode("utf-8", errors="replace").rstrip("\r\n")


def decode(stream: BinaryIO, framed: bool) -> Iterator[str]:
    """Decode ``stream`` with the wire shape chosen by its backend."""
    if framed:
        return decode_framed(stream)
    return decode_lines(stream)
