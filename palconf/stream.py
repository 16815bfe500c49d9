"""Chunked reading of configuration byte streams.

Input is read into one fixed-size, reusable buffer. Everything up to the
last line break of the filled region is handed to the line sink; the
unfinished tail is moved to the front of the buffer and completed by the
next read. Where read boundaries fall never changes the result.

Only ASCII-compatible encodings are supported: the buffer is cut at ``\\r``
and ``\\n`` bytes before decoding.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional, Protocol

from palconf.errors import LineTooLongError

logger = logging.getLogger("palconf.stream")

_LINE_BREAKS_RE = re.compile(r"[\r\n]+")
_PREVIEW_BYTES = 80


class ByteSource(Protocol):
    """Blocking binary input, such as a file opened with ``"rb"``."""

    def readinto(self, buffer: memoryview) -> Optional[int]:
        """Fill ``buffer`` and return the number of bytes read (0 at end)."""
        ...


class LineSink(Protocol):
    """Consumer of decoded text made of complete lines."""

    def feed(self, text: str, source: str, line_number: int) -> int:
        """Process every line in ``text`` and return the next line number."""
        ...


def iter_lines(text: str) -> Iterator[str]:
    """Yield the non-empty lines of ``text``.

    ``\\r`` and ``\\n`` each count as a line break; empty lines produced by
    runs of breaks are skipped.
    """
    for raw_line in _LINE_BREAKS_RE.split(text):
        if raw_line:
            yield raw_line


def _last_line_break(buffer: bytearray, end: int) -> int:
    return max(buffer.rfind(b"\n", 0, end), buffer.rfind(b"\r", 0, end))


def stream_lines(
    sink: LineSink,
    source: ByteSource,
    name: str,
    buffer_size: int = 4096,
    encoding: str = "utf-8",
) -> None:
    """Read ``source`` to the end and feed its lines to ``sink``.

    Args:
        sink: Receives decoded runs of complete lines.
        source: Byte source to drain.
        name: Input name used in diagnostics.
        buffer_size: Read buffer capacity; lines must be shorter.
        encoding: Text encoding of the input.

    Raises:
        LineTooLongError: A line does not fit into the buffer.
    """
    buffer = bytearray(buffer_size)
    view = memoryview(buffer)
    offset = 0
    line_number = 1

    while True:
        bytes_read = source.readinto(view[offset:]) or 0
        end = offset + bytes_read
        last_break = _last_line_break(buffer, end)

        if last_break != -1:
            processed = last_break + 1
            text = buffer[:processed].decode(encoding)
            line_number = sink.feed(text, name, line_number)
            unused = end - processed
            buffer[:unused] = buffer[processed:end]
            offset = unused
        elif end == buffer_size:
            preview = buffer[:_PREVIEW_BYTES].decode(encoding, errors="replace")
            logger.error("Line too long at %s:%d: %r", name, line_number, preview)
            raise LineTooLongError(
                f"Line {line_number} of {name} exceeds {buffer_size - 1} bytes"
            )
        elif bytes_read == 0:
            sink.feed(buffer[:end].decode(encoding), name, line_number)
            break
        else:
            offset = end

    logger.debug("Finished streaming %s", name)


__all__ = ["ByteSource", "LineSink", "iter_lines", "stream_lines"]
