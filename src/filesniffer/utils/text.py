"""Incremental line splitting for byte streams."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

NEWLINE = b"\n"
CARRIAGE_RETURN = b"\r"


class LineSplitter:
    """Split a stream of byte chunks into lines.

    Buffers incoming bytes just enough to cut complete lines. The newline
    (and a preceding carriage return) is not part of the returned line.
    When ``max_line_bytes`` is set, longer lines are truncated to that many
    bytes and the remainder up to the next newline is discarded. Empty lines
    are dropped unless ``keep_empty`` is true.
    """

    def __init__(self, max_line_bytes: Optional[int] = None, keep_empty: bool = False) -> None:
        self.max_line_bytes = max_line_bytes
        self.keep_empty = keep_empty
        self._buffer = bytearray()
        self._overflow = False

    def feed(self, chunk: bytes) -> List[bytes]:
        lines: List[bytes] = []
        start = 0
        while True:
            end = chunk.find(NEWLINE, start)
            if end == -1:
                self._append(chunk[start:])
                return lines
            self._append(chunk[start:end])
            line = self._take()
            if line or self.keep_empty:
                lines.append(line)
            start = end + 1

    def flush(self) -> List[bytes]:
        """Return the final unterminated line, if any."""
        if not self._buffer and not self._overflow:
            return []
        line = self._take()
        return [line] if line or self.keep_empty else []

    def _append(self, data: bytes) -> None:
        if self._overflow or not data:
            return
        self._buffer += data
        if self.max_line_bytes is not None and len(self._buffer) > self.max_line_bytes:
            del self._buffer[self.max_line_bytes :]
            self._overflow = True

    def _take(self) -> bytes:
        line = bytes(self._buffer)
        self._buffer.clear()
        self._overflow = False
        if line.endswith(CARRIAGE_RETURN):
            line = line[:-1]
        return line


def split_lines(
    chunks: Iterable[bytes], *, max_line_bytes: Optional[int] = None, keep_empty: bool = False
) -> Iterator[bytes]:
    """Split an iterable of byte chunks into lines."""
    splitter = LineSplitter(max_line_bytes=max_line_bytes, keep_empty=keep_empty)
    for chunk in chunks:
        yield from splitter.feed(chunk)
    yield from splitter.flush()
