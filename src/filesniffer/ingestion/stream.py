"""Streaming line sources for scanned files.

Each file is read in chunks on a worker thread, optionally passed through
a gzip decoder, and cut into lines without ever holding the whole file in
memory.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
import zlib
from typing import AsyncIterator, Optional

from filesniffer.config import DEFAULT_CHUNK_SIZE
from filesniffer.utils.files import PathLike, is_gzip_path
from filesniffer.utils.text import LineSplitter

LOGGER = logging.getLogger(__name__)

# Accept the gzip header only, not raw deflate or zlib streams.
_GZIP_WBITS = zlib.MAX_WBITS | 16

_DONE = object()


class GzipDecoder:
    """Incremental gzip decoder that also handles concatenated members."""

    def __init__(self) -> None:
        self._decompressor = zlib.decompressobj(_GZIP_WBITS)
        self._in_member = False

    def decompress(self, data: bytes) -> bytes:
        output = bytearray()
        while True:
            if not self._in_member:
                # NUL padding between or after members is tolerated, like gzip.open does.
                data = data.lstrip(b"\x00")
            if not data:
                break
            self._in_member = True
            output += self._decompressor.decompress(data)
            if not self._decompressor.eof:
                break
            self._in_member = False
            data = self._decompressor.unused_data
            self._decompressor = zlib.decompressobj(_GZIP_WBITS)
        return bytes(output)

    def flush(self) -> bytes:
        if self._in_member:
            raise EOFError("Compressed file ended before the end-of-stream marker was reached")
        return b""


def wants_gzip(path: PathLike, gzip_mode: bool) -> bool:
    """A decoder is interposed only in gzip mode and only for ``.gz`` files."""
    return gzip_mode and is_gzip_path(path)


def _pump(
    path: PathLike,
    chunk_size: int,
    loop: asyncio.AbstractEventLoop,
    queue: asyncio.Queue,
    closed: threading.Event,
) -> None:
    """Read ``path`` to the end in one worker job, handing chunks to ``queue``.

    The handle lives only inside this call, so no more files are open at
    once than there are worker threads. The last item queued is either
    ``_DONE`` or the exception that stopped the read.
    """
    last: object = _DONE
    try:
        with open(os.fspath(path), "rb") as handle:
            while not closed.is_set():
                chunk = handle.read(chunk_size)
                if not chunk:
                    break
                loop.call_soon_threadsafe(queue.put_nowait, chunk)
    except Exception as exc:
        last = exc
    loop.call_soon_threadsafe(queue.put_nowait, last)


async def iter_chunks(path: PathLike, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the raw bytes of ``path`` in chunks read on a worker thread."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()
    closed = threading.Event()
    loop.run_in_executor(None, _pump, path, chunk_size, loop, queue, closed)
    try:
        while True:
            item = await queue.get()
            if item is _DONE:
                return
            if isinstance(item, BaseException):
                raise item
            yield item
    finally:
        closed.set()


async def iter_lines(
    path: PathLike,
    *,
    gzip_mode: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_line_bytes: Optional[int] = None,
    encoding: str = "utf-8",
) -> AsyncIterator[str]:
    """Yield the decoded, non-empty lines of ``path`` in file order.

    Raises ``OSError`` if the file cannot be opened or read, and
    ``zlib.error``/``EOFError`` for corrupt or truncated gzip data.
    """
    decoder = None
    if wants_gzip(path, gzip_mode):
        LOGGER.debug("Decompressing %s", path)
        decoder = GzipDecoder()
    splitter = LineSplitter(max_line_bytes=max_line_bytes)
    chunks = iter_chunks(path, chunk_size=chunk_size)
    try:
        async for chunk in chunks:
            if decoder is not None:
                chunk = decoder.decompress(chunk)
            for line in splitter.feed(chunk):
                yield line.decode(encoding, errors="replace")
    finally:
        await chunks.aclose()
    if decoder is not None:
        for line in splitter.feed(decoder.flush()):
            yield line.decode(encoding, errors="replace")
    for line in splitter.flush():
        yield line.decode(encoding, errors="replace")
