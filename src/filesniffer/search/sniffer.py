"""Concurrent multi-file line search."""

from __future__ import annotations

import asyncio
import logging
import os
import zlib
from dataclasses import replace
from typing import Any, Callable, Coroutine, Dict, List, Optional, Sequence

from filesniffer.config import SnifferConfig
from filesniffer.exceptions import (
    MissingPatternError,
    ResolutionError,
    ScanError,
    SnifferConsumedError,
    SnifferError,
)
from filesniffer.ingestion.stream import iter_lines
from filesniffer.models import ResolvedFile, ScanOutcome, SnifferState
from filesniffer.search.collectors import Collector, NoopCollector
from filesniffer.search.matcher import Criterion, Matcher, build_matcher, is_missing
from filesniffer.search.resolver import InputResolver, Source, normalize_source
from filesniffer.search.tracker import CompletionTracker
from filesniffer.utils.binary import is_binary

LOGGER = logging.getLogger(__name__)

EVENTS = ("match", "eof", "end", "error")

Listener = Callable[..., Any]


class FileSniffer:
    """Searches files line by line and reports matches as they are found.

    Configure with the fluent methods, register listeners with ``on`` and
    start the run with ``find``::

        sniffer = FileSniffer.create().path("logs").depth(1).collect(as_dict())
        sniffer.on("match", lambda path, line: print(path, line))
        results = await sniffer.find(re.compile(r"^ERROR"))

    Every text file is scanned concurrently. ``match(path, line)`` fires per
    matching line, ``eof(path)`` once per scanned file, ``error(exc)`` for
    each non-fatal problem and ``end(filenames)`` exactly once at the end.
    A sniffer runs a single search.
    """

    def __init__(self, source: Optional[Source] = None, config: SnifferConfig | None = None) -> None:
        self.config = replace(config) if config is not None else SnifferConfig()
        self.state = SnifferState.IDLE
        self.outcome = ScanOutcome()
        self._source = source
        self._targets: Optional[List[str]] = None
        self._collector: Collector = NoopCollector()
        self._listeners: Dict[str, List[Listener]] = {event: [] for event in EVENTS}
        self._consumed = False

    @classmethod
    def create(cls, *sources: Any, config: SnifferConfig | None = None) -> "FileSniffer":
        """Create a sniffer; without arguments it searches the working directory.

        Raises ``InvalidInputSourceError`` for a source that is neither a
        path, a list of paths nor a ``FileLister``.
        """
        return cls(normalize_source(sources), config=config)

    # -- configuration -----------------------------------------------------

    def path(self, path: str | os.PathLike[str]) -> "FileSniffer":
        if self._targets is None:
            self._targets = []
        self._targets.append(os.fspath(path))
        return self

    def paths(self, *paths: Any) -> "FileSniffer":
        """Add several targets, either as one list/tuple or as separate arguments."""
        if paths and isinstance(paths[0], (list, tuple)):
            items: Sequence[Any] = paths[0]
        elif paths and isinstance(paths[0], (str, os.PathLike)):
            items = paths
        else:
            raise TypeError("paths must be a list")
        targets = [os.fspath(item) for item in items]
        if self._targets is None:
            self._targets = []
        self._targets.extend(targets)
        return self

    def depth(self, depth: int) -> "FileSniffer":
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise TypeError("Depth must be an integer")
        if depth < 0:
            raise ValueError("Depth must be >= 0")
        self.config.depth = depth
        return self

    def gzip(self) -> "FileSniffer":
        self.config.gzip_mode = True
        return self

    def collect(self, collector: Collector) -> "FileSniffer":
        if not isinstance(collector, Collector):
            raise TypeError("collector must provide record() and snapshot()")
        self._collector = collector
        return self

    def limit(self, max_concurrency: Optional[int]) -> "FileSniffer":
        """Cap the number of files scanned at once; ``None`` removes the cap."""
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("Concurrency limit must be >= 1")
        self.config.max_concurrency = max_concurrency
        return self

    # -- events ------------------------------------------------------------

    def on(self, event: str, listener: Listener) -> "FileSniffer":
        self._listeners_for(event).append(listener)
        return self

    def off(self, event: str, listener: Listener) -> "FileSniffer":
        listeners = self._listeners_for(event)
        if listener in listeners:
            listeners.remove(listener)
        return self

    def _listeners_for(self, event: str) -> List[Listener]:
        try:
            return self._listeners[event]
        except KeyError:
            raise ValueError(f"Unknown event {event!r}; expected one of {', '.join(EVENTS)}") from None

    def _emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(*args)

    def _report(self, error: SnifferError) -> None:
        LOGGER.warning("%s", error)
        self.outcome.errors.append(error)
        self._emit("error", error)

    # -- search ------------------------------------------------------------

    def find(self, criterion: Criterion) -> Coroutine[Any, Any, Any]:
        """Start the search; await the result to get the collector snapshot.

        A missing or unsupported criterion, or a second call, raises right
        away before any file is touched.
        """
        if is_missing(criterion):
            raise MissingPatternError()
        matcher = build_matcher(criterion)
        if self._consumed:
            raise SnifferConsumedError()
        self._consumed = True
        return self._run(matcher)

    def find_sync(self, criterion: Criterion) -> Any:
        return asyncio.run(self.find(criterion))

    def _effective_source(self) -> Source:
        if self._targets is not None:
            return self._targets
        if self._source is not None:
            return self._source
        return []

    async def _run(self, matcher: Matcher) -> Any:
        try:
            self.state = SnifferState.RESOLVING
            resolver = InputResolver(self.config, self._report)
            resolved = await resolver.resolve(self._effective_source())
            self.state = SnifferState.FILTERING
            candidates = await asyncio.to_thread(self._text_files, resolved)
        except SnifferError:
            self.state = SnifferState.FAILED
            raise

        self.state = SnifferState.SCANNING
        tracker = CompletionTracker(self._finish)
        tracker.start(len(candidates))
        semaphore = None
        if self.config.max_concurrency is not None:
            semaphore = asyncio.Semaphore(self.config.max_concurrency)

        tasks = [
            asyncio.create_task(self._scan_file(candidate.path, matcher, tracker, semaphore))
            for candidate in candidates
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            self.state = SnifferState.FAILED
            raise
        await tracker.wait()
        return self._collector.snapshot()

    def _text_files(self, resolved: List[ResolvedFile]) -> List[ResolvedFile]:
        candidates = []
        for item in resolved:
            try:
                binary = is_binary(
                    item.path,
                    gzip_mode=self.config.gzip_mode,
                    sample_bytes=self.config.sample_bytes,
                )
            except OSError as exc:
                raise ResolutionError(item.path, exc) from exc
            if not binary:
                candidates.append(item)
        LOGGER.debug("%d of %d file(s) are text", len(candidates), len(resolved))
        return candidates

    async def _scan_file(
        self,
        path: str,
        matcher: Matcher,
        tracker: CompletionTracker,
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        if semaphore is None:
            matched = await self._scan_lines(path, matcher)
        else:
            async with semaphore:
                matched = await self._scan_lines(path, matcher)

        tracker.decrement()
        self.outcome.files_scanned += 1
        self._emit("eof", path)
        if matched:
            self.outcome.mark_matched(path)
        tracker.check()

    async def _scan_lines(self, path: str, matcher: Matcher) -> bool:
        LOGGER.debug("Scanning %s", path)
        matched = False
        try:
            async for line in iter_lines(
                path,
                gzip_mode=self.config.gzip_mode,
                chunk_size=self.config.chunk_size,
                max_line_bytes=self.config.max_line_bytes,
                encoding=self.config.encoding,
            ):
                if matcher.matches(line):
                    matched = True
                    self._emit("match", path, line)
                    self._collector.record(path, line)
        except (OSError, EOFError, zlib.error) as exc:
            self._report(ScanError(path, exc))
        return matched

    def _finish(self) -> None:
        self.state = SnifferState.FINALIZING
        filenames = list(self.outcome.matched_files)
        LOGGER.info(
            "Scanned %d file(s), %d matched", self.outcome.files_scanned, len(filenames)
        )
        self._emit("end", filenames)
        self.state = SnifferState.COMPLETED
