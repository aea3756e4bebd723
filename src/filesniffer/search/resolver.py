"""Turn search targets into the concrete list of files to scan."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from typing import Callable, List, Sequence, Tuple, Union

from filesniffer.config import SnifferConfig
from filesniffer.exceptions import InvalidInputSourceError, ResolutionError
from filesniffer.models import FileKind, ResolvedFile
from filesniffer.utils.files import FileLister

LOGGER = logging.getLogger(__name__)

Source = Union[List[str], FileLister]
ErrorHandler = Callable[[ResolutionError], None]


def _is_path(value: object) -> bool:
    return isinstance(value, (str, os.PathLike))


def normalize_source(args: Sequence[object]) -> Source:
    """Validate the arguments of the legacy ``FileSniffer.create`` entry point.

    No argument means the current working directory. A single argument may
    be a path, a list/tuple of paths or a ``FileLister``; several arguments
    must all be paths.
    """
    if not args:
        return [os.getcwd()]
    first = args[0]
    if isinstance(first, FileLister):
        return first
    if isinstance(first, (list, tuple)):
        return [os.fspath(path) for path in first]
    if not _is_path(first):
        raise InvalidInputSourceError(first)
    if not all(_is_path(arg) for arg in args):
        raise InvalidInputSourceError(args)
    return [os.fspath(arg) for arg in args]


class InputResolver:
    """Resolves targets into files; directories are expanded with a ``FileLister``.

    Stat failures are handed to ``on_error`` and the target is dropped. If
    every target fails, the first failure is raised instead.
    """

    def __init__(self, config: SnifferConfig, on_error: ErrorHandler) -> None:
        self.config = config
        self.on_error = on_error

    async def resolve(self, source: Source) -> List[ResolvedFile]:
        if isinstance(source, FileLister):
            listed = await source.find()
            return [ResolvedFile(os.path.abspath(path), FileKind.DIRECTORY) for path in listed]

        if not source:
            return []

        files, dirs, failures = await asyncio.to_thread(self._partition, list(source))
        for failure in failures:
            self.on_error(failure)
        if failures and not files and not dirs:
            raise failures[0]

        expanded: List[str] = []
        if dirs:
            expanded = await self._expand(dirs)

        LOGGER.debug(
            "Resolved %d target(s) into %d candidate file(s)",
            len(files) + len(dirs),
            len(files) + len(expanded),
        )
        resolved = [ResolvedFile(path, FileKind.FILE) for path in files]
        resolved.extend(ResolvedFile(path, FileKind.DIRECTORY) for path in expanded)
        return resolved

    @staticmethod
    def _partition(targets: List[str]) -> Tuple[List[str], List[str], List[ResolutionError]]:
        files: List[str] = []
        dirs: List[str] = []
        failures: List[ResolutionError] = []
        for target in targets:
            path = os.path.abspath(target)
            try:
                is_dir = stat.S_ISDIR(os.stat(path).st_mode)
            except OSError as exc:
                failures.append(ResolutionError(target, exc))
                continue
            (dirs if is_dir else files).append(path)
        return files, dirs, failures

    async def _expand(self, dirs: List[str]) -> List[str]:
        listing_errors: List[Tuple[str, OSError]] = []
        lister = FileLister(
            dirs,
            depth=self.config.depth,
            ignore_hidden=self.config.ignore_hidden,
            on_error=lambda path, exc: listing_errors.append((path, exc)),
        )
        listed = await lister.find()
        # The lister runs on a worker thread; report back on the loop.
        for path, exc in listing_errors:
            self.on_error(ResolutionError(path, exc))
        return [os.path.abspath(path) for path in listed]
