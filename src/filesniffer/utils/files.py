"""Utility helpers for working with files."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

LOGGER = logging.getLogger(__name__)

GZIP_EXTENSION = ".gz"

PathLike = Union[str, "os.PathLike[str]"]
ErrorReporter = Callable[[str, OSError], None]


def extension_of(path: PathLike) -> str:
    """Return the lower-cased final suffix of ``path`` (``".gz"`` for ``a.txt.gz``)."""
    return Path(path).suffix.lower()


def is_gzip_path(path: PathLike) -> bool:
    return extension_of(path) == GZIP_EXTENSION


def is_hidden(name: str) -> bool:
    return name.startswith(".")


class FileLister:
    """Lists the files below a set of directories.

    Depth 0 means only the immediate children of each directory. Within a
    directory, files come before the contents of its subdirectories and
    both are visited in name order.
    """

    def __init__(
        self,
        paths: Sequence[PathLike] = (),
        *,
        depth: int = 0,
        ignore_hidden: bool = True,
        on_error: Optional[ErrorReporter] = None,
    ) -> None:
        if depth < 0:
            raise ValueError("Depth must be >= 0")
        self.paths = [os.fspath(path) for path in paths]
        self.depth = depth
        self.ignore_hidden = ignore_hidden
        self.on_error = on_error

    def iter_files(self) -> Iterator[str]:
        for root in self.paths:
            yield from self._walk(root, 0)

    def list_files(self) -> List[str]:
        return list(self.iter_files())

    async def find(self) -> List[str]:
        """Run the listing in a worker thread."""
        return await asyncio.to_thread(self.list_files)

    def _walk(self, directory: str, level: int) -> Iterator[str]:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            self._report(directory, exc)
            return

        subdirs: list[str] = []
        for entry in entries:
            if self.ignore_hidden and is_hidden(entry.name):
                continue
            try:
                if entry.is_dir():
                    subdirs.append(entry.path)
                elif entry.is_file():
                    yield entry.path
            except OSError as exc:
                self._report(entry.path, exc)

        if level >= self.depth:
            return
        for subdir in subdirs:
            yield from self._walk(subdir, level + 1)

    def _report(self, path: str, exc: OSError) -> None:
        if self.on_error is None:
            LOGGER.warning("Unable to list %s: %s", path, exc)
            return
        self.on_error(path, exc)


def iter_files(inputs: Iterable[PathLike], *, depth: int = 0) -> Iterator[str]:
    """Yield files from input paths, expanding directories up to ``depth``."""
    for item in inputs:
        path = os.fspath(item)
        if os.path.isdir(path):
            yield from FileLister([path], depth=depth).iter_files()
        elif os.path.isfile(path):
            yield path
