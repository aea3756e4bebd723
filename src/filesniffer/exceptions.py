"""Errors raised by filesniffer."""

from __future__ import annotations


class SnifferError(Exception):
    """Base class for filesniffer errors."""


class InvalidInputSourceError(SnifferError, TypeError):
    """The legacy input source is neither a path, a list of paths nor a lister."""

    def __init__(self, source: object) -> None:
        super().__init__("Invalid input source")
        self.source = source


class MissingPatternError(SnifferError, ValueError):
    def __init__(self) -> None:
        super().__init__("Search string or pattern must be specified")


class SnifferConsumedError(SnifferError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("find() has already been called on this sniffer")


class ResolutionError(SnifferError):
    """A target could not be stat'ed, listed or classified."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class ScanError(SnifferError):
    """A file could not be opened, read or decompressed during a scan."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to scan {path}: {cause}")
        self.path = path
        self.cause = cause
