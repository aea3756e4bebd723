"""Core filesniffer data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class FileKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class SnifferState(str, Enum):
    """Lifecycle of a single search run."""

    IDLE = "idle"
    RESOLVING = "resolving"
    FILTERING = "filtering"
    SCANNING = "scanning"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """Absolute path of a file to scan.

    ``kind`` records how it was found: named directly as a file target, or
    discovered by expanding a directory target.
    """

    path: str
    kind: FileKind = FileKind.FILE


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """A single matching line."""

    path: str
    line: str


@dataclass(slots=True)
class ScanOutcome:
    """Summary of a finished run."""

    files_scanned: int = 0
    matched_files: List[str] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    def mark_matched(self, path: str) -> None:
        self.matched_files.append(path)

    @property
    def match_count(self) -> int:
        return len(self.matched_files)
