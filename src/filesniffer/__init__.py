"""Concurrent line-oriented search across files and directories."""

from filesniffer.config import SnifferConfig
from filesniffer.exceptions import (
    InvalidInputSourceError,
    MissingPatternError,
    ResolutionError,
    ScanError,
    SnifferConsumedError,
    SnifferError,
)
from filesniffer.models import FileKind, MatchEvent, ResolvedFile, ScanOutcome, SnifferState
from filesniffer.search.collectors import (
    Collector,
    GroupedCollector,
    ListCollector,
    NoopCollector,
    as_dict,
    as_list,
)
from filesniffer.search.sniffer import FileSniffer
from filesniffer.utils.files import FileLister

__version__ = "0.1.0"

__all__ = [
    "Collector",
    "FileKind",
    "FileLister",
    "FileSniffer",
    "GroupedCollector",
    "InvalidInputSourceError",
    "ListCollector",
    "MatchEvent",
    "MissingPatternError",
    "NoopCollector",
    "ResolutionError",
    "ResolvedFile",
    "ScanError",
    "ScanOutcome",
    "SnifferConfig",
    "SnifferConsumedError",
    "SnifferError",
    "SnifferState",
    "as_dict",
    "as_list",
]
