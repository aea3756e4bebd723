"""Result collectors fed with every match of a run."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from filesniffer.models import MatchEvent


@runtime_checkable
class Collector(Protocol):
    """Accumulates matches; ``snapshot`` is what ``FileSniffer.find`` resolves to."""

    def record(self, path: str, line: str) -> None: ...

    def snapshot(self) -> Any: ...


class NoopCollector:
    """Used when only the event notifications are of interest."""

    def record(self, path: str, line: str) -> None:
        return None

    def snapshot(self) -> List[MatchEvent]:
        return []


class ListCollector:
    """Matches in the order they were observed.

    Lines of one file keep their file order; across files the order
    depends on I/O scheduling.
    """

    def __init__(self) -> None:
        self._records: List[MatchEvent] = []

    def record(self, path: str, line: str) -> None:
        self._records.append(MatchEvent(path=path, line=line))

    def snapshot(self) -> List[MatchEvent]:
        return self._records


class GroupedCollector:
    """Matched lines grouped by file path."""

    def __init__(self) -> None:
        self._groups: Dict[str, List[str]] = {}

    def record(self, path: str, line: str) -> None:
        lines = self._groups.get(path)
        if lines is None:
            self._groups[path] = [line]
        else:
            lines.append(line)

    def snapshot(self) -> Dict[str, List[str]]:
        return self._groups


def as_list() -> ListCollector:
    return ListCollector()


def as_dict() -> GroupedCollector:
    return GroupedCollector()
