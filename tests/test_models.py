"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from filesniffer.models import FileKind, MatchEvent, ResolvedFile, ScanOutcome, SnifferState


class TestMatchEvent:
    def test_equality(self) -> None:
        assert MatchEvent("/a.txt", "line") == MatchEvent("/a.txt", "line")
        assert MatchEvent("/a.txt", "line") != MatchEvent("/b.txt", "line")

    def test_hashable(self) -> None:
        assert len({MatchEvent("/a", "x"), MatchEvent("/a", "x")}) == 1

    def test_immutable(self) -> None:
        event = MatchEvent("/a", "x")

        with pytest.raises(dataclasses.FrozenInstanceError):
            event.line = "y"  # type: ignore[misc]


class TestResolvedFile:
    def test_default_kind(self) -> None:
        assert ResolvedFile("/a").kind is FileKind.FILE

    def test_immutable(self) -> None:
        resolved = ResolvedFile("/a")

        with pytest.raises(dataclasses.FrozenInstanceError):
            resolved.path = "/b"  # type: ignore[misc]


class TestScanOutcome:
    def test_defaults(self) -> None:
        outcome = ScanOutcome()

        assert outcome.files_scanned == 0
        assert outcome.matched_files == []
        assert outcome.errors == []
        assert outcome.match_count == 0

    def test_mark_matched(self) -> None:
        outcome = ScanOutcome()
        outcome.mark_matched("/a")
        outcome.mark_matched("/b")

        assert outcome.matched_files == ["/a", "/b"]
        assert outcome.match_count == 2

    def test_independent_lists(self) -> None:
        first = ScanOutcome()
        first.mark_matched("/a")

        assert ScanOutcome().matched_files == []


def test_state_values() -> None:
    assert [state.value for state in SnifferState] == [
        "idle",
        "resolving",
        "filtering",
        "scanning",
        "finalizing",
        "completed",
        "failed",
    ]
