"""Tests for line splitting."""

from __future__ import annotations

from filesniffer.utils.text import LineSplitter, split_lines


class TestLineSplitter:
    """Test LineSplitter incremental splitting."""

    def test_single_chunk(self) -> None:
        """Should split complete lines and hold back the remainder."""
        splitter = LineSplitter()

        assert splitter.feed(b"one\ntwo\nthr") == [b"one", b"two"]
        assert splitter.flush() == [b"thr"]

    def test_line_spanning_chunks(self) -> None:
        splitter = LineSplitter()

        assert splitter.feed(b"hel") == []
        assert splitter.feed(b"lo wor") == []
        assert splitter.feed(b"ld\n") == [b"hello world"]
        assert splitter.flush() == []

    def test_crlf_removed(self) -> None:
        splitter = LineSplitter()

        assert splitter.feed(b"a\r") == []
        assert splitter.feed(b"\nb\r\n") == [b"a", b"b"]

    def test_empty_lines_dropped(self) -> None:
        """Blank lines, including bare CRLF ones, are skipped by default."""
        assert list(split_lines([b"a\n\nb\r\n\r\n\n"])) == [b"a", b"b"]

    def test_empty_lines_kept_on_request(self) -> None:
        assert list(split_lines([b"a\n\nb\n"], keep_empty=True)) == [b"a", b"", b"b"]

    def test_empty_input(self) -> None:
        assert list(split_lines([])) == []
        assert list(split_lines([b""])) == []

    def test_max_line_bytes_truncates(self) -> None:
        """Should cut long lines and drop the rest up to the newline."""
        lines = list(split_lines([b"abcdefgh", b"ijk\nshort\n"], max_line_bytes=4))

        assert lines == [b"abcd", b"shor"]

    def test_multibyte_characters_split_across_chunks(self) -> None:
        data = "naïve café\n".encode("utf-8")
        chunks = [data[i : i + 1] for i in range(len(data))]

        assert [line.decode("utf-8") for line in split_lines(chunks)] == ["naïve café"]
