"""Shared fixtures: a small tree of text, binary, hidden and gzipped files."""

from __future__ import annotations

import gzip
from pathlib import Path

import pytest

NULLAM_1 = "Nullam rhoncus nisl et tellus molestie tincidunt."
NULLAM_2 = "In sit amet viverra leo. Donec sodales metus erat. Nullam consequat dui vel pretium auctor."
NULLAM_3 = "lobortis sem. Proin bibendum ex at purus ornare faucibus. Nullam semper ligula vel quam aliquam,"

LOREM_IPSUM = "\n".join(
    [
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
        NULLAM_1,
        "Vestibulum ante ipsum primis in faucibus orci luctus et ultrices.",
        NULLAM_2,
        "Aenean vitae ante nec lorem porta feugiat a quis ligula.",
        NULLAM_3,
        "Sed efficitur, massa id tristique gravida, elit tortor placerat.",
    ]
) + "\n"

MULTIPLE = "this is line A - 1\nthis is line B\nthis is line A - 2\nthis is line A - 3\n"


def write_tree(root: Path, files: dict[str, str | bytes]) -> None:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def fixtures(tmp_path: Path) -> Path:
    """Build the fixture tree used across the sniffer tests."""
    write_tree(
        tmp_path,
        {
            "list/a.txt": "failed",
            "list/b.txt": "passed",
            "list/c.txt": "failed",
            "nested/d.txt": "passed",
            "nested/e.txt": "failed",
            "nested/f.txt": "failed",
            "nested/subdir/d.txt": "passed",
            "match/lorem-ipsum.txt": LOREM_IPSUM,
            "match/multiple.txt": MULTIPLE,
            "binary/binaryFile": b"\x7fELF\x02\x01\x01\x00\x00\x00passed\nfailed\n",
            "listWithHidden/a.txt": "passed",
            "listWithHidden/.hidden.txt": "passed",
        },
    )
    gzipped = tmp_path / "gzipped" / "lorem-ipsum.txt.gz"
    gzipped.parent.mkdir()
    gzipped.write_bytes(gzip.compress(LOREM_IPSUM.encode("utf-8")))
    return tmp_path


@pytest.fixture
def nullam_lines() -> list[str]:
    """The three lines of the lorem ipsum fixture containing 'Nullam', in order."""
    return [NULLAM_1, NULLAM_2, NULLAM_3]
