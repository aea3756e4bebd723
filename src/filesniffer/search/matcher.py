"""Line matchers.

A search criterion is turned into a matcher once per run: a plain string
becomes a substring test, a compiled regular expression a pattern search.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Protocol, Union

Criterion = Union[str, Pattern[str]]


class Matcher(Protocol):
    def matches(self, line: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class SubstringMatcher:
    needle: str

    def matches(self, line: str) -> bool:
        return self.needle in line


@dataclass(frozen=True, slots=True)
class PatternMatcher:
    pattern: Pattern[str]

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


def is_missing(criterion: object) -> bool:
    return criterion is None or criterion == ""


def build_matcher(criterion: Criterion) -> Matcher:
    """Select the matcher for ``criterion``.

    Raises ``TypeError`` for anything other than ``str`` or a compiled
    ``str`` pattern.
    """
    if isinstance(criterion, re.Pattern):
        if not isinstance(criterion.pattern, str):
            raise TypeError("Byte patterns are not supported; compile a str pattern")
        return PatternMatcher(criterion)
    if isinstance(criterion, str):
        return SubstringMatcher(criterion)
    raise TypeError(
        f"Search criterion must be a string or compiled pattern, not {type(criterion).__name__}"
    )


def compile_criterion(text: str, *, regex: bool = False, ignore_case: bool = False) -> Criterion:
    """Build a criterion from user input, as the CLI and web API receive it."""
    if not regex and not ignore_case:
        return text
    source = text if regex else re.escape(text)
    return re.compile(source, re.IGNORECASE if ignore_case else 0)
