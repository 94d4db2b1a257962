"""\
Source excerpts
===============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Monday, October 19 2026
Last updated on: Monday, October 19 2026

This module reads a window of source lines around the line where an
error was raised, which the diagnostic page shows in debug mode.
"""

from __future__ import annotations

import typing as t

from mishap.utils.filesystem import readlines

__all__: tuple[str, ...] = (
    "SourceExcerpt",
    "read_source",
)

_LINES_BEFORE: t.Final[int] = 9
_WINDOW: t.Final[int] = 19


class SourceExcerpt:
    """Lines of a source file surrounding a faulting line.

    An excerpt spans at most 19 lines, with up to 9 lines before and 9
    lines after the faulting line. An empty excerpt is falsy and is
    returned whenever the file could not be read.

    :param first: Line number of the first line in the excerpt.
    :param lines: Raw source lines, line endings included.
    """

    __slots__: tuple[str, ...] = ("first", "lines")

    def __init__(self, first: int = 1, lines: list[str] | None = None) -> None:
        """Initialise the excerpt."""
        self.first = first
        self.lines: list[str] = list(lines or [])

    def __repr__(self) -> str:
        """Return a string representation of the excerpt."""
        return f"<SourceExcerpt(first={self.first}, lines={len(self)})>"

    def __len__(self) -> int:
        return len(self.lines)

    def __bool__(self) -> bool:
        return bool(self.lines)

    def __iter__(self) -> t.Iterator[tuple[int, str]]:
        """Yield line numbers with their source lines."""
        for offset, line in enumerate(self.lines):
            yield self.first + offset, line

    def as_dict(self) -> dict[str, t.Any]:
        """Return the excerpt as template friendly mapping."""
        if not self:
            return {}
        return {"first": self.first, "source": list(self.lines)}


def read_source(path: str, line: int) -> SourceExcerpt:
    """Read up to 19 lines of a file around the given line.

    The file is opened and read once. Any failure to read it, whether
    the file is missing, unreadable or not text, results in an empty
    excerpt instead of an exception.

    :param path: Path of the source file.
    :param line: Line number the excerpt is centred on.
    :return: Source excerpt, empty if the file could not be read.
    """
    first = line - _LINES_BEFORE if line - _LINES_BEFORE > 0 else 1
    if not path:
        return SourceExcerpt()
    try:
        contents = readlines(path)
    except (OSError, UnicodeError, ValueError):
        return SourceExcerpt()
    return SourceExcerpt(first, contents[first - 1 : first - 1 + _WINDOW])
