"""
Document model shared by the parsing stages.

A document is a list of :class:`Page` objects; page boundaries are the
list structure itself and never appear as tokens in the line stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence


@dataclass(frozen=True)
class Line:
    """One raw text line as produced by the line source."""
    text: str
    page: int
    index: int  # position within the page


@dataclass(frozen=True)
class Page:
    """Ordered lines of one page."""
    index: int
    lines: tuple[Line, ...]

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def replace_lines(self, lines: Iterable[Line]) -> "Page":
        return Page(index=self.index, lines=tuple(lines))


@dataclass(frozen=True)
class ReflowedLine:
    """A line of reading-order text after column reflow."""
    text: str
    page: int
    position: int  # global, monotonically increasing across the document
    source_line: int = -1
    column: int = 0


def build_pages(raw_pages: Sequence[Sequence[str]]) -> List[Page]:
    """Wrap a line source's nested string lists into :class:`Page` objects."""
    pages = []
    for page_index, raw_lines in enumerate(raw_pages):
        lines = tuple(
            Line(text=text.rstrip("\r\n"), page=page_index, index=line_index)
            for line_index, text in enumerate(raw_lines)
        )
        pages.append(Page(index=page_index, lines=lines))
    return pages


def as_reflowed(lines: Sequence[ReflowedLine | str]) -> List[ReflowedLine]:
    """Accept plain strings as already-reflowed single-page text."""
    result = []
    for position, line in enumerate(lines):
        if isinstance(line, ReflowedLine):
            result.append(line)
        else:
            result.append(ReflowedLine(text=line, page=0, position=position))
    return result
