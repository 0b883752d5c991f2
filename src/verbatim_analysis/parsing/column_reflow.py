"""
Column reflow for two-column verbatim records.

The upstream text dump prints both columns of a page on the same
physical line, separated by a wide run of spaces. This module splits each
line into fragments, assigns them to the left (0) or right (1) column and
serialises the page column-major: the whole left column, then the whole
right column.

Column assignment works on *gap slots*: the index of a fragment in the
line split on double spaces. Leading indentation produces empty slots, so
the slot index is a coarse measure of horizontal offset. The first
fragment belongs to the left column when it starts within the first
``left_col_width`` slots; everything else goes right. A line without any
wide gap is kept whole in the right column. When the right
column text is longer than ``overflow_threshold`` characters, irregular
spacing has split a long left entry, and leading right fragments are moved
back to the left column until it fits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..config import Settings
from ..errors import ProcessingWarning, WarningCode
from .document import Page, ReflowedLine

logger = logging.getLogger(__name__)

GAP = "  "
LEFT = 0
RIGHT = 1

DEFAULT_LEFT_COL_WIDTH = 8
DEFAULT_OVERFLOW_THRESHOLD = 65


@dataclass(frozen=True)
class ColumnFragment:
    text: str
    column: int
    line_index: int
    slot: int


@dataclass(frozen=True)
class SplitLine:
    """Result of splitting one raw line into its two column strings."""
    line_index: int
    column_0: str
    column_1: str
    fragments: Tuple[ColumnFragment, ...] = ()
    overflow_moves: int = 0

    @property
    def degenerate(self) -> bool:
        return not self.column_0 and not self.column_1


@dataclass
class PageReflow:
    page: int
    left: List[Tuple[int, str]] = field(default_factory=list)
    right: List[Tuple[int, str]] = field(default_factory=list)
    degenerate: List[int] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [text for _, text in self.left] + [text for _, text in self.right]


@dataclass
class ReflowResult:
    lines: List[ReflowedLine] = field(default_factory=list)
    warnings: List[ProcessingWarning] = field(default_factory=list)


def split_fragments(text: str) -> List[Tuple[int, str]]:
    """
    Split a line on runs of two or more spaces.

    Returns
    -------
    List[Tuple[int, str]]
        ``(slot, fragment)`` pairs in line order, empty fragments dropped.
        Fragment texts are identical to a split on maximal space runs.
    """
    return [
        (slot, piece.strip())
        for slot, piece in enumerate(text.expandtabs().split(GAP))
        if piece.strip()
    ]


def reflow_line(
    text: str,
    line_index: int = 0,
    left_col_width: int = DEFAULT_LEFT_COL_WIDTH,
    overflow_threshold: int = DEFAULT_OVERFLOW_THRESHOLD,
) -> SplitLine:
    """
    Split one raw line into left- and right-column text.

    Parameters
    ----------
    text : str
        Raw line as produced by the line source.
    line_index : int
        Index of the line within its page.
    left_col_width : int, default=8
        A fragment must start before this gap slot to be a left-column
        candidate.
    overflow_threshold : int, default=65
        Right-column text longer than this (strictly) triggers moving its
        leading fragments into the left column.

    Notes
    -----
    The overflow loop moves at most one fragment per iteration and stops
    when the right column is empty, so it runs at most once per fragment.
    """
    expanded = text.expandtabs()
    last_slot = len(expanded.split(GAP)) - 1
    pieces = split_fragments(expanded)

    left: List[Tuple[int, str]] = []
    right = list(pieces)
    if pieces:
        slot, _ = pieces[0]
        # a line with no gap at all is not split
        if slot < left_col_width and last_slot > 0:
            left.append(right.pop(0))

    moves = 0
    while right and len(" ".join(piece for _, piece in right)) > overflow_threshold:
        left.append(right.pop(0))
        moves += 1

    fragments = tuple(
        [ColumnFragment(piece, LEFT, line_index, slot) for slot, piece in left]
        + [ColumnFragment(piece, RIGHT, line_index, slot) for slot, piece in right]
    )
    return SplitLine(
        line_index=line_index,
        column_0=" ".join(piece for _, piece in left).strip(),
        column_1=" ".join(piece for _, piece in right).strip(),
        fragments=fragments,
        overflow_moves=moves,
    )


def reflow_page(
    page: Page,
    left_col_width: int = DEFAULT_LEFT_COL_WIDTH,
    overflow_threshold: int = DEFAULT_OVERFLOW_THRESHOLD,
) -> PageReflow:
    """Split every line of a page and collect the two column blocks."""
    result = PageReflow(page=page.index)
    for line in page.lines:
        split = reflow_line(line.text, line.index, left_col_width, overflow_threshold)
        if split.degenerate:
            result.degenerate.append(line.index)
            continue
        if split.overflow_moves:
            logger.debug(
                "page %d line %d: moved %d fragment(s) to the left column",
                page.index, line.index, split.overflow_moves,
            )
        if split.column_0:
            result.left.append((line.index, split.column_0))
        if split.column_1:
            result.right.append((line.index, split.column_1))
    return result


def reflow_document(pages: Sequence[Page], settings: Settings) -> ReflowResult:
    """
    Reflow every page and number the resulting lines globally.

    Lines that yield no text in either column are reported once per page
    as a ``ColumnReflowDegenerate`` warning.
    """
    result = ReflowResult()
    position = 0
    for page in pages:
        page_reflow = reflow_page(page, settings.left_col_width, settings.overflow_threshold)
        blocks = ((LEFT, page_reflow.left), (RIGHT, page_reflow.right))
        for column, block in blocks:
            for line_index, text in block:
                result.lines.append(
                    ReflowedLine(
                        text=text,
                        page=page.index,
                        position=position,
                        source_line=line_index,
                        column=column,
                    )
                )
                position += 1
        if page_reflow.degenerate:
            result.warnings.append(
                ProcessingWarning(
                    code=WarningCode.COLUMN_REFLOW_DEGENERATE,
                    message=(
                        f"{len(page_reflow.degenerate)} line(s) without text: "
                        f"{page_reflow.degenerate}"
                    ),
                    page=page.index,
                )
            )
    return result
