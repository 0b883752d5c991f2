"""
Tests for column splitting, overflow correction and page reflow.
"""

import pytest

from verbatim_analysis.config import Settings
from verbatim_analysis.errors import WarningCode
from verbatim_analysis.parsing.column_reflow import (
    reflow_document,
    reflow_line,
    reflow_page,
    split_fragments,
)
from verbatim_analysis.parsing.document import build_pages

from conftest import two_col


class TestSplitFragments:
    """Tests for splitting lines on wide gaps."""

    def test_split_on_gaps(self):
        assert split_fragments("a  b   c") == [(0, "a"), (1, "b"), (2, "c")]

    def test_single_spaces_do_not_split(self):
        assert split_fragments("one two three") == [(0, "one two three")]

    def test_leading_indentation_raises_slot(self):
        """Indentation shows up as empty slots before the fragment."""
        assert split_fragments(" " * 20 + "right") == [(10, "right")]

    def test_blank_line(self):
        assert split_fragments("") == []
        assert split_fragments("      ") == []


class TestReflowLine:
    """Tests for assigning fragments to the two columns."""

    def test_line_without_gap_goes_right_unchanged(self):
        split = reflow_line("Mr. A (X): Good morning")
        assert split.column_0 == ""
        assert split.column_1 == "Mr. A (X): Good morning"
        assert split.overflow_moves == 0

    def test_two_column_line(self):
        split = reflow_line(two_col("Left column text.", "Right column text."))
        assert split.column_0 == "Left column text."
        assert split.column_1 == "Right column text."

    def test_right_only_line(self):
        split = reflow_line(two_col("", "continues on the right."))
        assert split.column_0 == ""
        assert split.column_1 == "continues on the right."

    def test_indented_left_fragment(self):
        split = reflow_line("    Indented left      right")
        assert split.column_0 == "Indented left"
        assert split.column_1 == "right"

    def test_indented_left_only_line(self):
        """A paragraph start with nothing printed on the right stays left."""
        split = reflow_line("    Indented left paragraph start")
        assert split.column_0 == "Indented left paragraph start"
        assert split.column_1 == ""

    def test_remaining_fragments_joined_with_single_spaces(self):
        split = reflow_line("Left    one    two    three")
        assert split.column_0 == "Left"
        assert split.column_1 == "one two three"

    def test_left_col_width_is_configurable(self):
        line = " " * 20 + "alpha    beta"
        assert reflow_line(line).column_0 == ""
        assert reflow_line(line).column_1 == "alpha beta"

        wide = reflow_line(line, left_col_width=12)
        assert wide.column_0 == "alpha"
        assert wide.column_1 == "beta"

    def test_fragment_columns_recorded(self):
        split = reflow_line("Left    Right", line_index=7)
        assert [(f.text, f.column, f.line_index) for f in split.fragments] == [
            ("Left", 0, 7),
            ("Right", 1, 7),
        ]

    def test_degenerate_line(self):
        split = reflow_line("     ")
        assert split.degenerate


class TestOverflowCorrection:
    """Tests for moving right-column overflow back to the left column."""

    def test_exact_threshold_not_moved(self):
        right = "x" * 9 + "    " + "y" * 55  # joins to 65 characters
        split = reflow_line("Left    " + right)
        assert len(split.column_1) == 65
        assert split.overflow_moves == 0
        assert split.column_0 == "Left"

    def test_one_over_threshold_moves_one_fragment(self):
        right = "x" * 10 + "    " + "y" * 55  # joins to 66 characters
        split = reflow_line("Left    " + right)
        assert split.overflow_moves == 1
        assert split.column_0 == "Left " + "x" * 10
        assert split.column_1 == "y" * 55

    def test_moves_until_it_fits(self):
        line = "Left    " + "a" * 10 + "    " + "b" * 30 + "    " + "c" * 40
        split = reflow_line(line)
        assert split.overflow_moves == 2
        assert split.column_0 == "Left " + "a" * 10 + " " + "b" * 30
        assert split.column_1 == "c" * 40

    def test_terminates_on_single_long_fragment(self):
        text = "word " * 30
        split = reflow_line(text.strip())
        assert split.overflow_moves == 1
        assert split.column_0 == text.strip()
        assert split.column_1 == ""

    def test_threshold_is_configurable(self):
        split = reflow_line("Left    " + "r" * 20, overflow_threshold=19)
        assert split.column_0 == "Left " + "r" * 20
        assert split.column_1 == ""


class TestReflowPage:
    """Tests for column-major page assembly."""

    def test_left_block_then_right_block(self):
        page = build_pages([[
            two_col("L1", "R1"),
            two_col("L2", "R2"),
            two_col("", "R3"),
        ]])[0]
        result = reflow_page(page)
        assert result.texts() == ["L1", "L2", "R1", "R2", "R3"]

    def test_left_column_tail_stays_in_left_block(self):
        page = build_pages([[
            two_col("L1", "R1"),
            "  L2 runs longer than the right column",
            "  L3",
        ]])[0]
        result = reflow_page(page)
        assert result.texts() == [
            "L1", "L2 runs longer than the right column", "L3", "R1",
        ]

    def test_blank_lines_are_dropped(self):
        page = build_pages([["", two_col("L1", "R1"), "   "]])[0]
        result = reflow_page(page)
        assert result.texts() == ["L1", "R1"]
        assert result.degenerate == [0, 2]


class TestReflowDocument:
    """Tests for document-level reflow."""

    def test_positions_are_global_and_increasing(self):
        pages = build_pages([
            [two_col("A", "B")],
            [two_col("C", "D")],
        ])
        result = reflow_document(pages, Settings())
        assert [l.text for l in result.lines] == ["A", "B", "C", "D"]
        assert [l.position for l in result.lines] == [0, 1, 2, 3]
        assert [l.page for l in result.lines] == [0, 0, 1, 1]
        assert [l.column for l in result.lines] == [0, 1, 0, 1]

    def test_degenerate_lines_reported_per_page(self):
        pages = build_pages([["", "text"], ["more"]])
        result = reflow_document(pages, Settings())
        assert len(result.warnings) == 1
        assert result.warnings[0].code == WarningCode.COLUMN_REFLOW_DEGENERATE
        assert result.warnings[0].page == 0
