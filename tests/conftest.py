"""
Shared fixtures: a small two-column verbatim record in layout text form.
"""

from __future__ import annotations

import pytest

GUTTER = 42


def two_col(left: str, right: str = "") -> str:
    """Lay out one physical line with text in both printed columns."""
    if not left:
        return " " * GUTTER + right
    return left.ljust(GUTTER) + right


FIRST_PAGE = [
    "United Nations                                        A/75/PV.3",
    "General Assembly                                      Official Records",
    "Seventy-fifth session",
    "3rd plenary meeting",
    "Tuesday, 22 September 2020, 9 a.m.",
    "New York",
    "President:    Mr. Bozkir ............................ (Turkey)",
    "The meeting was called to order at 9.05 a.m.",
    "The President: I now give the floor to the first speaker.",
    "Mr. Smith (Ruritania): It is an honour to address",
    "the Assembly.",
    "This record contains the text of speeches delivered in English",
    "Corrections should be submitted to the original languages only.",
]

SECOND_PAGE = [
    "A/75/PV.3                                             22/09/2020",
    two_col("We stand ready to work with all.", "The President: I thank the"),
    two_col("Peace requires commitment.", "representative of Ruritania."),
    two_col("", "Mrs. Jones (Freedonia): We"),
    two_col("", "support the resolution."),
]

EXPECTED_REFLOW = [
    "The meeting was called to order at 9.05 a.m.",
    "The President: I now give the floor to the first speaker.",
    "Mr. Smith (Ruritania): It is an honour to address",
    "the Assembly.",
    "We stand ready to work with all.",
    "Peace requires commitment.",
    "The President: I thank the",
    "representative of Ruritania.",
    "Mrs. Jones (Freedonia): We",
    "support the resolution.",
]


@pytest.fixture()
def record_pages() -> list[list[str]]:
    return [list(FIRST_PAGE), list(SECOND_PAGE)]


@pytest.fixture()
def record_text_file(tmp_path, record_pages):
    """The sample record as a form-feed separated text dump."""
    path = tmp_path / "A_75_PV3.txt"
    path.write_text("\f".join("\n".join(p) for p in record_pages) + "\f", encoding="utf-8")
    return path


@pytest.fixture()
def headerless_text_file(tmp_path):
    path = tmp_path / "no_header.txt"
    path.write_text("Some unrelated document\nwithout any masthead\n", encoding="utf-8")
    return path
