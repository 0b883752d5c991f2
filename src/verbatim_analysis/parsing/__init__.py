"""
Parsing pipeline for two-column verbatim records.

Stages, in order:
- Line source: PDF or form-feed text dump to pages of raw lines
- Header/footer stripping
- Column reflow into reading order
- Speaker segmentation into speech units
"""

from .document import Line, Page, ReflowedLine, build_pages
from .pdf_extractor import extract_pdf_pages, load_pages, read_text_pages
from .header_footer import strip_boilerplate
from .column_reflow import reflow_document, reflow_line, reflow_page, split_fragments
from .speaker_segmenter import (
    Content,
    PresidentMarker,
    Speaker,
    SpeechUnit,
    classify_line,
    segment_document,
    segment_speeches,
)
from .validation import compute_coverage, verify_partition

__all__ = [
    "Line",
    "Page",
    "ReflowedLine",
    "build_pages",
    "extract_pdf_pages",
    "load_pages",
    "read_text_pages",
    "strip_boilerplate",
    "reflow_document",
    "reflow_line",
    "reflow_page",
    "split_fragments",
    "Content",
    "PresidentMarker",
    "Speaker",
    "SpeechUnit",
    "classify_line",
    "segment_document",
    "segment_speeches",
    "compute_coverage",
    "verify_partition",
]
