"""
Line source: decode a document into pages of raw text lines.

Two inputs are supported:
1. PDF files, read with PyMuPDF (fitz). Words are placed on a character
   grid so the gutter between printed columns survives as a run of
   spaces, the way a layout-preserving text dump looks.
2. Plain text in the ``pdftotext -layout`` convention, where pages are
   separated by form feeds.

The result is always a nested ``list[list[str]]``; page boundaries are
structural and never written into the text.
"""

from __future__ import annotations

import logging
import statistics
import tempfile
from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from ..errors import LineSourceError

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\f"

# Words on the same printed row may differ slightly in baseline.
ROW_TOLERANCE = 2.0
# Inter-word gaps wider than this many glyph widths are column gaps.
COLUMN_GAP_GLYPHS = 2.0


def _layout_words(words: list) -> List[str]:
    """Render PyMuPDF word tuples as grid-aligned text lines."""
    glyph_widths = [
        (w[2] - w[0]) / len(w[4]) for w in words if w[4] and w[2] > w[0]
    ]
    if not glyph_widths:
        return []
    glyph = statistics.median(glyph_widths)
    margin = min(w[0] for w in words)

    rows: list[list] = []
    row_y = None
    for word in sorted(words, key=lambda w: (w[3], w[0])):
        if row_y is None or word[3] - row_y > ROW_TOLERANCE:
            rows.append([])
            row_y = word[3]
        rows[-1].append(word)

    lines = []
    for row in rows:
        row.sort(key=lambda w: w[0])
        buf = ""
        prev_x1 = None
        for x0, _y0, x1, _y1, text, *_ in row:
            if prev_x1 is None:
                buf = " " * int(round((x0 - margin) / glyph))
            elif x0 - prev_x1 > COLUMN_GAP_GLYPHS * glyph:
                col = int(round((x0 - margin) / glyph))
                buf += " " * max(col - len(buf), 2)
            else:
                buf += " "
            buf += text
            prev_x1 = x1
        lines.append(buf.rstrip())
    return lines


def extract_pdf_pages(pdf_path: Path) -> List[List[str]]:
    """
    Extract layout-preserving text lines from every page of a PDF.

    Parameters
    ----------
    pdf_path : Path
        Path to the PDF file.

    Returns
    -------
    List[List[str]]
        One list of lines per page, in page order.

    Raises
    ------
    LineSourceError
        If the file cannot be opened or decoded.
    """
    try:
        doc = fitz.open(pdf_path)
    except (OSError, RuntimeError) as exc:
        raise LineSourceError(f"Cannot open PDF {pdf_path}: {exc}") from exc

    try:
        pages = [_layout_words(page.get_text("words")) for page in doc]
    except RuntimeError as exc:
        raise LineSourceError(f"Cannot decode PDF {pdf_path}: {exc}") from exc
    finally:
        doc.close()

    logger.debug("Extracted %d pages from %s", len(pages), pdf_path)
    return pages


def read_text_pages(text_path: Path) -> List[List[str]]:
    """Read a form-feed separated text dump into pages of lines."""
    try:
        text = text_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LineSourceError(f"Cannot read {text_path}: {exc}") from exc
    return split_pages(text)


def split_pages(text: str) -> List[List[str]]:
    chunks = text.split(PAGE_SEPARATOR)
    # pdftotext terminates every page with a form feed
    if len(chunks) > 1 and not chunks[-1].strip():
        chunks.pop()
    return [chunk.splitlines() for chunk in chunks]


def is_url(source: str | Path) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def load_pages(source: str | Path, timeout: int = 60) -> List[List[str]]:
    """
    Load pages of raw lines from a path or an http(s) URL.

    PDFs are detected by suffix; every other file is read as a
    form-feed separated text dump.
    """
    if is_url(source):
        from ..fetcher import download_document

        url = str(source)
        suffix = ".pdf" if url.lower().split("?")[0].endswith(".pdf") else ".txt"
        with tempfile.TemporaryDirectory() as tmp:
            local = Path(tmp) / f"document{suffix}"
            download_document(url, local, timeout=timeout)
            return load_pages(local)

    path = Path(source)
    if not path.is_file():
        raise LineSourceError(f"Input not found: {path}")
    if path.suffix.lower() == ".pdf":
        return extract_pdf_pages(path)
    return read_text_pages(path)
