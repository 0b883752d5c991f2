"""
Boilerplate removal for verbatim records.

The first page carries a masthead ending in the presiding-officer line
("President: ...") and a footer starting with a fixed sentence about
corrections and interpretation. Every later page starts with one running
header line (document symbol and date).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import Settings
from ..errors import HeaderNotFound, ProcessingWarning, WarningCode
from .document import Line, Page

logger = logging.getLogger(__name__)

HEADER = "header"
FOOTER = "footer"
RUNNING_HEADER = "running_header"


@dataclass
class StrippedDocument:
    """Pages after boilerplate removal, with an account of what was dropped."""
    pages: List[Page]
    discarded: List[Tuple[str, Line]] = field(default_factory=list)
    warnings: List[ProcessingWarning] = field(default_factory=list)


def strip_first_page_header(
    page: Page,
    anchor: str,
    document_id: Optional[str] = None,
) -> Tuple[Page, List[Line]]:
    """
    Drop every line of the first page up to and including the anchor line.

    Returns
    -------
    Tuple[Page, List[Line]]
        The remaining page and the dropped header lines.

    Raises
    ------
    HeaderNotFound
        If no line on the page matches ``anchor``.
    """
    pattern = re.compile(anchor)
    for i, line in enumerate(page.lines):
        if pattern.search(line.text):
            return page.replace_lines(page.lines[i + 1:]), list(page.lines[: i + 1])
    raise HeaderNotFound(document_id, len(page.lines), anchor)


def strip_first_page_footer(
    page: Page, fingerprint: str
) -> Tuple[Page, List[Line], Optional[ProcessingWarning]]:
    """
    Drop the footer: from the fingerprint line through the page break.

    A missing fingerprint is not an error; the page is returned unchanged
    with a warning.
    """
    for i, line in enumerate(page.lines):
        if fingerprint in line.text:
            return page.replace_lines(page.lines[:i]), list(page.lines[i:]), None
    warning = ProcessingWarning(
        code=WarningCode.FOOTER_FINGERPRINT_MISSING,
        message=f"Footer fingerprint {fingerprint!r} not found; footer kept",
        page=page.index,
    )
    return page, [], warning


def strip_running_headers(pages: Sequence[Page]) -> Tuple[List[Page], List[Line]]:
    """Drop the first non-blank line of every page after the first."""
    result = list(pages[:1])
    dropped = []
    for page in pages[1:]:
        lines = list(page.lines)
        for i, line in enumerate(lines):
            if line.text.strip():
                dropped.append(lines.pop(i))
                break
        result.append(page.replace_lines(lines))
    return result, dropped


def strip_boilerplate(
    pages: Sequence[Page],
    settings: Settings,
    document_id: Optional[str] = None,
) -> StrippedDocument:
    """Remove first-page header and footer and all running headers."""
    if not pages:
        raise HeaderNotFound(document_id, 0, settings.header_anchor)

    first, header_lines = strip_first_page_header(
        pages[0], settings.header_anchor, document_id
    )
    first, footer_lines, warning = strip_first_page_footer(
        first, settings.footer_fingerprint
    )
    remaining, running = strip_running_headers([first, *pages[1:]])

    doc = StrippedDocument(pages=remaining)
    doc.discarded.extend((HEADER, line) for line in header_lines)
    doc.discarded.extend((FOOTER, line) for line in footer_lines)
    doc.discarded.extend((RUNNING_HEADER, line) for line in running)
    if warning is not None:
        logger.warning("%s: %s", document_id or "<document>", warning.message)
        doc.warnings.append(warning)

    logger.debug(
        "Stripped %d header, %d footer and %d running-header lines",
        len(header_lines), len(footer_lines), len(running),
    )
    return doc
