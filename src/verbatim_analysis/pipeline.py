"""
End-to-end processing of one document.

LineSource -> HeaderFooterStripper -> ColumnReflower -> SpeakerSegmenter.
Each stage consumes the previous stage's complete output; nothing is
shared between documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import Settings, settings as default_settings
from .errors import PartitionViolation, ProcessingWarning
from .parsing.column_reflow import reflow_document
from .parsing.document import Line, ReflowedLine, build_pages
from .parsing.header_footer import strip_boilerplate
from .parsing.pdf_extractor import load_pages
from .parsing.speaker_segmenter import SpeechUnit, segment_document
from .parsing.validation import compute_coverage, verify_partition

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    """Speeches extracted from one document plus its audit trail."""
    document_id: Optional[str]
    speeches: List[SpeechUnit] = field(default_factory=list)
    warnings: List[ProcessingWarning] = field(default_factory=list)
    discarded: List[Tuple[str, Line]] = field(default_factory=list)
    reflowed: List[ReflowedLine] = field(default_factory=list)
    president_lines: List[ReflowedLine] = field(default_factory=list)
    preamble: List[ReflowedLine] = field(default_factory=list)
    coverage: float = 0.0

    def to_records(self) -> List[dict]:
        return [speech.to_record() for speech in self.speeches]


def process_document(
    raw_pages: Sequence[Sequence[str]],
    settings: Optional[Settings] = None,
    document_id: Optional[str] = None,
) -> DocumentResult:
    """
    Turn pages of raw lines into speech units.

    Parameters
    ----------
    raw_pages : Sequence[Sequence[str]]
        Pages of raw text lines, in document order.
    settings : Optional[Settings]
        Corpus calibration; the global settings when omitted.
    document_id : Optional[str]
        Identifier used in log messages and errors.

    Raises
    ------
    HeaderNotFound
        If the first page has no presiding-officer anchor line.
    PartitionViolation
        If segmentation lost or duplicated reflowed lines.
    """
    settings = settings or default_settings
    pages = build_pages(raw_pages)

    stripped = strip_boilerplate(pages, settings, document_id)
    reflow = reflow_document(stripped.pages, settings)
    segmentation = segment_document(reflow.lines, settings.unqualified_speakers)

    problems = verify_partition(reflow.lines, segmentation)
    if problems:
        raise PartitionViolation(f"{document_id or '<document>'}: {'; '.join(problems)}")

    result = DocumentResult(
        document_id=document_id,
        speeches=segmentation.speeches,
        warnings=[*stripped.warnings, *reflow.warnings, *segmentation.warnings],
        discarded=stripped.discarded,
        reflowed=reflow.lines,
        president_lines=segmentation.president_lines,
        preamble=segmentation.preamble,
        coverage=compute_coverage(reflow.lines, segmentation),
    )

    for warning in segmentation.warnings:
        logger.warning("%s: %s", document_id or "<document>", warning.message)
    logger.info(
        "%s: %d speeches from %d reflowed lines (%.0f%% attributed)",
        document_id or "<document>",
        len(result.speeches),
        len(result.reflowed),
        result.coverage * 100,
    )
    return result


def document_id_for(source: str | Path) -> str:
    text = str(source)
    if text.lower().startswith(("http://", "https://")):
        name = text.split("?")[0].rstrip("/").rsplit("/", 1)[-1]
        return Path(name).stem or text
    return Path(text).stem


def process_path(
    source: str | Path, settings: Optional[Settings] = None
) -> DocumentResult:
    """Load a document from a path or URL and process it."""
    raw_pages = load_pages(source)
    return process_document(raw_pages, settings, document_id=document_id_for(source))
