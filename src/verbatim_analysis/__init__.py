"""
verbatim_analysis
=================

Tools for turning layout-preserving text of two-column verbatim records
(e.g. General Assembly meeting records) into ordered, speaker-attributed
speech records.

Key modules include:

* :mod:`verbatim_analysis.parsing.pdf_extractor` – the line source:
  PDF or form-feed text dump to pages of raw lines.
* :mod:`verbatim_analysis.parsing.header_footer` – removal of the
  first-page masthead and footer and of per-page running headers.
* :mod:`verbatim_analysis.parsing.column_reflow` – column splitting and
  column-major reading-order reconstruction.
* :mod:`verbatim_analysis.parsing.speaker_segmenter` – boundary
  classification and slicing into speech units.
* :mod:`verbatim_analysis.pipeline` and :mod:`verbatim_analysis.batch`
  – single-document and worker-pool entry points.
"""

from .config import Settings, get_settings
from .errors import (
    HeaderNotFound,
    LineSourceError,
    PartitionViolation,
    ProcessingWarning,
    SegmentationError,
    VerbatimError,
    WarningCode,
)
from .parsing import (
    ReflowedLine,
    SpeechUnit,
    classify_line,
    reflow_line,
    segment_speeches,
)
from .pipeline import DocumentResult, process_document, process_path

__all__ = [
    "Settings",
    "get_settings",
    "HeaderNotFound",
    "LineSourceError",
    "PartitionViolation",
    "ProcessingWarning",
    "SegmentationError",
    "VerbatimError",
    "WarningCode",
    "ReflowedLine",
    "SpeechUnit",
    "classify_line",
    "reflow_line",
    "segment_speeches",
    "process_document",
    "process_path",
    "DocumentResult",
]
