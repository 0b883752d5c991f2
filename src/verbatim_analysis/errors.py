"""
Error taxonomy for the verbatim record pipeline.

Fatal conditions are exceptions and abort a single document. Everything
else is a :class:`ProcessingWarning` attached to the document result so
that low-confidence spots can be reviewed by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class VerbatimError(Exception):
    """Base class for all pipeline errors."""


class LineSourceError(VerbatimError):
    """The input document could not be read or decoded."""


class SegmentationError(VerbatimError):
    """A document could not be segmented into speeches."""


class HeaderNotFound(SegmentationError):
    """The first-page anchor line is missing, so content start is unknown."""

    def __init__(self, document_id: Optional[str], lines_scanned: int, anchor: str):
        self.document_id = document_id
        self.lines_scanned = lines_scanned
        self.anchor = anchor
        doc = document_id or "<document>"
        super().__init__(
            f"{doc}: no line matching {anchor!r} in the first "
            f"{lines_scanned} lines of page 1"
        )

    def __reduce__(self):
        # survive the trip back from a worker process
        return (self.__class__, (self.document_id, self.lines_scanned, self.anchor))

    @property
    def locator(self) -> str:
        return f"page 1, lines 0-{max(self.lines_scanned - 1, 0)}"


class PartitionViolation(SegmentationError):
    """Reflowed lines were lost, duplicated or invented during segmentation."""


class WarningCode(str, Enum):
    FOOTER_FINGERPRINT_MISSING = "FooterFingerprintMissing"
    COLUMN_REFLOW_DEGENERATE = "ColumnReflowDegenerate"
    NO_SPEAKERS_FOUND = "NoSpeakersFound"
    EMPTY_SPEECH_BODY = "EmptySpeechBody"
    UNATTRIBUTED_PREAMBLE = "UnattributedPreamble"


@dataclass(frozen=True)
class ProcessingWarning:
    """A non-fatal condition found while processing one document."""
    code: WarningCode
    message: str
    page: Optional[int] = None
    position: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "page": self.page,
            "position": self.position,
        }
