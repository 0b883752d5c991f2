"""
Speaker segmentation for reflowed verbatim records.

Every reflowed line is classified exactly once as one of:

- :class:`Speaker` -- a courtesy title, a name and a parenthesized
  qualifier (country or organisation) followed by a colon, e.g.
  ``"Mr. Smith (Ruritania): ..."``;
- :class:`PresidentMarker` -- ``"The President:"`` or
  ``"The Acting President:"``;
- :class:`Content` -- anything else.

Each boundary opens a span that runs up to the next boundary. Speaker
spans become :class:`SpeechUnit` records; president spans are discarded.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from ..errors import ProcessingWarning, WarningCode
from .document import ReflowedLine, as_reflowed

logger = logging.getLogger(__name__)

COURTESY_TITLES = [
    r"Mr\.?", r"Mrs\.?", r"Ms\.?", r"Miss", r"Mme\.?", r"Mlle\.?", r"M\.",
    r"Sr\.?", r"Sra\.?", r"Srta\.?", r"Dr\.?", r"Sir", r"Dame",
]

SPEAKER_PATTERN = re.compile(
    r"^(?P<label>(?:" + "|".join(COURTESY_TITLES) + r")\s+[^:()]*?"
    r"\((?P<qualifier>(?:[^()]|\([^()]*\))+)\))"
    r"(?:\s*\(spoke in [^()]+\))?\s*:"
)

PRESIDENT_PATTERN = re.compile(r"^The\s+(?:Acting\s+)?President\s*:")


@dataclass(frozen=True)
class Speaker:
    label: str
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class PresidentMarker:
    pass


@dataclass(frozen=True)
class Content:
    pass


Classification = Union[Speaker, PresidentMarker, Content]


@dataclass(frozen=True)
class SpeechUnit:
    """Contiguous lines attributed to one speaker, boundary row included."""
    speaker: str
    qualifier: Optional[str]
    lines: tuple[ReflowedLine, ...]
    empty_body: bool = False

    @property
    def start_line(self) -> int:
        return self.lines[0].position

    @property
    def end_line(self) -> int:
        return self.lines[-1].position

    @property
    def start_page(self) -> int:
        return self.lines[0].page

    @property
    def end_page(self) -> int:
        return self.lines[-1].page

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]

    def to_record(self) -> dict:
        return {
            "speaker": self.speaker,
            "qualifier": self.qualifier,
            "lines": self.texts,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "start_page": self.start_page,
            "end_page": self.end_page,
            "empty_body": self.empty_body,
        }


@dataclass
class Segmentation:
    """Speeches plus every line that did not end up in one."""
    speeches: List[SpeechUnit] = field(default_factory=list)
    president_lines: List[ReflowedLine] = field(default_factory=list)
    preamble: List[ReflowedLine] = field(default_factory=list)
    warnings: List[ProcessingWarning] = field(default_factory=list)


def classify_line(
    text: str, unqualified_speakers: Iterable[str] = ()
) -> Classification:
    """
    Classify a reflowed line as a speaker boundary, president boundary or content.

    Parameters
    ----------
    text : str
        Reflowed line text.
    unqualified_speakers : Iterable[str]
        Labels such as ``"The Secretary-General"`` that introduce a
        speech without a parenthesized qualifier.
    """
    text = text.strip()
    if PRESIDENT_PATTERN.match(text):
        return PresidentMarker()
    match = SPEAKER_PATTERN.match(text)
    if match:
        return Speaker(
            label=" ".join(match.group("label").split()),
            qualifier=match.group("qualifier").strip(),
        )
    for label in unqualified_speakers:
        if re.match(re.escape(label) + r"\s*:", text):
            return Speaker(label=label, qualifier=None)
    return Content()


def segment_document(
    lines: Sequence[ReflowedLine | str],
    unqualified_speakers: Iterable[str] = (),
) -> Segmentation:
    """
    Slice a reflowed line sequence into speeches.

    Lines before the first boundary are returned as ``preamble``; a
    speaker boundary directly followed by another boundary is emitted as
    a one-line unit flagged ``empty_body``.
    """
    lines = as_reflowed(lines)
    unqualified_speakers = list(unqualified_speakers)
    result = Segmentation()

    boundaries = []
    for i, line in enumerate(lines):
        kind = classify_line(line.text, unqualified_speakers)
        if not isinstance(kind, Content):
            boundaries.append((i, kind))

    if not any(isinstance(kind, Speaker) for _, kind in boundaries):
        result.warnings.append(
            ProcessingWarning(
                code=WarningCode.NO_SPEAKERS_FOUND,
                message="No speaker boundaries found",
            )
        )

    first = boundaries[0][0] if boundaries else len(lines)
    result.preamble = lines[:first]
    if result.preamble and boundaries:
        result.warnings.append(
            ProcessingWarning(
                code=WarningCode.UNATTRIBUTED_PREAMBLE,
                message=f"{len(result.preamble)} line(s) before the first boundary",
                page=result.preamble[0].page,
                position=result.preamble[0].position,
            )
        )

    for n, (start, kind) in enumerate(boundaries):
        end = boundaries[n + 1][0] if n + 1 < len(boundaries) else len(lines)
        span = lines[start:end]
        if isinstance(kind, PresidentMarker):
            result.president_lines.extend(span)
            continue

        empty_body = len(span) == 1
        if empty_body:
            logger.debug("Empty speech body for %s at line %d", kind.label, span[0].position)
            result.warnings.append(
                ProcessingWarning(
                    code=WarningCode.EMPTY_SPEECH_BODY,
                    message=f"{kind.label} is immediately followed by another boundary",
                    page=span[0].page,
                    position=span[0].position,
                )
            )
        result.speeches.append(
            SpeechUnit(
                speaker=kind.label,
                qualifier=kind.qualifier,
                lines=tuple(span),
                empty_body=empty_body,
            )
        )

    return result


def segment_speeches(
    lines: Sequence[ReflowedLine | str],
    unqualified_speakers: Iterable[str] = (),
) -> List[SpeechUnit]:
    """Return only the speech units of :func:`segment_document`."""
    segmentation = segment_document(lines, unqualified_speakers)
    for warning in segmentation.warnings:
        logger.debug("%s: %s", warning.code.value, warning.message)
    return segmentation.speeches
