"""
Validation utilities for the parsing pipeline.

Segmentation must partition the reflowed line sequence: every reflowed
line ends up in exactly one speech, president span or the preamble.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from .document import ReflowedLine
from .speaker_segmenter import Segmentation


def verify_partition(
    reflowed: Sequence[ReflowedLine], segmentation: Segmentation
) -> List[str]:
    """
    Check that a segmentation accounts for every reflowed line exactly once.

    Returns
    -------
    List[str]
        Human-readable problems; empty when the partition holds.
    """
    assigned: List[ReflowedLine] = list(segmentation.preamble)
    assigned.extend(segmentation.president_lines)
    for speech in segmentation.speeches:
        if not speech.lines:
            return [f"empty speech unit for {speech.speaker}"]
        assigned.extend(speech.lines)

    problems = []
    counts = Counter(line.position for line in assigned)
    expected = {line.position: line for line in reflowed}

    duplicated = sorted(pos for pos, n in counts.items() if n > 1)
    if duplicated:
        problems.append(f"lines assigned more than once: {duplicated}")
    invented = sorted(pos for pos in counts if pos not in expected)
    if invented:
        problems.append(f"lines not in the reflowed sequence: {invented}")
    lost = sorted(pos for pos in expected if pos not in counts)
    if lost:
        problems.append(f"lines not assigned: {lost}")

    if not problems and sorted(assigned, key=lambda l: l.position) != list(reflowed):
        problems.append("assigned line content differs from reflowed sequence")
    return problems


def compute_coverage(
    reflowed: Sequence[ReflowedLine], segmentation: Segmentation
) -> float:
    """Fraction of reflowed lines attributed to a speaker (0-1)."""
    if not reflowed:
        return 1.0 if not segmentation.speeches else 0.0
    attributed = sum(len(speech.lines) for speech in segmentation.speeches)
    return attributed / len(reflowed)
