"""
Serialisation of speech records as JSON arrays or JSON lines.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Iterable, List

from .errors import ProcessingWarning

FORMATS = ("json", "jsonl")


def dump_records(records: Iterable[dict], stream: IO[str], fmt: str = "json") -> None:
    """Write records to an open text stream."""
    if fmt == "jsonl":
        for record in records:
            stream.write(json.dumps(record, ensure_ascii=False) + "\n")
    elif fmt == "json":
        json.dump(list(records), stream, ensure_ascii=False, indent=2)
        stream.write("\n")
    else:
        raise ValueError(f"Unknown output format: {fmt}")


def save_speeches_json(records: Iterable[dict], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        dump_records(records, f, "json")


def save_speeches_jsonl(records: Iterable[dict], output_path: Path) -> None:
    """
    Save speech records to a JSONL file, one record per line.

    Parameters
    ----------
    records : Iterable[dict]
        Records as produced by ``SpeechUnit.to_record``.
    output_path : Path
        Path to output JSONL file.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        dump_records(records, f, "jsonl")


def load_speeches_jsonl(input_path: Path) -> List[dict]:
    records = []
    with input_path.open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                records.append(json.loads(line))
    return records


def save_warnings_json(warnings: Iterable[ProcessingWarning], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [warning.to_dict() for warning in warnings]
    output_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
