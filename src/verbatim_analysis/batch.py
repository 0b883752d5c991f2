"""
Batch processing of many documents on a worker pool.

One document is one task. Documents share no state, so a failure or a
timeout is recorded for that document only and the batch carries on.
Outcomes are returned in input order.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import (
    FIRST_COMPLETED,
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .config import Settings, settings as default_settings
from .errors import HeaderNotFound, LineSourceError, VerbatimError
from .pipeline import DocumentResult, document_id_for, process_path

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = {".pdf", ".txt"}

# Seconds between checks on running documents
POLL_INTERVAL = 0.05


@dataclass
class DocumentOutcome:
    """Result or failure record for one document of a batch."""
    document_id: str
    source: str
    result: Optional[DocumentResult] = None
    error_type: Optional[str] = None
    error: Optional[str] = None
    locator: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def find_documents(input_dir: Path) -> List[Path]:
    return sorted(
        p for p in input_dir.iterdir()
        if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES
    )


def _failure(document_id: str, source: str, exc: BaseException) -> DocumentOutcome:
    if isinstance(exc, HeaderNotFound):
        locator = exc.locator
    elif isinstance(exc, LineSourceError):
        locator = source
    else:
        locator = None
    return DocumentOutcome(
        document_id=document_id,
        source=source,
        error_type=type(exc).__name__,
        error=str(exc),
        locator=locator,
    )


def _collect(fut: Future, src: str) -> DocumentOutcome:
    doc_id = document_id_for(src)
    try:
        result = fut.result()
    except VerbatimError as exc:
        logger.error("%s: %s", doc_id, exc)
        return _failure(doc_id, src, exc)
    except Exception as exc:
        logger.exception("%s: unexpected failure", doc_id)
        return _failure(doc_id, src, exc)
    return DocumentOutcome(document_id=doc_id, source=src, result=result)


def process_batch(
    sources: Iterable[str | Path],
    settings: Optional[Settings] = None,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    use_threads: bool = False,
) -> List[DocumentOutcome]:
    """
    Process documents concurrently, one task per document.

    Parameters
    ----------
    sources : Iterable[str | Path]
        Document paths or URLs.
    settings : Optional[Settings]
        Corpus calibration shared by every task.
    workers : Optional[int]
        Pool size; ``settings.workers`` when omitted.
    timeout : Optional[float]
        Seconds a document may run once a worker has picked it up;
        ``settings.document_timeout`` when omitted. Time spent queued
        behind other documents does not count. A timed-out document is
        recorded as failed and its worker is abandoned rather than joined.
        A process pool marks one queued call per pool as running ahead of
        time, so that document's clock can start slightly early.
    use_threads : bool, default=False
        Use a thread pool instead of processes.
    """
    settings = settings or default_settings
    workers = workers or settings.workers
    timeout = timeout if timeout is not None else settings.document_timeout
    sources = [str(s) for s in sources]

    pool_cls = ThreadPoolExecutor if use_threads else ProcessPoolExecutor
    ex: Executor = pool_cls(max_workers=workers)
    timed_out = False
    outcomes: dict = {}
    try:
        futures = [(src, ex.submit(process_path, src, settings)) for src in sources]
        pending = {fut: src for src, fut in futures}
        started: dict = {}
        while pending:
            done, _ = wait(pending, timeout=POLL_INTERVAL, return_when=FIRST_COMPLETED)
            now = time.monotonic()
            for fut in done:
                outcomes[fut] = _collect(fut, pending.pop(fut))
            for fut, src in list(pending.items()):
                if not fut.running():
                    continue
                # clock starts when a worker picks the document up
                started.setdefault(fut, now)
                if timeout is not None and now - started[fut] > timeout:
                    timed_out = True
                    fut.cancel()
                    doc_id = document_id_for(pending.pop(fut))
                    logger.error("%s: timed out after %ss", doc_id, timeout)
                    outcomes[fut] = DocumentOutcome(
                        document_id=doc_id,
                        source=src,
                        error_type="Timeout",
                        error=f"no result after {timeout}s",
                    )
    finally:
        ex.shutdown(wait=not timed_out, cancel_futures=timed_out)

    ordered = [outcomes[fut] for _, fut in futures]
    failed = sum(1 for o in ordered if not o.ok)
    logger.info("Processed %d documents (%d failed)", len(ordered), failed)
    return ordered


def summarize_batch(outcomes: Iterable[DocumentOutcome]) -> pd.DataFrame:
    """One row per document: status, speech and warning counts, failure details."""
    rows = []
    for o in outcomes:
        rows.append({
            "document_id": o.document_id,
            "source": o.source,
            "status": "ok" if o.ok else "failed",
            "speeches": len(o.result.speeches) if o.ok else 0,
            "warnings": len(o.result.warnings) if o.ok else 0,
            "coverage": round(o.result.coverage, 4) if o.ok else None,
            "error_type": o.error_type,
            "error": o.error,
            "locator": o.locator,
        })
    columns = [
        "document_id", "source", "status", "speeches", "warnings",
        "coverage", "error_type", "error", "locator",
    ]
    return pd.DataFrame(rows, columns=columns)
