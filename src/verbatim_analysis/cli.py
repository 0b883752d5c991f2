"""
Command-line interface for the verbatim record pipeline.

Commands:
- extract: Turn one document into speech records
- batch: Process every document in a directory on a worker pool

Exit codes for ``extract``: 0 on success, 1 when the input cannot be
read, 2 when the document cannot be segmented (e.g. missing header).
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .batch import find_documents, process_batch, summarize_batch
from .config import get_settings
from .errors import LineSourceError, SegmentationError
from .output import (
    FORMATS,
    dump_records,
    save_speeches_json,
    save_speeches_jsonl,
    save_warnings_json,
)
from .pipeline import process_path


# Load environment variables
load_dotenv()


class InputError(click.ClickException):
    exit_code = 1


class SegmentationFailed(click.ClickException):
    exit_code = 2


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.option("--log-level", default=None, help="Logging level (default from settings).")
def cli(log_level: Optional[str]):
    """Verbatim record speech extraction."""
    _configure_logging(log_level or get_settings().log_level)


@cli.command()
@click.argument("input_path", metavar="INPUT")
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: stdout).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="json",
    help="JSON array or JSON lines.",
)
@click.option(
    "--left-col-width",
    type=click.IntRange(min=1),
    default=None,
    help="Gap slots in which a left-column fragment may start (default 8).",
)
@click.option(
    "--overflow-threshold",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum right-column length before fragments move left (default 65).",
)
@click.option(
    "--warnings-out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write processing warnings to this JSON file.",
)
def extract(
    input_path: str,
    out: Optional[Path],
    fmt: str,
    left_col_width: Optional[int],
    overflow_threshold: Optional[int],
    warnings_out: Optional[Path],
):
    """
    Extract speaker-attributed speeches from one document.

    INPUT is a PDF, a form-feed separated text dump, or an http(s) URL.
    """
    settings = get_settings(
        left_col_width=left_col_width,
        overflow_threshold=overflow_threshold,
    )

    try:
        result = process_path(input_path, settings)
    except LineSourceError as exc:
        raise InputError(str(exc)) from exc
    except SegmentationError as exc:
        raise SegmentationFailed(str(exc)) from exc

    records = result.to_records()
    if out is None:
        buf = io.StringIO()
        dump_records(records, buf, fmt)
        click.echo(buf.getvalue(), nl=False)
    else:
        if fmt == "jsonl":
            save_speeches_jsonl(records, out)
        else:
            save_speeches_json(records, out)
        click.echo(f"✓ Wrote {len(records)} speeches to {out}", err=True)

    if warnings_out is not None:
        save_warnings_json(result.warnings, warnings_out)
    if result.warnings:
        click.echo(f"{len(result.warnings)} warning(s) for manual review", err=True)


@cli.command()
@click.argument(
    "input_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("data/speeches"),
    help="Output directory for per-document JSONL and the batch summary.",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker pool size.")
@click.option("--timeout", type=float, default=None, help="Per-document timeout in seconds.")
@click.option("--threads", is_flag=True, help="Use threads instead of processes.")
@click.option("--left-col-width", type=click.IntRange(min=1), default=None)
@click.option("--overflow-threshold", type=click.IntRange(min=1), default=None)
def batch(
    input_dir: Path,
    out_dir: Path,
    workers: Optional[int],
    timeout: Optional[float],
    threads: bool,
    left_col_width: Optional[int],
    overflow_threshold: Optional[int],
):
    """
    Process every PDF and text dump in INPUT_DIR.

    Failed documents are listed in batch_summary.csv; they never stop the
    rest of the batch.
    """
    settings = get_settings(
        left_col_width=left_col_width,
        overflow_threshold=overflow_threshold,
    )
    documents = find_documents(input_dir)
    click.echo(f"Found {len(documents)} documents in {input_dir}")

    outcomes = process_batch(
        documents,
        settings,
        workers=workers,
        timeout=timeout,
        use_threads=threads,
    )

    out_dir.mkdir(parents=True, exist_ok=True)
    for outcome in outcomes:
        if outcome.ok:
            save_speeches_jsonl(
                outcome.result.to_records(), out_dir / f"{outcome.document_id}.jsonl"
            )
        else:
            click.echo(f"  ! failed {outcome.document_id}: {outcome.error}")

    summary = summarize_batch(outcomes)
    summary_path = out_dir / "batch_summary.csv"
    summary.to_csv(summary_path, index=False)

    ok = int((summary["status"] == "ok").sum()) if not summary.empty else 0
    click.echo(f"✓ Processed {ok}/{len(outcomes)} documents. Summary: {summary_path}")


if __name__ == "__main__":
    cli()
