"""
Download verbatim record documents over HTTP.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .errors import LineSourceError

logger = logging.getLogger(__name__)

UA = "verbatim-record-fetcher/1.0"

# Anything smaller is an error page rather than a record
MIN_DOCUMENT_BYTES = 64


def http_get(url: str, timeout: int = 30) -> requests.Response:
    resp = requests.get(url, headers={"User-Agent": UA}, timeout=timeout)
    resp.raise_for_status()
    return resp


def download_document(url: str, out_path: Path, timeout: int = 60) -> Path:
    """Fetch ``url`` into ``out_path``, raising LineSourceError on failure."""
    try:
        resp = http_get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise LineSourceError(f"Failed to download {url}: {exc}") from exc

    ctype = (resp.headers.get("Content-Type") or "").lower()
    if out_path.suffix == ".pdf" and "pdf" not in ctype and not resp.content.startswith(b"%PDF"):
        raise LineSourceError(f"Unexpected content-type for {url}: {ctype}")
    if len(resp.content) < MIN_DOCUMENT_BYTES:
        raise LineSourceError(
            f"Downloaded document too small: {url} ({len(resp.content)} bytes)"
        )

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(resp.content)
    logger.info("Downloaded %s (%d bytes)", url, len(resp.content))
    return out_path
