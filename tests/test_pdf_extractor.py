"""
Tests for the line source: text dumps, PDFs and URLs.
"""

import fitz  # PyMuPDF
import pytest

from verbatim_analysis.errors import LineSourceError
from verbatim_analysis.parsing import pdf_extractor
from verbatim_analysis.parsing.column_reflow import reflow_line
from verbatim_analysis.parsing.pdf_extractor import (
    extract_pdf_pages,
    load_pages,
    read_text_pages,
    split_pages,
)


@pytest.fixture()
def two_column_pdf(tmp_path):
    """A two-page PDF with text in two printed columns."""
    path = tmp_path / "record.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 100), "Left column text", fontsize=11)
    page.insert_text((320, 100), "Right column text", fontsize=11)
    page.insert_text((72, 130), "Second left line", fontsize=11)
    page = doc.new_page()
    page.insert_text((72, 100), "Page two", fontsize=11)
    doc.save(path)
    doc.close()
    return path


class TestTextDumps:
    """Tests for form-feed separated text."""

    def test_split_pages(self):
        assert split_pages("a\nb\fc\n\f") == [["a", "b"], ["c"]]

    def test_single_page_without_form_feed(self):
        assert split_pages("a\nb\n") == [["a", "b"]]

    def test_read_text_pages(self, record_text_file, record_pages):
        assert read_text_pages(record_text_file) == record_pages

    def test_missing_file(self, tmp_path):
        with pytest.raises(LineSourceError):
            load_pages(tmp_path / "missing.txt")


class TestPdfExtraction:
    """Tests for PyMuPDF extraction."""

    def test_pages_and_rows(self, two_column_pdf):
        pages = extract_pdf_pages(two_column_pdf)
        assert len(pages) == 2
        assert len(pages[0]) == 2
        assert pages[1] == ["Page two"]

    def test_column_gap_preserved(self, two_column_pdf):
        first = extract_pdf_pages(two_column_pdf)[0][0]
        split = reflow_line(first)
        assert split.column_0 == "Left column text"
        assert split.column_1 == "Right column text"

    def test_left_margin_removed(self, two_column_pdf):
        second = extract_pdf_pages(two_column_pdf)[0][1]
        assert second == "Second left line"

    def test_load_pages_dispatches_on_suffix(self, two_column_pdf):
        assert load_pages(two_column_pdf) == extract_pdf_pages(two_column_pdf)

    def test_corrupt_pdf(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf file at all")
        with pytest.raises(LineSourceError):
            extract_pdf_pages(path)


class TestUrlSource:
    """Tests for loading documents from a URL."""

    def test_url_is_downloaded_then_read(self, monkeypatch):
        def fake_download(url, out_path, timeout=60):
            out_path.write_text("President: X\fHeader\nBody\n", encoding="utf-8")
            return out_path

        monkeypatch.setattr("verbatim_analysis.fetcher.download_document", fake_download)
        pages = load_pages("https://example.org/record.txt")
        assert pages == [["President: X"], ["Header", "Body"]]

    def test_is_url(self):
        assert pdf_extractor.is_url("https://example.org/a.pdf")
        assert not pdf_extractor.is_url("data/a.pdf")
